"""
Django Settings para a Central de Chamados.

Usa variáveis de ambiente (python-dotenv) para configurações sensíveis.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from src.adapters.django_app.shared.database import DatabaseConfig

# Carregar variáveis de ambiente
load_dotenv()

# =============================================================================
# Caminhos Base
# =============================================================================

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# src/ directory
SRC_DIR = BASE_DIR / 'src'

# =============================================================================
# Segurança
# =============================================================================

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    'SECRET_KEY',
    'django-insecure-dev-key-change-in-production-please'
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'True').lower() in ('true', '1', 'yes')

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# =============================================================================
# Autenticação JWT
# =============================================================================

JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)

JWT_EXPIRACAO_DIAS = int(os.getenv('JWT_EXPIRACAO_DIAS', 7))

# Argon2 como hasher preferido; os demais permitem verificar hashes legados
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.Argon2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher',
]

# =============================================================================
# Aplicações
# =============================================================================

DJANGO_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

THIRD_PARTY_APPS = [
]

LOCAL_APPS = [
    'src.adapters.django_app.usuarios',
    'src.adapters.django_app.chamados',
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# =============================================================================
# Middleware
# =============================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'src.adapters.django_app.usuarios.middleware.JWTAuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'src.config.urls'

# =============================================================================
# Templates (apenas Django Admin)
# =============================================================================

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'src.config.wsgi.application'

# =============================================================================
# Banco de Dados
# =============================================================================

# DATABASE_URL ou DATABASE_* (PostgreSQL); DATABASE_ENGINE=sqlite para dev
DATABASE_CONFIG = DatabaseConfig.from_env(default_sqlite_path=str(BASE_DIR / 'db.sqlite3'))

DATABASES = {
    'default': DATABASE_CONFIG.to_django_config(),
}

# =============================================================================
# Redis / Tempo real
# =============================================================================

REDIS_URL = os.getenv('REDIS_URL')

# Canal pub/sub assinado pelo gateway WebSocket
REALTIME_CHANNEL = os.getenv('REALTIME_CHANNEL', 'helpdesk:realtime')

if REDIS_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': REDIS_URL,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'unique-snowflake',
        }
    }

# =============================================================================
# Internacionalização
# =============================================================================

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# =============================================================================
# Arquivos Estáticos
# =============================================================================

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# =============================================================================
# Default Primary Key
# =============================================================================

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'src.core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'src.adapters': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# =============================================================================
# Regras de negócio configuráveis
# =============================================================================

# Autor comum só edita comentários dentro desta janela
COMENTARIO_JANELA_EDICAO_MINUTOS = int(os.getenv('COMENTARIO_JANELA_EDICAO_MINUTOS', 30))

PAGINACAO_LIMITE_MAXIMO = int(os.getenv('PAGINACAO_LIMITE_MAXIMO', 100))

# =============================================================================
# Celery / Event Bus
# =============================================================================

# Broker URL (Redis por padrão; RabbitMQ via CELERY_BROKER_URL)
CELERY_BROKER_URL = os.getenv(
    'CELERY_BROKER_URL',
    REDIS_URL or 'redis://localhost:6379/0'
)

# Backend de resultados (Redis)
CELERY_RESULT_BACKEND = os.getenv(
    'CELERY_RESULT_BACKEND',
    'redis://localhost:6379/1'
)

# Serialização
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'

# Timezone
CELERY_TIMEZONE = TIME_ZONE
CELERY_ENABLE_UTC = True

# Configurações de execução
CELERY_TASK_ACKS_LATE = True
CELERY_TASK_REJECT_ON_WORKER_LOST = True
CELERY_WORKER_PREFETCH_MULTIPLIER = 1

# Resultados
CELERY_RESULT_EXPIRES = 3600  # 1 hora

# Event Publisher mode
# 'sync' = LoggingEventPublisher (desenvolvimento)
# 'redis' = RedisBroadcastPublisher (publica direto no canal)
# 'celery' = CeleryEventPublisher (worker repassa ao canal)
EVENT_PUBLISHER_MODE = os.getenv('EVENT_PUBLISHER_MODE', 'sync')
