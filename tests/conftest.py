"""
Configurações globais do Pytest para a Central de Chamados.

Este arquivo é carregado automaticamente pelo pytest e:
- Configura Django em memória (SQLite) antes da coleta
- Reinicia o container de DI entre testes
- Fornece fixtures de usuários e tokens para os testes de API
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='test-secret-key',
            JWT_SECRET='test-jwt-secret',
            JWT_EXPIRACAO_DIAS=7,
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.admin',
                'django.contrib.auth',
                'django.contrib.contenttypes',
                'django.contrib.sessions',
                'django.contrib.messages',
                'src.adapters.django_app.usuarios',
                'src.adapters.django_app.chamados',
            ],
            MIDDLEWARE=[
                'django.contrib.sessions.middleware.SessionMiddleware',
                'django.middleware.common.CommonMiddleware',
                'django.contrib.auth.middleware.AuthenticationMiddleware',
                'src.adapters.django_app.usuarios.middleware.JWTAuthenticationMiddleware',
                'django.contrib.messages.middleware.MessageMiddleware',
            ],
            TEMPLATES=[
                {
                    'BACKEND': 'django.template.backends.django.DjangoTemplates',
                    'DIRS': [],
                    'APP_DIRS': True,
                    'OPTIONS': {
                        'context_processors': [
                            'django.template.context_processors.request',
                            'django.contrib.auth.context_processors.auth',
                            'django.contrib.messages.context_processors.messages',
                        ],
                    },
                },
            ],
            ROOT_URLCONF='src.config.urls',
            PASSWORD_HASHERS=[
                'django.contrib.auth.hashers.Argon2PasswordHasher',
                'django.contrib.auth.hashers.PBKDF2PasswordHasher',
            ],
            EVENT_PUBLISHER_MODE='sync',
            REALTIME_CHANNEL='helpdesk:realtime',
            COMENTARIO_JANELA_EDICAO_MINUTOS=30,
            PAGINACAO_LIMITE_MAXIMO=100,
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
        )
        django.setup()


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_container():
    """
    Reset do container de DI entre testes.

    Garante que cada teste inicia com singletons (repositórios,
    publisher) e overrides limpos.
    """
    from src.config.container import reset_container as reset

    reset()
    yield
    reset()
