"""
Configuração do projeto Central de Chamados.

Módulos:
- settings: Configurações Django
- urls: Rotas principais
- wsgi: WSGI application
- celery: Configuração Celery para repasse de eventos de tempo real
- container: Dependency Injection Container
"""

from .celery import app as celery_app

__all__ = ('celery_app',)
