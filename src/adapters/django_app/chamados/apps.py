"""
Configuração do Django App para Chamados e Comentários.
"""

from django.apps import AppConfig


class ChamadosConfig(AppConfig):
    """Configuração do app Chamados."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.chamados'
    label = 'chamados'
    verbose_name = 'Central de Chamados'
