"""
Django Admin para o domínio de Usuários.
"""

from django.contrib import admin

from .models import UsuarioModel


@admin.register(UsuarioModel)
class UsuarioAdmin(admin.ModelAdmin):
    """Admin para UsuarioModel (o hash da senha nunca é exibido)."""

    list_display = [
        'id_curto',
        'nome',
        'email',
        'departamento',
        'cargo',
        'papel',
        'ativo',
        'criado_em',
    ]

    list_filter = [
        'papel',
        'ativo',
        'departamento',
    ]

    search_fields = [
        'id',
        'nome',
        'email',
    ]

    readonly_fields = [
        'id',
        'papel',
        'criado_em',
        'atualizado_em',
    ]

    exclude = ['senha_hash']

    ordering = ['nome']

    def id_curto(self, obj):
        """Exibe ID curto (primeiros 8 caracteres)."""
        return obj.id[:8] + '...'
    id_curto.short_description = 'ID'
