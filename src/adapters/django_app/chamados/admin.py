"""
Django Admin para Chamados, Comentários e Histórico.

O histórico é somente leitura: entradas só nascem pelos use cases.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import ChamadoModel, ComentarioModel, HistoricoAcaoModel


class ComentarioInline(admin.TabularInline):
    model = ComentarioModel
    extra = 0
    fields = ['autor', 'conteudo', 'criado_em']
    readonly_fields = ['criado_em']


@admin.register(ChamadoModel)
class ChamadoAdmin(admin.ModelAdmin):
    """Admin para ChamadoModel."""

    list_display = [
        'id_curto',
        'titulo',
        'status_badge',
        'prioridade_badge',
        'categoria',
        'criador',
        'atribuido',
        'criado_em',
    ]

    list_filter = [
        'status',
        'prioridade',
        'categoria',
        'criado_em',
    ]

    search_fields = [
        'id',
        'titulo',
        'descricao',
        'criador__nome',
        'atribuido__nome',
    ]

    readonly_fields = [
        'id',
        'resolvido_em',
        'criado_em',
        'atualizado_em',
    ]

    fieldsets = [
        ('Identificação', {
            'fields': ['id', 'titulo', 'descricao', 'categoria'],
        }),
        ('Status', {
            'fields': ['status', 'prioridade', 'resolvido_em'],
        }),
        ('Responsáveis', {
            'fields': ['criador', 'atribuido'],
        }),
        ('Timestamps', {
            'fields': ['criado_em', 'atualizado_em'],
            'classes': ['collapse'],
        }),
    ]

    inlines = [ComentarioInline]

    ordering = ['-criado_em']

    date_hierarchy = 'criado_em'

    def id_curto(self, obj):
        """Exibe ID curto (primeiros 8 caracteres)."""
        return obj.id[:8] + '...'
    id_curto.short_description = 'ID'

    def status_badge(self, obj):
        """Exibe status com badge colorido."""
        colors = {
            'ABERTO': '#17a2b8',
            'EM_ANDAMENTO': '#ffc107',
            'AGUARDANDO_RESPOSTA': '#6c757d',
            'RESOLVIDO': '#28a745',
            'FECHADO': '#343a40',
            'CANCELADO': '#dc3545',
        }
        color = colors.get(obj.status, '#6c757d')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            color,
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def prioridade_badge(self, obj):
        """Exibe prioridade com badge colorido."""
        colors = {
            'BAIXA': '#28a745',
            'MEDIA': '#ffc107',
            'ALTA': '#fd7e14',
            'CRITICA': '#dc3545',
        }
        color = colors.get(obj.prioridade, '#6c757d')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            color,
            obj.get_prioridade_display()
        )
    prioridade_badge.short_description = 'Prioridade'


@admin.register(HistoricoAcaoModel)
class HistoricoAcaoAdmin(admin.ModelAdmin):
    """Admin para histórico (somente leitura)."""

    list_display = [
        'acao',
        'chamado',
        'usuario',
        'detalhes',
        'criado_em',
    ]

    list_filter = ['acao', 'criado_em']

    search_fields = ['chamado__id', 'detalhes']

    ordering = ['-criado_em']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
