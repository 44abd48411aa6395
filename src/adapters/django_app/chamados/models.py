"""
Django Models para os domínios de Chamados e Comentários.

Estes models são ADAPTERS - persistem as entidades do Core:
- ChamadoModel ↔ ChamadoEntity
- ComentarioModel ↔ ComentarioEntity
- HistoricoAcaoModel ↔ HistoricoAcaoEntity

Remover um chamado remove em cascata seus comentários e histórico.
Usuários referenciados não podem ser removidos (PROTECT); o
responsável atribuído vira NULL se sumir.
"""

from django.db import models
from django.utils import timezone


class StatusChoices(models.TextChoices):
    """Choices para status (espelha StatusChamado do Core)."""
    ABERTO = 'ABERTO', 'Aberto'
    EM_ANDAMENTO = 'EM_ANDAMENTO', 'Em andamento'
    AGUARDANDO_RESPOSTA = 'AGUARDANDO_RESPOSTA', 'Aguardando resposta'
    RESOLVIDO = 'RESOLVIDO', 'Resolvido'
    FECHADO = 'FECHADO', 'Fechado'
    CANCELADO = 'CANCELADO', 'Cancelado'


class PrioridadeChoices(models.TextChoices):
    """Choices para prioridade (espelha Prioridade do Core)."""
    BAIXA = 'BAIXA', 'Baixa'
    MEDIA = 'MEDIA', 'Média'
    ALTA = 'ALTA', 'Alta'
    CRITICA = 'CRITICA', 'Crítica'


class AcaoChoices(models.TextChoices):
    """Choices para ação do histórico (espelha AcaoHistorico do Core)."""
    CRIADO = 'CRIADO', 'Criado'
    ATUALIZADO = 'ATUALIZADO', 'Atualizado'
    ATRIBUIDO = 'ATRIBUIDO', 'Atribuído'
    DESATRIBUIDO = 'DESATRIBUIDO', 'Desatribuído'
    COMENTARIO_ADICIONADO = 'COMENTARIO_ADICIONADO', 'Comentário adicionado'
    COMENTARIO_EDITADO = 'COMENTARIO_EDITADO', 'Comentário editado'
    COMENTARIO_DELETADO = 'COMENTARIO_DELETADO', 'Comentário deletado'


class ChamadoModel(models.Model):
    """
    Model Django para persistência de Chamados.

    Fields:
        id: UUID como primary key (gerado pela Entity)
        titulo: Título (5-200)
        descricao: Descrição (10-5000)
        prioridade: Nível de prioridade
        status: Estado atual
        categoria: Categoria livre (2-50)
        criador: Usuário que abriu o chamado
        atribuido: Responsável (opcional)
        resolvido_em: Preenchido ao resolver; nunca limpo
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único do chamado"
    )

    titulo = models.CharField(
        max_length=200,
        help_text="Título descritivo do chamado"
    )

    descricao = models.TextField(help_text="Descrição detalhada do problema")

    prioridade = models.CharField(
        max_length=10,
        choices=PrioridadeChoices.choices,
        default=PrioridadeChoices.MEDIA,
        db_index=True,
        help_text="Prioridade do chamado"
    )

    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.ABERTO,
        db_index=True,
        help_text="Status atual do chamado"
    )

    categoria = models.CharField(
        max_length=50,
        db_index=True,
        help_text="Categoria do chamado"
    )

    criador = models.ForeignKey(
        'usuarios.UsuarioModel',
        on_delete=models.PROTECT,
        related_name='chamados_criados',
        help_text="Usuário que abriu o chamado"
    )

    atribuido = models.ForeignKey(
        'usuarios.UsuarioModel',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chamados_atribuidos',
        help_text="Responsável pelo atendimento"
    )

    resolvido_em = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Quando o chamado foi resolvido"
    )

    criado_em = models.DateTimeField(default=timezone.now, db_index=True)

    atualizado_em = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'chamados'
        verbose_name = 'Chamado'
        verbose_name_plural = 'Chamados'
        ordering = ['-criado_em']
        indexes = [
            models.Index(fields=['status', 'criado_em'], name='idx_chamado_status_criado'),
            models.Index(fields=['atribuido', 'status'], name='idx_chamado_atrib_status'),
            models.Index(fields=['criador', 'criado_em'], name='idx_chamado_criador_data'),
        ]

    def __str__(self):
        return f"[{self.status}] {self.titulo}"

    def __repr__(self):
        return f"<ChamadoModel id={self.id[:8]} status={self.status}>"


class ComentarioModel(models.Model):
    """
    Model Django para comentários de um chamado.

    Fields:
        id: UUID como primary key
        conteudo: Texto (1-2000)
        chamado: Chamado comentado (CASCADE)
        autor: Usuário autor (PROTECT)
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único do comentário"
    )

    conteudo = models.TextField(help_text="Texto do comentário")

    chamado = models.ForeignKey(
        ChamadoModel,
        on_delete=models.CASCADE,
        related_name='comentarios',
        help_text="Chamado relacionado"
    )

    autor = models.ForeignKey(
        'usuarios.UsuarioModel',
        on_delete=models.PROTECT,
        related_name='comentarios',
        help_text="Autor do comentário"
    )

    criado_em = models.DateTimeField(default=timezone.now)

    atualizado_em = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'comentarios'
        verbose_name = 'Comentário'
        verbose_name_plural = 'Comentários'
        ordering = ['criado_em']
        indexes = [
            models.Index(fields=['chamado', 'criado_em'], name='idx_comentario_chamado_data'),
        ]

    def __str__(self):
        return f"Comentário {self.id[:8]} em {self.chamado_id[:8]}"


class HistoricoAcaoModel(models.Model):
    """
    Trilha de auditoria de um chamado (somente inserção).

    Fields:
        id: UUID como primary key
        acao: Tipo da ação
        detalhes: Descrição legível da alteração
        chamado: Chamado afetado (CASCADE)
        usuario: Quem executou a ação (PROTECT)
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único da entrada"
    )

    acao = models.CharField(
        max_length=30,
        choices=AcaoChoices.choices,
        db_index=True,
        help_text="Tipo da ação registrada"
    )

    detalhes = models.TextField(
        blank=True,
        default='',
        help_text="Detalhes da alteração"
    )

    chamado = models.ForeignKey(
        ChamadoModel,
        on_delete=models.CASCADE,
        related_name='historico',
        help_text="Chamado relacionado"
    )

    usuario = models.ForeignKey(
        'usuarios.UsuarioModel',
        on_delete=models.PROTECT,
        related_name='acoes',
        help_text="Usuário que executou a ação"
    )

    criado_em = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'historico_acoes'
        verbose_name = 'Histórico de Ação'
        verbose_name_plural = 'Histórico de Ações'
        ordering = ['-criado_em']
        indexes = [
            models.Index(fields=['chamado', 'criado_em'], name='idx_historico_chamado_data'),
        ]

    def __str__(self):
        return f"{self.acao} - {self.chamado_id[:8]} @ {self.criado_em}"
