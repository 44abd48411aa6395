"""
Django Models para o domínio de Usuários.

Estes models são ADAPTERS - persistem UsuarioEntity
(src/core/usuarios/entities.py). Não contêm lógica de negócio.

O papel é derivado do cargo no Core; a coluna ``papel`` é
gravada apenas para consulta/admin.
"""

from django.db import models
from django.utils import timezone


class PapelChoices(models.TextChoices):
    """Choices para papel (espelha Papel do Core)."""
    ADMINISTRADOR = 'ADMINISTRADOR', 'Administrador'
    GERENTE = 'GERENTE', 'Gerente'
    SUPERVISOR = 'SUPERVISOR', 'Supervisor'
    COLABORADOR = 'COLABORADOR', 'Colaborador'


class UsuarioModel(models.Model):
    """
    Model Django para persistência de Usuários.

    Fields:
        id: UUID como primary key (gerado pela Entity)
        nome: Nome completo
        email: Email único (minúsculas)
        senha_hash: Hash da senha (formato Django, ex: argon2$...)
        departamento: Departamento
        cargo: Cargo em texto livre
        papel: Papel derivado do cargo
        ativo: Usuários inativos não autenticam
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único do usuário"
    )

    nome = models.CharField(max_length=100, help_text="Nome completo")

    email = models.EmailField(
        max_length=254,
        unique=True,
        help_text="Email de login (único)"
    )

    senha_hash = models.CharField(max_length=255, help_text="Hash da senha")

    departamento = models.CharField(max_length=50, db_index=True)

    cargo = models.CharField(max_length=50)

    papel = models.CharField(
        max_length=20,
        choices=PapelChoices.choices,
        default=PapelChoices.COLABORADOR,
        db_index=True,
    )

    ativo = models.BooleanField(default=True, db_index=True)

    criado_em = models.DateTimeField(default=timezone.now)

    atualizado_em = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'usuarios'
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        ordering = ['nome']

    def __str__(self):
        return f"{self.nome} <{self.email}>"

    def __repr__(self):
        return f"<UsuarioModel id={self.id[:8]} papel={self.papel}>"
