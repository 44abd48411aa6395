"""
Papéis e capacidades dos usuários.

O cargo do usuário é texto livre ("Gerente de TI", "Analista"...).
O papel é derivado do cargo por palavras-chave e cada papel
concede um conjunto fixo de capacidades.

Regra de derivação (case-insensitive, por substring):
    "admin" / "administrador" → ADMINISTRADOR
    "gerente"                 → GERENTE
    "supervisor"              → SUPERVISOR
    qualquer outro            → COLABORADOR

Todas as verificações de permissão dos use cases passam por
``Capacidade`` em vez de comparar strings de cargo.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


class Capacidade(Enum):
    """Ações protegidas por permissão."""

    EDITAR_QUALQUER_CHAMADO = "editar_qualquer_chamado"
    DELETAR_CHAMADO = "deletar_chamado"
    ATRIBUIR_CHAMADO = "atribuir_chamado"
    MODERAR_COMENTARIOS = "moderar_comentarios"
    EDITAR_COMENTARIO_SEM_PRAZO = "editar_comentario_sem_prazo"
    GERENCIAR_USUARIOS = "gerenciar_usuarios"


class Papel(Enum):
    """
    Papel do usuário no helpdesk.

    Os três primeiros são administrativos e recebem as mesmas
    capacidades; COLABORADOR pode abrir, comentar e atribuir chamados.
    """

    ADMINISTRADOR = "ADMINISTRADOR"
    GERENTE = "GERENTE"
    SUPERVISOR = "SUPERVISOR"
    COLABORADOR = "COLABORADOR"

    @classmethod
    def from_cargo(cls, cargo: str) -> "Papel":
        """
        Deriva o papel a partir do cargo em texto livre.

        Args:
            cargo: Cargo informado no cadastro

        Returns:
            Papel correspondente (COLABORADOR se nenhuma palavra-chave)
        """
        cargo_normalizado = (cargo or "").lower()

        for palavra, papel in PALAVRAS_CHAVE_ADMIN:
            if palavra in cargo_normalizado:
                return papel

        return cls.COLABORADOR

    @classmethod
    def from_string(cls, value: str) -> "Papel":
        """Converte nome do enum para Papel."""
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Papel inválido: {value}")

    @property
    def capacidades(self) -> FrozenSet[Capacidade]:
        """Capacidades concedidas a este papel."""
        return CAPACIDADES_POR_PAPEL[self]

    @property
    def eh_administrativo(self) -> bool:
        return self is not Papel.COLABORADOR

    def pode(self, capacidade: Capacidade) -> bool:
        return capacidade in self.capacidades


# "admin" cobre "administrador"; mantido explícito para documentar a regra.
PALAVRAS_CHAVE_ADMIN: Tuple[Tuple[str, Papel], ...] = (
    ("administrador", Papel.ADMINISTRADOR),
    ("admin", Papel.ADMINISTRADOR),
    ("gerente", Papel.GERENTE),
    ("supervisor", Papel.SUPERVISOR),
)

_CAPACIDADES_ADMINISTRATIVAS = frozenset(Capacidade)

CAPACIDADES_POR_PAPEL: Dict[Papel, FrozenSet[Capacidade]] = {
    Papel.ADMINISTRADOR: _CAPACIDADES_ADMINISTRATIVAS,
    Papel.GERENTE: _CAPACIDADES_ADMINISTRATIVAS,
    Papel.SUPERVISOR: _CAPACIDADES_ADMINISTRATIVAS,
    Papel.COLABORADOR: frozenset({Capacidade.ATRIBUIR_CHAMADO}),
}


def eh_admin(cargo: str) -> bool:
    """
    Verifica se o cargo concede privilégios administrativos.

    Example:
        eh_admin("Gerente de TI")  # True
        eh_admin("Analista")       # False
    """
    return Papel.from_cargo(cargo).eh_administrativo
