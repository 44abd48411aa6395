"""
Data Transfer Objects (DTOs) de Comentários.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.core.usuarios.dtos import UsuarioAutenticado, UsuarioResumoDTO

from .entities import ComentarioEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarComentarioInputDTO:
    """
    DTO de entrada para comentar em um chamado.

    Attributes:
        ator: Usuário autenticado (vira o autor)
        chamado_id: Chamado comentado
        conteudo: Texto (1-2000 caracteres)
    """

    ator: UsuarioAutenticado
    chamado_id: str
    conteudo: str


@dataclass(frozen=True)
class AtualizarComentarioInputDTO:
    ator: UsuarioAutenticado
    comentario_id: str
    conteudo: str


@dataclass(frozen=True)
class DeletarComentarioInputDTO:
    ator: UsuarioAutenticado
    comentario_id: str


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class ComentarioOutputDTO:
    """
    DTO de saída de comentário com resumo do autor.

    ``autor`` pode ser None apenas se o usuário não for
    encontrado no momento da montagem (não deveria ocorrer: a FK
    impede remoção de autores).
    """

    id: str
    conteudo: str
    chamado_id: str
    autor_id: str
    autor: Optional[UsuarioResumoDTO]
    criado_em: datetime
    atualizado_em: datetime

    @classmethod
    def from_entity(
        cls,
        entity: ComentarioEntity,
        autor: Optional[UsuarioResumoDTO] = None,
    ) -> "ComentarioOutputDTO":
        return cls(
            id=entity.id,
            conteudo=entity.conteudo,
            chamado_id=entity.chamado_id,
            autor_id=entity.autor_id,
            autor=autor,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "conteudo": self.conteudo,
            "chamado_id": self.chamado_id,
            "autor_id": self.autor_id,
            "autor": self.autor.to_dict() if self.autor else None,
            "criado_em": self.criado_em.isoformat(),
            "atualizado_em": self.atualizado_em.isoformat(),
        }
