"""
Domínio de Comentários.

Comentários pertencem a um chamado; os use cases ficam em
``use_cases`` e não são reexportados aqui (dependem do domínio
de chamados, que por sua vez usa os DTOs deste pacote).
"""

from .entities import ComentarioEntity
from .dtos import (
    AtualizarComentarioInputDTO,
    ComentarioOutputDTO,
    CriarComentarioInputDTO,
    DeletarComentarioInputDTO,
)
from .events import ComentarioCriadoEvent, ComentarioDeletadoEvent
from .ports import ComentarioRepository

__all__ = [
    "ComentarioEntity",
    "AtualizarComentarioInputDTO",
    "ComentarioOutputDTO",
    "CriarComentarioInputDTO",
    "DeletarComentarioInputDTO",
    "ComentarioCriadoEvent",
    "ComentarioDeletadoEvent",
    "ComentarioRepository",
]
