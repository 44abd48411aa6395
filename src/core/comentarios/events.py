"""
Domain Events de Comentários.

- ComentarioCriadoEvent: "ticket:comment"
- ComentarioDeletadoEvent: "ticket:comment-deleted"

Ambos usam o chamado como agregado: clientes de tempo real
acompanham chamados, não comentários isolados.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict

from src.core.shared.events import DomainEvent


@dataclass
class ComentarioCriadoEvent(DomainEvent):
    """
    Evento: Novo comentário em um chamado.

    Attributes:
        comentario: Comentário serializado (com resumo do autor)
    """

    event_name: ClassVar[str] = "ticket:comment"

    comentario: Dict[str, Any] = field(default_factory=dict)

    @property
    def aggregate_type(self) -> str:
        return "Chamado"

    def payload(self) -> Dict[str, Any]:
        return {**self.comentario, "chamado_id": self.aggregate_id}


@dataclass
class ComentarioDeletadoEvent(DomainEvent):
    event_name: ClassVar[str] = "ticket:comment-deleted"

    comentario_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Chamado"

    def payload(self) -> Dict[str, Any]:
        return {
            "comentario_id": self.comentario_id,
            "chamado_id": self.aggregate_id,
        }
