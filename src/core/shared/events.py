"""
Domain Events - Notificações de mudanças no domínio.

Este módulo define a infraestrutura base para Domain Events,
usados para avisar clientes conectados (WebSocket) sobre mudanças
em chamados e comentários.

Características:
- Auto-geração de ID e timestamp (UTC)
- Nome de canal estável (ex: "ticket:created") independente da classe
- Payload serializável em JSON para broadcast

Fluxo:
    - Use case enfileira o evento no Unit of Work
    - Após commit, o UoW entrega o evento ao EventPublisher
    - Publisher repassa ao canal de tempo real (Redis/Celery/log)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict
import uuid


def agora_utc() -> datetime:
    """Retorna o instante atual com timezone UTC."""
    return datetime.now(timezone.utc)


@dataclass
class DomainEvent(ABC):
    """
    Classe base abstrata para Domain Events.

    Attributes:
        event_id: Identificador único do evento
        aggregate_id: ID do agregado que gerou o evento
        occurred_at: Momento em que o evento ocorreu
        version: Versão do schema do evento

    Subclasses definem ``event_name`` (nome publicado no canal de
    tempo real) e implementam ``payload()``.

    Example:
        @dataclass
        class ChamadoCriadoEvent(DomainEvent):
            event_name: ClassVar[str] = "ticket:created"
            chamado: dict = field(default_factory=dict)

            def payload(self):
                return self.chamado
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    aggregate_id: str = ""
    occurred_at: datetime = field(default_factory=agora_utc)
    version: int = 1

    event_name: ClassVar[str] = ""

    def __post_init__(self):
        if not self.aggregate_id:
            raise ValueError("aggregate_id é obrigatório")

    @property
    @abstractmethod
    def aggregate_type(self) -> str:
        """Tipo do agregado que gerou o evento (ex: "Chamado")."""
        ...

    @property
    def event_type(self) -> str:
        """Nome da classe do evento."""
        return self.__class__.__name__

    @abstractmethod
    def payload(self) -> Dict[str, Any]:
        """
        Dados entregues aos clientes de tempo real.

        Returns:
            Dicionário serializável em JSON
        """
        ...

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializa evento completo (envelope + payload).

        Usado por publishers que precisam transportar o evento
        (Celery) e por logs estruturados.
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "event_name": self.event_name,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self.payload(),
        }

    def __repr__(self) -> str:
        return (
            f"{self.event_type}("
            f"event_name={self.event_name}, "
            f"aggregate_id={self.aggregate_id}, "
            f"occurred_at={self.occurred_at.isoformat()}"
            f")"
        )
