"""
Domain Events do Domínio de Chamados.

Eventos publicados no canal de tempo real após o commit:
- ChamadoCriadoEvent: "ticket:created"
- ChamadoAtualizadoEvent: "ticket:updated"
- ChamadoStatusAlteradoEvent: "ticket:status-changed"

Uso:
    with uow:
        chamado = ChamadoEntity.criar(...)
        repo.save(chamado)
        uow.publish_event(ChamadoCriadoEvent(
            aggregate_id=chamado.id,
            chamado=output.to_dict(),
        ))
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict

from src.core.shared.events import DomainEvent


@dataclass
class ChamadoCriadoEvent(DomainEvent):
    """
    Evento: Chamado foi criado.

    Attributes:
        chamado: Representação completa do chamado (com resumos
            de criador e atribuído) já serializada
    """

    event_name: ClassVar[str] = "ticket:created"

    chamado: Dict[str, Any] = field(default_factory=dict)

    @property
    def aggregate_type(self) -> str:
        return "Chamado"

    def payload(self) -> Dict[str, Any]:
        return self.chamado


@dataclass
class ChamadoAtualizadoEvent(DomainEvent):
    """
    Evento: Chamado foi alterado (patch ou atribuição).

    Attributes:
        chamado: Estado do chamado após a alteração
    """

    event_name: ClassVar[str] = "ticket:updated"

    chamado: Dict[str, Any] = field(default_factory=dict)

    @property
    def aggregate_type(self) -> str:
        return "Chamado"

    def payload(self) -> Dict[str, Any]:
        return self.chamado


@dataclass
class ChamadoStatusAlteradoEvent(DomainEvent):
    """
    Evento: Status do chamado mudou.

    Emitido somente quando o valor de status efetivamente mudou,
    sempre junto com ChamadoAtualizadoEvent.

    Attributes:
        novo_status: Valor do novo status (ex: "RESOLVIDO")
        alterado_por: Nome de exibição de quem alterou
    """

    event_name: ClassVar[str] = "ticket:status-changed"

    novo_status: str = ""
    alterado_por: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Chamado"

    def payload(self) -> Dict[str, Any]:
        return {
            "chamado_id": self.aggregate_id,
            "novo_status": self.novo_status,
            "alterado_por": self.alterado_por,
        }
