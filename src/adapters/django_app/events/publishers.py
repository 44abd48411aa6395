"""
Event Publishers - Entrega de eventos ao canal de tempo real.

Implementações:
- LoggingEventPublisher: Apenas loga (desenvolvimento)
- RedisBroadcastPublisher: Publica no canal Redis pub/sub consumido
  pelo gateway WebSocket
- CeleryEventPublisher: Entrega a uma task Celery que repassa ao Redis
- InMemoryEventPublisher: Para testes

Formato da mensagem no canal (JSON):
    {"event": "ticket:status-changed", "data": {...}}
"""

from typing import Any, Dict, List, Optional
import json
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)


DEFAULT_CHANNEL = "helpdesk:realtime"


def serializar_mensagem(event_name: str, data: Dict[str, Any]) -> str:
    """Monta a mensagem publicada no canal de tempo real."""
    return json.dumps({"event": event_name, "data": data}, default=str)


class LoggingEventPublisher(EventPublisher):
    """
    Publisher que apenas loga eventos.

    Usado em desenvolvimento para visualizar eventos
    sem necessidade de Redis.
    """

    def __init__(self, log_level: int = logging.INFO):
        self._log_level = log_level

    def publish(self, event: DomainEvent) -> None:
        logger.log(
            self._log_level,
            f"[EVENT] {event.event_name} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event.payload(), default=str)}"
        )


class RedisBroadcastPublisher(EventPublisher):
    """
    Publisher que envia eventos para um canal Redis pub/sub.

    O gateway WebSocket assina o canal e repassa a mensagem
    aos clientes conectados.

    Args:
        redis_url: URL do Redis (ex: redis://localhost:6379/0)
        channel: Canal pub/sub
        client: Cliente já construído (testes)
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        channel: str = DEFAULT_CHANNEL,
        client=None,
    ):
        if client is None:
            import redis

            client = redis.from_url(redis_url or "redis://localhost:6379/0", decode_responses=True)

        self._client = client
        self._channel = channel

    def publish(self, event: DomainEvent) -> None:
        """
        Publica evento no canal.

        Falhas de conexão são registradas e não propagadas.
        """
        mensagem = serializar_mensagem(event.event_name, event.payload())

        try:
            receptores = self._client.publish(self._channel, mensagem)
            logger.info(
                f"[EVENT->REDIS] {event.event_name} | "
                f"aggregate={event.aggregate_id} | receptores={receptores}"
            )
        except Exception as e:
            logger.error(f"Falha ao publicar evento no Redis: {e}", exc_info=True)


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para Celery.

    A task ``dispatch_domain_event`` repassa a mensagem ao canal
    Redis fora do ciclo request/response.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_name} | "
                f"aggregate={event.aggregate_id}"
            )

        try:
            from src.adapters.django_app.events.handlers import dispatch_domain_event
            dispatch_domain_event.delay(event.event_name, event.payload())
        except Exception as e:
            # Em caso de falha, não quebra o fluxo principal
            logger.error(f"Falha ao publicar evento no Celery: {e}", exc_info=True)


class InMemoryEventPublisher(EventPublisher):
    """
    Publisher em memória para testes.

    Armazena eventos publicados para verificação em testes.
    """

    def __init__(self):
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def clear(self) -> None:
        self._published_events.clear()

    def get_events_by_name(self, event_name: str) -> List[DomainEvent]:
        """Filtra eventos pelo nome publicado (ex: "ticket:updated")."""
        return [e for e in self._published_events if e.event_name == event_name]


def get_event_publisher(
    mode: str = "sync",
    redis_url: Optional[str] = None,
    channel: str = DEFAULT_CHANNEL,
) -> EventPublisher:
    """
    Factory para obter publisher apropriado.

    Args:
        mode: "sync" (log), "redis" (pub/sub direto) ou "celery"
        redis_url: URL do Redis (modo redis)
        channel: Canal de tempo real (modo redis)

    Raises:
        ValueError: Se modo desconhecido
    """
    if mode == "sync":
        return LoggingEventPublisher()
    if mode == "redis":
        return RedisBroadcastPublisher(redis_url=redis_url, channel=channel)
    if mode == "celery":
        return CeleryEventPublisher()

    raise ValueError(f"EVENT_PUBLISHER_MODE inválido: {mode}")
