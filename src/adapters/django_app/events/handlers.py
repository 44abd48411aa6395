"""
Event Handlers - Tasks Celery de tempo real.

Quando EVENT_PUBLISHER_MODE=celery, o CeleryEventPublisher enfileira
``dispatch_domain_event``; o worker repassa a mensagem ao canal Redis
assinado pelo gateway WebSocket. Isso tira a chamada ao Redis do
ciclo request/response e ganha retry automático.

Padrão:
    @shared_task(bind=True, ...)
    def <task>(self, event_name: str, event_data: dict) -> None:
        ...
"""

from typing import Any, Dict
import logging

from celery import shared_task
import redis
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError
from django.conf import settings

from src.adapters.django_app.events.publishers import (
    DEFAULT_CHANNEL,
    serializar_mensagem,
)

logger = logging.getLogger(__name__)


_redis_client = None


def get_redis_client():
    """Cliente Redis do worker (criado sob demanda e reutilizado)."""
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.from_url(
            getattr(settings, "REDIS_URL", None) or "redis://localhost:6379/0",
            decode_responses=True,
        )

    return _redis_client


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=5,
    autoretry_for=(RedisConnectionError, RedisTimeoutError),
    acks_late=True,
)
def dispatch_domain_event(self, event_name: str, event_data: Dict[str, Any]) -> int:
    """
    Repassa evento ao canal de tempo real.

    Args:
        event_name: Nome publicado (ex: "ticket:created")
        event_data: Payload já serializável

    Returns:
        Número de assinantes que receberam a mensagem
    """
    channel = getattr(settings, "REALTIME_CHANNEL", DEFAULT_CHANNEL)

    try:
        receptores = get_redis_client().publish(
            channel,
            serializar_mensagem(event_name, event_data),
        )
    except Exception as e:
        logger.error(f"Erro ao repassar {event_name} ao Redis: {e}", exc_info=True)
        raise

    logger.info(f"[HANDLER] {event_name} -> {channel} ({receptores} receptores)")

    return receptores
