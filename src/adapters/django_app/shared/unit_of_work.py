"""
Unit of Work - Implementação Django.

Gerencia a transação que envolve a mutação de um chamado/comentário
e a entrada de histórico correspondente.

Responsabilidades:
- Abrir/fechar bloco ``transaction.atomic``
- Commit/Rollback coordenado
- Publicar eventos após commit bem-sucedido

Garantias:
- Atomicidade: mutação + histórico, tudo ou nada
- Eventos refletem apenas estado efetivamente persistido
- Falha na publicação nunca desfaz a transação
"""

from typing import Optional
import logging

from django.db import transaction

from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Usa ``transaction.atomic`` (savepoint quando já existe transação
    externa, como nos testes com ``django_db``). Eventos são publicados
    apenas após commit bem-sucedido, na ordem em que foram enfileirados.

    A mesma instância pode ser reutilizada em várias execuções do
    service: o estado é reiniciado a cada ``__enter__``.

    Example:
        with DjangoUnitOfWork(event_publisher=publisher) as uow:
            chamado_repo.save(chamado)
            historico_repo.add(entrada)
            uow.publish_event(ChamadoCriadoEvent(...))
        # Commit automático + eventos publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            chamado_repo.save(chamado)
            raise PermissionDeniedError("...")
        # Rollback automático, eventos descartados
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None, using: Optional[str] = None):
        """
        Args:
            event_publisher: Publicador de eventos (Redis, Celery, log)
            using: Alias do banco (padrão: default)
        """
        super().__init__()
        self._event_publisher = event_publisher
        self._using = using
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        if self._atomic is not None:
            raise RuntimeError("Unit of Work já está em uso")

        self._committed = False
        self._rolled_back = False
        self.clear_events()

        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Persiste mudanças e publica eventos.

        Ordem de execução:
        1. Fecha o bloco atomic (commit ou release do savepoint)
        2. Publica eventos enfileirados
        3. Limpa estado interno
        """
        if self._atomic is None:
            logger.warning("Transaction already finalized")
            return

        atomic, self._atomic = self._atomic, None

        try:
            atomic.__exit__(None, None, None)
        except Exception as e:
            logger.error(f"Commit failed: {e}")
            self._rolled_back = True
            self.clear_events()
            raise

        self._committed = True
        logger.debug("Transaction committed")

        self._publish_events()

    def rollback(self) -> None:
        """
        Desfaz mudanças e descarta eventos.

        Chamado automaticamente se exceção ocorrer dentro do contexto.
        """
        if self._atomic is None:
            return

        atomic, self._atomic = self._atomic, None

        try:
            transaction.set_rollback(True, using=self._using)
            atomic.__exit__(None, None, None)
            logger.debug("Transaction rolled back")
        finally:
            self._rolled_back = True
            self.clear_events()

    def _publish_events(self) -> None:
        """
        Entrega eventos ao publisher.

        Falhas são registradas em log e não propagadas: o estado já
        foi persistido e o cliente pode recarregar.
        """
        events = self.collect_events()
        self.clear_events()

        for event in events:
            logger.info(
                f"Publishing event: {event.event_name} "
                f"for aggregate {event.aggregate_id}"
            )

            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception as e:
                    logger.error(f"Failed to publish event {event.event_name}: {e}")

    @property
    def is_committed(self) -> bool:
        """Verifica se transação foi comitada."""
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        """Verifica se transação foi revertida."""
        return self._rolled_back
