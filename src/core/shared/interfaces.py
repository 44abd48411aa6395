"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Este módulo define as interfaces que os Adapters devem implementar.
São os "Ports" da Arquitetura Hexagonal.

Ports compartilhados:
- UnitOfWork: transação atômica que envolve mutação + auditoria
- EventPublisher: entrega de eventos ao canal de tempo real

Princípio: Core define interfaces; Adapters implementam.
"""

from abc import ABC, abstractmethod
from typing import List

from .events import DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Garante que a mutação de um chamado/comentário e a entrada de
    histórico correspondente sejam persistidas juntas: ou ambas
    são gravadas ou nenhuma é.

    Pattern: Context Manager
        with uow:
            chamado_repo.save(chamado)
            historico_repo.add(entrada)
            uow.publish_event(event)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Eventos enfileirados só são publicados após commit
    bem-sucedido; em rollback são descartados.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        """Inicia uma nova transação."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Persiste todas as mudanças e publica eventos.

        Ordem de execução:
        1. Commit da transação no banco
        2. Publicação de eventos enfileirados
        3. Limpeza de estado interno
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Desfaz todas as mudanças e descarta eventos."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """
        Enfileira evento para publicação após commit.

        Args:
            event: Evento de domínio a ser publicado
        """
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Retorna eventos enfileirados (para testing/debugging)."""
        return list(self._events)

    def clear_events(self) -> None:
        """Limpa fila de eventos."""
        self._events.clear()


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Adapters implementam para integrar com o canal de tempo real
    (Redis pub/sub, Celery, log).
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """
        Publica evento para consumidores.

        Args:
            event: Evento de domínio a ser publicado
        """
        raise NotImplementedError

    def publish_batch(self, events: List[DomainEvent]) -> None:
        """Publica múltiplos eventos na ordem recebida."""
        for event in events:
            self.publish(event)
