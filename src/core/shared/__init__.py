"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Interfaces (Ports)
- Base classes para Domain Events
"""

from .exceptions import (
    DomainException,
    ValidationError,
    ComentarioExpiradoError,
    AuthenticationError,
    PermissionDeniedError,
    EntityNotFoundError,
    ConflictError,
    DependencyError,
)
from .events import DomainEvent, agora_utc
from .interfaces import UnitOfWork, EventPublisher

__all__ = [
    "DomainException",
    "ValidationError",
    "ComentarioExpiradoError",
    "AuthenticationError",
    "PermissionDeniedError",
    "EntityNotFoundError",
    "ConflictError",
    "DependencyError",
    "DomainEvent",
    "agora_utc",
    "UnitOfWork",
    "EventPublisher",
]
