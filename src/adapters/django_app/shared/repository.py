"""
Repository Base - Implementação base de repositórios com Django ORM.

Fornece funcionalidades comuns para todos os repositórios:
- CRUD básico (save via update_or_create, get_by_id, delete)
- Ordenação
- Otimização de queries (select_related)
- Tradução de erros de banco para exceções de domínio

Princípios:
- Repositórios são stateless
- Não contêm lógica de negócio
- Apenas persistência e queries
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import wraps
from typing import Generic, List, Optional, Type, TypeVar
import logging

from django.db import DatabaseError, IntegrityError, models
from django.db.models import QuerySet

from src.core.shared.exceptions import ConflictError, DependencyError

logger = logging.getLogger(__name__)

# Type variables
T = TypeVar("T")  # Entity type
M = TypeVar("M", bound=models.Model)  # Model type


def traduzir_erros_de_banco(func):
    """
    Decorator que converte erros do Django ORM em exceções de domínio.

    - IntegrityError → ConflictError (409)
    - DatabaseError → DependencyError (500)

    Exceções de domínio lançadas dentro do método passam intactas.
    """

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except IntegrityError as e:
            logger.warning(f"{type(self).__name__}.{func.__name__}: integridade violada: {e}")
            raise ConflictError(self.mensagem_conflito) from e
        except DatabaseError as e:
            logger.error(f"{type(self).__name__}.{func.__name__}: erro de banco: {e}")
            raise DependencyError("Erro ao acessar o banco de dados", dependency="database") from e

    return wrapper


@dataclass
class SortParams:
    """Parâmetros de ordenação."""
    field: str = "criado_em"
    direction: str = "desc"  # asc ou desc

    @property
    def order_by(self) -> str:
        """Retorna string para QuerySet.order_by()."""
        prefix = "-" if self.direction == "desc" else ""
        return f"{prefix}{self.field}"


class BaseRepository(ABC, Generic[T, M]):
    """
    Classe base abstrata para repositórios Django.

    Type Parameters:
        T: Tipo da entidade de domínio
        M: Tipo do Model Django

    Example:
        class DjangoUsuarioRepository(BaseRepository[UsuarioEntity, UsuarioModel]):
            model_class = UsuarioModel

            def to_entity(self, model):
                return UsuarioMapper.to_entity(model)

            def to_model(self, entity):
                return UsuarioMapper.to_model(entity)
    """

    # Classe do model Django (definir na subclasse)
    model_class: Type[M]

    # Campos para select_related (otimização N+1)
    select_related_fields: List[str] = []

    # Campo padrão de ordenação
    default_order_field: str = "-criado_em"

    mensagem_conflito: str = "Registro conflita com dados existentes"

    @abstractmethod
    def to_entity(self, model: M) -> T:
        """Converte Model Django para Entity de domínio."""
        raise NotImplementedError

    @abstractmethod
    def to_model(self, entity: T) -> M:
        """Converte Entity de domínio para Model Django (não salvo)."""
        raise NotImplementedError

    def _get_base_queryset(self) -> QuerySet[M]:
        """
        Retorna queryset base com otimizações.

        Aplica select_related para evitar N+1.
        """
        qs = self.model_class.objects.all()

        if self.select_related_fields:
            qs = qs.select_related(*self.select_related_fields)

        return qs

    @traduzir_erros_de_banco
    def save(self, entity: T) -> None:
        """
        Persiste entidade (create ou update).

        Usa update_or_create para atomicidade.
        """
        model = self.to_model(entity)

        model_dict = {}
        for field in model._meta.fields:
            if not field.primary_key:
                model_dict[field.attname] = getattr(model, field.attname)

        self.model_class.objects.update_or_create(
            id=getattr(entity, "id"),
            defaults=model_dict,
        )

        logger.debug(f"{self.model_class.__name__} saved: {entity.id}")

    @traduzir_erros_de_banco
    def get_by_id(self, entity_id: str) -> Optional[T]:
        """
        Busca entidade por ID.

        Returns:
            Entidade encontrada ou None
        """
        try:
            model = self._get_base_queryset().get(id=entity_id)
            return self.to_entity(model)
        except self.model_class.DoesNotExist:
            return None

    @traduzir_erros_de_banco
    def delete(self, entity_id: str) -> bool:
        """
        Remove entidade (cascata definida nas FKs).

        Returns:
            True se removido, False se não existia
        """
        deleted_count, _ = self.model_class.objects.filter(id=entity_id).delete()
        logger.debug(f"{self.model_class.__name__} deleted: {entity_id} ({deleted_count} rows)")
        return deleted_count > 0
