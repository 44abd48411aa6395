"""
Ports (Interfaces) do Domínio de Chamados.

Define os contratos que os Adapters de infraestrutura devem implementar
para persistência e consulta de chamados e da trilha de auditoria.

Tipos de Ports:
- ChamadoRepository: CRUD + listagem paginada
- HistoricoRepository: trilha de auditoria (somente inclusão)

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core
"""

from typing import List, Optional, Protocol, Tuple, runtime_checkable

from .entities import ChamadoEntity, HistoricoAcaoEntity
from .dtos import CAMPOS_ENUMERADOS, ListarChamadosQueryDTO


@runtime_checkable
class ChamadoRepository(Protocol):
    """
    Interface para persistência de Chamados.

    Implementações:
    - DjangoChamadoRepository (PostgreSQL via ORM)
    - InMemoryChamadoRepository (para testes)
    """

    def save(self, chamado: ChamadoEntity) -> None:
        """
        Persiste chamado (create ou update).

        Raises:
            DependencyError: Se falha na persistência
        """
        ...

    def get_by_id(self, chamado_id: str) -> Optional[ChamadoEntity]:
        ...

    def delete(self, chamado_id: str) -> None:
        """
        Remove chamado junto com comentários e histórico (cascata).
        """
        ...

    def list_paginated(
        self,
        query: ListarChamadosQueryDTO,
    ) -> Tuple[List[ChamadoEntity], int]:
        """
        Lista chamados aplicando filtros, ordenação e paginação.

        Args:
            query: Filtros já validados

        Returns:
            Tupla (chamados da página, total sem paginação)
        """
        ...


@runtime_checkable
class HistoricoRepository(Protocol):
    """Interface da trilha de auditoria de chamados."""

    def add(self, entrada: HistoricoAcaoEntity) -> None:
        ...

    def list_by_chamado(self, chamado_id: str) -> List[HistoricoAcaoEntity]:
        """Entradas do chamado, mais recente primeiro."""
        ...


# =============================================================================
# Implementações em memória
# =============================================================================

class InMemoryChamadoRepository:
    """
    Implementação em memória do ChamadoRepository.

    Útil para testes unitários sem banco de dados. Repositórios
    dependentes (comentários, histórico) recebem ``delete_by_chamado``
    quando um chamado é removido, imitando a cascata do banco.

    Example:
        historico = InMemoryHistoricoRepository()
        comentarios = InMemoryComentarioRepository()
        repo = InMemoryChamadoRepository(dependentes=[historico, comentarios])
    """

    def __init__(self, dependentes: Optional[list] = None):
        self._chamados: dict[str, ChamadoEntity] = {}
        self._dependentes = list(dependentes or [])

    def registrar_dependente(self, repositorio) -> None:
        self._dependentes.append(repositorio)

    def save(self, chamado: ChamadoEntity) -> None:
        self._chamados[chamado.id] = chamado

    def get_by_id(self, chamado_id: str) -> Optional[ChamadoEntity]:
        return self._chamados.get(chamado_id)

    def delete(self, chamado_id: str) -> None:
        if self._chamados.pop(chamado_id, None) is None:
            return
        for repositorio in self._dependentes:
            repositorio.delete_by_chamado(chamado_id)

    def list_paginated(
        self,
        query: ListarChamadosQueryDTO,
    ) -> Tuple[List[ChamadoEntity], int]:
        chamados = [c for c in self._chamados.values() if self._corresponde(c, query)]

        def chave(chamado: ChamadoEntity):
            valor = getattr(chamado, query.ordenar_por)
            if query.ordenar_por in CAMPOS_ENUMERADOS:
                valor = valor.posicao
            return (valor is None, valor if valor is not None else "")

        chamados.sort(key=chave, reverse=query.ordem == "desc")

        total = len(chamados)
        return chamados[query.offset:query.offset + query.limite], total

    @staticmethod
    def _corresponde(chamado: ChamadoEntity, query: ListarChamadosQueryDTO) -> bool:
        if query.status and chamado.status.value != query.status:
            return False
        if query.prioridade and chamado.prioridade.value != query.prioridade:
            return False
        if query.criador_id and chamado.criador_id != query.criador_id:
            return False
        if query.atribuido_id and chamado.atribuido_id != query.atribuido_id:
            return False
        if query.categoria and query.categoria.lower() not in chamado.categoria.lower():
            return False
        if query.data_inicio and chamado.criado_em < query.data_inicio:
            return False
        if query.data_fim and chamado.criado_em > query.data_fim:
            return False
        return True

    def count(self) -> int:
        return len(self._chamados)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._chamados.clear()


class InMemoryHistoricoRepository:
    """Implementação em memória do HistoricoRepository."""

    def __init__(self):
        self._entradas: List[HistoricoAcaoEntity] = []

    def add(self, entrada: HistoricoAcaoEntity) -> None:
        self._entradas.append(entrada)

    def list_by_chamado(self, chamado_id: str) -> List[HistoricoAcaoEntity]:
        # Ordem de inclusão desempata entradas com o mesmo timestamp
        entradas = [
            (indice, e) for indice, e in enumerate(self._entradas)
            if e.chamado_id == chamado_id
        ]
        entradas.sort(key=lambda par: (par[1].criado_em, par[0]), reverse=True)
        return [e for _, e in entradas]

    def delete_by_chamado(self, chamado_id: str) -> None:
        self._entradas = [e for e in self._entradas if e.chamado_id != chamado_id]

    def all(self) -> List[HistoricoAcaoEntity]:
        return list(self._entradas)

    def clear(self) -> None:
        self._entradas.clear()
