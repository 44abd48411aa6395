"""
Ports (Interfaces) de Comentários.
"""

from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

from .entities import ComentarioEntity


@runtime_checkable
class ComentarioRepository(Protocol):
    """
    Interface para persistência de Comentários.

    Implementações:
    - DjangoComentarioRepository (ORM)
    - InMemoryComentarioRepository (testes)
    """

    def save(self, comentario: ComentarioEntity) -> None:
        ...

    def get_by_id(self, comentario_id: str) -> Optional[ComentarioEntity]:
        ...

    def delete(self, comentario_id: str) -> None:
        ...

    def list_by_chamado(self, chamado_id: str) -> List[ComentarioEntity]:
        """Comentários do chamado em ordem crescente de criação."""
        ...

    def count_by_chamados(self, chamado_ids: Iterable[str]) -> Dict[str, int]:
        """
        Conta comentários de vários chamados em uma consulta.

        Returns:
            Dicionário chamado_id -> total (chamados sem comentário
            podem ser omitidos)
        """
        ...


class InMemoryComentarioRepository:
    """
    Implementação em memória do ComentarioRepository.

    Registrada como dependente do InMemoryChamadoRepository para
    reproduzir a exclusão em cascata do banco.
    """

    def __init__(self):
        self._comentarios: dict[str, ComentarioEntity] = {}

    def save(self, comentario: ComentarioEntity) -> None:
        self._comentarios[comentario.id] = comentario

    def get_by_id(self, comentario_id: str) -> Optional[ComentarioEntity]:
        return self._comentarios.get(comentario_id)

    def delete(self, comentario_id: str) -> None:
        self._comentarios.pop(comentario_id, None)

    def list_by_chamado(self, chamado_id: str) -> List[ComentarioEntity]:
        return sorted(
            (c for c in self._comentarios.values() if c.chamado_id == chamado_id),
            key=lambda c: c.criado_em
        )

    def count_by_chamados(self, chamado_ids: Iterable[str]) -> Dict[str, int]:
        ids = set(chamado_ids)
        contagem: Dict[str, int] = {}
        for comentario in self._comentarios.values():
            if comentario.chamado_id in ids:
                contagem[comentario.chamado_id] = contagem.get(comentario.chamado_id, 0) + 1
        return contagem

    def delete_by_chamado(self, chamado_id: str) -> None:
        for comentario in self.list_by_chamado(chamado_id):
            del self._comentarios[comentario.id]

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._comentarios.clear()
