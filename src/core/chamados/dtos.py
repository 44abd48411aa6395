"""
Data Transfer Objects (DTOs) do Domínio de Chamados.

Tipos de DTOs:
- Input DTOs: carregam o ``ator`` (usuário autenticado) e os dados
  já extraídos do request
- Output DTOs: chamado com resumos de criador/atribuído, item de
  listagem com total de comentários, detalhe com comentários e histórico
- Query DTOs: filtros, paginação e ordenação da listagem
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.core.shared.exceptions import ValidationError
from src.core.usuarios.dtos import UsuarioAutenticado, UsuarioResumoDTO
from src.core.comentarios.dtos import ComentarioOutputDTO

from .entities import ChamadoEntity, HistoricoAcaoEntity, Prioridade, StatusChamado


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarChamadoInputDTO:
    """
    DTO de entrada para abrir chamado.

    Imutável (frozen=True) para garantir que dados
    validados não sejam alterados acidentalmente.

    Attributes:
        ator: Usuário autenticado (vira o criador)
        titulo: Título (5-200)
        descricao: Descrição (10-5000)
        categoria: Categoria (2-50)
        prioridade: Nome do enum (ex: "ALTA")
    """

    ator: UsuarioAutenticado
    titulo: str
    descricao: str
    categoria: str
    prioridade: str = "MEDIA"

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        return {
            "criador_id": self.ator.id,
            "titulo": self.titulo,
            "descricao": self.descricao,
            "categoria": self.categoria,
            "prioridade": self.prioridade,
        }


@dataclass(frozen=True)
class AtualizarChamadoInputDTO:
    """
    DTO de entrada para patch parcial de chamado.

    Campos None não são alterados. Em especial, ``atribuido_id=None``
    significa "não informado": a remoção de responsável é feita pela
    operação de atribuição.
    """

    ator: UsuarioAutenticado
    chamado_id: str
    titulo: Optional[str] = None
    descricao: Optional[str] = None
    prioridade: Optional[str] = None
    status: Optional[str] = None
    categoria: Optional[str] = None
    atribuido_id: Optional[str] = None


@dataclass(frozen=True)
class DeletarChamadoInputDTO:
    ator: UsuarioAutenticado
    chamado_id: str


@dataclass(frozen=True)
class AtribuirChamadoInputDTO:
    """
    DTO de entrada para atribuir chamado.

    Attributes:
        ator: Quem está atribuindo
        chamado_id: ID do chamado
        atribuido_id: Responsável (None remove a atribuição)
    """

    ator: UsuarioAutenticado
    chamado_id: str
    atribuido_id: Optional[str] = None


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class ChamadoOutputDTO:
    """
    DTO de saída completo com dados do chamado.

    Attributes:
        criador: Resumo do criador
        atribuido: Resumo do responsável (se houver)
    """

    id: str
    titulo: str
    descricao: str
    prioridade: str
    status: str
    categoria: str
    criador_id: str
    atribuido_id: Optional[str]
    criador: Optional[UsuarioResumoDTO]
    atribuido: Optional[UsuarioResumoDTO]
    resolvido_em: Optional[datetime]
    criado_em: datetime
    atualizado_em: datetime

    @classmethod
    def from_entity(
        cls,
        entity: ChamadoEntity,
        criador: Optional[UsuarioResumoDTO] = None,
        atribuido: Optional[UsuarioResumoDTO] = None,
    ) -> "ChamadoOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Entidade ChamadoEntity
            criador: Resumo já carregado (evita N+1)
            atribuido: Resumo já carregado (evita N+1)
        """
        return cls(
            id=entity.id,
            titulo=entity.titulo,
            descricao=entity.descricao,
            prioridade=entity.prioridade.value,
            status=entity.status.value,
            categoria=entity.categoria,
            criador_id=entity.criador_id,
            atribuido_id=entity.atribuido_id,
            criador=criador,
            atribuido=atribuido,
            resolvido_em=entity.resolvido_em,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "id": self.id,
            "titulo": self.titulo,
            "descricao": self.descricao,
            "prioridade": self.prioridade,
            "status": self.status,
            "categoria": self.categoria,
            "criador_id": self.criador_id,
            "atribuido_id": self.atribuido_id,
            "criador": self.criador.to_dict() if self.criador else None,
            "atribuido": self.atribuido.to_dict() if self.atribuido else None,
            "resolvido_em": self.resolvido_em.isoformat() if self.resolvido_em else None,
            "criado_em": self.criado_em.isoformat(),
            "atualizado_em": self.atualizado_em.isoformat(),
        }


@dataclass
class ChamadoListItemDTO(ChamadoOutputDTO):
    """Item de listagem: chamado + total de comentários."""

    total_comentarios: int = 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["total_comentarios"] = self.total_comentarios
        return data


@dataclass
class HistoricoAcaoOutputDTO:
    id: str
    acao: str
    detalhes: str
    chamado_id: str
    usuario_id: str
    usuario: Optional[UsuarioResumoDTO]
    criado_em: datetime

    @classmethod
    def from_entity(
        cls,
        entity: HistoricoAcaoEntity,
        usuario: Optional[UsuarioResumoDTO] = None,
    ) -> "HistoricoAcaoOutputDTO":
        return cls(
            id=entity.id,
            acao=entity.acao.value,
            detalhes=entity.detalhes,
            chamado_id=entity.chamado_id,
            usuario_id=entity.usuario_id,
            usuario=usuario,
            criado_em=entity.criado_em,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "acao": self.acao,
            "detalhes": self.detalhes,
            "chamado_id": self.chamado_id,
            "usuario_id": self.usuario_id,
            "usuario": self.usuario.to_dict() if self.usuario else None,
            "criado_em": self.criado_em.isoformat(),
        }


@dataclass
class ChamadoDetalheDTO:
    """
    Detalhe do chamado.

    Attributes:
        chamado: Dados do chamado com resumos de usuários
        comentarios: Comentários em ordem crescente de criação
        historico: Trilha de auditoria, mais recente primeiro
    """

    chamado: ChamadoOutputDTO
    comentarios: List[ComentarioOutputDTO] = field(default_factory=list)
    historico: List[HistoricoAcaoOutputDTO] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.chamado.to_dict()
        data["comentarios"] = [c.to_dict() for c in self.comentarios]
        data["historico"] = [h.to_dict() for h in self.historico]
        return data


# =============================================================================
# QUERY DTOs (Filtros de Busca)
# =============================================================================

CAMPOS_ORDENACAO = (
    "criado_em",
    "atualizado_em",
    "resolvido_em",
    "titulo",
    "prioridade",
    "status",
    "categoria",
)

# Ordenados pela posição no enum (BAIXA < MEDIA < ALTA < CRITICA), não pelo texto
CAMPOS_ENUMERADOS = {
    "prioridade": Prioridade,
    "status": StatusChamado,
}


@dataclass(frozen=True)
class ListarChamadosQueryDTO:
    """
    DTO para parâmetros de busca/filtro de chamados.

    Attributes:
        status: Filtrar por status exato (nome do enum)
        prioridade: Filtrar por prioridade exata (nome do enum)
        criador_id: Filtrar por criador
        atribuido_id: Filtrar por responsável
        categoria: Substring, sem diferenciar maiúsculas
        data_inicio: criado_em >= data_inicio
        data_fim: criado_em <= data_fim
        pagina: Número da página (1-indexed)
        limite: Itens por página (1-100)
        ordenar_por: Campo de ordenação (ver CAMPOS_ORDENACAO)
        ordem: "asc" ou "desc"
    """

    status: Optional[str] = None
    prioridade: Optional[str] = None
    criador_id: Optional[str] = None
    atribuido_id: Optional[str] = None
    categoria: Optional[str] = None
    data_inicio: Optional[datetime] = None
    data_fim: Optional[datetime] = None
    pagina: int = 1
    limite: int = 10
    ordenar_por: str = "criado_em"
    ordem: str = "desc"

    def validar(self, limite_maximo: int = 100) -> None:
        """
        Raises:
            ValidationError: Se paginação ou ordenação inválidas
        """
        if self.pagina < 1:
            raise ValidationError("Página deve ser maior que 0", field="pagina")

        if self.limite < 1:
            raise ValidationError("Limite deve ser maior que 0", field="limite")

        if self.limite > limite_maximo:
            raise ValidationError(
                f"Limite não pode ser maior que {limite_maximo}",
                field="limite"
            )

        if self.ordenar_por not in CAMPOS_ORDENACAO:
            raise ValidationError(
                f"Campo de ordenação inválido: {self.ordenar_por}",
                field="ordenar_por"
            )

        if self.ordem not in ("asc", "desc"):
            raise ValidationError("Ordem deve ser 'asc' ou 'desc'", field="ordem")

    @property
    def offset(self) -> int:
        return (self.pagina - 1) * self.limite


@dataclass
class PaginatedResultDTO:
    """
    DTO para resultados paginados.

    Attributes:
        items: Itens da página atual
        total: Total de itens (sem paginação)
        pagina: Página atual
        limite: Itens por página
    """

    items: List[ChamadoListItemDTO]
    total: int
    pagina: int
    limite: int

    @property
    def total_paginas(self) -> int:
        """Calcula total de páginas (ceil)."""
        if self.limite <= 0:
            return 0
        return (self.total + self.limite - 1) // self.limite

    @property
    def tem_proxima(self) -> bool:
        return self.pagina < self.total_paginas

    @property
    def tem_anterior(self) -> bool:
        return self.pagina > 1

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "pagina": self.pagina,
            "limite": self.limite,
            "total_paginas": self.total_paginas,
            "tem_proxima": self.tem_proxima,
            "tem_anterior": self.tem_anterior,
        }
