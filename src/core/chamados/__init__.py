"""
Domínio de Chamados - Atendimento de Suporte.

Este módulo contém a lógica de negócio de chamados de suporte:
- Entidades (ChamadoEntity, HistoricoAcaoEntity, StatusChamado, Prioridade)
- Use Cases (Criar, Atualizar, Deletar, Atribuir, Listar, Obter)
- Domain Events (ticket:created, ticket:updated, ticket:status-changed)
- DTOs (Input/Output Data Transfer Objects)
- Ports (Interfaces para repositórios)

Características do Domínio:
- Toda mutação grava entrada no histórico na mesma transação
- Permissões por Papel/Capacidade do ator
- Eventos publicados em tempo real após commit
"""

from .entities import (
    AcaoHistorico,
    ChamadoEntity,
    HistoricoAcaoEntity,
    Prioridade,
    StatusChamado,
)
from .events import (
    ChamadoAtualizadoEvent,
    ChamadoCriadoEvent,
    ChamadoStatusAlteradoEvent,
)
from .dtos import (
    AtribuirChamadoInputDTO,
    AtualizarChamadoInputDTO,
    ChamadoDetalheDTO,
    ChamadoOutputDTO,
    CriarChamadoInputDTO,
    DeletarChamadoInputDTO,
    ListarChamadosQueryDTO,
    PaginatedResultDTO,
)
from .ports import ChamadoRepository, HistoricoRepository
from .use_cases import (
    AtribuirChamadoService,
    AtualizarChamadoService,
    CriarChamadoService,
    DeletarChamadoService,
    ListarChamadosService,
    ObterChamadoService,
)

__all__ = [
    # Entities
    "AcaoHistorico",
    "ChamadoEntity",
    "HistoricoAcaoEntity",
    "Prioridade",
    "StatusChamado",
    # Events
    "ChamadoAtualizadoEvent",
    "ChamadoCriadoEvent",
    "ChamadoStatusAlteradoEvent",
    # DTOs
    "AtribuirChamadoInputDTO",
    "AtualizarChamadoInputDTO",
    "ChamadoDetalheDTO",
    "ChamadoOutputDTO",
    "CriarChamadoInputDTO",
    "DeletarChamadoInputDTO",
    "ListarChamadosQueryDTO",
    "PaginatedResultDTO",
    # Ports
    "ChamadoRepository",
    "HistoricoRepository",
    # Use Cases
    "AtribuirChamadoService",
    "AtualizarChamadoService",
    "CriarChamadoService",
    "DeletarChamadoService",
    "ListarChamadosService",
    "ObterChamadoService",
]
