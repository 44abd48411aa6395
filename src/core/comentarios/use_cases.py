"""
Use Cases de Comentários.

- CriarComentarioService: Comentar em um chamado
- AtualizarComentarioService: Editar (autor/moderador, janela de 30 min)
- DeletarComentarioService: Remover (autor/moderador)
- ListarComentariosService: Comentários do chamado, mais antigos primeiro

Toda mutação grava entrada no histórico do chamado na mesma transação.
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging

from src.core.shared.events import agora_utc
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import (
    ComentarioExpiradoError,
    EntityNotFoundError,
    PermissionDeniedError,
)
from src.core.usuarios.dtos import UsuarioAutenticado
from src.core.usuarios.permissions import Capacidade
from src.core.usuarios.ports import UsuarioRepository
from src.core.usuarios.use_cases import carregar_resumos
from src.core.chamados.entities import AcaoHistorico, HistoricoAcaoEntity
from src.core.chamados.ports import ChamadoRepository, HistoricoRepository
from src.core.chamados.use_cases import buscar_chamado

from .entities import ComentarioEntity
from .ports import ComentarioRepository
from .dtos import (
    AtualizarComentarioInputDTO,
    ComentarioOutputDTO,
    CriarComentarioInputDTO,
    DeletarComentarioInputDTO,
)
from .events import ComentarioCriadoEvent, ComentarioDeletadoEvent

logger = logging.getLogger(__name__)


def _buscar_comentario(repo: ComentarioRepository, comentario_id: str) -> ComentarioEntity:
    comentario = repo.get_by_id(comentario_id)

    if not comentario:
        raise EntityNotFoundError(
            "Comentário não encontrado",
            entity_type="Comentario",
            entity_id=comentario_id
        )

    return comentario


def _pode_moderar(ator: UsuarioAutenticado, comentario: ComentarioEntity) -> bool:
    return comentario.escrito_por(ator.id) or ator.pode(Capacidade.MODERAR_COMENTARIOS)


def _montar(comentario: ComentarioEntity, usuario_repo: UsuarioRepository) -> ComentarioOutputDTO:
    resumos = carregar_resumos(usuario_repo, [comentario.autor_id])
    return ComentarioOutputDTO.from_entity(comentario, autor=resumos.get(comentario.autor_id))


class CriarComentarioService:
    """
    Use Case: Comentar em um chamado.

    Fluxo:
    1. Validar conteúdo e existência do chamado
    2. Persistir comentário + entrada COMENTARIO_ADICIONADO
    3. Enfileirar ticket:comment
    """

    def __init__(
        self,
        comentario_repo: ComentarioRepository,
        chamado_repo: ChamadoRepository,
        historico_repo: HistoricoRepository,
        usuario_repo: UsuarioRepository,
        uow: UnitOfWork,
    ):
        self.comentario_repo = comentario_repo
        self.chamado_repo = chamado_repo
        self.historico_repo = historico_repo
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: CriarComentarioInputDTO) -> ComentarioOutputDTO:
        """
        Raises:
            ValidationError: Se conteúdo vazio ou maior que 2000 caracteres
            EntityNotFoundError: Se chamado não existe
        """
        ComentarioEntity.validar_conteudo(input_dto.conteudo)

        with self.uow:
            chamado = buscar_chamado(self.chamado_repo, input_dto.chamado_id)

            comentario = ComentarioEntity.criar(
                conteudo=input_dto.conteudo,
                autor_id=input_dto.ator.id,
                chamado_id=chamado.id,
            )

            self.comentario_repo.save(comentario)
            self.historico_repo.add(
                HistoricoAcaoEntity.registrar(
                    acao=AcaoHistorico.COMENTARIO_ADICIONADO,
                    detalhes="Novo comentário adicionado",
                    chamado_id=chamado.id,
                    usuario_id=input_dto.ator.id,
                )
            )

            output = _montar(comentario, self.usuario_repo)

            self.uow.publish_event(
                ComentarioCriadoEvent(aggregate_id=chamado.id, comentario=output.to_dict())
            )

        logger.info(f"Comentário {comentario.id} adicionado ao chamado {chamado.id}")

        return output


class AtualizarComentarioService:
    """
    Use Case: Editar comentário.

    Regras:
    - Somente o autor ou quem tem MODERAR_COMENTARIOS
    - Após a janela de edição (30 min), apenas quem tem
      EDITAR_COMENTARIO_SEM_PRAZO

    Args:
        janela_minutos: Janela de edição em minutos
        relogio: Função que retorna o instante atual (injetável em testes)
    """

    def __init__(
        self,
        comentario_repo: ComentarioRepository,
        historico_repo: HistoricoRepository,
        usuario_repo: UsuarioRepository,
        uow: UnitOfWork,
        janela_minutos: int = ComentarioEntity.JANELA_EDICAO_MINUTOS,
        relogio: Optional[Callable[[], datetime]] = None,
    ):
        self.comentario_repo = comentario_repo
        self.historico_repo = historico_repo
        self.usuario_repo = usuario_repo
        self.uow = uow
        self.janela_minutos = janela_minutos
        self.relogio = relogio or agora_utc

    def execute(self, input_dto: AtualizarComentarioInputDTO) -> ComentarioOutputDTO:
        """
        Raises:
            ValidationError: Se conteúdo inválido
            EntityNotFoundError: Se comentário não existe
            PermissionDeniedError: Se ator não é autor nem moderador
            ComentarioExpiradoError: Se fora da janela de edição
        """
        ator = input_dto.ator
        ComentarioEntity.validar_conteudo(input_dto.conteudo)

        with self.uow:
            comentario = _buscar_comentario(self.comentario_repo, input_dto.comentario_id)

            if not _pode_moderar(ator, comentario):
                raise PermissionDeniedError(
                    "Sem permissão para editar este comentário",
                    capacidade=Capacidade.MODERAR_COMENTARIOS.value
                )

            agora = self.relogio()

            if (
                not comentario.dentro_da_janela_de_edicao(agora, self.janela_minutos)
                and not ator.pode(Capacidade.EDITAR_COMENTARIO_SEM_PRAZO)
            ):
                raise ComentarioExpiradoError()

            comentario.editar(input_dto.conteudo, agora=agora)

            self.comentario_repo.save(comentario)
            self.historico_repo.add(
                HistoricoAcaoEntity.registrar(
                    acao=AcaoHistorico.COMENTARIO_EDITADO,
                    detalhes="Comentário editado",
                    chamado_id=comentario.chamado_id,
                    usuario_id=ator.id,
                )
            )

        logger.info(f"Comentário {comentario.id} editado por {ator.id}")

        return _montar(comentario, self.usuario_repo)


class DeletarComentarioService:
    """Use Case: Remover comentário (autor ou moderador)."""

    def __init__(
        self,
        comentario_repo: ComentarioRepository,
        historico_repo: HistoricoRepository,
        uow: UnitOfWork,
    ):
        self.comentario_repo = comentario_repo
        self.historico_repo = historico_repo
        self.uow = uow

    def execute(self, input_dto: DeletarComentarioInputDTO) -> None:
        """
        Raises:
            EntityNotFoundError: Se comentário não existe
            PermissionDeniedError: Se ator não é autor nem moderador
        """
        ator = input_dto.ator

        with self.uow:
            comentario = _buscar_comentario(self.comentario_repo, input_dto.comentario_id)

            if not _pode_moderar(ator, comentario):
                raise PermissionDeniedError(
                    "Sem permissão para deletar este comentário",
                    capacidade=Capacidade.MODERAR_COMENTARIOS.value
                )

            self.comentario_repo.delete(comentario.id)
            self.historico_repo.add(
                HistoricoAcaoEntity.registrar(
                    acao=AcaoHistorico.COMENTARIO_DELETADO,
                    detalhes="Comentário deletado",
                    chamado_id=comentario.chamado_id,
                    usuario_id=ator.id,
                )
            )

            self.uow.publish_event(
                ComentarioDeletadoEvent(
                    aggregate_id=comentario.chamado_id,
                    comentario_id=comentario.id,
                )
            )

        logger.info(f"Comentário {comentario.id} deletado por {ator.id}")


class ListarComentariosService:
    """Use Case: Listar comentários de um chamado."""

    def __init__(
        self,
        comentario_repo: ComentarioRepository,
        chamado_repo: ChamadoRepository,
        usuario_repo: UsuarioRepository,
    ):
        self.comentario_repo = comentario_repo
        self.chamado_repo = chamado_repo
        self.usuario_repo = usuario_repo

    def execute(self, chamado_id: str) -> List[ComentarioOutputDTO]:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe
        """
        buscar_chamado(self.chamado_repo, chamado_id)

        comentarios = self.comentario_repo.list_by_chamado(chamado_id)
        resumos = carregar_resumos(self.usuario_repo, [c.autor_id for c in comentarios])

        return [
            ComentarioOutputDTO.from_entity(c, autor=resumos.get(c.autor_id))
            for c in comentarios
        ]
