"""
Use Cases (Application Services) do Domínio de Chamados.

Use Cases implementados:
- CriarChamadoService: Abre chamado (status ABERTO)
- AtualizarChamadoService: Patch parcial com trilha de auditoria
- DeletarChamadoService: Remove chamado (somente administrativos)
- AtribuirChamadoService: Define/remove responsável
- ListarChamadosService: Lista com filtros e paginação
- ObterChamadoService: Detalhe com comentários e histórico

Responsabilidades dos Use Cases:
- Verificar permissões do ator (via Papel/Capacidade)
- Coordenar entidades
- Gravar mutação + histórico na mesma transação (via UoW)
- Enfileirar eventos de tempo real (publicados após commit)
- Retornar DTOs de saída
"""

from dataclasses import replace
from typing import Optional, Type, TypeVar
import logging

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from src.core.usuarios.permissions import Capacidade
from src.core.usuarios.ports import UsuarioRepository
from src.core.usuarios.use_cases import carregar_resumos
from src.core.comentarios.dtos import ComentarioOutputDTO
from src.core.comentarios.ports import ComentarioRepository

from .ports import ChamadoRepository, HistoricoRepository
from .entities import (
    AcaoHistorico,
    ChamadoEntity,
    HistoricoAcaoEntity,
    Prioridade,
    StatusChamado,
)
from .dtos import (
    AtribuirChamadoInputDTO,
    AtualizarChamadoInputDTO,
    ChamadoDetalheDTO,
    ChamadoListItemDTO,
    ChamadoOutputDTO,
    CriarChamadoInputDTO,
    DeletarChamadoInputDTO,
    HistoricoAcaoOutputDTO,
    ListarChamadosQueryDTO,
    PaginatedResultDTO,
)
from .events import (
    ChamadoAtualizadoEvent,
    ChamadoCriadoEvent,
    ChamadoStatusAlteradoEvent,
)

logger = logging.getLogger(__name__)


MENSAGEM_CHAMADO_NAO_ENCONTRADO = "Chamado não encontrado"
MENSAGEM_RESPONSAVEL_INVALIDO = "Usuário para atribuição não encontrado ou inativo"

E = TypeVar("E", Prioridade, StatusChamado)


def converter_enum(enum_cls: Type[E], valor: Optional[str], campo: str) -> Optional[E]:
    """
    Converte string da API em enum do domínio.

    Raises:
        ValidationError: Se valor não pertence ao enum
    """
    if valor is None:
        return None

    try:
        return enum_cls.from_string(valor)
    except ValueError as e:
        raise ValidationError(str(e), field=campo)


def buscar_chamado(chamado_repo: ChamadoRepository, chamado_id: str) -> ChamadoEntity:
    chamado = chamado_repo.get_by_id(chamado_id)

    if not chamado:
        raise EntityNotFoundError(
            MENSAGEM_CHAMADO_NAO_ENCONTRADO,
            entity_type="Chamado",
            entity_id=chamado_id
        )

    return chamado


def montar_chamado(chamado: ChamadoEntity, usuario_repo: UsuarioRepository) -> ChamadoOutputDTO:
    """Converte entidade em DTO com resumos de criador e atribuído."""
    resumos = carregar_resumos(usuario_repo, [chamado.criador_id, chamado.atribuido_id])
    return ChamadoOutputDTO.from_entity(
        chamado,
        criador=resumos.get(chamado.criador_id),
        atribuido=resumos.get(chamado.atribuido_id) if chamado.atribuido_id else None,
    )


def _buscar_responsavel_ativo(usuario_repo: UsuarioRepository, usuario_id: str):
    responsavel = usuario_repo.get_by_id(usuario_id)

    if not responsavel or not responsavel.ativo:
        raise EntityNotFoundError(
            MENSAGEM_RESPONSAVEL_INVALIDO,
            entity_type="Usuario",
            entity_id=usuario_id
        )

    return responsavel


class CriarChamadoService:
    """
    Use Case: Abrir um novo chamado.

    Fluxo:
    1. Converter prioridade
    2. Criar entidade (status ABERTO)
    3. Persistir chamado + entrada CRIADO no histórico
    4. Enfileirar evento ticket:created
    5. Retornar DTO de saída

    Example:
        service = CriarChamadoService(chamado_repo, historico_repo, usuario_repo, uow)
        output = service.execute(CriarChamadoInputDTO(
            ator=usuario,
            titulo="VPN não conecta",
            descricao="Erro de autenticação ao conectar na VPN",
            categoria="Rede",
            prioridade="ALTA",
        ))
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        historico_repo: HistoricoRepository,
        usuario_repo: UsuarioRepository,
        uow: UnitOfWork,
    ):
        """
        Inicializa service com dependências injetadas.

        Args:
            chamado_repo: Repositório de chamados
            historico_repo: Trilha de auditoria
            usuario_repo: Usado para montar resumos de usuários
            uow: Unit of Work para transação atômica
        """
        self.chamado_repo = chamado_repo
        self.historico_repo = historico_repo
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: CriarChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Executa criação de chamado em transação atômica.

        Raises:
            ValidationError: Se dados inválidos
        """
        with self.uow:
            prioridade = converter_enum(Prioridade, input_dto.prioridade, "prioridade")

            chamado = ChamadoEntity.criar(
                titulo=input_dto.titulo,
                descricao=input_dto.descricao,
                prioridade=prioridade,
                categoria=input_dto.categoria,
                criador_id=input_dto.ator.id,
            )

            self.chamado_repo.save(chamado)
            self.historico_repo.add(
                HistoricoAcaoEntity.registrar(
                    acao=AcaoHistorico.CRIADO,
                    detalhes=f"Chamado criado com prioridade {chamado.prioridade.value}",
                    chamado_id=chamado.id,
                    usuario_id=input_dto.ator.id,
                )
            )

            output = montar_chamado(chamado, self.usuario_repo)

            # Publicado após commit
            self.uow.publish_event(
                ChamadoCriadoEvent(aggregate_id=chamado.id, chamado=output.to_dict())
            )

        logger.info(f"Chamado {chamado.id} criado por {input_dto.ator.id}")

        return output


class AtualizarChamadoService:
    """
    Use Case: Atualizar chamado (patch parcial).

    Permitido ao criador ou a quem tem EDITAR_QUALQUER_CHAMADO.
    Qualquer status do enum é aceito, sem grafo de transições.

    Fluxo:
    1. Buscar chamado e verificar permissão
    2. Validar responsável informado (existente e ativo)
    3. Aplicar alterações e calcular resumo
    4. Persistir + entrada ATUALIZADO (se houve mudança)
    5. Enfileirar ticket:updated e, se o status mudou,
       ticket:status-changed
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        historico_repo: HistoricoRepository,
        usuario_repo: UsuarioRepository,
        uow: UnitOfWork,
    ):
        self.chamado_repo = chamado_repo
        self.historico_repo = historico_repo
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se chamado ou responsável não existe
            PermissionDeniedError: Se ator não é criador nem administrativo
            ValidationError: Se algum campo é inválido
        """
        ator = input_dto.ator

        with self.uow:
            chamado = buscar_chamado(self.chamado_repo, input_dto.chamado_id)

            if not (chamado.criado_por(ator.id) or ator.pode(Capacidade.EDITAR_QUALQUER_CHAMADO)):
                raise PermissionDeniedError(
                    "Sem permissão para atualizar este chamado",
                    capacidade=Capacidade.EDITAR_QUALQUER_CHAMADO.value
                )

            status = converter_enum(StatusChamado, input_dto.status, "status")
            prioridade = converter_enum(Prioridade, input_dto.prioridade, "prioridade")

            if input_dto.atribuido_id is not None:
                _buscar_responsavel_ativo(self.usuario_repo, input_dto.atribuido_id)

            status_anterior = chamado.status

            alteracoes = chamado.aplicar_alteracoes(
                titulo=input_dto.titulo,
                descricao=input_dto.descricao,
                prioridade=prioridade,
                status=status,
                categoria=input_dto.categoria,
                atribuido_id=input_dto.atribuido_id,
            )

            self.chamado_repo.save(chamado)

            if alteracoes:
                self.historico_repo.add(
                    HistoricoAcaoEntity.registrar(
                        acao=AcaoHistorico.ATUALIZADO,
                        detalhes=", ".join(alteracoes),
                        chamado_id=chamado.id,
                        usuario_id=ator.id,
                    )
                )

            output = montar_chamado(chamado, self.usuario_repo)

            self.uow.publish_event(
                ChamadoAtualizadoEvent(aggregate_id=chamado.id, chamado=output.to_dict())
            )

            if chamado.status != status_anterior:
                self.uow.publish_event(
                    ChamadoStatusAlteradoEvent(
                        aggregate_id=chamado.id,
                        novo_status=chamado.status.value,
                        alterado_por=ator.nome,
                    )
                )

        logger.info(
            f"Chamado {chamado.id} atualizado por {ator.id}: "
            f"{', '.join(alteracoes) or 'sem alterações'}"
        )

        return output


class DeletarChamadoService:
    """
    Use Case: Deletar chamado.

    Somente usuários com DELETAR_CHAMADO. Comentários e histórico
    são removidos em cascata.
    """

    def __init__(self, chamado_repo: ChamadoRepository, uow: UnitOfWork):
        self.chamado_repo = chamado_repo
        self.uow = uow

    def execute(self, input_dto: DeletarChamadoInputDTO) -> None:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe
            PermissionDeniedError: Se ator não é administrativo
        """
        with self.uow:
            chamado = buscar_chamado(self.chamado_repo, input_dto.chamado_id)

            if not input_dto.ator.pode(Capacidade.DELETAR_CHAMADO):
                raise PermissionDeniedError(
                    "Sem permissão para deletar chamados",
                    capacidade=Capacidade.DELETAR_CHAMADO.value
                )

            self.chamado_repo.delete(chamado.id)

        logger.info(f"Chamado {chamado.id} deletado por {input_dto.ator.id}")


class AtribuirChamadoService:
    """
    Use Case: Atribuir (ou desatribuir) chamado.

    Com responsável → status EM_ANDAMENTO e histórico ATRIBUIDO;
    sem responsável → status ABERTO e histórico DESATRIBUIDO.
    O status anterior é sobrescrito em ambos os casos.
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        historico_repo: HistoricoRepository,
        usuario_repo: UsuarioRepository,
        uow: UnitOfWork,
    ):
        self.chamado_repo = chamado_repo
        self.historico_repo = historico_repo
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: AtribuirChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe ou responsável
                não existe/está inativo
            PermissionDeniedError: Se papel do ator não permite atribuir
        """
        ator = input_dto.ator

        if not ator.pode(Capacidade.ATRIBUIR_CHAMADO):
            raise PermissionDeniedError(
                "Sem permissão para atribuir chamados",
                capacidade=Capacidade.ATRIBUIR_CHAMADO.value
            )

        with self.uow:
            chamado = buscar_chamado(self.chamado_repo, input_dto.chamado_id)

            if input_dto.atribuido_id:
                responsavel = _buscar_responsavel_ativo(self.usuario_repo, input_dto.atribuido_id)
                chamado.atribuir(responsavel.id)
                acao = AcaoHistorico.ATRIBUIDO
                detalhes = f"Chamado atribuído para {responsavel.nome}"
            else:
                chamado.atribuir(None)
                acao = AcaoHistorico.DESATRIBUIDO
                detalhes = "Chamado desatribuído"

            self.chamado_repo.save(chamado)
            self.historico_repo.add(
                HistoricoAcaoEntity.registrar(
                    acao=acao,
                    detalhes=detalhes,
                    chamado_id=chamado.id,
                    usuario_id=ator.id,
                )
            )

            output = montar_chamado(chamado, self.usuario_repo)

            self.uow.publish_event(
                ChamadoAtualizadoEvent(aggregate_id=chamado.id, chamado=output.to_dict())
            )

        logger.info(f"Chamado {chamado.id}: {detalhes} (por {ator.id})")

        return output


class ListarChamadosService:
    """
    Use Case: Listar chamados com filtros e paginação.

    Cada item traz resumos de criador/atribuído e o total de
    comentários; resumos e contagens são carregados em lote.
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        comentario_repo: ComentarioRepository,
        usuario_repo: UsuarioRepository,
        limite_maximo: int = 100,
    ):
        self.chamado_repo = chamado_repo
        self.comentario_repo = comentario_repo
        self.usuario_repo = usuario_repo
        self.limite_maximo = limite_maximo

    def execute(self, query: Optional[ListarChamadosQueryDTO] = None) -> PaginatedResultDTO:
        """
        Raises:
            ValidationError: Se filtros, paginação ou ordenação inválidos
        """
        query = query or ListarChamadosQueryDTO()
        query.validar(self.limite_maximo)

        status = converter_enum(StatusChamado, query.status, "status")
        prioridade = converter_enum(Prioridade, query.prioridade, "prioridade")
        query = replace(
            query,
            status=status.value if status else None,
            prioridade=prioridade.value if prioridade else None,
        )

        chamados, total = self.chamado_repo.list_paginated(query)

        ids_usuarios = [c.criador_id for c in chamados] + [c.atribuido_id for c in chamados]
        resumos = carregar_resumos(self.usuario_repo, ids_usuarios)
        contagens = self.comentario_repo.count_by_chamados([c.id for c in chamados])

        items = []
        for chamado in chamados:
            base = ChamadoOutputDTO.from_entity(
                chamado,
                criador=resumos.get(chamado.criador_id),
                atribuido=resumos.get(chamado.atribuido_id) if chamado.atribuido_id else None,
            )
            items.append(
                ChamadoListItemDTO(
                    **vars(base),
                    total_comentarios=contagens.get(chamado.id, 0),
                )
            )

        return PaginatedResultDTO(
            items=items,
            total=total,
            pagina=query.pagina,
            limite=query.limite,
        )


class ObterChamadoService:
    """
    Use Case: Obter detalhe de um chamado.

    Inclui comentários (mais antigos primeiro) e histórico (mais
    recente primeiro), todos com resumo do usuário.
    """

    def __init__(
        self,
        chamado_repo: ChamadoRepository,
        historico_repo: HistoricoRepository,
        comentario_repo: ComentarioRepository,
        usuario_repo: UsuarioRepository,
    ):
        self.chamado_repo = chamado_repo
        self.historico_repo = historico_repo
        self.comentario_repo = comentario_repo
        self.usuario_repo = usuario_repo

    def execute(self, chamado_id: str) -> ChamadoDetalheDTO:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe
        """
        chamado = buscar_chamado(self.chamado_repo, chamado_id)
        comentarios = self.comentario_repo.list_by_chamado(chamado_id)
        historico = self.historico_repo.list_by_chamado(chamado_id)

        resumos = carregar_resumos(
            self.usuario_repo,
            [chamado.criador_id, chamado.atribuido_id]
            + [c.autor_id for c in comentarios]
            + [h.usuario_id for h in historico],
        )

        return ChamadoDetalheDTO(
            chamado=ChamadoOutputDTO.from_entity(
                chamado,
                criador=resumos.get(chamado.criador_id),
                atribuido=resumos.get(chamado.atribuido_id) if chamado.atribuido_id else None,
            ),
            comentarios=[
                ComentarioOutputDTO.from_entity(c, autor=resumos.get(c.autor_id))
                for c in comentarios
            ],
            historico=[
                HistoricoAcaoOutputDTO.from_entity(h, usuario=resumos.get(h.usuario_id))
                for h in historico
            ],
        )
