"""
Mappers entre entidades do Core e models Django.

- ChamadoMapper: ChamadoEntity ↔ ChamadoModel
- ComentarioMapper: ComentarioEntity ↔ ComentarioModel
- HistoricoAcaoMapper: HistoricoAcaoEntity ↔ HistoricoAcaoModel

Enums são persistidos pelo nome (``.value``) e reconstruídos
pelo construtor do enum.
"""

from src.core.chamados.entities import (
    AcaoHistorico,
    ChamadoEntity,
    HistoricoAcaoEntity,
    Prioridade,
    StatusChamado,
)
from src.core.comentarios.entities import ComentarioEntity

from .models import ChamadoModel, ComentarioModel, HistoricoAcaoModel


class ChamadoMapper:
    """
    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity
    """

    @staticmethod
    def to_model(entity: ChamadoEntity) -> ChamadoModel:
        """
        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return ChamadoModel(
            id=entity.id,
            titulo=entity.titulo,
            descricao=entity.descricao,
            prioridade=entity.prioridade.value,
            status=entity.status.value,
            categoria=entity.categoria,
            criador_id=entity.criador_id,
            atribuido_id=entity.atribuido_id,
            resolvido_em=entity.resolvido_em,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
        )

    @staticmethod
    def to_entity(model: ChamadoModel) -> ChamadoEntity:
        """
        Bypassa validações de ``criar`` pois os dados já foram
        validados na gravação original.
        """
        return ChamadoEntity(
            id=model.id,
            titulo=model.titulo,
            descricao=model.descricao,
            prioridade=Prioridade(model.prioridade),
            status=StatusChamado(model.status),
            categoria=model.categoria,
            criador_id=model.criador_id,
            atribuido_id=model.atribuido_id,
            resolvido_em=model.resolvido_em,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )


class ComentarioMapper:

    @staticmethod
    def to_model(entity: ComentarioEntity) -> ComentarioModel:
        return ComentarioModel(
            id=entity.id,
            conteudo=entity.conteudo,
            chamado_id=entity.chamado_id,
            autor_id=entity.autor_id,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
        )

    @staticmethod
    def to_entity(model: ComentarioModel) -> ComentarioEntity:
        return ComentarioEntity(
            id=model.id,
            conteudo=model.conteudo,
            autor_id=model.autor_id,
            chamado_id=model.chamado_id,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )


class HistoricoAcaoMapper:

    @staticmethod
    def to_model(entity: HistoricoAcaoEntity) -> HistoricoAcaoModel:
        return HistoricoAcaoModel(
            id=entity.id,
            acao=entity.acao.value,
            detalhes=entity.detalhes,
            chamado_id=entity.chamado_id,
            usuario_id=entity.usuario_id,
            criado_em=entity.criado_em,
        )

    @staticmethod
    def to_entity(model: HistoricoAcaoModel) -> HistoricoAcaoEntity:
        return HistoricoAcaoEntity(
            id=model.id,
            acao=AcaoHistorico(model.acao),
            detalhes=model.detalhes,
            chamado_id=model.chamado_id,
            usuario_id=model.usuario_id,
            criado_em=model.criado_em,
        )
