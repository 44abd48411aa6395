"""
Repositórios Django para Chamados, Comentários e Histórico.

Implementam os ports de src/core/chamados/ports.py e
src/core/comentarios/ports.py usando o Django ORM.

Remoção de chamado usa o CASCADE das FKs para comentários e
histórico.
"""

from typing import Dict, Iterable, List, Tuple
import logging

from django.db.models import Case, Count, IntegerField, QuerySet, Value, When

from src.core.chamados.dtos import CAMPOS_ENUMERADOS, ListarChamadosQueryDTO
from src.core.chamados.entities import ChamadoEntity, HistoricoAcaoEntity
from src.core.comentarios.entities import ComentarioEntity

from ..shared.repository import BaseRepository, SortParams, traduzir_erros_de_banco
from .mappers import ChamadoMapper, ComentarioMapper, HistoricoAcaoMapper
from .models import ChamadoModel, ComentarioModel, HistoricoAcaoModel

logger = logging.getLogger(__name__)


class DjangoChamadoRepository(BaseRepository[ChamadoEntity, ChamadoModel]):
    """
    Implementação Django do ChamadoRepository.

    Example:
        repo = DjangoChamadoRepository()
        chamados, total = repo.list_paginated(
            ListarChamadosQueryDTO(status="ABERTO", pagina=2)
        )
    """

    model_class = ChamadoModel
    mensagem_conflito = "Chamado conflita com dados existentes"

    def to_entity(self, model: ChamadoModel) -> ChamadoEntity:
        return ChamadoMapper.to_entity(model)

    def to_model(self, entity: ChamadoEntity) -> ChamadoModel:
        return ChamadoMapper.to_model(entity)

    def _aplicar_filtros(self, qs: QuerySet, query: ListarChamadosQueryDTO) -> QuerySet:
        """Aplica filtros opcionais ao queryset."""
        if query.status:
            qs = qs.filter(status=query.status)

        if query.prioridade:
            qs = qs.filter(prioridade=query.prioridade)

        if query.criador_id:
            qs = qs.filter(criador_id=query.criador_id)

        if query.atribuido_id:
            qs = qs.filter(atribuido_id=query.atribuido_id)

        if query.categoria:
            qs = qs.filter(categoria__icontains=query.categoria)

        if query.data_inicio:
            qs = qs.filter(criado_em__gte=query.data_inicio)

        if query.data_fim:
            qs = qs.filter(criado_em__lte=query.data_fim)

        return qs

    @traduzir_erros_de_banco
    def list_paginated(
        self,
        query: ListarChamadosQueryDTO,
    ) -> Tuple[List[ChamadoEntity], int]:
        """
        Lista chamados filtrados com paginação por offset.

        Returns:
            (itens da página, total de registros filtrados)
        """
        qs = self._aplicar_filtros(self._get_base_queryset(), query)

        total = qs.count()

        campo = query.ordenar_por
        if campo in CAMPOS_ENUMERADOS:
            qs = self._anotar_posicao(qs, campo)
            campo = 'posicao_ordenacao'

        sort = SortParams(field=campo, direction=query.ordem)
        qs = qs.order_by(sort.order_by, 'id')

        models = qs[query.offset:query.offset + query.limite]

        return [self.to_entity(m) for m in models], total

    @staticmethod
    def _anotar_posicao(qs: QuerySet, campo: str) -> QuerySet:
        """Anota a posição do valor no enum do Core para ordenar por nível."""
        enum_cls = CAMPOS_ENUMERADOS[campo]
        return qs.annotate(
            posicao_ordenacao=Case(
                *[When(**{campo: membro.value}, then=Value(membro.posicao)) for membro in enum_cls],
                output_field=IntegerField(),
            )
        )


class DjangoComentarioRepository(BaseRepository[ComentarioEntity, ComentarioModel]):
    """Implementação Django do ComentarioRepository."""

    model_class = ComentarioModel
    default_order_field = "criado_em"

    def to_entity(self, model: ComentarioModel) -> ComentarioEntity:
        return ComentarioMapper.to_entity(model)

    def to_model(self, entity: ComentarioEntity) -> ComentarioModel:
        return ComentarioMapper.to_model(entity)

    @traduzir_erros_de_banco
    def list_by_chamado(self, chamado_id: str) -> List[ComentarioEntity]:
        qs = ComentarioModel.objects.filter(chamado_id=chamado_id).order_by('criado_em', 'id')
        return [self.to_entity(m) for m in qs]

    @traduzir_erros_de_banco
    def count_by_chamados(self, chamado_ids: Iterable[str]) -> Dict[str, int]:
        """Conta comentários de vários chamados em uma única consulta."""
        ids = list(chamado_ids)
        if not ids:
            return {}

        linhas = (
            ComentarioModel.objects
            .filter(chamado_id__in=ids)
            .values('chamado_id')
            .annotate(total=Count('id'))
            .order_by()
        )
        return {linha['chamado_id']: linha['total'] for linha in linhas}


class DjangoHistoricoRepository(BaseRepository[HistoricoAcaoEntity, HistoricoAcaoModel]):
    """
    Implementação Django do HistoricoRepository.

    Somente inserção: ``add`` nunca atualiza uma entrada existente.
    """

    model_class = HistoricoAcaoModel

    def to_entity(self, model: HistoricoAcaoModel) -> HistoricoAcaoEntity:
        return HistoricoAcaoMapper.to_entity(model)

    def to_model(self, entity: HistoricoAcaoEntity) -> HistoricoAcaoModel:
        return HistoricoAcaoMapper.to_model(entity)

    @traduzir_erros_de_banco
    def add(self, entrada: HistoricoAcaoEntity) -> None:
        self.to_model(entrada).save(force_insert=True)
        logger.debug(f"Histórico {entrada.acao.value} registrado para chamado {entrada.chamado_id}")

    @traduzir_erros_de_banco
    def list_by_chamado(self, chamado_id: str) -> List[HistoricoAcaoEntity]:
        qs = HistoricoAcaoModel.objects.filter(chamado_id=chamado_id).order_by('-criado_em')
        return [self.to_entity(m) for m in qs]
