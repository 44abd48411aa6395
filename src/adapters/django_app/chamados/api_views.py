"""
API Views JSON para os domínios de Chamados e Comentários.

Endpoints:
- GET /api/chamados/ - Listar chamados (filtros + paginação)
- POST /api/chamados/ - Criar chamado
- GET /api/chamados/<id>/ - Detalhe com comentários e histórico
- PATCH|PUT /api/chamados/<id>/ - Atualizar chamado
- DELETE /api/chamados/<id>/ - Deletar chamado
- POST /api/chamados/<id>/atribuir/ - Atribuir/desatribuir
- GET /api/chamados/<id>/comentarios/ - Listar comentários
- POST /api/chamados/<id>/comentarios/ - Comentar
- PATCH|PUT /api/comentarios/<id>/ - Editar comentário
- DELETE /api/comentarios/<id>/ - Deletar comentário

Todas exigem ``Authorization: Bearer <token>``.

Formato:
- Entrada: JSON
- Saída: JSON com estrutura {success, data/error, meta}
"""

import logging

from django.http import HttpRequest, JsonResponse

from src.core.chamados.dtos import (
    AtribuirChamadoInputDTO,
    AtualizarChamadoInputDTO,
    CriarChamadoInputDTO,
    DeletarChamadoInputDTO,
    ListarChamadosQueryDTO,
)
from src.core.comentarios.dtos import (
    AtualizarComentarioInputDTO,
    CriarComentarioInputDTO,
    DeletarComentarioInputDTO,
)

from ..shared.api import BaseAPIView, campos_presentes, json_response, validar_form
from ..usuarios.decorators import requer_autenticacao
from .forms import (
    AtribuirChamadoForm,
    AtualizarChamadoForm,
    ComentarioForm,
    CriarChamadoForm,
    ListarChamadosForm,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Chamados
# =============================================================================

class ChamadoAPIListView(BaseAPIView):
    """
    API para listar e criar chamados.

    GET /api/chamados/ - Lista chamados
    POST /api/chamados/ - Cria chamado
    """

    @requer_autenticacao
    def get(self, request: HttpRequest) -> JsonResponse:
        """
        Lista chamados com filtros opcionais.

        Query params:
        - status, prioridade: nome do enum
        - criador_id, atribuido_id: filtro exato
        - categoria: substring sem diferenciar maiúsculas
        - data_inicio, data_fim: intervalo de criado_em (ISO 8601)
        - pagina (default 1), limite (default 10, máx 100)
        - ordenar_por (default criado_em), ordem (asc|desc)
        """
        try:
            filtros = validar_form(ListarChamadosForm(request.GET))

            resultado = self.get_service('listar_chamados_service').execute(
                ListarChamadosQueryDTO(**filtros)
            )

            pagina = resultado.to_dict()

            return json_response(
                success=True,
                data=pagina.pop('items'),
                meta=pagina,
            )

        except Exception as e:
            return self.handle_exception(e)

    @requer_autenticacao
    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cria novo chamado tendo o usuário autenticado como criador.

        Body JSON:
        {
            "titulo": "string (5-200)",
            "descricao": "string (10-5000)",
            "categoria": "string (2-50)",
            "prioridade": "BAIXA|MEDIA|ALTA|CRITICA (opcional)"
        }
        """
        try:
            data = validar_form(CriarChamadoForm(self.parse_body(request)))

            output = self.get_service('criar_chamado_service').execute(
                CriarChamadoInputDTO(ator=self.get_usuario(request), **data)
            )

            logger.info(f"API: Chamado criado: {output.id}")

            return json_response(success=True, data=output.to_dict(), status=201)

        except Exception as e:
            return self.handle_exception(e)


class ChamadoAPIDetailView(BaseAPIView):
    """
    API para operações em chamado específico.

    GET /api/chamados/<id>/ - Obter chamado
    PATCH|PUT /api/chamados/<id>/ - Atualizar chamado
    DELETE /api/chamados/<id>/ - Deletar chamado
    """

    @requer_autenticacao
    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        """Obtém chamado com comentários e histórico."""
        try:
            detalhe = self.get_service('obter_chamado_service').execute(pk)

            return json_response(success=True, data=detalhe.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    @requer_autenticacao
    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Atualiza chamado parcialmente.

        Body JSON (todos opcionais):
        {
            "titulo": "string",
            "descricao": "string",
            "prioridade": "BAIXA|MEDIA|ALTA|CRITICA",
            "status": "ABERTO|EM_ANDAMENTO|AGUARDANDO_RESPOSTA|RESOLVIDO|FECHADO|CANCELADO",
            "categoria": "string",
            "atribuido_id": "string"
        }
        """
        try:
            body = self.parse_body(request)
            data = campos_presentes(validar_form(AtualizarChamadoForm(body)), body)

            output = self.get_service('atualizar_chamado_service').execute(
                AtualizarChamadoInputDTO(
                    ator=self.get_usuario(request),
                    chamado_id=pk,
                    **data,
                )
            )

            return json_response(success=True, data=output.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    put = patch

    @requer_autenticacao
    def delete(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            self.get_service('deletar_chamado_service').execute(
                DeletarChamadoInputDTO(ator=self.get_usuario(request), chamado_id=pk)
            )

            logger.info(f"API: Chamado {pk} deletado")

            return json_response(success=True, data={'message': 'Chamado deletado com sucesso'})

        except Exception as e:
            return self.handle_exception(e)


class ChamadoAPIAtribuirView(BaseAPIView):
    """
    API para atribuir chamado.

    POST /api/chamados/<id>/atribuir/
    """

    @requer_autenticacao
    def post(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Atribui chamado a um usuário ativo.

        Body JSON:
        {
            "atribuido_id": "string ou null (null desatribui)"
        }
        """
        try:
            data = validar_form(AtribuirChamadoForm(self.parse_body(request)))

            output = self.get_service('atribuir_chamado_service').execute(
                AtribuirChamadoInputDTO(
                    ator=self.get_usuario(request),
                    chamado_id=pk,
                    atribuido_id=data['atribuido_id'],
                )
            )

            logger.info(f"API: Chamado {pk} atribuído a {data['atribuido_id']}")

            return json_response(success=True, data=output.to_dict())

        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Comentários
# =============================================================================

class ComentarioAPIListView(BaseAPIView):
    """
    GET /api/chamados/<id>/comentarios/ - Lista comentários
    POST /api/chamados/<id>/comentarios/ - Cria comentário
    """

    @requer_autenticacao
    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            comentarios = self.get_service('listar_comentarios_service').execute(pk)

            return json_response(
                success=True,
                data=[c.to_dict() for c in comentarios],
                meta={'total': len(comentarios)},
            )

        except Exception as e:
            return self.handle_exception(e)

    @requer_autenticacao
    def post(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Body JSON:
        {
            "conteudo": "string (1-2000)"
        }
        """
        try:
            data = validar_form(ComentarioForm(self.parse_body(request)))

            output = self.get_service('criar_comentario_service').execute(
                CriarComentarioInputDTO(
                    ator=self.get_usuario(request),
                    chamado_id=pk,
                    conteudo=data['conteudo'],
                )
            )

            return json_response(success=True, data=output.to_dict(), status=201)

        except Exception as e:
            return self.handle_exception(e)


class ComentarioAPIDetailView(BaseAPIView):
    """
    PATCH|PUT /api/comentarios/<id>/ - Edita comentário
    DELETE /api/comentarios/<id>/ - Deleta comentário
    """

    @requer_autenticacao
    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            data = validar_form(ComentarioForm(self.parse_body(request)))

            output = self.get_service('atualizar_comentario_service').execute(
                AtualizarComentarioInputDTO(
                    ator=self.get_usuario(request),
                    comentario_id=pk,
                    conteudo=data['conteudo'],
                )
            )

            return json_response(success=True, data=output.to_dict())

        except Exception as e:
            return self.handle_exception(e)

    put = patch

    @requer_autenticacao
    def delete(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            self.get_service('deletar_comentario_service').execute(
                DeletarComentarioInputDTO(ator=self.get_usuario(request), comentario_id=pk)
            )

            return json_response(success=True, data={'message': 'Comentário deletado com sucesso'})

        except Exception as e:
            return self.handle_exception(e)
