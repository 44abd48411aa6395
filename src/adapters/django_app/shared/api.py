"""
Base das API Views JSON.

Fornece:
- Resposta padronizada {success, data/error, meta}
- Parsing de JSON
- Acesso ao container DI
- Mapeamento único exceção de domínio → status HTTP

Mapeamento:
    ValidationError             400
    AuthenticationError         401
    PermissionDeniedError       403
    EntityNotFoundError         404
    ConflictError               409
    DependencyError / DatabaseError  500
    demais                      500 "Erro interno do servidor"
"""

from typing import Any, Dict, Optional
import json
import logging

from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.core.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    DependencyError,
    DomainException,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from src.config.container import get_container

logger = logging.getLogger(__name__)


STATUS_POR_EXCECAO = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (PermissionDeniedError, 403),
    (EntityNotFoundError, 404),
    (ConflictError, 409),
    (DependencyError, 500),
)


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais (paginação, código de erro)
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status, safe=False)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: Se JSON inválido ou não for objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"JSON inválido: {e}")

    if not isinstance(data, dict):
        raise ValidationError("Corpo da requisição deve ser um objeto JSON")

    return data


def domain_error_response(e: DomainException, status: int) -> JsonResponse:
    """Resposta de erro com código e detalhes da exceção em ``meta``."""
    detalhes = e.to_dict()
    detalhes.pop('message', None)
    detalhes['code'] = detalhes.pop('error', e.code)

    return json_response(
        success=False,
        error=e.message,
        status=status,
        meta=detalhes,
    )


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Subclasses implementam get/post/patch/delete e delegam erros
    para ``handle_exception``.
    """

    def get_container(self):
        """Retorna container de DI."""
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container pelo nome do provider."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def get_usuario(self, request: HttpRequest):
        """
        Usuário autenticado resolvido pelo middleware JWT.

        Raises:
            AuthenticationError: Se request não autenticado
        """
        usuario = getattr(request, 'usuario', None)

        if usuario is None:
            erro = getattr(request, 'erro_autenticacao', None)
            raise erro or AuthenticationError("Token de acesso não fornecido")

        return usuario

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções e retorna resposta apropriada.

        Args:
            e: Exceção capturada

        Returns:
            JsonResponse com erro
        """
        for tipo, status in STATUS_POR_EXCECAO:
            if isinstance(e, tipo):
                if status >= 500:
                    logger.error(f"Falha de dependência na API: {e}")
                return domain_error_response(e, status)

        if isinstance(e, DomainException):
            return domain_error_response(e, 400)

        if isinstance(e, DatabaseError):
            logger.exception(f"Erro de banco na API: {e}")
            return json_response(
                success=False,
                error="Erro ao acessar o banco de dados",
                status=500,
                meta={'code': 'DEPENDENCY_ERROR'}
            )

        # Erro inesperado
        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


def optional_str(data: Dict, key: str) -> Optional[str]:
    """Lê campo opcional do body; string vazia vira None."""
    value = data.get(key)
    if value is None or value == '':
        return None
    return str(value)


def validar_form(form) -> Dict:
    """
    Valida um Django Form e devolve ``cleaned_data``.

    Raises:
        ValidationError: Com a primeira mensagem de erro do form
    """
    if form.is_valid():
        return form.cleaned_data

    campo, erros = next(iter(form.errors.items()))
    raise ValidationError(erros[0], field=None if campo == '__all__' else campo)


def campos_presentes(cleaned_data: Dict, data: Dict) -> Dict:
    """Filtra ``cleaned_data`` pelos campos enviados no body (PATCH)."""
    return {campo: valor for campo, valor in cleaned_data.items() if campo in data}
