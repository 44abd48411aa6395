"""
Middleware de autenticação JWT.

Resolve o header ``Authorization: Bearer <token>`` em
UsuarioAutenticado e o anexa ao request:

- request.usuario: UsuarioAutenticado ou None
- request.erro_autenticacao: AuthenticationError quando o token
  foi enviado mas rejeitado

O middleware não bloqueia requisições; quem exige autenticação é
a view (BaseAPIView.get_usuario).
"""

from typing import Optional
import logging

from django.http import HttpRequest

from src.core.shared.exceptions import AuthenticationError, DependencyError

logger = logging.getLogger(__name__)


PREFIXO_BEARER = "Bearer "


def extrair_token(request: HttpRequest) -> Optional[str]:
    """Extrai o token do header Authorization (ou None)."""
    header = request.META.get("HTTP_AUTHORIZATION", "")

    if not header.startswith(PREFIXO_BEARER):
        return None

    token = header[len(PREFIXO_BEARER):].strip()
    return token or None


class JWTAuthenticationMiddleware:
    """Anexa o usuário autenticado ao request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest):
        request.usuario = None
        request.erro_autenticacao = None

        token = extrair_token(request)

        if token:
            try:
                request.usuario = self._verificar(token)
            except (AuthenticationError, DependencyError) as e:
                logger.debug(f"Autenticação rejeitada em {request.path}: {e}")
                request.erro_autenticacao = e

        return self.get_response(request)

    def _verificar(self, token: str):
        from src.config.container import get_container

        return get_container().verificar_token_service().execute(token)
