"""
Decorators de autorização para API views.

Uso:
    class UsuarioAPIListView(BaseAPIView):
        @requer_capacidade(Capacidade.GERENCIAR_USUARIOS)
        def get(self, request):
            ...

O decorator roda antes do corpo da view e converte falhas de
autenticação/permissão na resposta padronizada da API.
"""

from functools import wraps

from src.core.shared.exceptions import PermissionDeniedError
from src.core.usuarios.permissions import Capacidade
from src.core.usuarios.use_cases import MENSAGEM_ACESSO_ADMIN


def requer_autenticacao(view_method):
    """Exige usuário autenticado no request."""

    @wraps(view_method)
    def wrapper(self, request, *args, **kwargs):
        try:
            self.get_usuario(request)
        except Exception as e:
            return self.handle_exception(e)
        return view_method(self, request, *args, **kwargs)

    return wrapper


def requer_capacidade(capacidade: Capacidade, mensagem: str = MENSAGEM_ACESSO_ADMIN):
    """Exige usuário autenticado cujo papel concede ``capacidade``."""

    def decorator(view_method):
        @wraps(view_method)
        def wrapper(self, request, *args, **kwargs):
            try:
                usuario = self.get_usuario(request)
                if not usuario.pode(capacidade):
                    raise PermissionDeniedError(mensagem, capacidade=capacidade.value)
            except Exception as e:
                return self.handle_exception(e)
            return view_method(self, request, *args, **kwargs)

        return wrapper

    return decorator
