"""
API Views JSON para autenticação e gestão de usuários.

Endpoints:
- POST /api/auth/registrar/ - Cadastro
- POST /api/auth/login/ - Login
- GET /api/auth/perfil/ - Perfil do usuário autenticado
- POST /api/auth/alterar-senha/ - Troca de senha
- POST /api/auth/validar-token/ - Validação do token
- GET /api/usuarios/ - Listar usuários (administrativo)
- PATCH /api/usuarios/<id>/ - Atualizar usuário (administrativo)

Formato:
- Entrada: JSON
- Saída: JSON com estrutura {success, data/error, meta}
"""

import logging

from django.http import HttpRequest, JsonResponse

from src.core.usuarios.dtos import (
    AlterarSenhaInputDTO,
    AtualizarUsuarioInputDTO,
    LoginInputDTO,
    RegistrarUsuarioInputDTO,
)
from src.core.usuarios.permissions import Capacidade

from ..shared.api import BaseAPIView, campos_presentes, json_response, validar_form
from .decorators import requer_capacidade
from .forms import AlterarSenhaForm, AtualizarUsuarioForm, RegistrarUsuarioForm

logger = logging.getLogger(__name__)


# =============================================================================
# Autenticação
# =============================================================================

class RegistrarAPIView(BaseAPIView):
    """POST /api/auth/registrar/"""

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cadastra usuário e devolve token.

        Body JSON:
        {
            "nome": "string",
            "email": "string",
            "senha": "string (6-100)",
            "departamento": "string",
            "cargo": "string"
        }
        """
        try:
            data = validar_form(RegistrarUsuarioForm(self.parse_body(request)))

            resultado = self.get_service('registrar_usuario_service').execute(
                RegistrarUsuarioInputDTO(**data)
            )

            return json_response(success=True, data=resultado.to_dict(), status=201)

        except Exception as e:
            return self.handle_exception(e)


class LoginAPIView(BaseAPIView):
    """POST /api/auth/login/"""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)

            resultado = self.get_service('login_service').execute(
                LoginInputDTO(
                    email=str(data.get('email') or ''),
                    senha=str(data.get('senha') or ''),
                )
            )

            return json_response(success=True, data=resultado.to_dict())

        except Exception as e:
            return self.handle_exception(e)


class PerfilAPIView(BaseAPIView):
    """GET /api/auth/perfil/"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            usuario = self.get_usuario(request)
            perfil = self.get_service('obter_perfil_service').execute(usuario.id)

            return json_response(success=True, data=perfil.to_dict())

        except Exception as e:
            return self.handle_exception(e)


class AlterarSenhaAPIView(BaseAPIView):
    """POST /api/auth/alterar-senha/"""

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            usuario = self.get_usuario(request)
            data = validar_form(AlterarSenhaForm(self.parse_body(request)))

            self.get_service('alterar_senha_service').execute(
                AlterarSenhaInputDTO(usuario_id=usuario.id, **data)
            )

            return json_response(success=True, data={'message': 'Senha alterada com sucesso'})

        except Exception as e:
            return self.handle_exception(e)


class ValidarTokenAPIView(BaseAPIView):
    """
    POST /api/auth/validar-token/

    Devolve a identidade resolvida pelo middleware; usado pelo
    gateway de tempo real para autenticar conexões.
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            usuario = self.get_usuario(request)

            return json_response(
                success=True,
                data={'valid': True, 'usuario': usuario.to_dict()},
            )

        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Gestão de usuários (administrativo)
# =============================================================================

class UsuarioAPIListView(BaseAPIView):
    """GET /api/usuarios/"""

    @requer_capacidade(Capacidade.GERENCIAR_USUARIOS)
    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            usuarios = self.get_service('listar_usuarios_service').execute(
                self.get_usuario(request)
            )

            return json_response(
                success=True,
                data=[u.to_dict() for u in usuarios],
                meta={'total': len(usuarios)},
            )

        except Exception as e:
            return self.handle_exception(e)


class UsuarioAPIDetailView(BaseAPIView):
    """PATCH /api/usuarios/<id>/"""

    @requer_capacidade(Capacidade.GERENCIAR_USUARIOS)
    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Body JSON (todos opcionais):
        {
            "nome": "string",
            "departamento": "string",
            "cargo": "string",
            "ativo": bool
        }
        """
        try:
            body = self.parse_body(request)
            data = campos_presentes(validar_form(AtualizarUsuarioForm(body)), body)

            usuario = self.get_service('atualizar_usuario_service').execute(
                AtualizarUsuarioInputDTO(
                    ator=self.get_usuario(request),
                    usuario_id=pk,
                    **data,
                )
            )

            logger.info(f"API: Usuário {pk} atualizado")

            return json_response(success=True, data=usuario.to_dict())

        except Exception as e:
            return self.handle_exception(e)
