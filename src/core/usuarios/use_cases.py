"""
Use Cases (Application Services) do Domínio de Usuários.

Use Cases implementados:
- RegistrarUsuarioService: Cadastro + emissão de token
- LoginService: Autenticação por email/senha
- ObterPerfilService: Perfil do usuário autenticado
- AlterarSenhaService: Troca de senha do próprio usuário
- VerificarTokenService: Resolve o token em UsuarioAutenticado
- ListarUsuariosService: Listagem administrativa
- AtualizarUsuarioService: Atualização administrativa

Dependências (repositório, hasher, token service, UoW) são
injetadas pelo container; nenhum use case instancia adapters.
"""

from typing import Dict, Iterable, List, Optional
import logging

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)

from .entities import UsuarioEntity
from .permissions import Capacidade
from .ports import PasswordHasher, TokenService, UsuarioRepository
from .dtos import (
    AlterarSenhaInputDTO,
    AtualizarUsuarioInputDTO,
    AuthResultDTO,
    LoginInputDTO,
    RegistrarUsuarioInputDTO,
    UsuarioAutenticado,
    UsuarioOutputDTO,
    UsuarioResumoDTO,
)

logger = logging.getLogger(__name__)


SENHA_MIN_LENGTH = 6
SENHA_MAX_LENGTH = 100

MENSAGEM_CREDENCIAIS_INVALIDAS = "Credenciais inválidas"
MENSAGEM_ACESSO_ADMIN = "Acesso negado. Privilégios de administrador necessários."


def validar_senha(senha: str, field: str = "senha") -> None:
    """Valida tamanho da senha em texto puro."""
    if not senha:
        raise ValidationError("Senha é obrigatória", field=field)

    if len(senha) < SENHA_MIN_LENGTH:
        raise ValidationError(
            f"Senha deve ter no mínimo {SENHA_MIN_LENGTH} caracteres",
            field=field
        )

    if len(senha) > SENHA_MAX_LENGTH:
        raise ValidationError(
            f"Senha deve ter no máximo {SENHA_MAX_LENGTH} caracteres",
            field=field
        )


def _buscar_usuario(repo: UsuarioRepository, usuario_id: str) -> UsuarioEntity:
    usuario = repo.get_by_id(usuario_id)

    if not usuario:
        raise EntityNotFoundError(
            "Usuário não encontrado",
            entity_type="Usuario",
            entity_id=usuario_id
        )

    return usuario


class RegistrarUsuarioService:
    """
    Use Case: Cadastrar novo usuário.

    Fluxo:
    1. Validar senha e normalizar email
    2. Verificar unicidade do email
    3. Gerar hash da senha e criar entidade
    4. Persistir e emitir token de acesso

    Example:
        service = RegistrarUsuarioService(repo, hasher, tokens, uow)
        resultado = service.execute(RegistrarUsuarioInputDTO(
            nome="Maria", email="maria@empresa.com", senha="segredo123",
            departamento="TI", cargo="Analista",
        ))
        resultado.token
    """

    def __init__(
        self,
        usuario_repo: UsuarioRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        uow: UnitOfWork,
    ):
        self.usuario_repo = usuario_repo
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.uow = uow

    def execute(self, input_dto: RegistrarUsuarioInputDTO) -> AuthResultDTO:
        """
        Executa cadastro em transação atômica.

        Raises:
            ValidationError: Se dados inválidos
            ConflictError: Se email já está em uso
        """
        validar_senha(input_dto.senha)
        email = UsuarioEntity.normalizar_email(input_dto.email)

        with self.uow:
            if self.usuario_repo.get_by_email(email):
                raise ConflictError("Email já está em uso", field="email")

            usuario = UsuarioEntity.criar(
                nome=input_dto.nome,
                email=email,
                senha_hash=self.password_hasher.hash(input_dto.senha),
                departamento=input_dto.departamento,
                cargo=input_dto.cargo,
            )

            self.usuario_repo.save(usuario)

        logger.info(f"Usuário cadastrado: {usuario.id} ({usuario.papel.value})")

        return AuthResultDTO(
            usuario=UsuarioOutputDTO.from_entity(usuario),
            token=self.token_service.gerar(usuario),
        )


class LoginService:
    """
    Use Case: Autenticar usuário por email e senha.

    Email desconhecido, usuário inativo e senha incorreta
    produzem a mesma mensagem para não revelar cadastros.
    """

    def __init__(
        self,
        usuario_repo: UsuarioRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.usuario_repo = usuario_repo
        self.password_hasher = password_hasher
        self.token_service = token_service

    def execute(self, input_dto: LoginInputDTO) -> AuthResultDTO:
        """
        Raises:
            AuthenticationError: Se credenciais inválidas
        """
        if not input_dto.email or not input_dto.senha:
            raise AuthenticationError(MENSAGEM_CREDENCIAIS_INVALIDAS, code="INVALID_CREDENTIALS")

        usuario = self.usuario_repo.get_by_email(input_dto.email.strip().lower())

        if not usuario or not usuario.ativo:
            raise AuthenticationError(MENSAGEM_CREDENCIAIS_INVALIDAS, code="INVALID_CREDENTIALS")

        if not self.password_hasher.verificar(input_dto.senha, usuario.senha_hash):
            logger.info(f"Senha incorreta para usuário {usuario.id}")
            raise AuthenticationError(MENSAGEM_CREDENCIAIS_INVALIDAS, code="INVALID_CREDENTIALS")

        return AuthResultDTO(
            usuario=UsuarioOutputDTO.from_entity(usuario),
            token=self.token_service.gerar(usuario),
        )


class ObterPerfilService:
    """Use Case: Obter perfil do usuário autenticado."""

    def __init__(self, usuario_repo: UsuarioRepository):
        self.usuario_repo = usuario_repo

    def execute(self, usuario_id: str) -> UsuarioOutputDTO:
        return UsuarioOutputDTO.from_entity(_buscar_usuario(self.usuario_repo, usuario_id))


class AlterarSenhaService:
    """
    Use Case: Trocar senha do próprio usuário.

    Exige a senha atual; a nova senha segue as mesmas regras
    de tamanho do cadastro.
    """

    def __init__(
        self,
        usuario_repo: UsuarioRepository,
        password_hasher: PasswordHasher,
        uow: UnitOfWork,
    ):
        self.usuario_repo = usuario_repo
        self.password_hasher = password_hasher
        self.uow = uow

    def execute(self, input_dto: AlterarSenhaInputDTO) -> None:
        """
        Raises:
            ValidationError: Se senhas ausentes, curtas ou senha atual incorreta
            EntityNotFoundError: Se usuário não existe
        """
        if not input_dto.senha_atual or not input_dto.nova_senha:
            raise ValidationError("Senha atual e nova senha são obrigatórias")

        validar_senha(input_dto.nova_senha, field="nova_senha")

        with self.uow:
            usuario = _buscar_usuario(self.usuario_repo, input_dto.usuario_id)

            if not self.password_hasher.verificar(input_dto.senha_atual, usuario.senha_hash):
                raise ValidationError("Senha atual incorreta", field="senha_atual")

            usuario.alterar_senha_hash(self.password_hasher.hash(input_dto.nova_senha))
            self.usuario_repo.save(usuario)

        logger.info(f"Senha alterada para usuário {usuario.id}")


class VerificarTokenService:
    """
    Use Case: Resolver token de acesso em usuário autenticado.

    Usado pelo middleware JWT em toda requisição autenticada.

    Raises:
        AuthenticationError: Token ausente, inválido, expirado
            ou usuário inexistente/inativo
    """

    def __init__(self, usuario_repo: UsuarioRepository, token_service: TokenService):
        self.usuario_repo = usuario_repo
        self.token_service = token_service

    def execute(self, token: Optional[str]) -> UsuarioAutenticado:
        if not token:
            raise AuthenticationError("Token de acesso não fornecido")

        payload = self.token_service.decodificar(token)
        usuario_id = payload.get("sub") or payload.get("id")

        usuario = self.usuario_repo.get_by_id(usuario_id) if usuario_id else None

        if not usuario or not usuario.ativo:
            raise AuthenticationError("Usuário não encontrado ou inativo")

        return UsuarioAutenticado.from_entity(usuario)


class ListarUsuariosService:
    """Use Case: Listar usuários (somente administrativos)."""

    def __init__(self, usuario_repo: UsuarioRepository):
        self.usuario_repo = usuario_repo

    def execute(self, ator: UsuarioAutenticado) -> List[UsuarioOutputDTO]:
        if not ator.pode(Capacidade.GERENCIAR_USUARIOS):
            raise PermissionDeniedError(
                MENSAGEM_ACESSO_ADMIN,
                capacidade=Capacidade.GERENCIAR_USUARIOS.value
            )

        return [UsuarioOutputDTO.from_entity(u) for u in self.usuario_repo.list_all()]


class AtualizarUsuarioService:
    """
    Use Case: Atualizar dados de um usuário (somente administrativos).

    Permite ativar/desativar contas; usuários inativos deixam de
    autenticar e não podem receber chamados.
    """

    def __init__(self, usuario_repo: UsuarioRepository, uow: UnitOfWork):
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarUsuarioInputDTO) -> UsuarioOutputDTO:
        if not input_dto.ator.pode(Capacidade.GERENCIAR_USUARIOS):
            raise PermissionDeniedError(
                MENSAGEM_ACESSO_ADMIN,
                capacidade=Capacidade.GERENCIAR_USUARIOS.value
            )

        with self.uow:
            usuario = _buscar_usuario(self.usuario_repo, input_dto.usuario_id)

            usuario.atualizar_dados(
                nome=input_dto.nome,
                departamento=input_dto.departamento,
                cargo=input_dto.cargo,
                ativo=input_dto.ativo,
            )

            self.usuario_repo.save(usuario)

        logger.info(
            f"Usuário {usuario.id} atualizado por {input_dto.ator.id} "
            f"(ativo={usuario.ativo})"
        )

        return UsuarioOutputDTO.from_entity(usuario)


def carregar_resumos(
    usuario_repo: UsuarioRepository,
    usuario_ids: Iterable[Optional[str]],
) -> Dict[str, UsuarioResumoDTO]:
    """
    Carrega resumos de vários usuários em uma única consulta.

    Usado por chamados, comentários e histórico para embutir
    {id, nome, email, departamento} sem N+1.
    """
    ids = {usuario_id for usuario_id in usuario_ids if usuario_id}
    if not ids:
        return {}

    return {
        usuario_id: UsuarioResumoDTO.from_entity(usuario)
        for usuario_id, usuario in usuario_repo.get_many(ids).items()
    }
