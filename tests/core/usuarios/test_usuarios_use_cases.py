"""
Testes Unitários para Use Cases do Domínio de Usuários.

Estratégia de Teste:
- InMemoryUsuarioRepository, InMemoryPasswordHasher e
  InMemoryTokenService no lugar dos adapters Django/JWT
- FakeUnitOfWork para verificar commit/rollback

Coverage:
- RegistrarUsuarioService
- LoginService
- AlterarSenhaService
- VerificarTokenService
- ListarUsuariosService / AtualizarUsuarioService
"""

import pytest

from src.core.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from src.core.usuarios.dtos import (
    AlterarSenhaInputDTO,
    AtualizarUsuarioInputDTO,
    LoginInputDTO,
    RegistrarUsuarioInputDTO,
)
from src.core.usuarios.use_cases import (
    AlterarSenhaService,
    AtualizarUsuarioService,
    ListarUsuariosService,
    LoginService,
    ObterPerfilService,
    RegistrarUsuarioService,
    VerificarTokenService,
)


def _input_registro(**kwargs) -> RegistrarUsuarioInputDTO:
    dados = {
        "nome": "Maria Souza",
        "email": "Maria@Empresa.com",
        "senha": "segredo123",
        "departamento": "TI",
        "cargo": "Analista",
    }
    dados.update(kwargs)
    return RegistrarUsuarioInputDTO(**dados)


@pytest.fixture
def registrar(usuario_repo, password_hasher, token_service, uow):
    return RegistrarUsuarioService(usuario_repo, password_hasher, token_service, uow)


@pytest.fixture
def login(usuario_repo, password_hasher, token_service):
    return LoginService(usuario_repo, password_hasher, token_service)


class TestRegistrarUsuarioService:
    """Testes para RegistrarUsuarioService."""

    def test_registrar_sucesso(self, registrar, usuario_repo, token_service, uow):
        """Deve cadastrar usuário, normalizar email e emitir token"""
        resultado = registrar.execute(_input_registro())

        assert resultado.usuario.email == "maria@empresa.com"
        assert resultado.usuario.papel == "COLABORADOR"
        assert resultado.token
        assert token_service.decodificar(resultado.token)["sub"] == resultado.usuario.id
        assert usuario_repo.get_by_email("maria@empresa.com") is not None
        assert uow.committed

    def test_registrar_nao_expoe_hash(self, registrar):
        """Deve omitir o hash da senha na saída"""
        resultado = registrar.execute(_input_registro())

        assert "senha_hash" not in resultado.to_dict()["usuario"]
        assert set(resultado.to_dict()) == {"usuario", "token"}

    def test_registrar_cargo_gerente(self, registrar):
        """Deve derivar papel GERENTE do cargo"""
        resultado = registrar.execute(_input_registro(cargo="Gerente de TI"))

        assert resultado.usuario.papel == "GERENTE"

    def test_registrar_email_duplicado(self, registrar, usuario_repo):
        """Deve lançar ConflictError para email já cadastrado (sem diferenciar caixa)"""
        registrar.execute(_input_registro())

        with pytest.raises(ConflictError) as exc:
            registrar.execute(_input_registro(email="MARIA@empresa.com", nome="Outra Maria"))

        assert exc.value.field == "email"
        assert len(usuario_repo.list_all()) == 1

    def test_registrar_senha_curta(self, registrar, usuario_repo):
        """Deve rejeitar senha com menos de 6 caracteres"""
        with pytest.raises(ValidationError, match="no mínimo 6"):
            registrar.execute(_input_registro(senha="123"))

        assert usuario_repo.list_all() == []

    def test_registrar_email_invalido(self, registrar):
        """Deve rejeitar email malformado"""
        with pytest.raises(ValidationError, match="Email inválido"):
            registrar.execute(_input_registro(email="sem-arroba"))

    def test_registrar_nome_curto(self, registrar, uow):
        """Deve rejeitar nome com menos de 2 caracteres"""
        with pytest.raises(ValidationError) as exc:
            registrar.execute(_input_registro(nome="M"))

        assert exc.value.code == "VALIDATION_ERROR_NOME"
        assert uow.rolled_back


class TestLoginService:
    """Testes para LoginService."""

    def test_login_sucesso(self, registrar, login):
        """Deve autenticar com email em qualquer caixa"""
        registrar.execute(_input_registro())

        resultado = login.execute(LoginInputDTO(email=" MARIA@empresa.com ", senha="segredo123"))

        assert resultado.usuario.nome == "Maria Souza"
        assert resultado.token

    @pytest.mark.parametrize("email,senha", [
        ("maria@empresa.com", "errada123"),
        ("ninguem@empresa.com", "segredo123"),
        ("", "segredo123"),
        ("maria@empresa.com", ""),
    ])
    def test_login_credenciais_invalidas(self, registrar, login, email, senha):
        """Deve responder sempre com INVALID_CREDENTIALS"""
        registrar.execute(_input_registro())

        with pytest.raises(AuthenticationError) as exc:
            login.execute(LoginInputDTO(email=email, senha=senha))

        assert exc.value.code == "INVALID_CREDENTIALS"
        assert exc.value.message == "Credenciais inválidas"

    def test_login_usuario_inativo(self, registrar, login, usuario_repo):
        """Deve recusar login de usuário desativado"""
        resultado = registrar.execute(_input_registro())
        usuario = usuario_repo.get_by_id(resultado.usuario.id)
        usuario.atualizar_dados(ativo=False)

        with pytest.raises(AuthenticationError):
            login.execute(LoginInputDTO(email="maria@empresa.com", senha="segredo123"))


class TestAlterarSenhaService:
    """Testes para AlterarSenhaService."""

    @pytest.fixture
    def service(self, usuario_repo, password_hasher, uow):
        return AlterarSenhaService(usuario_repo, password_hasher, uow)

    def test_alterar_senha_sucesso(self, service, registrar, login):
        """Deve trocar a senha e permitir login com a nova"""
        usuario = registrar.execute(_input_registro()).usuario

        service.execute(AlterarSenhaInputDTO(
            usuario_id=usuario.id, senha_atual="segredo123", nova_senha="novaSenha1",
        ))

        assert login.execute(LoginInputDTO(email=usuario.email, senha="novaSenha1")).token
        with pytest.raises(AuthenticationError):
            login.execute(LoginInputDTO(email=usuario.email, senha="segredo123"))

    def test_senha_atual_incorreta(self, service, registrar):
        """Deve rejeitar senha atual incorreta"""
        usuario = registrar.execute(_input_registro()).usuario

        with pytest.raises(ValidationError) as exc:
            service.execute(AlterarSenhaInputDTO(
                usuario_id=usuario.id, senha_atual="errada123", nova_senha="novaSenha1",
            ))

        assert exc.value.field == "senha_atual"

    def test_campos_obrigatorios(self, service, registrar):
        """Deve exigir senha atual e nova senha"""
        usuario = registrar.execute(_input_registro()).usuario

        with pytest.raises(ValidationError, match="obrigatórias"):
            service.execute(AlterarSenhaInputDTO(
                usuario_id=usuario.id, senha_atual="", nova_senha="novaSenha1",
            ))

    def test_nova_senha_curta(self, service, registrar):
        """Deve aplicar regra de tamanho à nova senha"""
        usuario = registrar.execute(_input_registro()).usuario

        with pytest.raises(ValidationError) as exc:
            service.execute(AlterarSenhaInputDTO(
                usuario_id=usuario.id, senha_atual="segredo123", nova_senha="123",
            ))

        assert exc.value.field == "nova_senha"


class TestVerificarTokenService:
    """Testes para VerificarTokenService."""

    @pytest.fixture
    def service(self, usuario_repo, token_service):
        return VerificarTokenService(usuario_repo, token_service)

    def test_token_valido(self, service, registrar):
        """Deve resolver o token no usuário autenticado"""
        resultado = registrar.execute(_input_registro(cargo="Supervisor"))

        ator = service.execute(resultado.token)

        assert ator.id == resultado.usuario.id
        assert ator.eh_admin

    def test_token_ausente(self, service):
        """Deve lançar AuthenticationError sem token"""
        with pytest.raises(AuthenticationError, match="não fornecido"):
            service.execute(None)

    def test_token_invalido(self, service):
        """Deve lançar INVALID_TOKEN para token desconhecido"""
        with pytest.raises(AuthenticationError) as exc:
            service.execute("token-qualquer")

        assert exc.value.code == "INVALID_TOKEN"

    def test_token_expirado(self, service, registrar, token_service):
        """Deve lançar EXPIRED_TOKEN para token expirado"""
        token = registrar.execute(_input_registro()).token
        token_service.expirar(token)

        with pytest.raises(AuthenticationError) as exc:
            service.execute(token)

        assert exc.value.code == "EXPIRED_TOKEN"

    def test_usuario_inativo(self, service, registrar, usuario_repo):
        """Deve recusar token de usuário desativado"""
        resultado = registrar.execute(_input_registro())
        usuario_repo.get_by_id(resultado.usuario.id).atualizar_dados(ativo=False)

        with pytest.raises(AuthenticationError, match="inativo"):
            service.execute(resultado.token)


class TestGestaoDeUsuarios:
    """Testes para listagem e atualização administrativas."""

    def test_listar_como_admin(self, usuario_repo, gerente, colaborador):
        """Deve listar todos os usuários ordenados por nome"""
        usuarios = ListarUsuariosService(usuario_repo).execute(gerente)

        assert [u.nome for u in usuarios] == ["Ana Gerente", "Maria Souza"]

    def test_listar_como_colaborador(self, usuario_repo, colaborador):
        """Deve negar listagem a colaborador"""
        with pytest.raises(PermissionDeniedError) as exc:
            ListarUsuariosService(usuario_repo).execute(colaborador)

        assert exc.value.code == "INSUFFICIENT_PERMISSIONS"

    def test_desativar_usuario(self, usuario_repo, uow, gerente, colaborador):
        """Deve desativar usuário e manter demais campos"""
        service = AtualizarUsuarioService(usuario_repo, uow)

        saida = service.execute(AtualizarUsuarioInputDTO(
            ator=gerente, usuario_id=colaborador.id, ativo=False,
        ))

        assert saida.ativo is False
        assert saida.nome == "Maria Souza"
        assert usuario_repo.get_by_id(colaborador.id).ativo is False

    def test_atualizar_cargo_altera_papel(self, usuario_repo, uow, gerente, colaborador):
        """Deve recalcular o papel quando o cargo muda"""
        service = AtualizarUsuarioService(usuario_repo, uow)

        saida = service.execute(AtualizarUsuarioInputDTO(
            ator=gerente, usuario_id=colaborador.id, cargo="Supervisor de Suporte",
        ))

        assert saida.papel == "SUPERVISOR"

    def test_atualizar_como_colaborador(self, usuario_repo, uow, colaborador, outro_colaborador):
        """Deve negar atualização a colaborador"""
        service = AtualizarUsuarioService(usuario_repo, uow)

        with pytest.raises(PermissionDeniedError):
            service.execute(AtualizarUsuarioInputDTO(
                ator=colaborador, usuario_id=outro_colaborador.id, ativo=False,
            ))

        assert usuario_repo.get_by_id(outro_colaborador.id).ativo is True

    def test_atualizar_inexistente(self, usuario_repo, uow, gerente):
        """Deve lançar EntityNotFoundError para usuário inexistente"""
        with pytest.raises(EntityNotFoundError):
            AtualizarUsuarioService(usuario_repo, uow).execute(
                AtualizarUsuarioInputDTO(ator=gerente, usuario_id="nao-existe", nome="X Y")
            )

    def test_obter_perfil(self, usuario_repo, colaborador):
        """Deve retornar o perfil do usuário"""
        perfil = ObterPerfilService(usuario_repo).execute(colaborador.id)

        assert perfil.email == "maria@empresa.com"
        assert perfil.ativo is True
