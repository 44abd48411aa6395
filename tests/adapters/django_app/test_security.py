"""
Testes dos adapters de segurança (Argon2 via Django e JWT via PyJWT).
"""

from datetime import timedelta

import jwt
import pytest

from src.adapters.django_app.usuarios.security import DjangoPasswordHasher, JWTTokenService
from src.core.shared.events import agora_utc
from src.core.shared.exceptions import AuthenticationError
from src.core.usuarios.entities import UsuarioEntity


@pytest.fixture
def usuario():
    return UsuarioEntity.criar(
        nome="Maria Souza",
        email="maria@empresa.com",
        senha_hash="qualquer",
        departamento="TI",
        cargo="Analista",
    )


class TestDjangoPasswordHasher:
    """Testes para DjangoPasswordHasher."""

    def test_hash_argon2(self):
        """Deve gerar hash Argon2 verificável"""
        hasher = DjangoPasswordHasher()

        senha_hash = hasher.hash("segredo123")

        assert senha_hash.startswith("argon2")
        assert "segredo123" not in senha_hash
        assert hasher.verificar("segredo123", senha_hash)
        assert not hasher.verificar("errada123", senha_hash)

    def test_hash_vazio(self):
        """Deve recusar verificação contra hash vazio"""
        assert DjangoPasswordHasher().verificar("segredo123", "") is False


class TestJWTTokenService:
    """Testes para JWTTokenService."""

    def test_gerar_e_decodificar(self, usuario):
        """Deve emitir token com sub, email e expiração"""
        tokens = JWTTokenService(secret="segredo", expiracao_dias=7)

        payload = tokens.decodificar(tokens.gerar(usuario))

        assert payload["sub"] == usuario.id
        assert payload["email"] == "maria@empresa.com"
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_token_expirado(self, usuario):
        """Deve lançar EXPIRED_TOKEN para token vencido"""
        tokens = JWTTokenService(secret="segredo", expiracao_dias=-1)

        with pytest.raises(AuthenticationError) as exc:
            tokens.decodificar(tokens.gerar(usuario))

        assert exc.value.code == "EXPIRED_TOKEN"
        assert exc.value.message == "Token expirado"

    def test_assinatura_invalida(self, usuario):
        """Deve lançar INVALID_TOKEN para token assinado com outro segredo"""
        token = JWTTokenService(secret="outro").gerar(usuario)

        with pytest.raises(AuthenticationError) as exc:
            JWTTokenService(secret="segredo").decodificar(token)

        assert exc.value.code == "INVALID_TOKEN"

    def test_token_sem_sub(self):
        """Deve exigir a claim sub"""
        token = jwt.encode(
            {"email": "x@y.com", "exp": agora_utc() + timedelta(hours=1)},
            "segredo",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc:
            JWTTokenService(secret="segredo").decodificar(token)

        assert exc.value.code == "INVALID_TOKEN"

    def test_lixo(self):
        """Deve rejeitar string que não é JWT"""
        with pytest.raises(AuthenticationError):
            JWTTokenService(secret="segredo").decodificar("nao-e-um-jwt")

    def test_secret_obrigatorio(self):
        """Deve exigir segredo configurado"""
        with pytest.raises(ValueError):
            JWTTokenService(secret="")
