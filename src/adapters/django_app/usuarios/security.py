"""
Adapters de segurança: hash de senha e tokens JWT.

- DjangoPasswordHasher: make_password/check_password do Django
  (Argon2 como hasher preferido via PASSWORD_HASHERS)
- JWTTokenService: tokens HS256 emitidos com PyJWT

Implementam PasswordHasher e TokenService (src/core/usuarios/ports.py).
"""

from datetime import timedelta
from typing import Optional
import logging

import jwt
from django.contrib.auth.hashers import check_password, make_password

from src.core.shared.events import agora_utc
from src.core.shared.exceptions import AuthenticationError
from src.core.usuarios.entities import UsuarioEntity

logger = logging.getLogger(__name__)


class DjangoPasswordHasher:
    """Hash de senhas usando os hashers configurados no Django."""

    def hash(self, senha: str) -> str:
        return make_password(senha)

    def verificar(self, senha: str, senha_hash: str) -> bool:
        if not senha_hash:
            return False
        return check_password(senha, senha_hash)


class JWTTokenService:
    """
    Emissão e validação de tokens JWT.

    Payload: {sub, email, iat, exp}

    Example:
        tokens = JWTTokenService(secret="...", expiracao_dias=7)
        token = tokens.gerar(usuario)
        tokens.decodificar(token)["sub"] == usuario.id
    """

    ALGORITHM = "HS256"

    def __init__(self, secret: str, expiracao_dias: int = 7, algorithm: Optional[str] = None):
        if not secret:
            raise ValueError("JWT secret não configurado")

        self.secret = secret
        self.expiracao = timedelta(days=expiracao_dias)
        self.algorithm = algorithm or self.ALGORITHM

    def gerar(self, usuario: UsuarioEntity) -> str:
        agora = agora_utc()
        payload = {
            "sub": usuario.id,
            "email": usuario.email,
            "iat": agora,
            "exp": agora + self.expiracao,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decodificar(self, token: str) -> dict:
        """
        Raises:
            AuthenticationError: EXPIRED_TOKEN ou INVALID_TOKEN
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expirado", code="EXPIRED_TOKEN")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Token rejeitado: {e}")
            raise AuthenticationError("Token inválido", code="INVALID_TOKEN")
