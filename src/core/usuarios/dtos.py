"""
Data Transfer Objects (DTOs) do Domínio de Usuários.

- Input DTOs: cadastro, login, troca de senha, atualização administrativa
- UsuarioAutenticado: identidade resolvida a partir do token (o "ator")
- Output DTOs: perfil completo, resumo embutido em chamados/comentários
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .entities import UsuarioEntity
from .permissions import Capacidade, Papel


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class RegistrarUsuarioInputDTO:
    """
    DTO de entrada para cadastro de usuário.

    Attributes:
        nome: Nome completo (2-100)
        email: Email (único)
        senha: Senha em texto puro (6-100), nunca persistida
        departamento: Departamento (2-50)
        cargo: Cargo em texto livre (2-50)
    """

    nome: str
    email: str
    senha: str
    departamento: str
    cargo: str

    def to_dict(self) -> dict:
        """Converte para dicionário (sem a senha)."""
        return {
            "nome": self.nome,
            "email": self.email,
            "departamento": self.departamento,
            "cargo": self.cargo,
        }


@dataclass(frozen=True)
class LoginInputDTO:
    email: str
    senha: str


@dataclass(frozen=True)
class AlterarSenhaInputDTO:
    """
    DTO de entrada para troca de senha do próprio usuário.

    Attributes:
        usuario_id: ID do usuário autenticado
        senha_atual: Senha vigente (conferida contra o hash)
        nova_senha: Nova senha (mínimo 6 caracteres)
    """

    usuario_id: str
    senha_atual: str
    nova_senha: str


@dataclass(frozen=True)
class AtualizarUsuarioInputDTO:
    """
    DTO de entrada para atualização administrativa de usuário.

    Campos None não são alterados.
    """

    ator: "UsuarioAutenticado"
    usuario_id: str
    nome: Optional[str] = None
    departamento: Optional[str] = None
    cargo: Optional[str] = None
    ativo: Optional[bool] = None


# =============================================================================
# IDENTIDADE
# =============================================================================

@dataclass(frozen=True)
class UsuarioAutenticado:
    """
    Usuário autenticado resolvido a partir do token JWT.

    É passado aos use cases como ``ator`` para as verificações
    de permissão.
    """

    id: str
    nome: str
    email: str
    departamento: str
    cargo: str

    @classmethod
    def from_entity(cls, entity: UsuarioEntity) -> "UsuarioAutenticado":
        return cls(
            id=entity.id,
            nome=entity.nome,
            email=entity.email,
            departamento=entity.departamento,
            cargo=entity.cargo,
        )

    @property
    def papel(self) -> Papel:
        return Papel.from_cargo(self.cargo)

    @property
    def eh_admin(self) -> bool:
        return self.papel.eh_administrativo

    def pode(self, capacidade: Capacidade) -> bool:
        return self.papel.pode(capacidade)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "email": self.email,
            "departamento": self.departamento,
            "cargo": self.cargo,
            "papel": self.papel.value,
        }


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class UsuarioResumoDTO:
    """
    Resumo de usuário embutido em chamados, comentários e histórico.

    Attributes:
        id: Identificador do usuário
        nome: Nome de exibição
        email: Email
        departamento: Departamento
    """

    id: str
    nome: str
    email: str
    departamento: str

    @classmethod
    def from_entity(cls, entity: UsuarioEntity) -> "UsuarioResumoDTO":
        return cls(
            id=entity.id,
            nome=entity.nome,
            email=entity.email,
            departamento=entity.departamento,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "email": self.email,
            "departamento": self.departamento,
        }


@dataclass
class UsuarioOutputDTO:
    """
    DTO de saída com o perfil completo do usuário.

    Nunca inclui o hash da senha.
    """

    id: str
    nome: str
    email: str
    departamento: str
    cargo: str
    papel: str
    ativo: bool
    criado_em: datetime
    atualizado_em: datetime

    @classmethod
    def from_entity(cls, entity: UsuarioEntity) -> "UsuarioOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Entidade UsuarioEntity

        Returns:
            DTO sem dados sensíveis
        """
        return cls(
            id=entity.id,
            nome=entity.nome,
            email=entity.email,
            departamento=entity.departamento,
            cargo=entity.cargo,
            papel=entity.papel.value,
            ativo=entity.ativo,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "id": self.id,
            "nome": self.nome,
            "email": self.email,
            "departamento": self.departamento,
            "cargo": self.cargo,
            "papel": self.papel,
            "ativo": self.ativo,
            "criado_em": self.criado_em.isoformat(),
            "atualizado_em": self.atualizado_em.isoformat(),
        }


@dataclass
class AuthResultDTO:
    """Resultado de cadastro/login: perfil + token de acesso."""

    usuario: UsuarioOutputDTO
    token: str

    def to_dict(self) -> dict:
        return {
            "usuario": self.usuario.to_dict(),
            "token": self.token,
        }
