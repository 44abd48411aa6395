"""
Ports (Interfaces) do Domínio de Usuários.

Contratos implementados pelos adapters:
- UsuarioRepository: persistência de usuários
- PasswordHasher: hash e verificação de senhas
- TokenService: emissão e validação de tokens de acesso

Implementações em memória ao final do módulo servem aos testes
unitários do Core.
"""

from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable
import uuid

from src.core.shared.exceptions import AuthenticationError, ConflictError

from .entities import UsuarioEntity


@runtime_checkable
class UsuarioRepository(Protocol):
    """
    Interface para persistência de Usuários.

    Implementações:
    - DjangoUsuarioRepository (ORM)
    - InMemoryUsuarioRepository (testes)
    """

    def save(self, usuario: UsuarioEntity) -> None:
        """
        Persiste usuário (create ou update).

        Raises:
            ConflictError: Se o email já pertence a outro usuário
        """
        ...

    def get_by_id(self, usuario_id: str) -> Optional[UsuarioEntity]:
        ...

    def get_by_email(self, email: str) -> Optional[UsuarioEntity]:
        """Busca por email já normalizado (minúsculas)."""
        ...

    def get_many(self, usuario_ids: Iterable[str]) -> Dict[str, UsuarioEntity]:
        """
        Busca vários usuários de uma vez (evita N+1 ao montar resumos).

        Returns:
            Dicionário id -> entidade (ids inexistentes são omitidos)
        """
        ...

    def list_all(self) -> List[UsuarioEntity]:
        ...


class PasswordHasher(Protocol):
    """Hash de senhas (algoritmo definido pelo adapter)."""

    def hash(self, senha: str) -> str:
        ...

    def verificar(self, senha: str, senha_hash: str) -> bool:
        ...


class TokenService(Protocol):
    """
    Emissão e validação de tokens de acesso.

    ``decodificar`` deve lançar AuthenticationError com code
    INVALID_TOKEN ou EXPIRED_TOKEN quando o token não for aceito.
    """

    def gerar(self, usuario: UsuarioEntity) -> str:
        ...

    def decodificar(self, token: str) -> dict:
        """
        Returns:
            Payload com ao menos "sub" (id do usuário) e "email"
        """
        ...


# =============================================================================
# Implementações em memória
# =============================================================================

class InMemoryUsuarioRepository:
    """
    Implementação em memória do UsuarioRepository.

    Example:
        repo = InMemoryUsuarioRepository()
        repo.save(usuario)
        repo.get_by_email("maria@empresa.com")
    """

    def __init__(self):
        self._usuarios: dict[str, UsuarioEntity] = {}

    def save(self, usuario: UsuarioEntity) -> None:
        existente = self.get_by_email(usuario.email)
        if existente and existente.id != usuario.id:
            raise ConflictError("Email já está em uso", field="email")
        self._usuarios[usuario.id] = usuario

    def get_by_id(self, usuario_id: str) -> Optional[UsuarioEntity]:
        return self._usuarios.get(usuario_id)

    def get_by_email(self, email: str) -> Optional[UsuarioEntity]:
        for usuario in self._usuarios.values():
            if usuario.email == email:
                return usuario
        return None

    def get_many(self, usuario_ids: Iterable[str]) -> Dict[str, UsuarioEntity]:
        return {
            usuario_id: self._usuarios[usuario_id]
            for usuario_id in set(usuario_ids)
            if usuario_id in self._usuarios
        }

    def list_all(self) -> List[UsuarioEntity]:
        return sorted(self._usuarios.values(), key=lambda u: u.nome)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._usuarios.clear()


class InMemoryPasswordHasher:
    """Hasher reversível apenas para testes. Não usar em produção."""

    PREFIXO = "plain$"

    def hash(self, senha: str) -> str:
        return f"{self.PREFIXO}{senha}"

    def verificar(self, senha: str, senha_hash: str) -> bool:
        return senha_hash == self.hash(senha)


class InMemoryTokenService:
    """
    TokenService em memória para testes.

    Tokens são UUIDs opacos; ``expirar`` simula expiração.
    """

    def __init__(self):
        self._tokens: dict[str, dict] = {}
        self._expirados: set[str] = set()

    def gerar(self, usuario: UsuarioEntity) -> str:
        token = str(uuid.uuid4())
        self._tokens[token] = {"sub": usuario.id, "email": usuario.email}
        return token

    def decodificar(self, token: str) -> dict:
        if token in self._expirados:
            raise AuthenticationError("Token expirado", code="EXPIRED_TOKEN")
        payload = self._tokens.get(token)
        if payload is None:
            raise AuthenticationError("Token inválido", code="INVALID_TOKEN")
        return dict(payload)

    def expirar(self, token: str) -> None:
        self._expirados.add(token)
