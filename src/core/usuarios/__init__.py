"""
Domínio de Usuários - Identidade e Permissões.

Contém:
- Entidade UsuarioEntity
- Papel/Capacidade: mapeamento explícito cargo → papel → capacidades
- Use Cases de autenticação (cadastro, login, token, senha)
- Ports para repositório, hash de senha e tokens
"""

from .permissions import Capacidade, Papel, eh_admin
from .entities import UsuarioEntity
from .dtos import UsuarioAutenticado, UsuarioOutputDTO, UsuarioResumoDTO
from .ports import UsuarioRepository, PasswordHasher, TokenService

__all__ = [
    "Capacidade",
    "Papel",
    "eh_admin",
    "UsuarioEntity",
    "UsuarioAutenticado",
    "UsuarioOutputDTO",
    "UsuarioResumoDTO",
    "UsuarioRepository",
    "PasswordHasher",
    "TokenService",
]
