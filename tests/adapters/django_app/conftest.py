"""
Fixtures para testes dos adapters Django.

Banco SQLite em memória configurado em tests/conftest.py;
testes que acessam o banco usam o marker ``django_db``.
"""

import pytest

from src.core.usuarios.dtos import UsuarioAutenticado
from src.core.usuarios.entities import UsuarioEntity


@pytest.fixture
def usuario_factory():
    """Factory para criar usuários persistidos (hash em memória)."""
    from src.adapters.django_app.usuarios.repositories import DjangoUsuarioRepository

    repo = DjangoUsuarioRepository()

    def create_usuario(nome="Maria Souza", email="maria@empresa.com",
                       cargo="Analista", departamento="TI"):
        usuario = UsuarioEntity.criar(
            nome=nome,
            email=email,
            senha_hash="plain$segredo123",
            departamento=departamento,
            cargo=cargo,
        )
        repo.save(usuario)
        return UsuarioAutenticado.from_entity(usuario)

    return create_usuario
