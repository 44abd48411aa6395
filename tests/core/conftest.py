"""
Fixtures compartilhadas pelos testes do Core.

Estratégia:
- Repositórios em memória (InMemory*) no lugar do ORM
- FakeUnitOfWork registra commit/rollback e eventos publicados
- Hasher e TokenService em memória (sem Argon2/JWT)
"""

from typing import List

import pytest

from src.core.chamados.ports import InMemoryChamadoRepository, InMemoryHistoricoRepository
from src.core.comentarios.ports import InMemoryComentarioRepository
from src.core.shared.events import DomainEvent
from src.core.usuarios.dtos import UsuarioAutenticado
from src.core.usuarios.entities import UsuarioEntity
from src.core.usuarios.ports import (
    InMemoryPasswordHasher,
    InMemoryTokenService,
    InMemoryUsuarioRepository,
)


class FakeUnitOfWork:
    """
    Fake Unit of Work para testes.

    Permite testar:
    - Comportamento de commit/rollback
    - Eventos publicados (somente após commit)
    - Reuso da mesma instância em várias execuções
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._committed = False
        self._rolled_back = False
        self.published: List[DomainEvent] = []

    def __enter__(self):
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    def _begin_transaction(self):
        self._committed = False
        self._rolled_back = False
        self._events.clear()

    def commit(self):
        self._committed = True
        self.published.extend(self._events)
        self._events.clear()

    def rollback(self):
        self._rolled_back = True
        self._events.clear()

    def publish_event(self, event: DomainEvent):
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        return self._events.copy()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    def nomes_publicados(self) -> List[str]:
        return [e.event_name for e in self.published]


def criar_usuario(repo, nome="Maria Souza", email="maria@empresa.com",
                  cargo="Analista", departamento="TI", senha="segredo123"):
    """Cria e persiste um usuário; retorna a versão autenticada."""
    usuario = UsuarioEntity.criar(
        nome=nome,
        email=email,
        senha_hash=InMemoryPasswordHasher().hash(senha),
        departamento=departamento,
        cargo=cargo,
    )
    repo.save(usuario)
    return UsuarioAutenticado.from_entity(usuario)


@pytest.fixture
def uow():
    return FakeUnitOfWork()


@pytest.fixture
def usuario_repo():
    return InMemoryUsuarioRepository()


@pytest.fixture
def password_hasher():
    return InMemoryPasswordHasher()


@pytest.fixture
def token_service():
    return InMemoryTokenService()


@pytest.fixture
def historico_repo():
    return InMemoryHistoricoRepository()


@pytest.fixture
def comentario_repo():
    return InMemoryComentarioRepository()


@pytest.fixture
def chamado_repo(historico_repo, comentario_repo):
    """Repositório de chamados com cascata para comentários e histórico."""
    return InMemoryChamadoRepository(dependentes=[historico_repo, comentario_repo])


@pytest.fixture
def colaborador(usuario_repo):
    return criar_usuario(usuario_repo)


@pytest.fixture
def outro_colaborador(usuario_repo):
    return criar_usuario(usuario_repo, nome="Pedro Lima", email="pedro@empresa.com")


@pytest.fixture
def gerente(usuario_repo):
    return criar_usuario(
        usuario_repo,
        nome="Ana Gerente",
        email="ana@empresa.com",
        cargo="Gerente de TI",
    )


@pytest.fixture
def novo_usuario(usuario_repo):
    """Factory de usuários persistidos no repositório em memória."""
    def _criar(**kwargs):
        return criar_usuario(usuario_repo, **kwargs)

    return _criar
