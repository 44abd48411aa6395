"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (repositories, publisher,
  hasher, token service)
- Factory: Nova instância por chamada (services, UoW)
- Configuration: valores lidos de django.conf.settings em get_container()

Imports de adapters são feitos sob demanda (``_lazy``) porque as
API views importam este módulo e os models Django só podem ser
importados depois de ``django.setup()``.
"""

from importlib import import_module
from typing import Optional

from dependency_injector import containers, providers


def _lazy(path: str):
    """
    Retorna callable que importa ``modulo:atributo`` só na chamada.

    Example:
        providers.Singleton(_lazy('pacote.modulo:Classe'), arg=...)
    """
    module_name, attr = path.split(':')

    def factory(*args, **kwargs):
        return getattr(import_module(module_name), attr)(*args, **kwargs)

    factory.__name__ = attr
    return factory


ADAPTERS = 'src.adapters.django_app'


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: settings do Django
    - Infrastructure: publisher de eventos, segurança
    - Repositories: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        from src.config.container import get_container

        service = get_container().criar_chamado_service()
        result = service.execute(input_dto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        _lazy(f'{ADAPTERS}.events.publishers:get_event_publisher'),
        mode=config.event_publisher_mode,
        redis_url=config.redis_url,
        channel=config.realtime_channel,
    )

    password_hasher = providers.Singleton(
        _lazy(f'{ADAPTERS}.usuarios.security:DjangoPasswordHasher'),
    )

    token_service = providers.Singleton(
        _lazy(f'{ADAPTERS}.usuarios.security:JWTTokenService'),
        secret=config.jwt_secret,
        expiracao_dias=config.jwt_expiracao_dias,
    )

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    usuario_repository = providers.Singleton(
        _lazy(f'{ADAPTERS}.usuarios.repositories:DjangoUsuarioRepository'),
    )

    chamado_repository = providers.Singleton(
        _lazy(f'{ADAPTERS}.chamados.repositories:DjangoChamadoRepository'),
    )

    comentario_repository = providers.Singleton(
        _lazy(f'{ADAPTERS}.chamados.repositories:DjangoComentarioRepository'),
    )

    historico_repository = providers.Singleton(
        _lazy(f'{ADAPTERS}.chamados.repositories:DjangoHistoricoRepository'),
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        _lazy(f'{ADAPTERS}.shared.unit_of_work:DjangoUnitOfWork'),
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services: Usuários
    # =========================================================================

    registrar_usuario_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:RegistrarUsuarioService'),
        usuario_repo=usuario_repository,
        password_hasher=password_hasher,
        token_service=token_service,
        uow=unit_of_work,
    )

    login_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:LoginService'),
        usuario_repo=usuario_repository,
        password_hasher=password_hasher,
        token_service=token_service,
    )

    obter_perfil_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:ObterPerfilService'),
        usuario_repo=usuario_repository,
    )

    alterar_senha_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:AlterarSenhaService'),
        usuario_repo=usuario_repository,
        password_hasher=password_hasher,
        uow=unit_of_work,
    )

    verificar_token_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:VerificarTokenService'),
        usuario_repo=usuario_repository,
        token_service=token_service,
    )

    listar_usuarios_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:ListarUsuariosService'),
        usuario_repo=usuario_repository,
    )

    atualizar_usuario_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases:AtualizarUsuarioService'),
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    # =========================================================================
    # Services: Chamados
    # =========================================================================

    criar_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases:CriarChamadoService'),
        chamado_repo=chamado_repository,
        historico_repo=historico_repository,
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    atualizar_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases:AtualizarChamadoService'),
        chamado_repo=chamado_repository,
        historico_repo=historico_repository,
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    deletar_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases:DeletarChamadoService'),
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    atribuir_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases:AtribuirChamadoService'),
        chamado_repo=chamado_repository,
        historico_repo=historico_repository,
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    listar_chamados_service = providers.Factory(
        _lazy('src.core.chamados.use_cases:ListarChamadosService'),
        chamado_repo=chamado_repository,
        comentario_repo=comentario_repository,
        usuario_repo=usuario_repository,
        limite_maximo=config.paginacao_limite_maximo,
    )

    obter_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases:ObterChamadoService'),
        chamado_repo=chamado_repository,
        historico_repo=historico_repository,
        comentario_repo=comentario_repository,
        usuario_repo=usuario_repository,
    )

    # =========================================================================
    # Services: Comentários
    # =========================================================================

    criar_comentario_service = providers.Factory(
        _lazy('src.core.comentarios.use_cases:CriarComentarioService'),
        comentario_repo=comentario_repository,
        chamado_repo=chamado_repository,
        historico_repo=historico_repository,
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    atualizar_comentario_service = providers.Factory(
        _lazy('src.core.comentarios.use_cases:AtualizarComentarioService'),
        comentario_repo=comentario_repository,
        historico_repo=historico_repository,
        usuario_repo=usuario_repository,
        uow=unit_of_work,
        janela_minutos=config.comentario_janela_edicao_minutos,
    )

    deletar_comentario_service = providers.Factory(
        _lazy('src.core.comentarios.use_cases:DeletarComentarioService'),
        comentario_repo=comentario_repository,
        historico_repo=historico_repository,
        uow=unit_of_work,
    )

    listar_comentarios_service = providers.Factory(
        _lazy('src.core.comentarios.use_cases:ListarComentariosService'),
        comentario_repo=comentario_repository,
        chamado_repo=chamado_repository,
        usuario_repo=usuario_repository,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def configuracao_from_settings() -> dict:
    """Extrai de django.conf.settings os valores usados pelo container."""
    from django.conf import settings

    return {
        'event_publisher_mode': getattr(settings, 'EVENT_PUBLISHER_MODE', 'sync'),
        'redis_url': getattr(settings, 'REDIS_URL', None),
        'realtime_channel': getattr(settings, 'REALTIME_CHANNEL', 'helpdesk:realtime'),
        'jwt_secret': getattr(settings, 'JWT_SECRET', None) or settings.SECRET_KEY,
        'jwt_expiracao_dias': getattr(settings, 'JWT_EXPIRACAO_DIAS', 7),
        'comentario_janela_edicao_minutos': getattr(settings, 'COMENTARIO_JANELA_EDICAO_MINUTOS', 30),
        'paginacao_limite_maximo': getattr(settings, 'PAGINACAO_LIMITE_MAXIMO', 100),
    }


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization).

    Returns:
        Container configurado a partir dos settings
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(configuracao_from_settings())

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None
