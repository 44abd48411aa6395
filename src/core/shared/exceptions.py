"""
Exceções de Domínio da Central de Chamados.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    │   └── ComentarioExpiradoError (janela de edição encerrada)
    ├── AuthenticationError (identidade ausente ou inválida)
    ├── PermissionDeniedError (ator sem capacidade)
    ├── EntityNotFoundError (entidade não existe)
    ├── ConflictError (unicidade violada)
    └── DependencyError (falha de banco ou serviço externo)

Cada exceção corresponde a um status HTTP no adapter de API
(ver BaseAPIView.handle_exception).
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando dados fornecidos não atendem aos requisitos
    mínimos para processamento.

    Example:
        if len(titulo) < 5:
            raise ValidationError("Título deve ter pelo menos 5 caracteres", field="titulo")
    """

    def __init__(self, message: str, field: str = None, code: str = None):
        self.field = field
        if code is None:
            code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class ComentarioExpiradoError(ValidationError):
    """Comentário fora da janela de edição permitida ao autor."""

    def __init__(self, message: str = "Comentário muito antigo para edição"):
        super().__init__(message, field="conteudo", code="COMMENT_TOO_OLD")


class AuthenticationError(DomainException):
    """
    Falha de autenticação.

    Token ausente, inválido ou expirado, credenciais incorretas
    ou usuário inativo.

    Example:
        if not usuario or not usuario.ativo:
            raise AuthenticationError("Usuário não encontrado ou inativo")
    """

    def __init__(self, message: str, code: str = "UNAUTHENTICATED"):
        super().__init__(message, code)


class PermissionDeniedError(DomainException):
    """
    Ator autenticado sem permissão para a operação.

    Example:
        if not ator.pode(Capacidade.DELETAR_CHAMADO):
            raise PermissionDeniedError("Sem permissão para deletar chamados")
    """

    def __init__(self, message: str, capacidade: str = None):
        self.capacidade = capacidade
        super().__init__(message, "INSUFFICIENT_PERMISSIONS")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.capacidade:
            result["capacidade"] = self.capacidade
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Lançada quando uma busca por ID não retorna resultado.

    Example:
        chamado = repo.get_by_id(chamado_id)
        if not chamado:
            raise EntityNotFoundError("Chamado não encontrado")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class ConflictError(DomainException):
    """
    Violação de unicidade (ex: email já cadastrado).

    Example:
        if repo.get_by_email(email):
            raise ConflictError("Email já está em uso", field="email")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message, "CONFLICT")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class DependencyError(DomainException):
    """
    Falha em dependência externa (banco de dados, broker, cache).

    Repositórios convertem erros de infraestrutura nesta exceção
    para que o Core não conheça detalhes do ORM.
    """

    def __init__(self, message: str, dependency: str = None):
        self.dependency = dependency
        super().__init__(message, "DEPENDENCY_ERROR")
