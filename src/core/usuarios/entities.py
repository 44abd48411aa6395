"""
Entidades do Domínio de Usuários.

Entidades:
- UsuarioEntity: usuário do helpdesk (solicitante ou atendente)

Regras de Negócio Encapsuladas:
- Validação de nome, email, departamento e cargo
- Email sempre normalizado em minúsculas
- Papel derivado do cargo (ver permissions.Papel)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Optional
import re
import uuid

from src.core.shared.events import agora_utc
from src.core.shared.exceptions import ValidationError

from .permissions import Capacidade, Papel


EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class UsuarioEntity:
    """
    Entidade de Domínio: Usuário.

    Invariantes:
    - Nome entre 2 e 100 caracteres
    - Email válido e em minúsculas (único no repositório)
    - Departamento e cargo entre 2 e 50 caracteres
    - senha_hash nunca é exposta em DTOs de saída

    Example:
        usuario = UsuarioEntity.criar(
            nome="Maria Souza",
            email="Maria@Empresa.com",
            senha_hash=hasher.hash("segredo123"),
            departamento="TI",
            cargo="Gerente de Suporte",
        )
        usuario.email   # "maria@empresa.com"
        usuario.papel   # Papel.GERENTE
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    email: str = ""
    senha_hash: str = ""
    departamento: str = ""
    cargo: str = ""
    ativo: bool = True
    criado_em: datetime = field(default_factory=agora_utc)
    atualizado_em: datetime = field(default_factory=agora_utc)

    # Constantes de validação
    NOME_MIN_LENGTH: ClassVar[int] = 2
    NOME_MAX_LENGTH: ClassVar[int] = 100
    DEPARTAMENTO_MIN_LENGTH: ClassVar[int] = 2
    DEPARTAMENTO_MAX_LENGTH: ClassVar[int] = 50
    CARGO_MIN_LENGTH: ClassVar[int] = 2
    CARGO_MAX_LENGTH: ClassVar[int] = 50

    @classmethod
    def criar(
        cls,
        nome: str,
        email: str,
        senha_hash: str,
        departamento: str,
        cargo: str,
    ) -> "UsuarioEntity":
        """
        Factory method para criar usuário com validações.

        Args:
            nome: Nome completo
            email: Email (normalizado para minúsculas)
            senha_hash: Hash já calculado pelo PasswordHasher
            departamento: Departamento do usuário
            cargo: Cargo em texto livre (define o papel)

        Raises:
            ValidationError: Se algum campo for inválido
        """
        cls._validar_texto(nome, "nome", "Nome", cls.NOME_MIN_LENGTH, cls.NOME_MAX_LENGTH)
        email_normalizado = cls.normalizar_email(email)
        cls._validar_texto(
            departamento, "departamento", "Departamento",
            cls.DEPARTAMENTO_MIN_LENGTH, cls.DEPARTAMENTO_MAX_LENGTH,
        )
        cls._validar_texto(cargo, "cargo", "Cargo", cls.CARGO_MIN_LENGTH, cls.CARGO_MAX_LENGTH)

        if not senha_hash:
            raise ValidationError("Senha é obrigatória", field="senha")

        return cls(
            nome=nome.strip(),
            email=email_normalizado,
            senha_hash=senha_hash,
            departamento=departamento.strip(),
            cargo=cargo.strip(),
        )

    @staticmethod
    def normalizar_email(email: str) -> str:
        """Valida formato e retorna email em minúsculas."""
        email_limpo = (email or "").strip().lower()

        if not email_limpo:
            raise ValidationError("Email é obrigatório", field="email")

        if not EMAIL_REGEX.match(email_limpo):
            raise ValidationError("Email inválido", field="email")

        return email_limpo

    @staticmethod
    def _validar_texto(valor: str, campo: str, rotulo: str, minimo: int, maximo: int) -> None:
        if not valor or not valor.strip():
            raise ValidationError(f"{rotulo} é obrigatório", field=campo)

        tamanho = len(valor.strip())

        if tamanho < minimo:
            raise ValidationError(
                f"{rotulo} deve ter pelo menos {minimo} caracteres",
                field=campo
            )

        if tamanho > maximo:
            raise ValidationError(
                f"{rotulo} deve ter no máximo {maximo} caracteres",
                field=campo
            )

    def atualizar_dados(
        self,
        nome: Optional[str] = None,
        departamento: Optional[str] = None,
        cargo: Optional[str] = None,
        ativo: Optional[bool] = None,
    ) -> None:
        """
        Atualiza dados cadastrais (operação administrativa).

        Campos None são mantidos.
        """
        if nome is not None:
            self._validar_texto(nome, "nome", "Nome", self.NOME_MIN_LENGTH, self.NOME_MAX_LENGTH)
            self.nome = nome.strip()

        if departamento is not None:
            self._validar_texto(
                departamento, "departamento", "Departamento",
                self.DEPARTAMENTO_MIN_LENGTH, self.DEPARTAMENTO_MAX_LENGTH,
            )
            self.departamento = departamento.strip()

        if cargo is not None:
            self._validar_texto(cargo, "cargo", "Cargo", self.CARGO_MIN_LENGTH, self.CARGO_MAX_LENGTH)
            self.cargo = cargo.strip()

        if ativo is not None:
            self.ativo = ativo

        self._atualizar_timestamp()

    def alterar_senha_hash(self, novo_hash: str) -> None:
        self.senha_hash = novo_hash
        self._atualizar_timestamp()

    def _atualizar_timestamp(self) -> None:
        self.atualizado_em = agora_utc()

    @property
    def papel(self) -> Papel:
        """Papel derivado do cargo."""
        return Papel.from_cargo(self.cargo)

    @property
    def eh_admin(self) -> bool:
        return self.papel.eh_administrativo

    def pode(self, capacidade: Capacidade) -> bool:
        """Verifica se o papel do usuário concede a capacidade."""
        return self.papel.pode(capacidade)

    def __repr__(self) -> str:
        return (
            f"UsuarioEntity("
            f"id={self.id[:8]}..., "
            f"email={self.email}, "
            f"papel={self.papel.value}"
            f")"
        )

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, UsuarioEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
