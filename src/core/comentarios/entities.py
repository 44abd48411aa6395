"""
Entidade de Comentário.

Regras:
- Conteúdo obrigatório, no máximo 2000 caracteres
- Edição permitida apenas dentro da janela de tempo (30 min por
  padrão); usuários com EDITAR_COMENTARIO_SEM_PRAZO ignoram a janela
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import ClassVar, Optional
import uuid

from src.core.shared.events import agora_utc
from src.core.shared.exceptions import ValidationError


@dataclass
class ComentarioEntity:
    """
    Entidade de Domínio: Comentário em um chamado.

    Attributes:
        id: Identificador único (UUID)
        conteudo: Texto do comentário (1-2000 caracteres)
        autor_id: ID do usuário autor
        chamado_id: ID do chamado comentado
        criado_em: Data/hora de criação (base da janela de edição)
        atualizado_em: Data/hora da última edição
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    conteudo: str = ""
    autor_id: str = ""
    chamado_id: str = ""
    criado_em: datetime = field(default_factory=agora_utc)
    atualizado_em: datetime = field(default_factory=agora_utc)

    CONTEUDO_MAX_LENGTH: ClassVar[int] = 2000
    JANELA_EDICAO_MINUTOS: ClassVar[int] = 30

    @classmethod
    def criar(cls, conteudo: str, autor_id: str, chamado_id: str) -> "ComentarioEntity":
        """
        Raises:
            ValidationError: Se conteúdo vazio ou longo demais
        """
        conteudo = cls.validar_conteudo(conteudo)
        return cls(conteudo=conteudo, autor_id=autor_id, chamado_id=chamado_id)

    @classmethod
    def validar_conteudo(cls, conteudo: Optional[str]) -> str:
        """Valida e retorna o conteúdo sem espaços nas pontas (o limite vale para o texto gravado)."""
        conteudo = (conteudo or "").strip()

        if not conteudo:
            raise ValidationError("Conteúdo do comentário é obrigatório", field="conteudo")

        if len(conteudo) > cls.CONTEUDO_MAX_LENGTH:
            raise ValidationError(
                f"Conteúdo deve ter no máximo {cls.CONTEUDO_MAX_LENGTH} caracteres",
                field="conteudo"
            )

        return conteudo

    def dentro_da_janela_de_edicao(
        self,
        agora: Optional[datetime] = None,
        janela_minutos: Optional[int] = None,
    ) -> bool:
        """Verifica se o comentário ainda pode ser editado pelo autor."""
        agora = agora or agora_utc()
        janela = timedelta(
            minutes=janela_minutos if janela_minutos is not None else self.JANELA_EDICAO_MINUTOS
        )
        return agora - self.criado_em <= janela

    def editar(self, conteudo: str, agora: Optional[datetime] = None) -> None:
        self.conteudo = self.validar_conteudo(conteudo)
        self.atualizado_em = agora or agora_utc()

    def escrito_por(self, usuario_id: str) -> bool:
        return self.autor_id == usuario_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComentarioEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
