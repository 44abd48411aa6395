"""
Entidades do Domínio de Chamados.

Entidades:
- ChamadoEntity: Agregado principal (chamado de suporte)
- HistoricoAcaoEntity: Entrada imutável da trilha de auditoria
- StatusChamado / Prioridade / AcaoHistorico: Enums do domínio

Regras de Negócio Encapsuladas:
- Validação de título, descrição e categoria
- resolvido_em preenchido ao entrar em RESOLVIDO (nunca limpo depois)
- Resumo textual das alterações para o histórico
- Atribuição define status EM_ANDAMENTO / ABERTO

Transições de status NÃO seguem grafo fixo: qualquer valor do enum
é aceito em ``aplicar_alteracoes``. A atribuição sobrescreve o status
independentemente do valor anterior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Optional
import uuid

from src.core.shared.events import agora_utc
from src.core.shared.exceptions import ValidationError


class _EnumPorNome(Enum):
    """Enum cujo valor é igual ao nome (ex: CRITICA = "CRITICA")."""

    @classmethod
    def from_string(cls, value: str):
        """
        Converte string para enum.

        Args:
            value: Nome do enum (case-insensitive, espaços viram "_")

        Raises:
            ValueError: Se valor inválido
        """
        try:
            return cls[value.strip().upper().replace(" ", "_")]
        except (KeyError, AttributeError):
            raise ValueError(f"{cls._mensagem_invalido()}: {value}")

    @classmethod
    def _mensagem_invalido(cls) -> str:
        return f"{cls.__name__} inválido"

    @classmethod
    def nomes(cls) -> List[str]:
        return [membro.name for membro in cls]

    @property
    def posicao(self) -> int:
        """Posição na ordem de declaração (usada para ordenar por nível)."""
        return self.__class__.nomes().index(self.name)


class StatusChamado(_EnumPorNome):
    """Estados possíveis de um chamado."""

    ABERTO = "ABERTO"
    EM_ANDAMENTO = "EM_ANDAMENTO"
    AGUARDANDO_RESPOSTA = "AGUARDANDO_RESPOSTA"
    RESOLVIDO = "RESOLVIDO"
    FECHADO = "FECHADO"
    CANCELADO = "CANCELADO"

    @classmethod
    def _mensagem_invalido(cls) -> str:
        return "Status inválido"


class Prioridade(_EnumPorNome):
    """Níveis de prioridade."""

    BAIXA = "BAIXA"
    MEDIA = "MEDIA"
    ALTA = "ALTA"
    CRITICA = "CRITICA"

    @classmethod
    def _mensagem_invalido(cls) -> str:
        return "Prioridade inválida"


class AcaoHistorico(_EnumPorNome):
    """Tipos de entrada na trilha de auditoria."""

    CRIADO = "CRIADO"
    ATUALIZADO = "ATUALIZADO"
    ATRIBUIDO = "ATRIBUIDO"
    DESATRIBUIDO = "DESATRIBUIDO"
    COMENTARIO_ADICIONADO = "COMENTARIO_ADICIONADO"
    COMENTARIO_EDITADO = "COMENTARIO_EDITADO"
    COMENTARIO_DELETADO = "COMENTARIO_DELETADO"


@dataclass
class ChamadoEntity:
    """
    Entidade de Domínio: Chamado.

    Invariantes:
    - Título entre 5 e 200 caracteres
    - Descrição entre 10 e 5000 caracteres
    - Categoria entre 2 e 50 caracteres
    - Criador obrigatório; atribuído opcional
    - Status inicial ABERTO

    Attributes:
        id: Identificador único (UUID)
        titulo: Título do chamado
        descricao: Descrição detalhada do problema
        prioridade: Nível de prioridade
        status: Estado atual
        categoria: Categoria livre (ex: "Rede", "Hardware")
        criador_id: ID do usuário que abriu
        atribuido_id: ID do responsável (opcional)
        resolvido_em: Momento em que foi marcado RESOLVIDO
        criado_em: Data/hora de criação
        atualizado_em: Data/hora da última atualização

    Example:
        chamado = ChamadoEntity.criar(
            titulo="Impressora offline",
            descricao="A impressora do 3º andar não responde desde ontem",
            prioridade=Prioridade.ALTA,
            categoria="Hardware",
            criador_id="user-123",
        )
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    titulo: str = ""
    descricao: str = ""
    categoria: str = ""

    prioridade: Prioridade = field(default=Prioridade.MEDIA)
    status: StatusChamado = field(default=StatusChamado.ABERTO)

    criador_id: str = ""
    atribuido_id: Optional[str] = None

    resolvido_em: Optional[datetime] = None
    criado_em: datetime = field(default_factory=agora_utc)
    atualizado_em: datetime = field(default_factory=agora_utc)

    # Constantes de validação
    TITULO_MIN_LENGTH: ClassVar[int] = 5
    TITULO_MAX_LENGTH: ClassVar[int] = 200
    DESCRICAO_MIN_LENGTH: ClassVar[int] = 10
    DESCRICAO_MAX_LENGTH: ClassVar[int] = 5000
    CATEGORIA_MIN_LENGTH: ClassVar[int] = 2
    CATEGORIA_MAX_LENGTH: ClassVar[int] = 50

    @classmethod
    def criar(
        cls,
        titulo: str,
        descricao: str,
        prioridade: Prioridade,
        categoria: str,
        criador_id: str,
    ) -> "ChamadoEntity":
        """
        Factory method para criar chamado com validações.

        Args:
            titulo: Título (5-200 caracteres)
            descricao: Descrição (10-5000 caracteres)
            prioridade: Prioridade do chamado
            categoria: Categoria (2-50 caracteres)
            criador_id: ID do usuário autenticado que abre o chamado

        Returns:
            Nova instância com status ABERTO

        Raises:
            ValidationError: Se dados de entrada inválidos
        """
        cls._validar_titulo(titulo)
        cls._validar_descricao(descricao)
        cls._validar_categoria(categoria)

        if not criador_id:
            raise ValidationError("Criador é obrigatório", field="criador_id")

        return cls(
            titulo=titulo.strip(),
            descricao=descricao.strip(),
            prioridade=prioridade,
            categoria=categoria.strip(),
            criador_id=criador_id,
            status=StatusChamado.ABERTO,
        )

    @classmethod
    def _validar_titulo(cls, titulo: str) -> None:
        cls._validar_tamanho(
            titulo, "titulo", "Título", cls.TITULO_MIN_LENGTH, cls.TITULO_MAX_LENGTH,
            obrigatorio="Título é obrigatório",
        )

    @classmethod
    def _validar_descricao(cls, descricao: str) -> None:
        cls._validar_tamanho(
            descricao, "descricao", "Descrição", cls.DESCRICAO_MIN_LENGTH, cls.DESCRICAO_MAX_LENGTH,
            obrigatorio="Descrição é obrigatória",
        )

    @classmethod
    def _validar_categoria(cls, categoria: str) -> None:
        cls._validar_tamanho(
            categoria, "categoria", "Categoria", cls.CATEGORIA_MIN_LENGTH, cls.CATEGORIA_MAX_LENGTH,
            obrigatorio="Categoria é obrigatória",
        )

    @staticmethod
    def _validar_tamanho(
        valor: str, campo: str, rotulo: str, minimo: int, maximo: int, obrigatorio: str
    ) -> None:
        if not valor or not valor.strip():
            raise ValidationError(obrigatorio, field=campo)

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

    def aplicar_alteracoes(
        self,
        titulo: Optional[str] = None,
        descricao: Optional[str] = None,
        prioridade: Optional[Prioridade] = None,
        status: Optional[StatusChamado] = None,
        categoria: Optional[str] = None,
        atribuido_id: Optional[str] = None,
        agora: Optional[datetime] = None,
    ) -> List[str]:
        """
        Aplica patch parcial e retorna o resumo das alterações.

        Campos None não são alterados. O resumo segue a ordem
        status, título, descrição, prioridade, atribuído e só
        inclui campos cujo valor efetivamente mudou.

        Status RESOLVIDO preenche ``resolvido_em`` com o instante
        atual (mesmo que o chamado já estivesse resolvido).

        Args:
            agora: Instante de referência (injetável para testes)

        Returns:
            Lista de mensagens para o histórico (pode ser vazia)

        Raises:
            ValidationError: Se algum campo informado for inválido
        """
        if titulo is not None:
            self._validar_titulo(titulo)
            titulo = titulo.strip()
        if descricao is not None:
            self._validar_descricao(descricao)
            descricao = descricao.strip()
        if categoria is not None:
            self._validar_categoria(categoria)
            categoria = categoria.strip()

        agora = agora or agora_utc()
        alteracoes: List[str] = []

        if status is not None and status != self.status:
            alteracoes.append(f"Status alterado para {status.value}")
        if titulo is not None and titulo != self.titulo:
            alteracoes.append("Título atualizado")
        if descricao is not None and descricao != self.descricao:
            alteracoes.append("Descrição atualizada")
        if prioridade is not None and prioridade != self.prioridade:
            alteracoes.append(f"Prioridade alterada para {prioridade.value}")
        if atribuido_id is not None and atribuido_id != self.atribuido_id:
            alteracoes.append("Chamado reatribuído")

        if titulo is not None:
            self.titulo = titulo
        if descricao is not None:
            self.descricao = descricao
        if categoria is not None:
            self.categoria = categoria
        if prioridade is not None:
            self.prioridade = prioridade
        if atribuido_id is not None:
            self.atribuido_id = atribuido_id
        if status is not None:
            self.status = status
            if status == StatusChamado.RESOLVIDO:
                self.resolvido_em = agora

        self.atualizado_em = agora
        return alteracoes

    def atribuir(self, usuario_id: Optional[str]) -> None:
        """
        Atribui (ou remove atribuição) do chamado.

        Com responsável → EM_ANDAMENTO; sem responsável → ABERTO,
        qualquer que seja o status anterior.
        """
        self.atribuido_id = usuario_id or None
        self.status = StatusChamado.EM_ANDAMENTO if self.atribuido_id else StatusChamado.ABERTO
        self.atualizado_em = agora_utc()

    def criado_por(self, usuario_id: str) -> bool:
        return self.criador_id == usuario_id

    @property
    def esta_atribuido(self) -> bool:
        """Verifica se chamado está atribuído a alguém."""
        return self.atribuido_id is not None

    def __repr__(self) -> str:
        return (
            f"ChamadoEntity("
            f"id={self.id[:8]}..., "
            f"titulo='{self.titulo[:20]}...', "
            f"status={self.status.value}, "
            f"prioridade={self.prioridade.value}"
            f")"
        )

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, ChamadoEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True)
class HistoricoAcaoEntity:
    """
    Entrada da trilha de auditoria de um chamado.

    Imutável e somente-inclusão: o sistema nunca altera nem
    remove entradas individualmente (apenas em cascata quando
    o chamado é deletado).

    Attributes:
        acao: Tipo da ação registrada
        detalhes: Texto legível (ex: "Status alterado para RESOLVIDO")
        chamado_id: Chamado afetado
        usuario_id: Usuário que executou a ação
    """

    acao: AcaoHistorico
    detalhes: str
    chamado_id: str
    usuario_id: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    criado_em: datetime = field(default_factory=agora_utc)

    @classmethod
    def registrar(
        cls,
        acao: AcaoHistorico,
        detalhes: str,
        chamado_id: str,
        usuario_id: str,
    ) -> "HistoricoAcaoEntity":
        return cls(
            acao=acao,
            detalhes=detalhes,
            chamado_id=chamado_id,
            usuario_id=usuario_id,
        )
