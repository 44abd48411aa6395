"""
Testes das exceções de domínio e da base de eventos.
"""

import pytest

from src.core.chamados.events import ChamadoCriadoEvent
from src.core.shared.exceptions import (
    AuthenticationError,
    ComentarioExpiradoError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class TestDomainExceptions:
    """Testes de códigos e serialização das exceções."""

    def test_validation_error_codigo_por_campo(self):
        """Deve derivar o código a partir do campo"""
        erro = ValidationError("Título é obrigatório", field="titulo")

        assert erro.code == "VALIDATION_ERROR_TITULO"
        assert erro.to_dict() == {
            "error": "VALIDATION_ERROR_TITULO",
            "message": "Título é obrigatório",
            "field": "titulo",
        }
        assert str(erro) == "[VALIDATION_ERROR_TITULO] Título é obrigatório"

    def test_validation_error_sem_campo(self):
        """Deve usar VALIDATION_ERROR quando não há campo"""
        assert ValidationError("JSON inválido").code == "VALIDATION_ERROR"

    def test_comentario_expirado_e_validacao(self):
        """Deve ser tratado como erro de validação com código próprio"""
        erro = ComentarioExpiradoError()

        assert isinstance(erro, ValidationError)
        assert erro.code == "COMMENT_TOO_OLD"

    def test_codigos_padrao(self):
        """Deve definir códigos estáveis para a API"""
        assert AuthenticationError("x").code == "UNAUTHENTICATED"
        assert PermissionDeniedError("x").code == "INSUFFICIENT_PERMISSIONS"
        assert EntityNotFoundError("x", entity_type="Chamado", entity_id="1").code == "ENTITY_NOT_FOUND"


class TestDomainEvent:
    """Testes da base DomainEvent."""

    def test_aggregate_id_obrigatorio(self):
        """Deve exigir aggregate_id"""
        with pytest.raises(ValueError):
            ChamadoCriadoEvent(chamado={})

    def test_metadados_gerados(self):
        """Deve gerar id e timestamp automaticamente"""
        evento = ChamadoCriadoEvent(aggregate_id="c1", chamado={"id": "c1"})

        assert evento.event_id
        assert evento.occurred_at.tzinfo is not None
        assert evento.aggregate_type == "Chamado"
        assert evento.payload() == {"id": "c1"}
