"""
Repositório Django para persistência de Usuários.

Implementa UsuarioRepository (src/core/usuarios/ports.py).
"""

from typing import Dict, Iterable, List, Optional
import logging

from src.core.usuarios.entities import UsuarioEntity

from ..shared.repository import BaseRepository, traduzir_erros_de_banco
from .mappers import UsuarioMapper
from .models import UsuarioModel

logger = logging.getLogger(__name__)


class DjangoUsuarioRepository(BaseRepository[UsuarioEntity, UsuarioModel]):
    """
    Implementação Django do UsuarioRepository.

    A unicidade do email é garantida pelo índice único; violações
    viram ConflictError("Email já está em uso").

    Example:
        repo = DjangoUsuarioRepository()
        repo.save(usuario)
        repo.get_by_email("maria@empresa.com")
    """

    model_class = UsuarioModel
    default_order_field = "nome"
    mensagem_conflito = "Email já está em uso"

    def to_entity(self, model: UsuarioModel) -> UsuarioEntity:
        return UsuarioMapper.to_entity(model)

    def to_model(self, entity: UsuarioEntity) -> UsuarioModel:
        return UsuarioMapper.to_model(entity)

    @traduzir_erros_de_banco
    def get_by_email(self, email: str) -> Optional[UsuarioEntity]:
        model = UsuarioModel.objects.filter(email=email).first()
        return self.to_entity(model) if model else None

    @traduzir_erros_de_banco
    def get_many(self, usuario_ids: Iterable[str]) -> Dict[str, UsuarioEntity]:
        ids = [usuario_id for usuario_id in set(usuario_ids) if usuario_id]
        if not ids:
            return {}
        return {
            model.id: self.to_entity(model)
            for model in UsuarioModel.objects.filter(id__in=ids)
        }

    @traduzir_erros_de_banco
    def list_all(self) -> List[UsuarioEntity]:
        return [self.to_entity(m) for m in UsuarioModel.objects.order_by(self.default_order_field)]
