"""
Mapper entre UsuarioEntity (Core) e UsuarioModel (Django).
"""

from src.core.usuarios.entities import UsuarioEntity

from .models import UsuarioModel


class UsuarioMapper:
    """
    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity
    """

    @staticmethod
    def to_model(entity: UsuarioEntity) -> UsuarioModel:
        """
        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return UsuarioModel(
            id=entity.id,
            nome=entity.nome,
            email=entity.email,
            senha_hash=entity.senha_hash,
            departamento=entity.departamento,
            cargo=entity.cargo,
            papel=entity.papel.value,
            ativo=entity.ativo,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
        )

    @staticmethod
    def to_entity(model: UsuarioModel) -> UsuarioEntity:
        """
        Bypassa validações de ``criar`` pois os dados já foram
        validados na gravação original.
        """
        return UsuarioEntity(
            id=model.id,
            nome=model.nome,
            email=model.email,
            senha_hash=model.senha_hash,
            departamento=model.departamento,
            cargo=model.cargo,
            ativo=model.ativo,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )
