"""
Testes dos repositórios Django (SQLite em memória).

Verificam mapeamento Entity <-> Model, filtros, paginação,
cascata e tradução de erros de banco.
"""

from datetime import timedelta

import pytest

from src.adapters.django_app.chamados.repositories import (
    DjangoChamadoRepository,
    DjangoComentarioRepository,
    DjangoHistoricoRepository,
)
from src.adapters.django_app.usuarios.repositories import DjangoUsuarioRepository
from src.core.chamados.dtos import ListarChamadosQueryDTO
from src.core.chamados.entities import (
    AcaoHistorico,
    ChamadoEntity,
    HistoricoAcaoEntity,
    Prioridade,
    StatusChamado,
)
from src.core.comentarios.entities import ComentarioEntity
from src.core.shared.exceptions import ConflictError
from src.core.usuarios.entities import UsuarioEntity


def _chamado(criador_id, **kwargs) -> ChamadoEntity:
    dados = {
        "titulo": "Monitor piscando",
        "descricao": "O monitor pisca a cada poucos segundos",
        "prioridade": Prioridade.MEDIA,
        "categoria": "Hardware",
        "criador_id": criador_id,
    }
    dados.update(kwargs)
    return ChamadoEntity.criar(**dados)


@pytest.mark.django_db
class TestDjangoUsuarioRepository:
    """Testes para DjangoUsuarioRepository."""

    def test_save_e_get(self, usuario_factory):
        """Deve persistir e recuperar usuário com papel derivado"""
        repo = DjangoUsuarioRepository()
        ator = usuario_factory(cargo="Gerente de TI")

        usuario = repo.get_by_id(ator.id)

        assert usuario.email == "maria@empresa.com"
        assert usuario.papel.value == "GERENTE"
        assert repo.get_by_email("maria@empresa.com").id == ator.id
        assert repo.get_by_email("outro@empresa.com") is None

    def test_papel_gravado_no_model(self, usuario_factory):
        """Deve gravar a coluna papel para consulta"""
        from src.adapters.django_app.usuarios.models import UsuarioModel

        ator = usuario_factory(cargo="Supervisor")

        assert UsuarioModel.objects.get(id=ator.id).papel == "SUPERVISOR"

    def test_email_duplicado_vira_conflito(self, usuario_factory):
        """Deve traduzir violação de unicidade em ConflictError"""
        repo = DjangoUsuarioRepository()
        usuario_factory()
        duplicado = UsuarioEntity.criar(
            nome="Outra Maria",
            email="maria@empresa.com",
            senha_hash="plain$x",
            departamento="RH",
            cargo="Analista",
        )

        with pytest.raises(ConflictError, match="Email já está em uso"):
            repo.save(duplicado)

    def test_get_many(self, usuario_factory):
        """Deve buscar vários usuários ignorando ids vazios e inexistentes"""
        repo = DjangoUsuarioRepository()
        maria = usuario_factory()
        pedro = usuario_factory(nome="Pedro Lima", email="pedro@empresa.com")

        encontrados = repo.get_many([maria.id, pedro.id, None, "nao-existe"])

        assert set(encontrados) == {maria.id, pedro.id}
        assert [u.nome for u in repo.list_all()] == ["Maria Souza", "Pedro Lima"]


@pytest.mark.django_db
class TestDjangoChamadoRepository:
    """Testes para DjangoChamadoRepository."""

    def test_round_trip(self, usuario_factory):
        """Deve preservar enums, responsável e timestamps"""
        repo = DjangoChamadoRepository()
        maria = usuario_factory()
        pedro = usuario_factory(nome="Pedro Lima", email="pedro@empresa.com")
        chamado = _chamado(maria.id, prioridade=Prioridade.CRITICA)
        chamado.atribuir(pedro.id)
        chamado.aplicar_alteracoes(status=StatusChamado.RESOLVIDO)

        repo.save(chamado)
        salvo = repo.get_by_id(chamado.id)

        assert salvo.prioridade == Prioridade.CRITICA
        assert salvo.status == StatusChamado.RESOLVIDO
        assert salvo.atribuido_id == pedro.id
        assert salvo.resolvido_em == chamado.resolvido_em
        assert salvo.criado_em == chamado.criado_em

    def test_get_inexistente(self):
        """Deve retornar None para id inexistente"""
        assert DjangoChamadoRepository().get_by_id("nao-existe") is None

    def test_paginacao_e_filtros(self, usuario_factory):
        """Deve filtrar, ordenar e paginar no banco"""
        repo = DjangoChamadoRepository()
        maria = usuario_factory()
        for i in range(12):
            repo.save(_chamado(
                maria.id,
                titulo=f"Chamado de rede {i:02d}",
                categoria="Rede" if i % 2 == 0 else "Hardware",
                prioridade=Prioridade.ALTA if i < 3 else Prioridade.BAIXA,
            ))

        chamados, total = repo.list_paginated(ListarChamadosQueryDTO(
            categoria="rede", pagina=2, limite=4, ordenar_por="titulo", ordem="asc",
        ))

        assert total == 6
        assert [c.titulo for c in chamados] == ["Chamado de rede 08", "Chamado de rede 10"]

        chamados, total = repo.list_paginated(ListarChamadosQueryDTO(prioridade="ALTA"))
        assert total == 3

    def test_ordenacao_por_nivel_de_prioridade(self, usuario_factory):
        """Deve ordenar prioridade pelo nível no banco, não pelo texto"""
        repo = DjangoChamadoRepository()
        maria = usuario_factory()
        for prioridade in (Prioridade.BAIXA, Prioridade.CRITICA, Prioridade.MEDIA, Prioridade.ALTA):
            repo.save(_chamado(maria.id, prioridade=prioridade))

        desc, _ = repo.list_paginated(ListarChamadosQueryDTO(ordenar_por="prioridade", ordem="desc"))
        asc, _ = repo.list_paginated(ListarChamadosQueryDTO(ordenar_por="prioridade", ordem="asc"))

        assert [c.prioridade for c in desc] == [
            Prioridade.CRITICA, Prioridade.ALTA, Prioridade.MEDIA, Prioridade.BAIXA,
        ]
        assert [c.prioridade for c in asc] == list(reversed([c.prioridade for c in desc]))

    def test_filtro_por_data(self, usuario_factory):
        """Deve aplicar intervalo de criado_em"""
        repo = DjangoChamadoRepository()
        maria = usuario_factory()
        antigo = _chamado(maria.id)
        antigo.criado_em = antigo.criado_em - timedelta(days=30)
        recente = _chamado(maria.id)
        repo.save(antigo)
        repo.save(recente)

        chamados, total = repo.list_paginated(ListarChamadosQueryDTO(
            data_inicio=recente.criado_em - timedelta(days=1),
        ))

        assert total == 1
        assert chamados[0].id == recente.id

    def test_delete_em_cascata(self, usuario_factory):
        """Deve remover comentários e histórico junto com o chamado"""
        chamados = DjangoChamadoRepository()
        comentarios = DjangoComentarioRepository()
        historico = DjangoHistoricoRepository()
        maria = usuario_factory()
        chamado = _chamado(maria.id)
        chamados.save(chamado)
        comentarios.save(ComentarioEntity.criar("Alguma novidade?", maria.id, chamado.id))
        historico.add(HistoricoAcaoEntity.registrar(
            AcaoHistorico.CRIADO, "Chamado criado com prioridade MEDIA", chamado.id, maria.id,
        ))

        assert chamados.delete(chamado.id) is True

        assert comentarios.list_by_chamado(chamado.id) == []
        assert historico.list_by_chamado(chamado.id) == []
        assert chamados.delete(chamado.id) is False


@pytest.mark.django_db
class TestComentarioEHistoricoRepositories:
    """Testes para comentários e histórico."""

    def test_contagem_por_chamado(self, usuario_factory):
        """Deve contar comentários de vários chamados em uma consulta"""
        chamados = DjangoChamadoRepository()
        comentarios = DjangoComentarioRepository()
        maria = usuario_factory()
        primeiro, segundo = _chamado(maria.id), _chamado(maria.id)
        chamados.save(primeiro)
        chamados.save(segundo)
        for texto in ("Um", "Dois"):
            comentarios.save(ComentarioEntity.criar(texto, maria.id, primeiro.id))

        assert comentarios.count_by_chamados([primeiro.id, segundo.id]) == {primeiro.id: 2}
        assert comentarios.count_by_chamados([]) == {}

    def test_ordem_dos_comentarios(self, usuario_factory):
        """Deve listar comentários do mais antigo ao mais recente"""
        chamados = DjangoChamadoRepository()
        comentarios = DjangoComentarioRepository()
        maria = usuario_factory()
        chamado = _chamado(maria.id)
        chamados.save(chamado)
        recente = ComentarioEntity.criar("Recente", maria.id, chamado.id)
        antigo = ComentarioEntity.criar("Antigo", maria.id, chamado.id)
        antigo.criado_em = recente.criado_em - timedelta(minutes=5)
        comentarios.save(recente)
        comentarios.save(antigo)

        assert [c.conteudo for c in comentarios.list_by_chamado(chamado.id)] == ["Antigo", "Recente"]

    def test_historico_mais_recente_primeiro(self, usuario_factory):
        """Deve listar histórico do mais recente ao mais antigo"""
        chamados = DjangoChamadoRepository()
        historico = DjangoHistoricoRepository()
        maria = usuario_factory()
        chamado = _chamado(maria.id)
        chamados.save(chamado)
        criado = HistoricoAcaoEntity.registrar(
            AcaoHistorico.CRIADO, "Chamado criado com prioridade MEDIA", chamado.id, maria.id,
        )
        atualizado = HistoricoAcaoEntity(
            acao=AcaoHistorico.ATUALIZADO,
            detalhes="Status alterado para FECHADO",
            chamado_id=chamado.id,
            usuario_id=maria.id,
            criado_em=criado.criado_em + timedelta(seconds=1),
        )
        historico.add(atualizado)
        historico.add(criado)

        entradas = historico.list_by_chamado(chamado.id)

        assert [e.acao for e in entradas] == [AcaoHistorico.ATUALIZADO, AcaoHistorico.CRIADO]
        assert entradas[0].detalhes == "Status alterado para FECHADO"
