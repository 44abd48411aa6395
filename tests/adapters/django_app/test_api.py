"""
Testes das API Views JSON (Django test client + JWT real).

Cobrem o envelope {success, data/error, meta}, o mapeamento
exceção → status HTTP e os fluxos principais do helpdesk.
"""

import json

import pytest
from dependency_injector import providers
from django.test import Client

from src.adapters.django_app.events.publishers import InMemoryEventPublisher
from src.config.container import get_container


class ApiClient:
    """Client JSON com token Bearer opcional."""

    def __init__(self, token=None):
        self._client = Client()
        self.token = token

    def _extra(self):
        return {'HTTP_AUTHORIZATION': f'Bearer {self.token}'} if self.token else {}

    def get(self, url, params=None):
        return self._client.get(url, params or {}, **self._extra())

    def post(self, url, data=None):
        return self._client.post(
            url, json.dumps(data or {}), content_type='application/json', **self._extra()
        )

    def patch(self, url, data=None):
        return self._client.patch(
            url, json.dumps(data or {}), content_type='application/json', **self._extra()
        )

    def delete(self, url):
        return self._client.delete(url, **self._extra())


def _registrar(nome, email, cargo):
    response = ApiClient().post('/api/auth/registrar/', {
        'nome': nome,
        'email': email,
        'senha': 'segredo123',
        'departamento': 'TI',
        'cargo': cargo,
    })
    assert response.status_code == 201, response.content
    data = response.json()['data']
    return ApiClient(token=data['token']), data['usuario']


@pytest.fixture
def publisher():
    """Substitui o publisher do container por um em memória."""
    publisher = InMemoryEventPublisher()
    get_container().event_publisher.override(providers.Object(publisher))
    return publisher


@pytest.fixture
def maria():
    return _registrar('Maria Souza', 'maria@empresa.com', 'Analista')


@pytest.fixture
def pedro():
    return _registrar('Pedro Lima', 'pedro@empresa.com', 'Técnico')


@pytest.fixture
def ana():
    return _registrar('Ana Gerente', 'ana@empresa.com', 'Gerente de TI')


@pytest.fixture
def chamado(maria):
    client, _ = maria
    response = client.post('/api/chamados/', {
        'titulo': 'Impressora offline',
        'descricao': 'A impressora do 3º andar não responde desde ontem',
        'categoria': 'Hardware',
        'prioridade': 'CRITICA',
    })
    assert response.status_code == 201, response.content
    return response.json()['data']


@pytest.mark.django_db
class TestAuthAPI:
    """Testes de /api/auth/."""

    def test_registrar(self, maria):
        """Deve cadastrar e devolver token sem expor hash"""
        _, usuario = maria

        assert usuario['email'] == 'maria@empresa.com'
        assert usuario['papel'] == 'COLABORADOR'
        assert 'senha_hash' not in usuario

    def test_registrar_email_duplicado(self, maria):
        """Deve responder 409 para email já cadastrado"""
        response = ApiClient().post('/api/auth/registrar/', {
            'nome': 'Outra Maria',
            'email': 'MARIA@empresa.com',
            'senha': 'segredo123',
            'departamento': 'RH',
            'cargo': 'Analista',
        })

        assert response.status_code == 409
        assert response.json()['success'] is False
        assert response.json()['meta']['code'] == 'CONFLICT'

    def test_registrar_campo_ausente(self):
        """Deve responder 400 com o campo ausente"""
        response = ApiClient().post('/api/auth/registrar/', {
            'email': 'joao@empresa.com',
            'senha': 'segredo123',
            'departamento': 'TI',
            'cargo': 'Analista',
        })

        assert response.status_code == 400
        assert response.json()['error'] == 'Nome é obrigatório'
        assert response.json()['meta']['field'] == 'nome'

    def test_json_invalido(self):
        """Deve responder 400 para corpo que não é JSON"""
        response = Client().post('/api/auth/login/', 'nao-json', content_type='application/json')

        assert response.status_code == 400
        assert response.json()['meta']['code'] == 'VALIDATION_ERROR'

    def test_login(self, maria):
        """Deve autenticar e devolver novo token"""
        response = ApiClient().post('/api/auth/login/', {
            'email': 'maria@empresa.com',
            'senha': 'segredo123',
        })

        assert response.status_code == 200
        assert response.json()['data']['token']

    def test_login_invalido(self, maria):
        """Deve responder 401 com INVALID_CREDENTIALS"""
        response = ApiClient().post('/api/auth/login/', {
            'email': 'maria@empresa.com',
            'senha': 'errada123',
        })

        assert response.status_code == 401
        assert response.json()['meta']['code'] == 'INVALID_CREDENTIALS'

    def test_perfil(self, maria):
        """Deve devolver perfil do usuário do token"""
        client, usuario = maria

        response = client.get('/api/auth/perfil/')

        assert response.status_code == 200
        assert response.json()['data']['id'] == usuario['id']

    def test_perfil_sem_token(self):
        """Deve responder 401 sem token"""
        response = ApiClient().get('/api/auth/perfil/')

        assert response.status_code == 401
        assert response.json()['error'] == 'Token de acesso não fornecido'

    def test_perfil_token_invalido(self):
        """Deve responder 401 com INVALID_TOKEN"""
        response = ApiClient(token='abc.def.ghi').get('/api/auth/perfil/')

        assert response.status_code == 401
        assert response.json()['meta']['code'] == 'INVALID_TOKEN'

    def test_validar_token(self, ana):
        """Deve devolver identidade com papel"""
        client, _ = ana

        response = client.post('/api/auth/validar-token/')

        assert response.json()['data']['valid'] is True
        assert response.json()['data']['usuario']['papel'] == 'GERENTE'

    def test_alterar_senha(self, maria):
        """Deve trocar a senha e aceitar login com a nova"""
        client, _ = maria

        response = client.post('/api/auth/alterar-senha/', {
            'senha_atual': 'segredo123',
            'nova_senha': 'novaSenha1',
        })

        assert response.status_code == 200
        login = ApiClient().post('/api/auth/login/', {
            'email': 'maria@empresa.com',
            'senha': 'novaSenha1',
        })
        assert login.status_code == 200


@pytest.mark.django_db
class TestUsuariosAPI:
    """Testes de /api/usuarios/ (administrativo)."""

    def test_listar_como_gerente(self, ana, maria):
        """Deve listar usuários com total em meta"""
        client, _ = ana

        response = client.get('/api/usuarios/')

        assert response.status_code == 200
        assert response.json()['meta']['total'] == 2

    def test_listar_como_colaborador(self, maria):
        """Deve responder 403 com mensagem administrativa"""
        client, _ = maria

        response = client.get('/api/usuarios/')

        assert response.status_code == 403
        assert response.json()['error'] == 'Acesso negado. Privilégios de administrador necessários.'
        assert response.json()['meta']['code'] == 'INSUFFICIENT_PERMISSIONS'

    def test_desativar_bloqueia_token(self, ana, maria):
        """Deve invalidar acesso do usuário desativado"""
        admin, _ = ana
        client, usuario = maria

        response = admin.patch(f"/api/usuarios/{usuario['id']}/", {'ativo': False})

        assert response.status_code == 200
        assert response.json()['data']['ativo'] is False
        assert response.json()['data']['nome'] == 'Maria Souza'
        assert client.get('/api/auth/perfil/').status_code == 401

    @pytest.mark.parametrize('ativo', ['talvez', 'false', 0, None])
    def test_ativo_precisa_ser_booleano(self, ana, maria, ativo):
        """Deve responder 400 e manter o usuário ativo"""
        admin, _ = ana
        client, usuario = maria

        response = admin.patch(f"/api/usuarios/{usuario['id']}/", {'ativo': ativo})

        assert response.status_code == 400
        assert response.json()['meta']['code'] == 'VALIDATION_ERROR_ATIVO'
        assert client.get('/api/auth/perfil/').json()['data']['ativo'] is True


@pytest.mark.django_db
class TestChamadosAPI:
    """Testes de /api/chamados/."""

    def test_criar(self, chamado, maria):
        """Deve criar chamado ABERTO com criador resumido"""
        _, usuario = maria

        assert chamado['status'] == 'ABERTO'
        assert chamado['prioridade'] == 'CRITICA'
        assert chamado['criador']['id'] == usuario['id']
        assert chamado['atribuido'] is None

    def test_criar_publica_evento(self, publisher, maria):
        """Deve publicar ticket:created após o commit"""
        client, _ = maria

        response = client.post('/api/chamados/', {
            'titulo': 'Sem acesso ao ERP',
            'descricao': 'Usuário bloqueado após troca de senha',
            'categoria': 'Sistemas',
        })

        assert response.json()['data']['prioridade'] == 'MEDIA'
        eventos = publisher.get_events_by_name('ticket:created')
        assert len(eventos) == 1
        assert eventos[0].payload()['id'] == response.json()['data']['id']

    def test_criar_titulo_curto(self, maria):
        """Deve responder 400 com o campo inválido"""
        client, _ = maria

        response = client.post('/api/chamados/', {
            'titulo': 'VPN',
            'descricao': 'Erro de autenticação ao conectar',
            'categoria': 'Rede',
        })

        assert response.status_code == 400
        assert response.json()['meta']['code'] == 'VALIDATION_ERROR_TITULO'

    def test_criar_sem_token(self):
        """Deve responder 401"""
        response = ApiClient().post('/api/chamados/', {'titulo': 'Qualquer coisa'})

        assert response.status_code == 401

    def test_listar_com_meta(self, chamado, maria):
        """Deve devolver itens em data e paginação em meta"""
        client, _ = maria

        response = client.get('/api/chamados/', {'prioridade': 'critica', 'limite': '5'})

        body = response.json()
        assert response.status_code == 200
        assert [c['id'] for c in body['data']] == [chamado['id']]
        assert body['data'][0]['total_comentarios'] == 0
        assert body['meta'] == {
            'total': 1,
            'pagina': 1,
            'limite': 5,
            'total_paginas': 1,
            'tem_proxima': False,
            'tem_anterior': False,
        }

    @pytest.mark.parametrize('params', [
        {'limite': '500'},
        {'pagina': '0'},
        {'pagina': 'abc'},
        {'ordenar_por': 'senha_hash'},
        {'status': 'PAUSADO'},
        {'data_inicio': 'ontem'},
    ])
    def test_listar_parametros_invalidos(self, maria, params):
        """Deve responder 400 para filtros inválidos"""
        client, _ = maria

        response = client.get('/api/chamados/', params)

        assert response.status_code == 400

    def test_detalhe(self, chamado, maria):
        """Deve trazer comentários e histórico"""
        client, _ = maria

        response = client.get(f"/api/chamados/{chamado['id']}/")

        data = response.json()['data']
        assert data['comentarios'] == []
        assert [h['acao'] for h in data['historico']] == ['CRIADO']
        assert data['historico'][0]['detalhes'] == 'Chamado criado com prioridade CRITICA'

    def test_detalhe_inexistente(self, maria):
        """Deve responder 404"""
        client, _ = maria

        response = client.get('/api/chamados/nao-existe/')

        assert response.status_code == 404
        assert response.json()['error'] == 'Chamado não encontrado'

    def test_resolver(self, chamado, maria, publisher):
        """Deve resolver e publicar ticket:status-changed"""
        client, _ = maria

        response = client.patch(f"/api/chamados/{chamado['id']}/", {'status': 'RESOLVIDO'})

        assert response.status_code == 200
        assert response.json()['data']['status'] == 'RESOLVIDO'
        assert response.json()['data']['resolvido_em'] is not None
        assert [e.event_name for e in publisher.published_events] == [
            'ticket:updated', 'ticket:status-changed',
        ]

    def test_atualizar_por_outro_colaborador(self, chamado, pedro):
        """Deve responder 403 e manter o chamado"""
        client, _ = pedro

        response = client.patch(f"/api/chamados/{chamado['id']}/", {'status': 'FECHADO'})

        assert response.status_code == 403
        detalhe = client.get(f"/api/chamados/{chamado['id']}/").json()['data']
        assert detalhe['status'] == 'ABERTO'

    def test_deletar(self, chamado, maria, ana):
        """Deve permitir remoção apenas a papel administrativo"""
        client, _ = maria
        admin, _ = ana

        assert client.delete(f"/api/chamados/{chamado['id']}/").status_code == 403

        response = admin.delete(f"/api/chamados/{chamado['id']}/")

        assert response.status_code == 200
        assert response.json()['data']['message'] == 'Chamado deletado com sucesso'
        assert client.get(f"/api/chamados/{chamado['id']}/").status_code == 404

    def test_listar_ordenado_por_prioridade(self, maria):
        """Deve trazer CRITICA primeiro na ordem decrescente de prioridade"""
        client, _ = maria
        for prioridade in ('BAIXA', 'CRITICA', 'MEDIA', 'ALTA'):
            client.post('/api/chamados/', {
                'titulo': f'Chamado {prioridade}',
                'descricao': 'Descrição suficiente para o chamado',
                'categoria': 'Geral',
                'prioridade': prioridade,
            })

        response = client.get('/api/chamados/', {'ordenar_por': 'prioridade', 'ordem': 'desc'})

        assert [c['prioridade'] for c in response.json()['data']] == ['CRITICA', 'ALTA', 'MEDIA', 'BAIXA']

    def test_patch_atribuido_nulo_rejeitado(self, chamado, maria, pedro):
        """Deve recusar desatribuição pelo PATCH e manter o responsável"""
        client, _ = maria
        _, tecnico = pedro
        client.post(f"/api/chamados/{chamado['id']}/atribuir/", {'atribuido_id': tecnico['id']})

        response = client.patch(f"/api/chamados/{chamado['id']}/", {'atribuido_id': None})

        assert response.status_code == 400
        assert response.json()['meta']['field'] == 'atribuido_id'
        assert '/atribuir/' in response.json()['error']
        detalhe = client.get(f"/api/chamados/{chamado['id']}/").json()['data']
        assert detalhe['atribuido_id'] == tecnico['id']

    def test_atribuir_e_desatribuir(self, chamado, maria, pedro):
        """Deve atribuir (EM_ANDAMENTO) e desatribuir (ABERTO)"""
        client, _ = maria
        _, tecnico = pedro
        url = f"/api/chamados/{chamado['id']}/atribuir/"

        atribuido = client.post(url, {'atribuido_id': tecnico['id']}).json()['data']
        desatribuido = client.post(url, {'atribuido_id': None}).json()['data']

        assert atribuido['status'] == 'EM_ANDAMENTO'
        assert atribuido['atribuido']['nome'] == 'Pedro Lima'
        assert desatribuido['status'] == 'ABERTO'
        assert desatribuido['atribuido'] is None

    def test_atribuir_usuario_inexistente(self, chamado, maria):
        """Deve responder 404 para responsável inexistente"""
        client, _ = maria

        response = client.post(f"/api/chamados/{chamado['id']}/atribuir/", {'atribuido_id': 'nao-existe'})

        assert response.status_code == 404


@pytest.mark.django_db
class TestComentariosAPI:
    """Testes de comentários."""

    def test_fluxo_de_comentarios(self, chamado, maria, pedro, publisher):
        """Deve criar, listar, editar e remover comentário"""
        autor, _ = maria
        outro, _ = pedro
        base = f"/api/chamados/{chamado['id']}/comentarios/"

        criado = autor.post(base, {'conteudo': 'Já tentei reiniciar'})
        assert criado.status_code == 201
        comentario = criado.json()['data']
        assert comentario['autor']['nome'] == 'Maria Souza'

        lista = autor.get(base).json()
        assert lista['meta']['total'] == 1

        url = f"/api/comentarios/{comentario['id']}/"
        assert outro.patch(url, {'conteudo': 'Invasão'}).status_code == 403

        editado = autor.patch(url, {'conteudo': 'Já tentei reiniciar duas vezes'})
        assert editado.status_code == 200
        assert editado.json()['data']['conteudo'] == 'Já tentei reiniciar duas vezes'

        removido = autor.delete(url)
        assert removido.status_code == 200
        assert autor.get(base).json()['meta']['total'] == 0

        nomes = [e.event_name for e in publisher.published_events]
        assert nomes == ['ticket:comment', 'ticket:comment-deleted']

        historico = autor.get(f"/api/chamados/{chamado['id']}/").json()['data']['historico']
        assert {h['acao'] for h in historico} == {
            'CRIADO', 'COMENTARIO_ADICIONADO', 'COMENTARIO_EDITADO', 'COMENTARIO_DELETADO',
        }

    def test_comentario_vazio(self, chamado, maria):
        """Deve responder 400 para conteúdo vazio"""
        client, _ = maria

        response = client.post(f"/api/chamados/{chamado['id']}/comentarios/", {'conteudo': '   '})

        assert response.status_code == 400
        assert response.json()['error'] == 'Conteúdo do comentário é obrigatório'

    def test_comentario_em_chamado_inexistente(self, maria):
        """Deve responder 404"""
        client, _ = maria

        response = client.post('/api/chamados/nao-existe/comentarios/', {'conteudo': 'Olá'})

        assert response.status_code == 404


@pytest.mark.django_db
def test_health():
    """Deve reportar banco conectado"""
    response = Client().get('/health/')

    assert response.status_code == 200
    assert response.json()['database']['healthy'] is True
