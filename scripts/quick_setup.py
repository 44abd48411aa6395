#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Cria banco de dados SQLite
3. Executa migrations
4. Cria usuários e chamados de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SENHA_EXEMPLO = 'helpdesk123'

USUARIOS_EXEMPLO = [
    {'nome': 'Ana Gerente', 'email': 'ana@empresa.com', 'departamento': 'TI', 'cargo': 'Gerente de TI'},
    {'nome': 'Pedro Lima', 'email': 'pedro@empresa.com', 'departamento': 'TI', 'cargo': 'Técnico de Suporte'},
    {'nome': 'Maria Souza', 'email': 'maria@empresa.com', 'departamento': 'Financeiro', 'cargo': 'Analista'},
]

CHAMADOS_EXEMPLO = [
    {
        'titulo': 'Sistema fora do ar',
        'descricao': 'O sistema está completamente inacessível para todos os usuários. Erro 503 em todas as páginas.',
        'prioridade': 'CRITICA',
        'categoria': 'Infraestrutura',
    },
    {
        'titulo': 'Impressora do 3º andar offline',
        'descricao': 'A impressora não aparece na rede desde a troca do switch.',
        'prioridade': 'ALTA',
        'categoria': 'Hardware',
    },
    {
        'titulo': 'Relatório exportando dados incorretos',
        'descricao': 'O relatório de despesas está mostrando valores negativos em algumas colunas.',
        'prioridade': 'MEDIA',
        'categoria': 'Relatórios',
    },
    {
        'titulo': 'Acesso à pasta compartilhada',
        'descricao': 'Preciso de acesso de leitura à pasta do setor de Compras.',
        'prioridade': 'BAIXA',
        'categoria': 'Acessos',
    },
]


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    # Forçar SQLite para desenvolvimento rápido
    os.environ['DATABASE_URL'] = 'sqlite:///db.sqlite3'

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria usuários e chamados de exemplo pelos próprios use cases."""
    from src.config.container import get_container
    from src.core.chamados.dtos import AtribuirChamadoInputDTO, CriarChamadoInputDTO
    from src.core.comentarios.dtos import CriarComentarioInputDTO
    from src.core.shared.exceptions import ConflictError
    from src.core.usuarios.dtos import LoginInputDTO, RegistrarUsuarioInputDTO

    container = get_container()

    print("👤 Criando usuários de exemplo...")

    usuarios = {}
    for dados in USUARIOS_EXEMPLO:
        try:
            resultado = container.registrar_usuario_service().execute(
                RegistrarUsuarioInputDTO(senha=SENHA_EXEMPLO, **dados)
            )
        except ConflictError:
            resultado = container.login_service().execute(
                LoginInputDTO(email=dados['email'], senha=SENHA_EXEMPLO)
            )
        usuarios[dados['email']] = container.verificar_token_service().execute(resultado.token)
        print(f"   ✓ {dados['nome']} <{dados['email']}> ({usuarios[dados['email']].papel.value})")

    maria = usuarios['maria@empresa.com']
    pedro = usuarios['pedro@empresa.com']

    print("📝 Criando chamados de exemplo...")

    criados = []
    for dados in CHAMADOS_EXEMPLO:
        chamado = container.criar_chamado_service().execute(
            CriarChamadoInputDTO(ator=maria, **dados)
        )
        criados.append(chamado)
        print(f"   ✓ [{chamado.prioridade}] {chamado.titulo[:50]}")

    # Atribuir os dois mais urgentes ao técnico
    for chamado in criados[:2]:
        container.atribuir_chamado_service().execute(
            AtribuirChamadoInputDTO(ator=maria, chamado_id=chamado.id, atribuido_id=pedro.id)
        )

    container.criar_comentario_service().execute(
        CriarComentarioInputDTO(
            ator=pedro,
            chamado_id=criados[0].id,
            conteudo='Verificando o balanceador de carga.',
        )
    )

    print(f"✅ {len(criados)} chamados criados! Senha dos usuários: {SENHA_EXEMPLO}")


def check_connection():
    """Verifica conexão com o banco."""
    from src.adapters.django_app.shared.database import check_database_connection

    print("🔍 Verificando conexão com o banco...")

    status = check_database_connection()
    if status['healthy']:
        print("✅ Conexão OK!")
    else:
        print(f"❌ Erro de conexão: {status.get('error')}")
    return status['healthy']


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Event Publisher: {settings.EVENT_PUBLISHER_MODE}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. django-admin runserver --settings=src.config.settings")
    print("   2. POST http://localhost:8000/api/auth/login/")
    print("   3. GET  http://localhost:8000/api/chamados/ (Authorization: Bearer <token>)")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar usuários e chamados de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Central de Chamados - Quick Setup")
    print("=" * 60 + "\n")

    # Configurar Django
    setup_django()

    if args.check_only:
        check_connection()
        return

    # Verificar conexão
    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Para usar SQLite, defina: DATABASE_URL=sqlite:///db.sqlite3")
        return

    # Executar migrations
    run_migrations()

    # Criar dados de exemplo
    if args.with_sample_data:
        create_sample_data()

    # Mostrar informações
    show_info()


if __name__ == '__main__':
    main()
