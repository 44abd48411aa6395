"""
Migration inicial para os domínios de Chamados e Comentários.

Cria as tabelas:
- chamados: Tabela principal de chamados
- comentarios: Comentários de cada chamado
- historico_acoes: Trilha de auditoria
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
        ('usuarios', '0001_initial'),
    ]

    operations = [
        # =================================================================
        # Tabela: chamados
        # =================================================================
        migrations.CreateModel(
            name='ChamadoModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único do chamado'
                )),
                ('titulo', models.CharField(
                    max_length=200,
                    help_text='Título descritivo do chamado'
                )),
                ('descricao', models.TextField(
                    help_text='Descrição detalhada do problema'
                )),
                ('prioridade', models.CharField(
                    max_length=10,
                    choices=[
                        ('BAIXA', 'Baixa'),
                        ('MEDIA', 'Média'),
                        ('ALTA', 'Alta'),
                        ('CRITICA', 'Crítica'),
                    ],
                    default='MEDIA',
                    db_index=True,
                    help_text='Prioridade do chamado'
                )),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('ABERTO', 'Aberto'),
                        ('EM_ANDAMENTO', 'Em andamento'),
                        ('AGUARDANDO_RESPOSTA', 'Aguardando resposta'),
                        ('RESOLVIDO', 'Resolvido'),
                        ('FECHADO', 'Fechado'),
                        ('CANCELADO', 'Cancelado'),
                    ],
                    default='ABERTO',
                    db_index=True,
                    help_text='Status atual do chamado'
                )),
                ('categoria', models.CharField(
                    max_length=50,
                    db_index=True,
                    help_text='Categoria do chamado'
                )),
                ('resolvido_em', models.DateTimeField(
                    null=True,
                    blank=True,
                    help_text='Quando o chamado foi resolvido'
                )),
                ('criado_em', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True
                )),
                ('atualizado_em', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
                ('criador', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='chamados_criados',
                    to='usuarios.usuariomodel',
                    help_text='Usuário que abriu o chamado'
                )),
                ('atribuido', models.ForeignKey(
                    on_delete=django.db.models.deletion.SET_NULL,
                    null=True,
                    blank=True,
                    related_name='chamados_atribuidos',
                    to='usuarios.usuariomodel',
                    help_text='Responsável pelo atendimento'
                )),
            ],
            options={
                'verbose_name': 'Chamado',
                'verbose_name_plural': 'Chamados',
                'db_table': 'chamados',
                'ordering': ['-criado_em'],
            },
        ),
        migrations.AddIndex(
            model_name='chamadomodel',
            index=models.Index(
                fields=['status', 'criado_em'],
                name='idx_chamado_status_criado'
            ),
        ),
        migrations.AddIndex(
            model_name='chamadomodel',
            index=models.Index(
                fields=['atribuido', 'status'],
                name='idx_chamado_atrib_status'
            ),
        ),
        migrations.AddIndex(
            model_name='chamadomodel',
            index=models.Index(
                fields=['criador', 'criado_em'],
                name='idx_chamado_criador_data'
            ),
        ),

        # =================================================================
        # Tabela: comentarios
        # =================================================================
        migrations.CreateModel(
            name='ComentarioModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único do comentário'
                )),
                ('conteudo', models.TextField(
                    help_text='Texto do comentário'
                )),
                ('criado_em', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
                ('atualizado_em', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
                ('chamado', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='comentarios',
                    to='chamados.chamadomodel',
                    help_text='Chamado relacionado'
                )),
                ('autor', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='comentarios',
                    to='usuarios.usuariomodel',
                    help_text='Autor do comentário'
                )),
            ],
            options={
                'verbose_name': 'Comentário',
                'verbose_name_plural': 'Comentários',
                'db_table': 'comentarios',
                'ordering': ['criado_em'],
            },
        ),
        migrations.AddIndex(
            model_name='comentariomodel',
            index=models.Index(
                fields=['chamado', 'criado_em'],
                name='idx_comentario_chamado_data'
            ),
        ),

        # =================================================================
        # Tabela: historico_acoes
        # =================================================================
        migrations.CreateModel(
            name='HistoricoAcaoModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único da entrada'
                )),
                ('acao', models.CharField(
                    max_length=30,
                    choices=[
                        ('CRIADO', 'Criado'),
                        ('ATUALIZADO', 'Atualizado'),
                        ('ATRIBUIDO', 'Atribuído'),
                        ('DESATRIBUIDO', 'Desatribuído'),
                        ('COMENTARIO_ADICIONADO', 'Comentário adicionado'),
                        ('COMENTARIO_EDITADO', 'Comentário editado'),
                        ('COMENTARIO_DELETADO', 'Comentário deletado'),
                    ],
                    db_index=True,
                    help_text='Tipo da ação registrada'
                )),
                ('detalhes', models.TextField(
                    blank=True,
                    default='',
                    help_text='Detalhes da alteração'
                )),
                ('criado_em', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True
                )),
                ('chamado', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='historico',
                    to='chamados.chamadomodel',
                    help_text='Chamado relacionado'
                )),
                ('usuario', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='acoes',
                    to='usuarios.usuariomodel',
                    help_text='Usuário que executou a ação'
                )),
            ],
            options={
                'verbose_name': 'Histórico de Ação',
                'verbose_name_plural': 'Histórico de Ações',
                'db_table': 'historico_acoes',
                'ordering': ['-criado_em'],
            },
        ),
        migrations.AddIndex(
            model_name='historicoacaomodel',
            index=models.Index(
                fields=['chamado', 'criado_em'],
                name='idx_historico_chamado_data'
            ),
        ),
    ]
