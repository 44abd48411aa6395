"""
Migration inicial para o domínio de Usuários.

Cria a tabela:
- usuarios: Contas de acesso (email único, hash de senha, papel)
"""

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='UsuarioModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único do usuário'
                )),
                ('nome', models.CharField(
                    max_length=100,
                    help_text='Nome completo'
                )),
                ('email', models.EmailField(
                    max_length=254,
                    unique=True,
                    help_text='Email de login (único)'
                )),
                ('senha_hash', models.CharField(
                    max_length=255,
                    help_text='Hash da senha'
                )),
                ('departamento', models.CharField(
                    max_length=50,
                    db_index=True
                )),
                ('cargo', models.CharField(
                    max_length=50
                )),
                ('papel', models.CharField(
                    max_length=20,
                    choices=[
                        ('ADMINISTRADOR', 'Administrador'),
                        ('GERENTE', 'Gerente'),
                        ('SUPERVISOR', 'Supervisor'),
                        ('COLABORADOR', 'Colaborador'),
                    ],
                    default='COLABORADOR',
                    db_index=True
                )),
                ('ativo', models.BooleanField(
                    default=True,
                    db_index=True
                )),
                ('criado_em', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
                ('atualizado_em', models.DateTimeField(
                    default=django.utils.timezone.now
                )),
            ],
            options={
                'verbose_name': 'Usuário',
                'verbose_name_plural': 'Usuários',
                'db_table': 'usuarios',
                'ordering': ['nome'],
            },
        ),
    ]
