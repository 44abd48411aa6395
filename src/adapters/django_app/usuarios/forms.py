"""
Django Forms para validação estrutural das requisições de usuários.

Forms verificam presença e tipo dos campos; regras de tamanho e
formato ficam em UsuarioEntity.
"""

from django import forms


class RegistrarUsuarioForm(forms.Form):
    """Form para cadastro (POST /api/auth/registrar/)."""

    nome = forms.CharField(error_messages={'required': 'Nome é obrigatório'})

    email = forms.CharField(error_messages={'required': 'Email é obrigatório'})

    senha = forms.CharField(
        strip=False,
        error_messages={'required': 'Senha é obrigatória'},
    )

    departamento = forms.CharField(error_messages={'required': 'Departamento é obrigatório'})

    cargo = forms.CharField(error_messages={'required': 'Cargo é obrigatório'})


class AlterarSenhaForm(forms.Form):
    """Form para troca de senha (POST /api/auth/alterar-senha/)."""

    senha_atual = forms.CharField(
        strip=False,
        error_messages={'required': 'Senha atual e nova senha são obrigatórias'},
    )

    nova_senha = forms.CharField(
        strip=False,
        error_messages={'required': 'Senha atual e nova senha são obrigatórias'},
    )


class AtualizarUsuarioForm(forms.Form):
    """
    Form para atualização administrativa (PATCH /api/usuarios/<id>/).

    Todos os campos são opcionais; a view repassa apenas os enviados.
    """

    nome = forms.CharField(required=False, strip=False)

    departamento = forms.CharField(required=False, strip=False)

    cargo = forms.CharField(required=False, strip=False)

    ativo = forms.Field(required=False)

    def clean_ativo(self):
        """Exige booleano JSON quando o campo é enviado."""
        valor = self.data.get('ativo')
        if 'ativo' in self.data and not isinstance(valor, bool):
            raise forms.ValidationError('Ativo deve ser true ou false')
        return valor
