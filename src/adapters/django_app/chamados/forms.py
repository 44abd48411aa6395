"""
Django Forms para validação estrutural das requisições de chamados.

Forms verificam presença e tipo dos campos e convertem query
params; tamanhos, enums e regras ficam nas entidades e use cases.
"""

from django import forms


class CriarChamadoForm(forms.Form):
    """Form para criação (POST /api/chamados/)."""

    titulo = forms.CharField(error_messages={'required': 'Título é obrigatório'})

    descricao = forms.CharField(error_messages={'required': 'Descrição é obrigatória'})

    categoria = forms.CharField(error_messages={'required': 'Categoria é obrigatória'})

    prioridade = forms.CharField(required=False)

    def clean_prioridade(self):
        return self.cleaned_data.get('prioridade') or 'MEDIA'


class AtualizarChamadoForm(forms.Form):
    """
    Form para atualização parcial (PATCH/PUT /api/chamados/<id>/).

    A view repassa apenas os campos presentes no body.
    """

    titulo = forms.CharField(required=False, strip=False)

    descricao = forms.CharField(required=False, strip=False)

    categoria = forms.CharField(required=False, strip=False)

    prioridade = forms.CharField(required=False)

    status = forms.CharField(required=False)

    atribuido_id = forms.CharField(required=False)

    def clean_atribuido_id(self):
        """Remoção de responsável só pela rota de atribuição."""
        valor = self.cleaned_data.get('atribuido_id') or None
        if 'atribuido_id' in self.data and valor is None:
            raise forms.ValidationError(
                'atribuido_id não pode ser vazio; use POST /api/chamados/<id>/atribuir/ para desatribuir'
            )
        return valor


class ListarChamadosForm(forms.Form):
    """Query params de GET /api/chamados/."""

    status = forms.CharField(required=False)

    prioridade = forms.CharField(required=False)

    criador_id = forms.CharField(required=False)

    atribuido_id = forms.CharField(required=False)

    categoria = forms.CharField(required=False)

    data_inicio = forms.DateTimeField(
        required=False,
        error_messages={'invalid': 'data_inicio deve ser uma data ISO 8601'},
    )

    data_fim = forms.DateTimeField(
        required=False,
        error_messages={'invalid': 'data_fim deve ser uma data ISO 8601'},
    )

    pagina = forms.IntegerField(
        required=False,
        error_messages={'invalid': 'Página deve ser um número inteiro'},
    )

    limite = forms.IntegerField(
        required=False,
        error_messages={'invalid': 'Limite deve ser um número inteiro'},
    )

    ordenar_por = forms.CharField(required=False)

    ordem = forms.CharField(required=False)

    def clean(self):
        """Remove filtros vazios para que o DTO aplique seus defaults."""
        cleaned = super().clean()
        return {campo: valor for campo, valor in cleaned.items() if valor not in (None, '')}


class ComentarioForm(forms.Form):
    """Form para criar/editar comentário."""

    conteudo = forms.CharField(required=False, strip=False)


class AtribuirChamadoForm(forms.Form):
    """Form para POST /api/chamados/<id>/atribuir/ (vazio desatribui)."""

    atribuido_id = forms.CharField(required=False)

    def clean_atribuido_id(self):
        return self.cleaned_data.get('atribuido_id') or None
