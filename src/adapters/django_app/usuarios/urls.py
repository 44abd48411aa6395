"""
URL patterns para autenticação e usuários.

- /api/auth/...: cadastro, login, perfil, senha, validação de token
- /api/usuarios/...: gestão administrativa

Incluídos em src/config/urls.py com namespaces "auth" e "usuarios".
"""

from django.urls import path

from . import api_views

auth_urlpatterns = [
    path('registrar/', api_views.RegistrarAPIView.as_view(), name='registrar'),
    path('login/', api_views.LoginAPIView.as_view(), name='login'),
    path('perfil/', api_views.PerfilAPIView.as_view(), name='perfil'),
    path('alterar-senha/', api_views.AlterarSenhaAPIView.as_view(), name='alterar_senha'),
    path('validar-token/', api_views.ValidarTokenAPIView.as_view(), name='validar_token'),
]

usuarios_urlpatterns = [
    path('', api_views.UsuarioAPIListView.as_view(), name='list'),
    path('<str:pk>/', api_views.UsuarioAPIDetailView.as_view(), name='detail'),
]
