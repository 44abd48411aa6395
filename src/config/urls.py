"""
URL Configuration para a Central de Chamados.

Estrutura:
- /admin/ - Django Admin
- /api/auth/ - Cadastro, login, perfil
- /api/usuarios/ - Gestão de usuários (administrativo)
- /api/chamados/ - Chamados e seus comentários
- /api/comentarios/ - Edição/remoção de comentários
- /health/ - Health check (inclui banco)
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path

from src.adapters.django_app.chamados.urls import chamados_urlpatterns, comentarios_urlpatterns
from src.adapters.django_app.shared.database import check_database_connection
from src.adapters.django_app.usuarios.urls import auth_urlpatterns, usuarios_urlpatterns


def health(request):
    """Status da aplicação; 503 se o banco não responde."""
    banco = check_database_connection()
    status = 200 if banco['healthy'] else 503

    return JsonResponse(
        {'status': 'ok' if banco['healthy'] else 'degraded', 'database': banco},
        status=status,
    )


urlpatterns = [
    # Django Admin
    path('admin/', admin.site.urls),

    # API
    path('api/auth/', include((auth_urlpatterns, 'auth'))),
    path('api/usuarios/', include((usuarios_urlpatterns, 'usuarios'))),
    path('api/chamados/', include((chamados_urlpatterns, 'chamados'))),
    path('api/comentarios/', include((comentarios_urlpatterns, 'comentarios'))),

    # Health check
    path('health/', health, name='health'),
]
