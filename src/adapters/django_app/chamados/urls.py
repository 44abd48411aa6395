"""
URL patterns para Chamados e Comentários.

Endpoints API JSON:
- GET|POST /api/chamados/
- GET|PATCH|PUT|DELETE /api/chamados/<id>/
- POST /api/chamados/<id>/atribuir/
- GET|POST /api/chamados/<id>/comentarios/
- PATCH|PUT|DELETE /api/comentarios/<id>/

Incluídos em src/config/urls.py com namespaces "chamados" e "comentarios".
"""

from django.urls import path

from . import api_views

chamados_urlpatterns = [
    path('', api_views.ChamadoAPIListView.as_view(), name='list'),
    path('<str:pk>/', api_views.ChamadoAPIDetailView.as_view(), name='detail'),
    path('<str:pk>/atribuir/', api_views.ChamadoAPIAtribuirView.as_view(), name='atribuir'),
    path('<str:pk>/comentarios/', api_views.ComentarioAPIListView.as_view(), name='comentarios'),
]

comentarios_urlpatterns = [
    path('<str:pk>/', api_views.ComentarioAPIDetailView.as_view(), name='detail'),
]
