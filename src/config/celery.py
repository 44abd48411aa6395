"""
Configuração do Celery para processamento assíncrono.

O Celery é usado para repassar eventos de domínio ao canal de tempo
real (Redis pub/sub) fora do ciclo request/response, com retry.
Ativado com EVENT_PUBLISHER_MODE=celery.

Arquitetura:
- Broker: Redis ou RabbitMQ (CELERY_BROKER_URL)
- Backend: Redis (resultados de tarefas)
- Workers: consomem a fila "events"

Uso:
    # Iniciar worker
    celery -A src.config.celery worker -Q events -l INFO
"""

import os
from celery import Celery
from kombu import Queue, Exchange

# Definir módulo de settings do Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

# Criar aplicação Celery
app = Celery('helpdesk')

# Carregar configurações do Django (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    # Monitoramento
    worker_send_task_events=True,
    task_send_sent_event=True,
)

# Definir filas
app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
)

app.conf.task_default_queue = 'default'

# Roteamento de tarefas para filas
app.conf.task_routes = {
    'src.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

# Auto-descoberta de tarefas
app.autodiscover_tasks(['src.adapters.django_app.events'], related_name='handlers')
