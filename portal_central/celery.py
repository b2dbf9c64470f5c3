"""
Configuração Celery para o Portal Cresci e Perdi.

Processa em segundo plano o encerramento de votações de ideias
e a fila de envio de mensagens de WhatsApp.
"""
import os
from celery import Celery

# Define o módulo de configuração do Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'portal_central.settings')

app = Celery('portal_central')

# Carrega configurações do Django
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-descobre tarefas em apps instalados
app.autodiscover_tasks()
