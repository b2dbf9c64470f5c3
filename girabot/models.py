"""
Histórico de conversas com o GiraBot (tabela ai_sessions).
"""
import uuid

from django.conf import settings
from django.db import models


class AIModule(models.TextChoices):
    GERAL = 'geral', 'Geral'
    FEED = 'feed', 'Feed'
    TREINAMENTOS = 'treinamentos', 'Treinamentos'
    MURAL = 'mural', 'Mural'
    IDEIAS = 'ideias', 'Ideias'


class AISession(models.Model):
    """
    Uma pergunta e a resposta do GiraBot.

    Perguntas da mesma conversa compartilham conversation_id; as últimas
    trocas são reenviadas como histórico.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ai_sessions',
        verbose_name='Usuário'
    )
    conversation_id = models.UUIDField(default=uuid.uuid4, db_index=True, verbose_name='Conversa')
    module = models.CharField(
        max_length=20,
        choices=AIModule.choices,
        default=AIModule.GERAL,
        verbose_name='Módulo'
    )
    question = models.TextField(verbose_name='Pergunta')
    answer = models.TextField(verbose_name='Resposta')
    model_used = models.CharField(max_length=100, blank=True, verbose_name='Modelo')
    tokens_used = models.PositiveIntegerField(default=0, verbose_name='Tokens')
    response_time_ms = models.PositiveIntegerField(default=0, verbose_name='Tempo de Resposta (ms)')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'ai_sessions'
        verbose_name = 'Sessão do GiraBot'
        verbose_name_plural = 'Sessões do GiraBot'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='ai_sessions_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.user.username} - {self.question[:50]}"
