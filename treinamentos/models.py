"""
Modelos de Treinamentos: conteúdos, perguntas de quiz e tentativas.
"""
from decimal import Decimal

from django.conf import settings
from django.db import models


class TrainingCategory(models.Model):
    name = models.CharField(max_length=100, unique=True, verbose_name='Nome')
    description = models.TextField(blank=True, verbose_name='Descrição')
    order = models.PositiveIntegerField(default=0, verbose_name='Ordem')
    is_active = models.BooleanField(default=True, verbose_name='Ativa')

    class Meta:
        db_table = 'training_categories'
        verbose_name = 'Categoria de Treinamento'
        verbose_name_plural = 'Categorias de Treinamento'
        ordering = ['order', 'name']

    def __str__(self):
        return self.name


class Training(models.Model):
    """
    Treinamento com conteúdo e quiz de múltipla escolha.

    target_roles vazio significa disponível para todos os papéis.
    """
    title = models.CharField(max_length=255, verbose_name='Título')
    description = models.TextField(blank=True, verbose_name='Descrição')
    category = models.ForeignKey(
        TrainingCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='trainings',
        verbose_name='Categoria'
    )
    content = models.TextField(blank=True, verbose_name='Conteúdo')
    video_url = models.URLField(blank=True, verbose_name='Vídeo')
    duration_minutes = models.PositiveIntegerField(default=0, verbose_name='Duração (min)')
    target_roles = models.JSONField(default=list, blank=True, verbose_name='Papéis')
    is_mandatory = models.BooleanField(default=False, verbose_name='Obrigatório')
    is_active = models.BooleanField(default=True, verbose_name='Ativo')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='trainings_created',
        verbose_name='Criado por'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        db_table = 'trainings'
        verbose_name = 'Treinamento'
        verbose_name_plural = 'Treinamentos'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def is_available_for(self, role):
        return not self.target_roles or role in self.target_roles


class QuizQuestion(models.Model):
    training = models.ForeignKey(
        Training,
        on_delete=models.CASCADE,
        related_name='questions',
        verbose_name='Treinamento'
    )
    question = models.TextField(verbose_name='Pergunta')
    options = models.JSONField(default=list, verbose_name='Alternativas')
    correct_option = models.PositiveSmallIntegerField(
        verbose_name='Alternativa Correta',
        help_text='Índice (a partir de 0) da alternativa correta'
    )
    explanation = models.TextField(
        blank=True,
        verbose_name='Explicação',
        help_text='Mostrada quando o GiraBot não consegue gerar o feedback'
    )
    order = models.PositiveIntegerField(default=0, verbose_name='Ordem')

    class Meta:
        db_table = 'training_quiz_questions'
        verbose_name = 'Pergunta do Quiz'
        verbose_name_plural = 'Perguntas do Quiz'
        ordering = ['training', 'order', 'id']

    def __str__(self):
        return self.question[:60]

    def option_text(self, index):
        if index is None or not 0 <= index < len(self.options):
            return '(sem resposta)'
        return self.options[index]


class QuizAttempt(models.Model):
    training = models.ForeignKey(
        Training,
        on_delete=models.CASCADE,
        related_name='attempts',
        verbose_name='Treinamento'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='quiz_attempts',
        verbose_name='Usuário'
    )
    answers = models.JSONField(default=dict, verbose_name='Respostas')
    correct_count = models.PositiveIntegerField(default=0, verbose_name='Acertos')
    total_questions = models.PositiveIntegerField(default=0, verbose_name='Total de Perguntas')
    score = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'), verbose_name='Nota (%)')
    passed = models.BooleanField(default=False, verbose_name='Aprovado')
    feedback = models.JSONField(default=list, blank=True, verbose_name='Feedback')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data da Tentativa')

    class Meta:
        db_table = 'training_quiz_attempts'
        verbose_name = 'Tentativa de Quiz'
        verbose_name_plural = 'Tentativas de Quiz'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.username} - {self.training.title} ({self.score}%)"
