"""
Modelos do módulo de Ideias.

- Idea: ideia submetida por um colaborador (tabela ideas)
- IdeaVote: voto de um usuário em uma ideia em votação
- IdeaFeedback: devolutiva registrada na curadoria
- IdeaNotification: aviso ao autor (ou responsável) a cada mudança de status
"""
from decimal import Decimal

from django.conf import settings
from django.db import models

from .workflow import IdeaStatus, eventos_permitidos, proximo_status


class IdeaCategory(models.TextChoices):
    PROCESSO = 'processo', 'Processo'
    TECNOLOGIA = 'tecnologia', 'Tecnologia'
    PRODUTO = 'produto', 'Produto'
    AMBIENTE = 'ambiente', 'Ambiente'
    OUTRO = 'outro', 'Outro'


class TargetAudience(models.TextChoices):
    FRANQUEADOS = 'franqueados', 'Franqueados'
    COLABORADORES = 'colaboradores', 'Colaboradores'
    AMBOS = 'ambos', 'Ambos'


class Level(models.TextChoices):
    BAIXO = 'baixo', 'Baixo'
    MEDIO = 'medio', 'Médio'
    ALTO = 'alto', 'Alto'


class Idea(models.Model):
    """
    Ideia de melhoria.

    O status só muda por Idea.aplicar(evento), que consulta a máquina de
    estados em ideias.workflow.
    """
    code = models.CharField(
        max_length=20,
        unique=True,
        verbose_name='Código',
        help_text='Formato IDEA-<ano>-<sequência>'
    )
    title = models.CharField(max_length=255, verbose_name='Título')
    description = models.TextField(verbose_name='Descrição')
    category = models.CharField(max_length=20, choices=IdeaCategory.choices, verbose_name='Categoria')
    ai_category = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Classificação do GiraBot'
    )
    target_audience = models.CharField(
        max_length=20,
        choices=TargetAudience.choices,
        default=TargetAudience.AMBOS,
        verbose_name='Público-alvo'
    )
    status = models.CharField(
        max_length=20,
        choices=IdeaStatus.choices,
        default=IdeaStatus.TRIAGEM,
        db_index=True,
        verbose_name='Status'
    )

    # Votação
    positive_votes = models.PositiveIntegerField(default=0, verbose_name='Votos Favoráveis')
    negative_votes = models.PositiveIntegerField(default=0, verbose_name='Votos Contrários')
    total_votes = models.PositiveIntegerField(default=0, verbose_name='Total de Votos')
    quorum = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name='Aprovação (%)',
        help_text='Percentual de votos favoráveis registrado no encerramento'
    )
    vote_start = models.DateTimeField(null=True, blank=True, verbose_name='Início da Votação')
    vote_end = models.DateTimeField(null=True, blank=True, verbose_name='Fim da Votação')
    evaluating_at = models.DateTimeField(null=True, blank=True, verbose_name='Enviada para Votação em')

    # Autoria e curadoria
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ideas_submitted',
        verbose_name='Autor'
    )
    unit = models.ForeignKey(
        'accounts.Unit',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ideas',
        verbose_name='Unidade'
    )
    curator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ideas_curated',
        verbose_name='Curador'
    )
    feedback = models.TextField(blank=True, verbose_name='Devolutiva')
    viability_level = models.CharField(max_length=10, choices=Level.choices, blank=True, verbose_name='Viabilidade')
    impact_level = models.CharField(max_length=10, choices=Level.choices, blank=True, verbose_name='Impacto')
    resolved_at = models.DateTimeField(null=True, blank=True, verbose_name='Resolvida em')

    # Implementação
    implemented_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ideas_implementing',
        verbose_name='Responsável pela Implementação'
    )
    implementation_deadline = models.DateField(null=True, blank=True, verbose_name='Prazo de Implementação')
    implementation_notes = models.TextField(blank=True, verbose_name='Observações da Implementação')
    implemented_at = models.DateTimeField(null=True, blank=True, verbose_name='Implementada em')

    media_urls = models.JSONField(default=list, blank=True, verbose_name='Mídias')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        db_table = 'ideas'
        verbose_name = 'Ideia'
        verbose_name_plural = 'Ideias'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'vote_end'], name='ideas_status_vote_end_idx'),
            models.Index(fields=['submitted_by', '-created_at'], name='ideas_submitter_created_idx'),
        ]

    def __str__(self):
        return f"{self.code} - {self.title}"

    @property
    def approval_rate(self):
        """Percentual de votos favoráveis (0 sem votos)."""
        if not self.total_votes:
            return Decimal('0.00')
        rate = Decimal(self.positive_votes) * 100 / Decimal(self.total_votes)
        return rate.quantize(Decimal('0.01'))

    @property
    def first_media_url(self):
        if isinstance(self.media_urls, list) and self.media_urls:
            return self.media_urls[0]
        return ''

    def eventos_permitidos(self):
        return eventos_permitidos(self.status)

    def aplicar(self, evento):
        """
        Aplica o evento e atualiza self.status (sem salvar).

        Raises:
            TransicaoInvalida: se o evento não for permitido no status atual
        """
        self.status = proximo_status(self.status, evento)
        return self.status


class IdeaVote(models.Model):
    idea = models.ForeignKey(Idea, on_delete=models.CASCADE, related_name='votes', verbose_name='Ideia')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='idea_votes',
        verbose_name='Usuário'
    )
    is_positive = models.BooleanField(verbose_name='Favorável')
    comment = models.TextField(blank=True, verbose_name='Comentário')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data do Voto')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        db_table = 'ideas_votes'
        verbose_name = 'Voto'
        verbose_name_plural = 'Votos'
        constraints = [
            models.UniqueConstraint(fields=['idea', 'user'], name='unique_vote_per_user'),
        ]

    def __str__(self):
        return f"{self.user.username} {'+' if self.is_positive else '-'} {self.idea.code}"


class IdeaFeedback(models.Model):
    """Histórico das devolutivas de curadoria."""
    idea = models.ForeignKey(Idea, on_delete=models.CASCADE, related_name='feedbacks', verbose_name='Ideia')
    curator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='idea_feedbacks',
        verbose_name='Curador'
    )
    feedback_text = models.TextField(verbose_name='Devolutiva')
    status_update = models.CharField(max_length=20, choices=IdeaStatus.choices, verbose_name='Novo Status')
    viability_level = models.CharField(max_length=10, choices=Level.choices, blank=True, verbose_name='Viabilidade')
    impact_level = models.CharField(max_length=10, choices=Level.choices, blank=True, verbose_name='Impacto')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'ideas_feedback'
        verbose_name = 'Devolutiva'
        verbose_name_plural = 'Devolutivas'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.idea.code} → {self.status_update}"


class IdeaNotificationType(models.TextChoices):
    STATUS = 'status', 'Mudança de Status'
    ASSIGNMENT = 'assignment', 'Designação de Responsável'


class IdeaNotification(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='idea_notifications',
        verbose_name='Usuário'
    )
    idea = models.ForeignKey(Idea, on_delete=models.CASCADE, related_name='notifications', verbose_name='Ideia')
    notification_type = models.CharField(
        max_length=20,
        choices=IdeaNotificationType.choices,
        default=IdeaNotificationType.STATUS,
        verbose_name='Tipo'
    )
    message = models.TextField(verbose_name='Mensagem')
    is_read = models.BooleanField(default=False, verbose_name='Lida')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'ideas_notifications'
        verbose_name = 'Notificação de Ideia'
        verbose_name_plural = 'Notificações de Ideias'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.idea.code} → {self.user.username}"

    def mark_as_read(self):
        self.is_read = True
        self.save(update_fields=['is_read'])
