"""
Modelos do Mural: espaço anônimo de pedidos de ajuda e conquistas.

O texto publicado é sempre a versão anonimizada pelo GiraBot; o autor
é guardado só para notificações e nunca é exposto pela API.
"""
from django.conf import settings
from django.db import models

from core.models import KeyValueSetting


class MuralStatus(models.TextChoices):
    PENDING = 'pending', 'Em Revisão'
    APPROVED = 'approved', 'Aprovado'
    REJECTED = 'rejected', 'Rejeitado'


class ApprovalSource(models.TextChoices):
    MANUAL = 'manual', 'Moderador'
    AI = 'ai', 'GiraBot'


class MuralCategory(models.Model):
    key = models.SlugField(max_length=50, unique=True, verbose_name='Chave')
    name = models.CharField(max_length=100, verbose_name='Nome')
    description = models.TextField(blank=True, verbose_name='Descrição')
    curator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mural_categories_curated',
        verbose_name='Curador',
        help_text='Recebe os pedidos de moderação desta categoria'
    )
    order = models.PositiveIntegerField(default=0, verbose_name='Ordem')
    is_active = models.BooleanField(default=True, verbose_name='Ativa')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'mural_categories'
        verbose_name = 'Categoria do Mural'
        verbose_name_plural = 'Categorias do Mural'
        ordering = ['order', 'name']

    def __str__(self):
        return self.name


class ModeratedContent(models.Model):
    """Campos de moderação comuns a postagens e respostas."""
    content = models.TextField(verbose_name='Conteúdo')
    status = models.CharField(
        max_length=20,
        choices=MuralStatus.choices,
        default=MuralStatus.PENDING,
        db_index=True,
        verbose_name='Status'
    )
    approval_source = models.CharField(
        max_length=10,
        choices=ApprovalSource.choices,
        blank=True,
        verbose_name='Origem da Aprovação'
    )
    ai_reason = models.TextField(blank=True, verbose_name='Justificativa da IA')
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name='Revisado por'
    )
    approved_at = models.DateTimeField(null=True, blank=True, verbose_name='Aprovado em')
    metadata = models.JSONField(default=dict, blank=True, verbose_name='Metadados')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        abstract = True
        ordering = ['-created_at']


class MuralPost(ModeratedContent):
    category = models.ForeignKey(
        MuralCategory,
        on_delete=models.PROTECT,
        related_name='posts',
        verbose_name='Categoria'
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='mural_posts',
        verbose_name='Autor'
    )
    image = models.FileField(upload_to='mural-images/%Y/%m/', blank=True, verbose_name='Imagem')
    response_count = models.PositiveIntegerField(default=0, verbose_name='Respostas')

    class Meta(ModeratedContent.Meta):
        db_table = 'mural_posts'
        verbose_name = 'Postagem do Mural'
        verbose_name_plural = 'Postagens do Mural'
        indexes = [
            models.Index(fields=['status', '-created_at'], name='mural_posts_status_idx'),
        ]

    def __str__(self):
        return f"#{self.pk} {self.content[:50]}"


class MuralResponse(ModeratedContent):
    post = models.ForeignKey(
        MuralPost,
        on_delete=models.CASCADE,
        related_name='responses',
        verbose_name='Postagem'
    )
    responder = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='mural_responses',
        verbose_name='Autor da Resposta'
    )

    class Meta(ModeratedContent.Meta):
        db_table = 'mural_responses'
        verbose_name = 'Resposta do Mural'
        verbose_name_plural = 'Respostas do Mural'
        ordering = ['created_at']

    def __str__(self):
        return f"Resposta #{self.pk} em #{self.post_id}"


class MuralSetting(KeyValueSetting):
    """Configurações do Mural (auto_approve, ai_moderation, auto_integrate_feed, forbidden_words)."""

    class Meta(KeyValueSetting.Meta):
        db_table = 'mural_settings'
        verbose_name = 'Configuração do Mural'
        verbose_name_plural = 'Configurações do Mural'
