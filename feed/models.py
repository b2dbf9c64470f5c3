"""
Modelos do Feed: posts (tabela feed_posts), comentários e curtidas.
"""
from django.conf import settings
from django.db import models


class FeedPostType(models.TextChoices):
    ANNOUNCEMENT = 'announcement', 'Comunicado'
    MURAL = 'mural', 'Mural'
    IDEA = 'idea', 'Ideia'
    TRAINING = 'training', 'Treinamento'
    GENERAL = 'general', 'Geral'


class FeedPost(models.Model):
    """
    Post do Feed.

    Posts espelhados de outros módulos (Mural, Ideias) guardam a origem em
    source_type/source_id e a chave única mirror_key ("<tipo>:<id>"), que
    impede o mesmo registro de ser publicado duas vezes.
    """
    post_type = models.CharField(
        max_length=20,
        choices=FeedPostType.choices,
        default=FeedPostType.GENERAL,
        verbose_name='Tipo'
    )
    title = models.CharField(max_length=255, verbose_name='Título')
    description = models.TextField(blank=True, verbose_name='Descrição')
    module_link = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Link do Módulo',
        help_text='Rota do registro de origem, por exemplo /mural/12'
    )
    reference_id = models.CharField(max_length=64, blank=True, verbose_name='Referência')
    source_type = models.CharField(max_length=30, blank=True, verbose_name='Tipo de Origem')
    source_id = models.CharField(max_length=64, blank=True, verbose_name='ID de Origem')
    mirror_key = models.CharField(
        max_length=100,
        unique=True,
        null=True,
        blank=True,
        verbose_name='Chave de Espelhamento'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='feed_posts',
        verbose_name='Criado por'
    )
    media_url = models.CharField(max_length=500, blank=True, verbose_name='Mídia')
    pinned = models.BooleanField(default=False, verbose_name='Fixado')
    likes_count = models.PositiveIntegerField(default=0, verbose_name='Curtidas')
    comments_count = models.PositiveIntegerField(default=0, verbose_name='Comentários')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        db_table = 'feed_posts'
        verbose_name = 'Post do Feed'
        verbose_name_plural = 'Posts do Feed'
        ordering = ['-pinned', '-created_at']
        indexes = [
            models.Index(fields=['post_type', '-created_at'], name='feed_posts_type_created_idx'),
            models.Index(fields=['source_type', 'source_id'], name='feed_posts_source_idx'),
        ]

    def __str__(self):
        return self.title


class FeedPostComment(models.Model):
    post = models.ForeignKey(
        FeedPost,
        on_delete=models.CASCADE,
        related_name='comments',
        verbose_name='Post'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='feed_comments',
        verbose_name='Usuário'
    )
    content = models.TextField(verbose_name='Comentário')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'feed_post_comments'
        verbose_name = 'Comentário'
        verbose_name_plural = 'Comentários'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user.username}: {self.content[:40]}"


class FeedPostLike(models.Model):
    post = models.ForeignKey(FeedPost, on_delete=models.CASCADE, related_name='likes', verbose_name='Post')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='feed_likes',
        verbose_name='Usuário'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'feed_post_likes'
        verbose_name = 'Curtida'
        verbose_name_plural = 'Curtidas'
        constraints = [
            models.UniqueConstraint(fields=['post', 'user'], name='unique_feed_like_per_user'),
        ]
