"""
Services do Feed.

FeedMirrorService publica no Feed registros de outros módulos (posts
aprovados do Mural, ideias aprovadas ou implementadas) sem duplicar:
a chave mirror_key é única no banco, então duas chamadas concorrentes
para a mesma origem terminam no mesmo post.
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F

from accounts.roles import is_curador

from .models import FeedPost, FeedPostComment, FeedPostLike, FeedPostType

logger = logging.getLogger(__name__)


class FeedMirrorService:

    @staticmethod
    def build_key(source_type, source_id):
        return f"{source_type}:{source_id}"

    @staticmethod
    def _existing(mirror_key):
        return FeedPost.objects.filter(mirror_key=mirror_key).first()

    @staticmethod
    def mirror(source_type, source_id, **fields):
        """
        Retorna o post do Feed da origem, criando-o se ainda não existir.

        Args:
            source_type: tipo da origem ('mural', 'idea_approved', ...)
            source_id: id do registro de origem
            **fields: campos do FeedPost criado (title, description,
                post_type, module_link, pinned, created_by, ...)

        Returns:
            (FeedPost, created)
        """
        mirror_key = FeedMirrorService.build_key(source_type, source_id)
        existing = FeedMirrorService._existing(mirror_key)
        if existing is not None:
            logger.info("Feed: %s já publicado (post %s)", mirror_key, existing.pk)
            return existing, False

        try:
            # savepoint: o IntegrityError não invalida a transação de quem chamou
            with transaction.atomic():
                post = FeedPost.objects.create(
                    mirror_key=mirror_key,
                    source_type=source_type,
                    source_id=str(source_id),
                    **fields,
                )
        except IntegrityError:
            post = FeedPost.objects.get(mirror_key=mirror_key)
            logger.warning("Feed: inserção concorrente de %s resolvida para o post %s", mirror_key, post.pk)
            return post, False

        logger.info("Feed: %s publicado como post %s", mirror_key, post.pk)
        return post, True


class FeedService:
    """Interações dos usuários com o Feed."""

    @staticmethod
    def create_announcement(author, title, description='', pinned=False, media_url=''):
        if not is_curador(author):
            raise PermissionDenied("Apenas administradores e gestores de setor podem publicar comunicados.")
        title = (title or '').strip()
        if not title:
            raise ValidationError("O título é obrigatório.")
        post = FeedPost.objects.create(
            post_type=FeedPostType.ANNOUNCEMENT,
            title=title,
            description=(description or '').strip(),
            pinned=pinned,
            media_url=media_url or '',
            created_by=author,
        )
        logger.info("Feed: comunicado %s publicado por %s", post.pk, author.username)
        return post

    @staticmethod
    @transaction.atomic
    def add_comment(post, user, content):
        content = (content or '').strip()
        if not content:
            raise ValidationError("O comentário não pode ser vazio.")
        comment = FeedPostComment.objects.create(post=post, user=user, content=content)
        FeedPost.objects.filter(pk=post.pk).update(comments_count=F('comments_count') + 1)
        return comment

    @staticmethod
    @transaction.atomic
    def toggle_like(post, user):
        """Curte ou descurte; retorna (liked, likes_count)."""
        like = FeedPostLike.objects.filter(post=post, user=user).first()
        if like:
            like.delete()
            FeedPost.objects.filter(pk=post.pk, likes_count__gt=0).update(likes_count=F('likes_count') - 1)
            liked = False
        else:
            FeedPostLike.objects.create(post=post, user=user)
            FeedPost.objects.filter(pk=post.pk).update(likes_count=F('likes_count') + 1)
            liked = True
        post.refresh_from_db(fields=['likes_count'])
        return liked, post.likes_count
