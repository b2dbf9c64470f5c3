# Generated manually - Initial migration for feed app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FeedPost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('post_type', models.CharField(choices=[('announcement', 'Comunicado'), ('mural', 'Mural'), ('idea', 'Ideia'), ('training', 'Treinamento'), ('general', 'Geral')], default='general', max_length=20, verbose_name='Tipo')),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('module_link', models.CharField(blank=True, help_text='Rota do registro de origem, por exemplo /mural/12', max_length=255, verbose_name='Link do Módulo')),
                ('reference_id', models.CharField(blank=True, max_length=64, verbose_name='Referência')),
                ('source_type', models.CharField(blank=True, max_length=30, verbose_name='Tipo de Origem')),
                ('source_id', models.CharField(blank=True, max_length=64, verbose_name='ID de Origem')),
                ('mirror_key', models.CharField(blank=True, max_length=100, null=True, unique=True, verbose_name='Chave de Espelhamento')),
                ('media_url', models.CharField(blank=True, max_length=500, verbose_name='Mídia')),
                ('pinned', models.BooleanField(default=False, verbose_name='Fixado')),
                ('likes_count', models.PositiveIntegerField(default=0, verbose_name='Curtidas')),
                ('comments_count', models.PositiveIntegerField(default=0, verbose_name='Comentários')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='feed_posts', to=settings.AUTH_USER_MODEL, verbose_name='Criado por')),
            ],
            options={
                'verbose_name': 'Post do Feed',
                'verbose_name_plural': 'Posts do Feed',
                'db_table': 'feed_posts',
                'ordering': ['-pinned', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='FeedPostComment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('content', models.TextField(verbose_name='Comentário')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='feed.feedpost', verbose_name='Post')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feed_comments', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Comentário',
                'verbose_name_plural': 'Comentários',
                'db_table': 'feed_post_comments',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='FeedPostLike',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='likes', to='feed.feedpost', verbose_name='Post')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feed_likes', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Curtida',
                'verbose_name_plural': 'Curtidas',
                'db_table': 'feed_post_likes',
            },
        ),
        migrations.AddIndex(
            model_name='feedpost',
            index=models.Index(fields=['post_type', '-created_at'], name='feed_posts_type_created_idx'),
        ),
        migrations.AddIndex(
            model_name='feedpost',
            index=models.Index(fields=['source_type', 'source_id'], name='feed_posts_source_idx'),
        ),
        migrations.AddConstraint(
            model_name='feedpostlike',
            constraint=models.UniqueConstraint(fields=('post', 'user'), name='unique_feed_like_per_user'),
        ),
    ]
