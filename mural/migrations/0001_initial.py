# Generated manually - Initial migration for mural app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

STATUS_CHOICES = [('pending', 'Em Revisão'), ('approved', 'Aprovado'), ('rejected', 'Rejeitado')]
APPROVAL_SOURCE_CHOICES = [('manual', 'Moderador'), ('ai', 'GiraBot')]


def moderation_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('content', models.TextField(verbose_name='Conteúdo')),
        ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='pending', max_length=20, verbose_name='Status')),
        ('approval_source', models.CharField(blank=True, choices=APPROVAL_SOURCE_CHOICES, max_length=10, verbose_name='Origem da Aprovação')),
        ('ai_reason', models.TextField(blank=True, verbose_name='Justificativa da IA')),
        ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='Aprovado em')),
        ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
        ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Revisado por')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='MuralCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.SlugField(unique=True, verbose_name='Chave')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('order', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativa')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('curator', models.ForeignKey(blank=True, help_text='Recebe os pedidos de moderação desta categoria', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='mural_categories_curated', to=settings.AUTH_USER_MODEL, verbose_name='Curador')),
            ],
            options={
                'verbose_name': 'Categoria do Mural',
                'verbose_name_plural': 'Categorias do Mural',
                'db_table': 'mural_categories',
                'ordering': ['order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='MuralPost',
            fields=moderation_fields() + [
                ('image', models.FileField(blank=True, upload_to='mural-images/%Y/%m/', verbose_name='Imagem')),
                ('response_count', models.PositiveIntegerField(default=0, verbose_name='Respostas')),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='posts', to='mural.muralcategory', verbose_name='Categoria')),
                ('author', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='mural_posts', to=settings.AUTH_USER_MODEL, verbose_name='Autor')),
            ],
            options={
                'verbose_name': 'Postagem do Mural',
                'verbose_name_plural': 'Postagens do Mural',
                'db_table': 'mural_posts',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='MuralResponse',
            fields=moderation_fields() + [
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responses', to='mural.muralpost', verbose_name='Postagem')),
                ('responder', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='mural_responses', to=settings.AUTH_USER_MODEL, verbose_name='Autor da Resposta')),
            ],
            options={
                'verbose_name': 'Resposta do Mural',
                'verbose_name_plural': 'Respostas do Mural',
                'db_table': 'mural_responses',
                'ordering': ['created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='MuralSetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=100, unique=True, verbose_name='Chave')),
                ('value', models.JSONField(blank=True, default=dict, verbose_name='Valor')),
                ('description', models.CharField(blank=True, max_length=255, verbose_name='Descrição')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
            ],
            options={
                'verbose_name': 'Configuração do Mural',
                'verbose_name_plural': 'Configurações do Mural',
                'db_table': 'mural_settings',
                'ordering': ['key'],
                'abstract': False,
            },
        ),
        migrations.AddIndex(
            model_name='muralpost',
            index=models.Index(fields=['status', '-created_at'], name='mural_posts_status_idx'),
        ),
    ]
