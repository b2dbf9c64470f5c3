# Generated manually - Initial migration for girabot app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AISession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('conversation_id', models.UUIDField(db_index=True, default=uuid.uuid4, verbose_name='Conversa')),
                ('module', models.CharField(choices=[('geral', 'Geral'), ('feed', 'Feed'), ('treinamentos', 'Treinamentos'), ('mural', 'Mural'), ('ideias', 'Ideias')], default='geral', max_length=20, verbose_name='Módulo')),
                ('question', models.TextField(verbose_name='Pergunta')),
                ('answer', models.TextField(verbose_name='Resposta')),
                ('model_used', models.CharField(blank=True, max_length=100, verbose_name='Modelo')),
                ('tokens_used', models.PositiveIntegerField(default=0, verbose_name='Tokens')),
                ('response_time_ms', models.PositiveIntegerField(default=0, verbose_name='Tempo de Resposta (ms)')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ai_sessions', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Sessão do GiraBot',
                'verbose_name_plural': 'Sessões do GiraBot',
                'db_table': 'ai_sessions',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='aisession',
            index=models.Index(fields=['user', '-created_at'], name='ai_sessions_user_created_idx'),
        ),
    ]
