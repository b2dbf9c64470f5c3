# Generated manually - Initial migration for treinamentos app

from decimal import Decimal

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
            name='TrainingCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Nome')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('order', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativa')),
            ],
            options={
                'verbose_name': 'Categoria de Treinamento',
                'verbose_name_plural': 'Categorias de Treinamento',
                'db_table': 'training_categories',
                'ordering': ['order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Training',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('content', models.TextField(blank=True, verbose_name='Conteúdo')),
                ('video_url', models.URLField(blank=True, verbose_name='Vídeo')),
                ('duration_minutes', models.PositiveIntegerField(default=0, verbose_name='Duração (min)')),
                ('target_roles', models.JSONField(blank=True, default=list, verbose_name='Papéis')),
                ('is_mandatory', models.BooleanField(default=False, verbose_name='Obrigatório')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='trainings', to='treinamentos.trainingcategory', verbose_name='Categoria')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='trainings_created', to=settings.AUTH_USER_MODEL, verbose_name='Criado por')),
            ],
            options={
                'verbose_name': 'Treinamento',
                'verbose_name_plural': 'Treinamentos',
                'db_table': 'trainings',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='QuizQuestion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('question', models.TextField(verbose_name='Pergunta')),
                ('options', models.JSONField(default=list, verbose_name='Alternativas')),
                ('correct_option', models.PositiveSmallIntegerField(help_text='Índice (a partir de 0) da alternativa correta', verbose_name='Alternativa Correta')),
                ('explanation', models.TextField(blank=True, help_text='Mostrada quando o GiraBot não consegue gerar o feedback', verbose_name='Explicação')),
                ('order', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('training', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='treinamentos.training', verbose_name='Treinamento')),
            ],
            options={
                'verbose_name': 'Pergunta do Quiz',
                'verbose_name_plural': 'Perguntas do Quiz',
                'db_table': 'training_quiz_questions',
                'ordering': ['training', 'order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='QuizAttempt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('answers', models.JSONField(default=dict, verbose_name='Respostas')),
                ('correct_count', models.PositiveIntegerField(default=0, verbose_name='Acertos')),
                ('total_questions', models.PositiveIntegerField(default=0, verbose_name='Total de Perguntas')),
                ('score', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, verbose_name='Nota (%)')),
                ('passed', models.BooleanField(default=False, verbose_name='Aprovado')),
                ('feedback', models.JSONField(blank=True, default=list, verbose_name='Feedback')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data da Tentativa')),
                ('training', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attempts', to='treinamentos.training', verbose_name='Treinamento')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quiz_attempts', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Tentativa de Quiz',
                'verbose_name_plural': 'Tentativas de Quiz',
                'db_table': 'training_quiz_attempts',
                'ordering': ['-created_at'],
            },
        ),
    ]
