# Generated manually - Initial migration for ideias app

from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

STATUS_CHOICES = [
    ('triagem', 'Em Triagem'),
    ('pending', 'Pendente'),
    ('em_votacao', 'Em Votação'),
    ('aprovada', 'Aprovada'),
    ('recusada', 'Recusada'),
    ('em_implementacao', 'Em Implementação'),
    ('implementada', 'Implementada'),
]
LEVEL_CHOICES = [('baixo', 'Baixo'), ('medio', 'Médio'), ('alto', 'Alto')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Idea',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(help_text='Formato IDEA-<ano>-<sequência>', max_length=20, unique=True, verbose_name='Código')),
                ('title', models.CharField(max_length=255, verbose_name='Título')),
                ('description', models.TextField(verbose_name='Descrição')),
                ('category', models.CharField(choices=[('processo', 'Processo'), ('tecnologia', 'Tecnologia'), ('produto', 'Produto'), ('ambiente', 'Ambiente'), ('outro', 'Outro')], max_length=20, verbose_name='Categoria')),
                ('ai_category', models.CharField(blank=True, max_length=100, verbose_name='Classificação do GiraBot')),
                ('target_audience', models.CharField(choices=[('franqueados', 'Franqueados'), ('colaboradores', 'Colaboradores'), ('ambos', 'Ambos')], default='ambos', max_length=20, verbose_name='Público-alvo')),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='triagem', max_length=20, verbose_name='Status')),
                ('positive_votes', models.PositiveIntegerField(default=0, verbose_name='Votos Favoráveis')),
                ('negative_votes', models.PositiveIntegerField(default=0, verbose_name='Votos Contrários')),
                ('total_votes', models.PositiveIntegerField(default=0, verbose_name='Total de Votos')),
                ('quorum', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Percentual de votos favoráveis registrado no encerramento', max_digits=5, verbose_name='Aprovação (%)')),
                ('vote_start', models.DateTimeField(blank=True, null=True, verbose_name='Início da Votação')),
                ('vote_end', models.DateTimeField(blank=True, null=True, verbose_name='Fim da Votação')),
                ('evaluating_at', models.DateTimeField(blank=True, null=True, verbose_name='Enviada para Votação em')),
                ('feedback', models.TextField(blank=True, verbose_name='Devolutiva')),
                ('viability_level', models.CharField(blank=True, choices=LEVEL_CHOICES, max_length=10, verbose_name='Viabilidade')),
                ('impact_level', models.CharField(blank=True, choices=LEVEL_CHOICES, max_length=10, verbose_name='Impacto')),
                ('resolved_at', models.DateTimeField(blank=True, null=True, verbose_name='Resolvida em')),
                ('implementation_deadline', models.DateField(blank=True, null=True, verbose_name='Prazo de Implementação')),
                ('implementation_notes', models.TextField(blank=True, verbose_name='Observações da Implementação')),
                ('implemented_at', models.DateTimeField(blank=True, null=True, verbose_name='Implementada em')),
                ('media_urls', models.JSONField(blank=True, default=list, verbose_name='Mídias')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
                ('submitted_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ideas_submitted', to=settings.AUTH_USER_MODEL, verbose_name='Autor')),
                ('unit', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ideas', to='accounts.unit', verbose_name='Unidade')),
                ('curator', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ideas_curated', to=settings.AUTH_USER_MODEL, verbose_name='Curador')),
                ('implemented_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ideas_implementing', to=settings.AUTH_USER_MODEL, verbose_name='Responsável pela Implementação')),
            ],
            options={
                'verbose_name': 'Ideia',
                'verbose_name_plural': 'Ideias',
                'db_table': 'ideas',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='IdeaVote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_positive', models.BooleanField(verbose_name='Favorável')),
                ('comment', models.TextField(blank=True, verbose_name='Comentário')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data do Voto')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
                ('idea', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='votes', to='ideias.idea', verbose_name='Ideia')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='idea_votes', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Voto',
                'verbose_name_plural': 'Votos',
                'db_table': 'ideas_votes',
            },
        ),
        migrations.CreateModel(
            name='IdeaFeedback',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('feedback_text', models.TextField(verbose_name='Devolutiva')),
                ('status_update', models.CharField(choices=STATUS_CHOICES, max_length=20, verbose_name='Novo Status')),
                ('viability_level', models.CharField(blank=True, choices=LEVEL_CHOICES, max_length=10, verbose_name='Viabilidade')),
                ('impact_level', models.CharField(blank=True, choices=LEVEL_CHOICES, max_length=10, verbose_name='Impacto')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('idea', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feedbacks', to='ideias.idea', verbose_name='Ideia')),
                ('curator', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='idea_feedbacks', to=settings.AUTH_USER_MODEL, verbose_name='Curador')),
            ],
            options={
                'verbose_name': 'Devolutiva',
                'verbose_name_plural': 'Devolutivas',
                'db_table': 'ideas_feedback',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='IdeaNotification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('notification_type', models.CharField(choices=[('status', 'Mudança de Status'), ('assignment', 'Designação de Responsável')], default='status', max_length=20, verbose_name='Tipo')),
                ('message', models.TextField(verbose_name='Mensagem')),
                ('is_read', models.BooleanField(default=False, verbose_name='Lida')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('idea', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='ideias.idea', verbose_name='Ideia')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='idea_notifications', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Notificação de Ideia',
                'verbose_name_plural': 'Notificações de Ideias',
                'db_table': 'ideas_notifications',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='idea',
            index=models.Index(fields=['status', 'vote_end'], name='ideas_status_vote_end_idx'),
        ),
        migrations.AddIndex(
            model_name='idea',
            index=models.Index(fields=['submitted_by', '-created_at'], name='ideas_submitter_created_idx'),
        ),
        migrations.AddConstraint(
            model_name='ideavote',
            constraint=models.UniqueConstraint(fields=('idea', 'user'), name='unique_vote_per_user'),
        ),
    ]
