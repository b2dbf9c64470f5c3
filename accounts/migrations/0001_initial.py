# Generated manually - Initial migration for accounts app

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
            name='Unit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(help_text='Código da unidade (ex: SP-001)', max_length=30, unique=True, verbose_name='Código')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('city', models.CharField(blank=True, max_length=120, verbose_name='Cidade')),
                ('state', models.CharField(blank=True, max_length=2, verbose_name='UF')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativa')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
            ],
            options={
                'verbose_name': 'Unidade',
                'verbose_name_plural': 'Unidades',
                'db_table': 'units',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(blank=True, max_length=200, verbose_name='Nome Completo')),
                ('role', models.CharField(choices=[('admin', 'Administrador'), ('gestor_setor', 'Gestor de Setor'), ('franqueado', 'Franqueado'), ('gerente', 'Gerente'), ('colaborador', 'Colaborador')], default='colaborador', max_length=20, verbose_name='Papel')),
                ('phone', models.CharField(blank=True, help_text='Telefone com DDD, usado para notificações por WhatsApp', max_length=20, verbose_name='Telefone')),
                ('receive_whatsapp_notifications', models.BooleanField(default=False, verbose_name='Receber notificações por WhatsApp')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Última Atualização')),
                ('unit', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='profiles', to='accounts.unit', verbose_name='Unidade')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Perfil',
                'verbose_name_plural': 'Perfis',
                'db_table': 'profiles',
                'ordering': ['full_name'],
            },
        ),
        migrations.AddIndex(
            model_name='profile',
            index=models.Index(fields=['role', 'is_active'], name='profiles_role_active_idx'),
        ),
    ]
