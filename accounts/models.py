"""
Accounts app - Perfis e Unidades

Modelos:
- User: padrão Django (django.contrib.auth.models.User).
- Unit: unidade (loja) da rede de franquias.
- Profile: dados do colaborador no portal (papel, unidade, WhatsApp).
"""
from django.conf import settings
from django.db import models

from .roles import PAPEIS


class Unit(models.Model):
    """Unidade (loja) da rede Cresci e Perdi."""
    code = models.CharField(
        max_length=30,
        unique=True,
        verbose_name='Código',
        help_text='Código da unidade (ex: SP-001)'
    )
    name = models.CharField(max_length=200, verbose_name='Nome')
    city = models.CharField(max_length=120, blank=True, verbose_name='Cidade')
    state = models.CharField(max_length=2, blank=True, verbose_name='UF')
    is_active = models.BooleanField(default=True, verbose_name='Ativa')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'units'
        verbose_name = 'Unidade'
        verbose_name_plural = 'Unidades'
        ordering = ['code']

    def __str__(self):
        return f"{self.code} - {self.name}"


class Profile(models.Model):
    """
    Perfil do usuário no portal.

    Define o papel (controle de acesso), a unidade e as preferências
    de notificação por WhatsApp.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile',
        verbose_name='Usuário'
    )
    full_name = models.CharField(max_length=200, blank=True, verbose_name='Nome Completo')
    role = models.CharField(
        max_length=20,
        choices=PAPEIS.CHOICES,
        default=PAPEIS.COLABORADOR,
        verbose_name='Papel'
    )
    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='profiles',
        verbose_name='Unidade'
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        verbose_name='Telefone',
        help_text='Telefone com DDD, usado para notificações por WhatsApp'
    )
    receive_whatsapp_notifications = models.BooleanField(
        default=False,
        verbose_name='Receber notificações por WhatsApp'
    )
    is_active = models.BooleanField(default=True, verbose_name='Ativo')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        db_table = 'profiles'
        verbose_name = 'Perfil'
        verbose_name_plural = 'Perfis'
        ordering = ['full_name']
        indexes = [
            models.Index(fields=['role', 'is_active'], name='profiles_role_active_idx'),
        ]

    def __str__(self):
        return f"{self.display_name} ({self.get_role_display()})"

    @property
    def display_name(self):
        return self.full_name or self.user.get_full_name() or self.user.username

    @property
    def unit_code(self):
        return self.unit.code if self.unit_id else None

    @property
    def wants_whatsapp(self):
        """Tem telefone cadastrado e aceitou receber mensagens."""
        return bool(self.phone) and self.receive_whatsapp_notifications
