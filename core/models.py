"""
Modelos compartilhados do portal.

- Setting: configurações de negócio editáveis (tabela settings).
- Notification: notificações in-app (tabela notifications).
"""
from django.conf import settings
from django.db import models


class KeyValueSetting(models.Model):
    """
    Base para tabelas de configuração chave/valor com valor JSON.

    O valor segue o formato usado pelas telas de administração,
    por exemplo {"enabled": true} ou {"percentage": 80}.
    """
    key = models.CharField(max_length=100, unique=True, verbose_name='Chave')
    value = models.JSONField(default=dict, blank=True, verbose_name='Valor')
    description = models.CharField(max_length=255, blank=True, verbose_name='Descrição')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Última Atualização')

    class Meta:
        abstract = True
        ordering = ['key']

    def __str__(self):
        return self.key

    @classmethod
    def get_value(cls, key, default=None):
        """Retorna o valor da chave ou `default` se ela não existir."""
        try:
            return cls.objects.get(key=key).value
        except cls.DoesNotExist:
            return default

    @classmethod
    def set_value(cls, key, value, description=''):
        defaults = {'value': value}
        if description:
            defaults['description'] = description
        obj, _ = cls.objects.update_or_create(key=key, defaults=defaults)
        return obj

    @classmethod
    def is_enabled(cls, key, default=False):
        """
        Lê chaves no formato {"enabled": bool}.

        Um valor salvo fora do formato (por exemplo `true`) vale pelo
        próprio valor; chave ausente ou dict sem "enabled" usa `default`.
        """
        value = cls.get_value(key)
        if value is None:
            return default
        if isinstance(value, dict):
            return bool(value.get('enabled', default))
        return bool(value)


class Setting(KeyValueSetting):
    """Configurações gerais (quórum de votação, publicação automática no feed, etc.)."""

    class Meta(KeyValueSetting.Meta):
        db_table = 'settings'
        verbose_name = 'Configuração'
        verbose_name_plural = 'Configurações'


class NotificationType(models.TextChoices):
    IDEA_STATUS = 'idea_status', 'Status de Ideia'
    MURAL_APPROVED = 'mural_approved', 'Postagem do Mural Aprovada'
    MURAL_REJECTED = 'mural_rejected', 'Postagem do Mural Rejeitada'
    MURAL_MODERATION = 'mural_moderation', 'Moderação do Mural'
    MURAL_RESPONSE = 'mural_response', 'Resposta no Mural'
    TRAINING = 'training', 'Treinamento'
    ANNOUNCEMENT = 'announcement', 'Comunicado'
    SYSTEM = 'system', 'Notificação do Sistema'


class Notification(models.Model):
    """
    Notificação in-app para um usuário.

    Criada como efeito colateral de moderações e comunicados; depois de
    criada só o campo is_read muda.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
        verbose_name='Usuário',
        help_text='Usuário que receberá a notificação'
    )
    notification_type = models.CharField(
        max_length=50,
        choices=NotificationType.choices,
        default=NotificationType.SYSTEM,
        verbose_name='Tipo de Notificação'
    )
    title = models.CharField(max_length=255, verbose_name='Título')
    message = models.TextField(verbose_name='Mensagem')
    reference_id = models.CharField(
        max_length=64,
        blank=True,
        verbose_name='Referência',
        help_text='ID do registro relacionado (post do mural, treinamento, etc.)'
    )
    is_read = models.BooleanField(default=False, verbose_name='Lida')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')

    class Meta:
        db_table = 'notifications'
        verbose_name = 'Notificação'
        verbose_name_plural = 'Notificações'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read', '-created_at'], name='notif_user_read_created_idx'),
        ]

    def __str__(self):
        return f"{self.title} - {self.user.username}"

    def mark_as_read(self):
        """Marca a notificação como lida."""
        self.is_read = True
        self.save(update_fields=['is_read'])
