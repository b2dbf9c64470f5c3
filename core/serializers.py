"""
Serializers DRF para notificações e configurações.
"""
from rest_framework import serializers

from accounts.roles import PAPEIS

from .config import SETTINGS_PADRAO
from .models import Notification, Setting


class NotificationSerializer(serializers.ModelSerializer):
    notification_type_display = serializers.CharField(source='get_notification_type_display', read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id', 'notification_type', 'notification_type_display', 'title',
            'message', 'reference_id', 'is_read', 'created_at',
        ]
        read_only_fields = fields


class EnabledFormatMixin:
    """
    Exige {"enabled": bool} nas chaves cujo padrão tem esse formato.

    `padroes` mapeia chave → (valor padrão, descrição).
    """
    padroes = {}

    def validate(self, attrs):
        attrs = super().validate(attrs)
        key = attrs.get('key') or getattr(self.instance, 'key', None)
        padrao = self.padroes.get(key, (None, ''))[0]
        if 'value' in attrs and isinstance(padrao, dict) and 'enabled' in padrao:
            value = attrs['value']
            if not isinstance(value, dict) or not isinstance(value.get('enabled'), bool):
                raise serializers.ValidationError({'value': 'Use o formato {"enabled": true} ou {"enabled": false}.'})
        return attrs


class SettingSerializer(EnabledFormatMixin, serializers.ModelSerializer):
    padroes = SETTINGS_PADRAO

    class Meta:
        model = Setting
        fields = ['id', 'key', 'value', 'description', 'updated_at']
        read_only_fields = ['id', 'updated_at']


class BroadcastSerializer(serializers.Serializer):
    """Entrada do envio de comunicados (send-notification)."""
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    user_ids = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)
    roles = serializers.ListField(
        child=serializers.ChoiceField(choices=PAPEIS.CHOICES), required=False, default=list
    )
    units = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)
    send_whatsapp = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if not attrs['user_ids'] and not attrs['roles'] and not attrs['units']:
            raise serializers.ValidationError('Informe destinatários (usuários, papéis ou unidades).')
        return attrs
