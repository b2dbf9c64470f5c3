"""
Serializers DRF para perfis e unidades.
"""
from django.contrib.auth.models import User
from rest_framework import serializers

from .models import Profile, Unit


class UserSerializer(serializers.ModelSerializer):
    """Serializer para User (apenas campos essenciais)."""
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'full_name']
        read_only_fields = fields

    def get_full_name(self, obj):
        """Retorna o nome do perfil, o nome completo ou o username."""
        profile = getattr(obj, 'profile', None)
        if profile is not None:
            return profile.display_name
        return obj.get_full_name() or obj.username


class UnitSerializer(serializers.ModelSerializer):
    class Meta:
        model = Unit
        fields = ['id', 'code', 'name', 'city', 'state', 'is_active']


class ProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(source='user.email', read_only=True)
    unit_code = serializers.CharField(read_only=True)
    role_display = serializers.CharField(source='get_role_display', read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id', 'user', 'username', 'email', 'full_name', 'role', 'role_display',
            'unit', 'unit_code', 'phone', 'receive_whatsapp_notifications',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'user', 'created_at', 'updated_at']
