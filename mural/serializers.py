"""
Serializers DRF do Mural.

O autor nunca é exposto; `is_mine` indica apenas se a postagem é do
usuário logado.
"""
from rest_framework import serializers

from core.serializers import EnabledFormatMixin

from .config import MURAL_SETTINGS_PADRAO
from .models import MuralCategory, MuralPost, MuralResponse, MuralSetting
from .validators import validate_mural_image


class MuralCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = MuralCategory
        fields = ['id', 'key', 'name', 'description', 'curator', 'order', 'is_active']


class _OwnershipMixin(serializers.Serializer):
    is_mine = serializers.SerializerMethodField()
    owner_field = None

    def get_is_mine(self, obj):
        request = self.context.get('request')
        if request is None:
            return False
        return getattr(obj, f'{self.owner_field}_id') == request.user.id


class MuralPostSerializer(_OwnershipMixin, serializers.ModelSerializer):
    owner_field = 'author'
    category_name = serializers.CharField(source='category.name', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = MuralPost
        fields = [
            'id', 'category', 'category_name', 'content', 'image', 'status',
            'status_display', 'approval_source', 'ai_reason', 'response_count',
            'approved_at', 'metadata', 'is_mine', 'created_at',
        ]
        read_only_fields = [
            'id', 'status', 'approval_source', 'ai_reason', 'response_count',
            'approved_at', 'metadata', 'created_at',
        ]

    def validate_image(self, value):
        if value:
            validate_mural_image(value)
        return value


class MuralResponseSerializer(_OwnershipMixin, serializers.ModelSerializer):
    owner_field = 'responder'
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = MuralResponse
        fields = [
            'id', 'post', 'content', 'status', 'status_display', 'approval_source',
            'ai_reason', 'approved_at', 'metadata', 'is_mine', 'created_at',
        ]
        read_only_fields = [
            'id', 'post', 'status', 'approval_source', 'ai_reason', 'approved_at',
            'metadata', 'created_at',
        ]


class ModerationSerializer(serializers.Serializer):
    decision = serializers.ChoiceField(choices=['approve', 'reject'])


class MuralSettingSerializer(EnabledFormatMixin, serializers.ModelSerializer):
    padroes = MURAL_SETTINGS_PADRAO

    class Meta:
        model = MuralSetting
        fields = ['id', 'key', 'value', 'description', 'updated_at']
        read_only_fields = ['id', 'updated_at']
