from rest_framework import serializers

from .models import AIModule, AISession


class AISessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = AISession
        fields = [
            'id', 'conversation_id', 'module', 'question', 'answer',
            'model_used', 'tokens_used', 'response_time_ms', 'created_at',
        ]
        read_only_fields = fields


class AskSerializer(serializers.Serializer):
    message = serializers.CharField()
    module = serializers.ChoiceField(choices=AIModule.choices, default=AIModule.GERAL)
    conversation_id = serializers.UUIDField(required=False, allow_null=True)
    field_name = serializers.CharField(required=False, allow_blank=True, default='')
