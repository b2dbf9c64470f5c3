"""
Serializers DRF do módulo de Ideias.
"""
from django.contrib.auth.models import User
from rest_framework import serializers

from accounts.serializers import UserSerializer

from .models import Idea, IdeaFeedback, IdeaNotification, IdeaVote


class IdeaSerializer(serializers.ModelSerializer):
    submitted_by = UserSerializer(read_only=True)
    implemented_by = UserSerializer(read_only=True)
    curator = UserSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    approval_rate = serializers.DecimalField(max_digits=5, decimal_places=2, read_only=True)
    allowed_events = serializers.SerializerMethodField()

    class Meta:
        model = Idea
        fields = [
            'id', 'code', 'title', 'description', 'category', 'ai_category',
            'target_audience', 'status', 'status_display', 'allowed_events',
            'positive_votes', 'negative_votes', 'total_votes', 'approval_rate',
            'quorum', 'vote_start', 'vote_end', 'evaluating_at',
            'submitted_by', 'unit', 'curator', 'feedback', 'viability_level',
            'impact_level', 'resolved_at', 'implemented_by',
            'implementation_deadline', 'implementation_notes', 'implemented_at',
            'media_urls', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            f for f in fields
            if f not in ('title', 'description', 'category', 'target_audience', 'media_urls')
        ]

    def get_allowed_events(self, obj):
        return [str(e) for e in obj.eventos_permitidos()]


class IdeaVoteSerializer(serializers.ModelSerializer):
    class Meta:
        model = IdeaVote
        fields = ['id', 'idea', 'user', 'is_positive', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class IdeaFeedbackSerializer(serializers.ModelSerializer):
    curator = UserSerializer(read_only=True)

    class Meta:
        model = IdeaFeedback
        fields = [
            'id', 'idea', 'curator', 'feedback_text', 'status_update',
            'viability_level', 'impact_level', 'created_at',
        ]
        read_only_fields = fields


class IdeaNotificationSerializer(serializers.ModelSerializer):
    idea_code = serializers.CharField(source='idea.code', read_only=True)

    class Meta:
        model = IdeaNotification
        fields = ['id', 'idea', 'idea_code', 'notification_type', 'message', 'is_read', 'created_at']
        read_only_fields = fields


# Entradas das ações de workflow

class VoteInputSerializer(serializers.Serializer):
    is_positive = serializers.BooleanField()
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class ApproveForVotingSerializer(serializers.Serializer):
    duration_days = serializers.IntegerField()


class CurateSerializer(serializers.Serializer):
    decision = serializers.CharField()
    feedback_text = serializers.CharField(required=False, allow_blank=True, default='')
    viability_level = serializers.CharField(required=False, allow_blank=True, default='')
    impact_level = serializers.CharField(required=False, allow_blank=True, default='')


class StartImplementationSerializer(serializers.Serializer):
    responsible = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True, default=None
    )
    deadline = serializers.DateField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class MarkImplementedSerializer(serializers.Serializer):
    feedback_text = serializers.CharField(required=False, allow_blank=True, default='')
    publish_to_feed = serializers.BooleanField(required=False, default=False)
