from django.contrib import admin

from .models import Idea, IdeaFeedback, IdeaNotification, IdeaVote


class IdeaFeedbackInline(admin.TabularInline):
    model = IdeaFeedback
    extra = 0
    readonly_fields = ['curator', 'feedback_text', 'status_update', 'viability_level', 'impact_level', 'created_at']
    can_delete = False


@admin.register(Idea)
class IdeaAdmin(admin.ModelAdmin):
    """
    O status é somente leitura: mudanças passam pelas ações da API,
    que respeitam a máquina de estados.
    """
    list_display = ['code', 'title', 'category', 'status', 'positive_votes', 'total_votes', 'vote_end', 'created_at']
    list_filter = ['status', 'category', 'target_audience', 'created_at']
    search_fields = ['code', 'title', 'description']
    readonly_fields = [
        'code', 'status', 'positive_votes', 'negative_votes', 'total_votes', 'quorum',
        'vote_start', 'vote_end', 'evaluating_at', 'resolved_at', 'implemented_at',
        'created_at', 'updated_at',
    ]
    raw_id_fields = ['submitted_by', 'curator', 'implemented_by']
    inlines = [IdeaFeedbackInline]
    date_hierarchy = 'created_at'


@admin.register(IdeaVote)
class IdeaVoteAdmin(admin.ModelAdmin):
    list_display = ['idea', 'user', 'is_positive', 'created_at']
    list_filter = ['is_positive']
    search_fields = ['idea__code', 'user__username']


@admin.register(IdeaNotification)
class IdeaNotificationAdmin(admin.ModelAdmin):
    list_display = ['idea', 'user', 'notification_type', 'is_read', 'created_at']
    list_filter = ['notification_type', 'is_read']
    search_fields = ['idea__code', 'user__username', 'message']
