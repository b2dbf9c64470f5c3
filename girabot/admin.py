from django.contrib import admin

from .models import AISession


@admin.register(AISession)
class AISessionAdmin(admin.ModelAdmin):
    list_display = ['user', 'module', 'question', 'tokens_used', 'response_time_ms', 'created_at']
    list_filter = ['module', 'created_at']
    search_fields = ['question', 'answer', 'user__username']
    readonly_fields = ['created_at']
