from django.contrib import admin

from .models import MuralCategory, MuralPost, MuralResponse, MuralSetting


@admin.register(MuralCategory)
class MuralCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'key', 'curator', 'order', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'key']
    prepopulated_fields = {'key': ('name',)}


@admin.register(MuralPost)
class MuralPostAdmin(admin.ModelAdmin):
    list_display = ['id', 'category', 'status', 'approval_source', 'response_count', 'created_at']
    list_filter = ['status', 'approval_source', 'category']
    search_fields = ['content']
    readonly_fields = ['author', 'approval_source', 'ai_reason', 'approved_at', 'reviewed_by', 'metadata', 'created_at']


@admin.register(MuralResponse)
class MuralResponseAdmin(admin.ModelAdmin):
    list_display = ['id', 'post', 'status', 'approval_source', 'created_at']
    list_filter = ['status', 'approval_source']
    search_fields = ['content']
    readonly_fields = ['responder', 'approval_source', 'ai_reason', 'approved_at', 'reviewed_by', 'metadata', 'created_at']


@admin.register(MuralSetting)
class MuralSettingAdmin(admin.ModelAdmin):
    list_display = ['key', 'value', 'updated_at']
    search_fields = ['key']
