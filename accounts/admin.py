from django.contrib import admin

from .models import Profile, Unit


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'city', 'state', 'is_active']
    list_filter = ['is_active', 'state']
    search_fields = ['code', 'name', 'city']


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Perfil define o papel do usuário e a unidade a que pertence."""
    list_display = ['display_name', 'user', 'role', 'unit', 'receive_whatsapp_notifications', 'is_active']
    list_filter = ['role', 'is_active', 'receive_whatsapp_notifications']
    search_fields = ['full_name', 'user__username', 'user__email', 'phone']
    autocomplete_fields = ['user', 'unit']
