"""
URLs da API REST (DRF) de notificações e configurações.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import NotificationViewSet, SettingViewSet

router = DefaultRouter()
router.register(r'notifications', NotificationViewSet, basename='notification')
router.register(r'settings', SettingViewSet, basename='setting')

urlpatterns = [
    path('', include(router.urls)),
]
