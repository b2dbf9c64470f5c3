"""
URLs da API REST (DRF) do módulo de Ideias.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import IdeaNotificationViewSet, IdeaViewSet

router = DefaultRouter()
router.register(r'ideas', IdeaViewSet, basename='idea')
router.register(r'notifications', IdeaNotificationViewSet, basename='idea-notification')

urlpatterns = [
    path('', include(router.urls)),
]
