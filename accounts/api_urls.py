"""
URLs da API REST (DRF) de perfis e unidades.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ProfileViewSet, UnitViewSet

router = DefaultRouter()
router.register(r'profiles', ProfileViewSet, basename='profile')
router.register(r'units', UnitViewSet, basename='unit')

urlpatterns = [
    path('', include(router.urls)),
]
