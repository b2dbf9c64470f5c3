"""
URLs da API REST (DRF) do Mural.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import MuralCategoryViewSet, MuralPostViewSet, MuralResponseViewSet, MuralSettingViewSet

router = DefaultRouter()
router.register(r'categories', MuralCategoryViewSet, basename='mural-category')
router.register(r'posts', MuralPostViewSet, basename='mural-post')
router.register(r'responses', MuralResponseViewSet, basename='mural-response')
router.register(r'settings', MuralSettingViewSet, basename='mural-setting')

urlpatterns = [
    path('', include(router.urls)),
]
