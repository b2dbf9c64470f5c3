"""
URL configuration do Portal Cresci e Perdi.

Estrutura de URLs:
  /api/accounts/       -> Perfis e unidades
  /api/core/           -> Notificações e configurações
  /api/feed/           -> Feed
  /api/ideias/         -> Ideias (submissão, votação, curadoria)
  /api/mural/          -> Mural anônimo
  /api/girabot/        -> GiraBot
  /api/treinamentos/   -> Treinamentos e quizzes
  /api-auth/           -> Login da API navegável (DRF)
  /admin/              -> Django Admin
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api-auth/', include('rest_framework.urls')),

    path('api/accounts/', include('accounts.api_urls')),
    path('api/core/', include('core.api_urls')),
    path('api/feed/', include('feed.api_urls')),
    path('api/ideias/', include('ideias.api_urls')),
    path('api/mural/', include('mural.api_urls')),
    path('api/girabot/', include('girabot.api_urls')),
    path('api/treinamentos/', include('treinamentos.api_urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
