from django.apps import AppConfig


class IdeiasConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'ideias'
    verbose_name = 'Ideias'
