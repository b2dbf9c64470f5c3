from django.apps import AppConfig


class MuralConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'mural'
    verbose_name = 'Mural'
