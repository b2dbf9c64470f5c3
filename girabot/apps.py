from django.apps import AppConfig


class GirabotConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'girabot'
    verbose_name = 'GiraBot'
