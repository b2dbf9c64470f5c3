from django.apps import AppConfig


class TreinamentosConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'treinamentos'
    verbose_name = 'Treinamentos'
