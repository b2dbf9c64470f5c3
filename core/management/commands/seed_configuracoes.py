"""
Grava os valores padrão das configurações de negócio.

Uso:
    python manage.py seed_configuracoes
    python manage.py seed_configuracoes --sobrescrever
"""
from django.core.management.base import BaseCommand

from core.config import SETTINGS_PADRAO
from core.models import Setting
from mural.config import MURAL_SETTINGS_PADRAO
from mural.models import MuralSetting


class Command(BaseCommand):
    help = 'Cria as configurações padrão (settings e mural_settings) que ainda não existem'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sobrescrever',
            action='store_true',
            help='Regrava também as chaves que já existem com o valor padrão',
        )

    def handle(self, *args, **options):
        sobrescrever = options['sobrescrever']
        for model, padroes in ((Setting, SETTINGS_PADRAO), (MuralSetting, MURAL_SETTINGS_PADRAO)):
            criadas = 0
            for key, (value, description) in padroes.items():
                if sobrescrever:
                    model.set_value(key, value, description)
                    criadas += 1
                    continue
                _, created = model.objects.get_or_create(
                    key=key, defaults={'value': value, 'description': description}
                )
                if created:
                    criadas += 1
                    self.stdout.write(self.style.SUCCESS(f'✓ {model._meta.db_table}: {key}'))
                else:
                    self.stdout.write(self.style.WARNING(f'⊘ {model._meta.db_table}: {key} já existe'))
            self.stdout.write(
                self.style.SUCCESS(f'{model._meta.verbose_name_plural}: {criadas} chaves gravadas.')
            )
