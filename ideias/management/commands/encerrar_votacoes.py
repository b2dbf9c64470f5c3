"""
Apura as votações de ideias que já passaram do prazo.

Uso (cron):
    python manage.py encerrar_votacoes
    python manage.py encerrar_votacoes --dry-run
"""
from django.core.management.base import BaseCommand
from django.utils import timezone

from ideias.models import Idea
from ideias.services import IdeaService, quorum_minimo
from ideias.workflow import IdeaStatus


class Command(BaseCommand):
    help = 'Encerra as votações expiradas, aprovando ou recusando as ideias pelo quórum'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Apenas lista o que seria apurado, sem alterar nada',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            minimo = quorum_minimo()
            expiradas = Idea.objects.filter(status=IdeaStatus.EM_VOTACAO, vote_end__lt=timezone.now())
            self.stdout.write(self.style.WARNING(f'Modo dry-run (quórum {minimo}%)'))
            for idea in expiradas:
                resultado = 'aprovada' if idea.approval_rate >= minimo else 'recusada'
                self.stdout.write(f'  {idea.code}: {idea.approval_rate}% → {resultado}')
            self.stdout.write(self.style.SUCCESS(f'{expiradas.count()} votações seriam encerradas.'))
            return

        resultados = IdeaService.close_expired_voting()
        for r in resultados:
            self.stdout.write(f"  {r['code']}: {r['approval_rate']:.1f}% → {r['status']}")
        self.stdout.write(self.style.SUCCESS(f'✅ {len(resultados)} votações encerradas.'))
