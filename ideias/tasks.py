"""
Tarefas Celery do módulo de Ideias.
"""
import logging

from celery import shared_task

from .services import IdeaService

logger = logging.getLogger(__name__)


@shared_task
def encerrar_votacoes_expiradas():
    """Apura as votações vencidas (agendada de hora em hora no beat)."""
    resultados = IdeaService.close_expired_voting()
    if resultados:
        logger.info("Votações encerradas: %s", ', '.join(r['code'] for r in resultados))
    return {'processed': len(resultados), 'details': resultados}
