"""
Tarefas Celery compartilhadas.
"""
import logging

from celery import shared_task

from .whatsapp import send_text

logger = logging.getLogger(__name__)

# Erros em que vale tentar de novo; credencial ou telefone inválido não.
ERROS_TEMPORARIOS = {'connection_error', 'http_429', 'http_500', 'http_502', 'http_503', 'http_504'}


@shared_task(bind=True, max_retries=3)
def enviar_whatsapp(self, phone, message):
    """
    Envia uma mensagem de WhatsApp pela Z-API.

    Falhas temporárias são reenfileiradas com espera exponencial
    (60s, 120s, 240s).
    """
    result = send_text(phone, message)
    if result['ok']:
        return result

    if result['error'] in ERROS_TEMPORARIOS and self.request.retries < self.max_retries:
        countdown = 60 * (2 ** self.request.retries)
        logger.info(
            "WhatsApp: nova tentativa em %ss (erro %s, tentativa %s)",
            countdown, result['error'], self.request.retries + 1,
        )
        raise self.retry(countdown=countdown)

    logger.error("WhatsApp: envio descartado (erro %s)", result['error'])
    return result
