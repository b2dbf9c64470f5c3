"""
Utilitários compartilhados pelos ViewSets DRF.
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def error_message(exc):
    if isinstance(exc, ValidationError):
        return '; '.join(exc.messages)
    return str(exc) or exc.__class__.__name__


def error_response(exc):
    """
    Converte exceções dos services em {"error": ...} com o status HTTP adequado.

    ValidationError → 400, PermissionDenied → 403, GiraBotError → 502.
    """
    from girabot.client import GiraBotError

    if isinstance(exc, ValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, PermissionDenied):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, GiraBotError):
        logger.warning("Falha no GiraBot: %s", exc)
        code = status.HTTP_502_BAD_GATEWAY
    else:
        raise exc
    return Response({'error': error_message(exc)}, status=code)
