"""
Cliente Z-API para envio de mensagens de texto por WhatsApp.

Credenciais vêm do settings (ZAPI_*). Tokens e telefones são mascarados
nos logs.
"""
import logging
import re

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


def normalize_phone(value):
    """Mantém só dígitos e acrescenta o DDI 55 em números nacionais (10 ou 11 dígitos)."""
    digits = re.sub(r"\D", "", value or "")
    if not digits:
        return ""
    digits = digits.lstrip("0")
    if not digits.startswith("55") and len(digits) in (10, 11):
        digits = f"55{digits}"
    return digits


def _mask_token(value, keep=4):
    if not value:
        return ""
    if len(value) <= keep * 2:
        return "*" * len(value)
    return f"{value[:keep]}...{value[-keep:]}"


def _mask_phone(value):
    digits = re.sub(r"\D", "", value or "")
    if len(digits) <= 4:
        return "*" * len(digits)
    return f"{'*' * (len(digits) - 4)}{digits[-4:]}"


def format_message(title, message):
    """Formato padrão das mensagens do portal: título em negrito + corpo."""
    return f"*{title}*\n\n{message}"


def is_configured():
    return bool(settings.ZAPI_INSTANCE_ID and settings.ZAPI_TOKEN)


def send_text(phone, message):
    """
    Envia uma mensagem de texto.

    Retorna {"ok": True, "response": ...} ou {"ok": False, "error": <código>}.
    Códigos de erro: missing_credentials, invalid_phone, empty_message,
    http_<status>, connection_error.
    """
    if not is_configured():
        logger.warning("WhatsApp envio ignorado: credenciais não configuradas.")
        return {"ok": False, "error": "missing_credentials"}

    normalized = normalize_phone(phone)
    if not normalized:
        return {"ok": False, "error": "invalid_phone"}
    if not message:
        return {"ok": False, "error": "empty_message"}

    instance_id = settings.ZAPI_INSTANCE_ID
    token = settings.ZAPI_TOKEN
    base_url = settings.ZAPI_BASE_URL.rstrip("/")
    endpoint = f"{base_url}/instances/{instance_id}/token/{token}/send-text"
    headers = {"Content-Type": "application/json"}
    if settings.ZAPI_CLIENT_TOKEN:
        headers["client-token"] = settings.ZAPI_CLIENT_TOKEN

    logger.info(
        "WhatsApp envio para %s (instância %s, %s caracteres)",
        _mask_phone(normalized), _mask_token(instance_id), len(message),
    )
    try:
        response = requests.post(
            endpoint,
            json={"phone": normalized, "message": message},
            headers=headers,
            timeout=settings.ZAPI_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.warning("WhatsApp erro de conexão: %s", exc)
        return {"ok": False, "error": "connection_error"}

    if response.status_code >= 400:
        logger.warning("WhatsApp erro HTTP %s: %s", response.status_code, response.text[:240])
        return {"ok": False, "error": f"http_{response.status_code}"}

    logger.info("WhatsApp enviado para %s (status %s)", _mask_phone(normalized), response.status_code)
    return {"ok": True, "response": response.text}
