"""
Cliente HTTP do GiraBot.

Fala com um gateway de LLM compatível com /v1/chat/completions
(URL, chave e modelo no settings: GIRABOT_*). Toda funcionalidade de
IA do portal passa por aqui; falhas viram GiraBotError, sem retentativa.
"""
import json
import logging
import re
import time

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GiraBotError(Exception):
    """Falha ao consultar o gateway de IA (rede, HTTP ou resposta inválida)."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class GiraBotClient:
    """
    Cliente do gateway de IA.

    Uso:
        client = GiraBotClient.from_settings()
        result = client.chat([{'role': 'user', 'content': 'Olá'}])
        result['content']
    """

    def __init__(self, api_url, api_key, model, timeout=30):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_settings(cls):
        return cls(
            api_url=settings.GIRABOT_API_URL,
            api_key=settings.GIRABOT_API_KEY,
            model=settings.GIRABOT_MODEL,
            timeout=settings.GIRABOT_TIMEOUT,
        )

    def chat(self, messages, temperature=None, max_tokens=None, json_mode=False):
        """
        Envia a conversa e retorna {"content", "tokens_used", "response_time_ms", "model"}.

        Raises:
            GiraBotError: sem chave configurada, erro de rede, HTTP != 2xx
                ou resposta sem conteúdo.
        """
        if not self.api_key:
            raise GiraBotError("GIRABOT_API_KEY não configurada.")

        payload = {'model': self.model, 'messages': messages, 'stream': False}
        if temperature is not None:
            payload['temperature'] = temperature
        if max_tokens is not None:
            payload['max_tokens'] = max_tokens
        if json_mode:
            payload['response_format'] = {'type': 'json_object'}

        started = time.monotonic()
        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers={
                    'Authorization': f'Bearer {self.api_key}',
                    'Content-Type': 'application/json',
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("GiraBot: erro de conexão com o gateway: %s", exc)
            raise GiraBotError(f"Erro de conexão com o gateway de IA: {exc}") from exc

        elapsed_ms = int((time.monotonic() - started) * 1000)

        if response.status_code == 429:
            logger.warning("GiraBot: limite de uso excedido (429)")
            raise GiraBotError("Limite de uso excedido. Tente novamente em alguns minutos.", 429)
        if response.status_code == 402:
            logger.error("GiraBot: créditos de IA esgotados (402)")
            raise GiraBotError("Créditos de IA esgotados. Contacte o administrador.", 402)
        if response.status_code >= 400:
            logger.error("GiraBot: gateway respondeu %s: %s", response.status_code, response.text[:240])
            raise GiraBotError(f"Erro no gateway de IA: {response.status_code}", response.status_code)

        try:
            data = response.json()
            content = data['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise GiraBotError("Resposta do gateway de IA em formato inesperado.") from exc
        if not content:
            raise GiraBotError("Resposta do gateway de IA sem conteúdo.")

        usage = data.get('usage') or {}
        logger.info(
            "GiraBot: resposta em %sms (%s tokens, modelo %s)",
            elapsed_ms, usage.get('total_tokens', 0), self.model,
        )
        return {
            'content': content.strip(),
            'tokens_used': usage.get('total_tokens', 0),
            'response_time_ms': elapsed_ms,
            'model': self.model,
        }

    def ask(self, system_prompt, user_prompt, **kwargs):
        """Atalho para uma pergunta única com prompt de sistema; retorna só o texto."""
        messages = [
            {'role': 'system', 'content': system_prompt},
            {'role': 'user', 'content': user_prompt},
        ]
        return self.chat(messages, **kwargs)['content']

    def ask_json(self, system_prompt, user_prompt, **kwargs):
        """
        Pergunta em modo JSON e devolve o objeto decodificado.

        Aceita respostas embrulhadas em bloco ```json.
        """
        content = self.ask(system_prompt, user_prompt, json_mode=True, **kwargs)
        try:
            return json.loads(_FENCE_RE.sub('', content.strip()))
        except ValueError as exc:
            logger.error("GiraBot: JSON inválido na resposta: %s", content[:240])
            raise GiraBotError("Resposta da IA não é um JSON válido.") from exc


def get_client():
    return GiraBotClient.from_settings()
