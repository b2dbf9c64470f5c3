"""
Testes do cliente Z-API e da tarefa de envio de WhatsApp.
"""
from unittest import mock

import pytest
import requests
from celery.exceptions import Retry

from core.tasks import enviar_whatsapp
from core.whatsapp import _mask_phone, _mask_token, format_message, is_configured, normalize_phone, send_text


class TestNormalizacao:

    @pytest.mark.parametrize('entrada, esperado', [
        ('(11) 98765-4321', '5511987654321'),
        ('1133334444', '551133334444'),
        ('+55 11 98765-4321', '5511987654321'),
        ('011987654321', '5511987654321'),
        ('', ''),
        ('sem telefone', ''),
    ])
    def test_normalize_phone(self, entrada, esperado):
        assert normalize_phone(entrada) == esperado

    def test_mascaras(self):
        assert _mask_phone('5511987654321') == '*********4321'
        assert _mask_token('abcdefghijkl') == 'abcd...ijkl'
        assert _mask_token('curto') == '*****'

    def test_format_message(self):
        assert format_message('Aviso', 'Reunião às 10h') == '*Aviso*\n\nReunião às 10h'


class TestSendText:

    def test_envio(self):
        resposta = mock.Mock(status_code=200, text='{"zaapId": "1"}')
        with mock.patch('requests.post', return_value=resposta) as post:
            result = send_text('(11) 98765-4321', 'Olá')

        assert result == {'ok': True, 'response': '{"zaapId": "1"}'}
        url = post.call_args[0][0]
        assert url == 'https://api.z-api.io/instances/instancia-teste/token/token-teste/send-text'
        kwargs = post.call_args[1]
        assert kwargs['json'] == {'phone': '5511987654321', 'message': 'Olá'}
        assert kwargs['headers']['client-token'] == 'client-token-teste'

    def test_erro_http(self):
        with mock.patch('requests.post', return_value=mock.Mock(status_code=500, text='erro')):
            assert send_text('11987654321', 'Olá') == {'ok': False, 'error': 'http_500'}

    def test_erro_de_conexao(self):
        assert send_text('11987654321', 'Olá') == {'ok': False, 'error': 'connection_error'}

    def test_sem_credenciais(self, settings):
        settings.ZAPI_TOKEN = ''
        with mock.patch('requests.post') as post:
            assert send_text('11987654321', 'Olá') == {'ok': False, 'error': 'missing_credentials'}
        post.assert_not_called()

    def test_is_configured(self, settings):
        assert is_configured() is True
        settings.ZAPI_INSTANCE_ID = ''
        assert is_configured() is False

    def test_telefone_e_mensagem_invalidos(self):
        assert send_text('abc', 'Olá')['error'] == 'invalid_phone'
        assert send_text('11987654321', '')['error'] == 'empty_message'


class TestTarefaEnvio:

    def test_sucesso(self, whatsapp_enviado):
        result = enviar_whatsapp.delay('11987654321', 'Olá').get()
        assert result['ok'] is True
        whatsapp_enviado.assert_called_once_with('11987654321', 'Olá')

    @pytest.mark.parametrize('erro', ['connection_error', 'http_429', 'http_503'])
    def test_erro_temporario_reenfileira(self, whatsapp_enviado, erro):
        whatsapp_enviado.return_value = {'ok': False, 'error': erro}
        with mock.patch.object(enviar_whatsapp, 'retry', return_value=Retry()) as retry:
            with pytest.raises(Retry):
                enviar_whatsapp.run('11987654321', 'Olá')
        retry.assert_called_once_with(countdown=60)

    def test_erro_definitivo_nao_reenfileira(self, whatsapp_enviado):
        whatsapp_enviado.return_value = {'ok': False, 'error': 'invalid_phone'}
        with mock.patch.object(enviar_whatsapp, 'retry') as retry:
            result = enviar_whatsapp.run('abc', 'Olá')
        assert result == {'ok': False, 'error': 'invalid_phone'}
        retry.assert_not_called()

    def test_erro_de_rede_real_vira_connection_error(self):
        with mock.patch('requests.post', side_effect=requests.Timeout('lento')):
            assert send_text('11987654321', 'Olá')['error'] == 'connection_error'
