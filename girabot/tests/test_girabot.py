"""
Testes do cliente do gateway de IA e do chat do GiraBot.
"""
import uuid
from unittest import mock

import pytest
from django.core.exceptions import ValidationError
from rest_framework.test import APIClient

from core.tests.factories import resposta_ia
from girabot import services
from girabot.client import GiraBotClient, GiraBotError
from girabot.models import AISession


def _http(status_code, payload=None, text=''):
    response = mock.Mock(status_code=status_code, text=text)
    response.json.return_value = payload
    return response


@pytest.fixture
def gateway():
    return GiraBotClient('https://ia.exemplo/v1/chat/completions', 'chave', 'modelo-teste', timeout=5)


class TestGiraBotClient:

    def test_resposta(self, gateway):
        payload = {'choices': [{'message': {'content': '  Olá!  '}}], 'usage': {'total_tokens': 21}}
        with mock.patch('requests.post', return_value=_http(200, payload)) as post:
            result = gateway.chat([{'role': 'user', 'content': 'Oi'}], temperature=0.2, json_mode=True)

        assert result['content'] == 'Olá!'
        assert result['tokens_used'] == 21
        assert result['model'] == 'modelo-teste'
        body = post.call_args[1]['json']
        assert body['temperature'] == 0.2
        assert body['response_format'] == {'type': 'json_object'}
        assert post.call_args[1]['headers']['Authorization'] == 'Bearer chave'

    @pytest.mark.parametrize('status_code, trecho', [
        (429, 'Limite de uso excedido'),
        (402, 'Créditos de IA esgotados'),
        (500, 'Erro no gateway de IA: 500'),
    ])
    def test_erros_http(self, gateway, status_code, trecho):
        with mock.patch('requests.post', return_value=_http(status_code, text='falhou')):
            with pytest.raises(GiraBotError) as exc:
                gateway.chat([])
        assert trecho in str(exc.value)
        assert exc.value.status_code == status_code

    def test_erro_de_conexao(self, gateway):
        with pytest.raises(GiraBotError):
            gateway.chat([])

    def test_sem_chave(self):
        gateway = GiraBotClient('https://ia.exemplo', '', 'modelo')
        with mock.patch('requests.post') as post:
            with pytest.raises(GiraBotError):
                gateway.chat([])
        post.assert_not_called()

    @pytest.mark.parametrize('payload', [{}, {'choices': []}, {'choices': [{'message': {'content': ''}}]}])
    def test_formato_inesperado(self, gateway, payload):
        with mock.patch('requests.post', return_value=_http(200, payload)):
            with pytest.raises(GiraBotError):
                gateway.chat([])

    def test_ask_json_aceita_bloco_de_codigo(self, gateway):
        with mock.patch.object(GiraBotClient, 'chat', return_value=resposta_ia('```json\n{"quality": "review"}\n```')):
            assert gateway.ask_json('sistema', 'usuário') == {'quality': 'review'}

    def test_ask_json_invalido(self, gateway):
        with mock.patch.object(GiraBotClient, 'chat', return_value=resposta_ia('não sei')):
            with pytest.raises(GiraBotError):
                gateway.ask_json('sistema', 'usuário')


class TestChat:

    def test_grava_a_sessao(self, colaborador, girabot_chat):
        girabot_chat.return_value = resposta_ia('Os treinamentos ficam no menu lateral.', tokens=40)
        session = services.ask(colaborador, 'Onde encontro os treinamentos?', module='treinamentos')

        assert session.answer == 'Os treinamentos ficam no menu lateral.'
        assert session.tokens_used == 40
        assert session.model_used == 'modelo-teste'
        messages = girabot_chat.call_args[0][0]
        assert messages[0]['role'] == 'system'
        assert 'Módulo Treinamentos' in messages[0]['content']
        assert 'colaborador' in messages[0]['content']
        assert messages[-1] == {'role': 'user', 'content': 'Onde encontro os treinamentos?'}

    def test_historico_da_conversa(self, colaborador, girabot_chat):
        conversa = uuid.uuid4()
        girabot_chat.return_value = resposta_ia('Primeira resposta')
        services.ask(colaborador, 'Primeira pergunta', conversation_id=conversa)
        girabot_chat.return_value = resposta_ia('Segunda resposta')
        services.ask(colaborador, 'Segunda pergunta', conversation_id=conversa)

        messages = girabot_chat.call_args[0][0]
        assert [m['content'] for m in messages[1:]] == ['Primeira pergunta', 'Primeira resposta', 'Segunda pergunta']
        assert AISession.objects.filter(conversation_id=conversa).count() == 2

    def test_mensagem_vazia(self, colaborador):
        with pytest.raises(ValidationError):
            services.ask(colaborador, '   ')

    def test_falha_nao_grava(self, colaborador):
        with pytest.raises(GiraBotError):
            services.ask(colaborador, 'Olá')
        assert not AISession.objects.exists()


@pytest.mark.django_db
class TestChatAPI:

    def test_perguntar(self, colaborador, girabot_chat):
        girabot_chat.return_value = resposta_ia('Olá! Como posso ajudar?')
        api = APIClient()
        api.force_authenticate(user=colaborador)
        response = api.post('/api/girabot/sessions/ask/', {'message': 'Oi'}, format='json')
        assert response.status_code == 201
        assert response.data['reply'] == 'Olá! Como posso ajudar?'
        assert api.get('/api/girabot/sessions/').data['count'] == 1

    def test_ia_fora_do_ar_retorna_502(self, colaborador):
        api = APIClient()
        api.force_authenticate(user=colaborador)
        response = api.post('/api/girabot/sessions/ask/', {'message': 'Oi'}, format='json')
        assert response.status_code == 502
        assert 'error' in response.data
