"""
Testes de notificações, comunicados em massa e configurações.
"""
from io import StringIO
from unittest import mock

import pytest
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.management import call_command
from rest_framework.test import APIClient

from accounts.roles import PAPEIS
from core.models import Notification, NotificationType, Setting
from core.services import NotificationService, get_setting
from core.tests.factories import criar_usuario
from mural.models import MuralSetting


class TestConfiguracoes:

    def test_padrao_quando_nao_existe(self, db):
        assert get_setting('ideas_voting_quorum') == {'percentage': 80}
        assert get_setting('chave_inexistente') is None
        assert get_setting('chave_inexistente', 'x') == 'x'

    def test_valor_do_banco(self, db):
        Setting.set_value('ideas_voting_quorum', {'percentage': 65}, 'Quórum reduzido')
        assert get_setting('ideas_voting_quorum') == {'percentage': 65}
        assert Setting.is_enabled('ideas_voting_quorum') is False

    @pytest.mark.parametrize('valor, esperado', [
        ({'enabled': True}, True),
        ({'enabled': False}, False),
        (True, True),
        (False, False),
        (1, True),
        ('', False),
        ({}, False),
    ])
    def test_is_enabled_aceita_valor_fora_do_formato(self, db, valor, esperado):
        Setting.set_value('ideas_auto_publish_to_feed', valor)
        assert Setting.is_enabled('ideas_auto_publish_to_feed') is esperado

    def test_is_enabled_usa_padrao_quando_ausente(self, db):
        assert Setting.is_enabled('ideas_auto_publish_to_feed') is False
        assert MuralSetting.is_enabled('ai_moderation', default=True) is True

    def test_seed(self, db):
        Setting.set_value('ideas_voting_quorum', {'percentage': 50})
        call_command('seed_configuracoes', stdout=StringIO())
        assert get_setting('ideas_voting_quorum') == {'percentage': 50}
        assert Setting.objects.filter(key='training_min_score').exists()
        assert MuralSetting.get_value('auto_approve') == {'enabled': True, 'min_confidence': 0.7}

        call_command('seed_configuracoes', '--sobrescrever', stdout=StringIO())
        assert get_setting('ideas_voting_quorum') == {'percentage': 80}


class TestNotify:

    def test_cria_notificacao(self, colaborador):
        notification = NotificationService.notify(
            colaborador, NotificationType.SYSTEM, 'Bem-vindo', 'Seu acesso foi liberado', reference_id=7
        )
        assert notification.reference_id == '7'
        assert notification.is_read is False

    def test_whatsapp_so_para_quem_aceitou(self, colaborador, whatsapp_enviado):
        NotificationService.notify(colaborador, NotificationType.SYSTEM, 'Oi', 'Teste', send_whatsapp=True)
        whatsapp_enviado.assert_not_called()

        profile = colaborador.profile
        profile.phone = '11987654321'
        profile.receive_whatsapp_notifications = True
        profile.save()
        NotificationService.notify(colaborador, NotificationType.SYSTEM, 'Oi', 'Teste', send_whatsapp=True)
        whatsapp_enviado.assert_called_once_with('11987654321', '*Oi*\n\nTeste')


class TestBroadcast:

    @pytest.fixture
    def rede(self, unidade):
        return [
            criar_usuario('gerente_1', PAPEIS.GERENTE, unit=unidade, phone='11911111111', whatsapp=True),
            criar_usuario('gerente_2', PAPEIS.GERENTE, phone='11922222222', whatsapp=True),
            criar_usuario('colab_1', PAPEIS.COLABORADOR, unit=unidade, phone='11933333333'),
        ]

    def test_por_papel(self, gestor, rede):
        result = NotificationService.broadcast(gestor, 'Reunião', 'Amanhã às 9h', roles=[PAPEIS.GERENTE])
        assert result == {'notified': 2, 'whatsapp_queued': 0}
        assert Notification.objects.filter(notification_type=NotificationType.ANNOUNCEMENT).count() == 2

    def test_por_papel_e_unidade(self, gestor, rede, unidade):
        result = NotificationService.broadcast(gestor, 'Reunião', 'Hoje', roles=[PAPEIS.GERENTE], units=[unidade.pk])
        assert result['notified'] == 1

    def test_por_usuario(self, gestor, rede):
        result = NotificationService.broadcast(gestor, 'Olá', 'Direto', user_ids=[rede[2].pk])
        assert result['notified'] == 1
        assert Notification.objects.get().user == rede[2]

    def test_sem_destinatarios(self, gestor, rede):
        assert NotificationService.broadcast(gestor, 'Olá', 'Ninguém')['notified'] == 0

    def test_whatsapp_espacado(self, gestor, rede):
        with mock.patch('core.tasks.enviar_whatsapp.apply_async') as apply_async:
            result = NotificationService.broadcast(
                gestor, 'Reunião', 'Amanhã', roles=[PAPEIS.GERENTE, PAPEIS.COLABORADOR], send_whatsapp=True
            )
        assert result == {'notified': 3, 'whatsapp_queued': 2}
        countdowns = [c[1]['countdown'] for c in apply_async.call_args_list]
        assert countdowns[0] == 0
        assert 3 <= countdowns[1] <= 5

    def test_apenas_curadores(self, colaborador, rede):
        with pytest.raises(PermissionDenied):
            NotificationService.broadcast(colaborador, 'Olá', 'Teste', roles=[PAPEIS.GERENTE])

    def test_titulo_obrigatorio(self, gestor):
        with pytest.raises(ValidationError):
            NotificationService.broadcast(gestor, '', 'Teste', roles=[PAPEIS.GERENTE])

    def test_papel_invalido(self, gestor):
        with pytest.raises(ValidationError):
            NotificationService.broadcast(gestor, 'Olá', 'Teste', roles=['diretor'])


@pytest.mark.django_db
class TestNotificationAPI:

    def _client(self, user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def test_lista_so_as_proprias(self, colaborador, gestor):
        NotificationService.notify(colaborador, NotificationType.SYSTEM, 'Sua', 'Mensagem')
        NotificationService.notify(gestor, NotificationType.SYSTEM, 'Outra', 'Mensagem')
        response = self._client(colaborador).get('/api/core/notifications/')
        assert response.data['count'] == 1
        assert response.data['results'][0]['title'] == 'Sua'

    def test_marcar_lidas(self, colaborador):
        for i in range(3):
            NotificationService.notify(colaborador, NotificationType.SYSTEM, f'Aviso {i}', 'Mensagem')
        client = self._client(colaborador)
        assert client.get('/api/core/notifications/unread_count/').data == {'unread': 3}
        assert client.post('/api/core/notifications/mark_all_read/').data == {'updated': 3}
        assert client.get('/api/core/notifications/unread_count/').data == {'unread': 0}

    def test_enviar_comunicado(self, gestor, colaborador):
        response = self._client(gestor).post(
            '/api/core/notifications/send/',
            {'title': 'Inventário', 'message': 'Sexta-feira', 'roles': ['colaborador']},
            format='json',
        )
        assert response.status_code == 201
        assert response.data['notified'] == 1

    def test_enviar_sem_destinatarios_retorna_400(self, gestor):
        response = self._client(gestor).post(
            '/api/core/notifications/send/', {'title': 'Inventário', 'message': 'Sexta'}, format='json'
        )
        assert response.status_code == 400

    def test_colaborador_nao_envia(self, colaborador):
        response = self._client(colaborador).post(
            '/api/core/notifications/send/',
            {'title': 'Oi', 'message': 'Oi', 'roles': ['gerente']},
            format='json',
        )
        assert response.status_code == 403

    def test_configuracoes_so_admin(self, gestor, admin_user):
        Setting.set_value('ideas_voting_quorum', {'percentage': 80})
        assert self._client(gestor).get('/api/core/settings/').status_code == 403
        response = self._client(admin_user).patch(
            '/api/core/settings/ideas_voting_quorum/', {'value': {'percentage': 75}}, format='json'
        )
        assert response.status_code == 200
        assert get_setting('ideas_voting_quorum') == {'percentage': 75}

    def test_configuracao_booleana_exige_formato(self, admin_user):
        Setting.set_value('ideas_auto_publish_to_feed', {'enabled': False})
        url = '/api/core/settings/ideas_auto_publish_to_feed/'
        response = self._client(admin_user).patch(url, {'value': True}, format='json')
        assert response.status_code == 400
        assert 'value' in response.data
        assert get_setting('ideas_auto_publish_to_feed') == {'enabled': False}

        response = self._client(admin_user).patch(url, {'value': {'enabled': True}}, format='json')
        assert response.status_code == 200
        assert Setting.is_enabled('ideas_auto_publish_to_feed') is True
