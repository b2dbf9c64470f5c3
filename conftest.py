"""
Fixtures compartilhadas para os testes do Portal Cresci e Perdi.

Nenhum teste fala com a rede: o envio de WhatsApp é substituído por um
mock e o requests.post do GiraBot levanta ConnectionError (a IA cai no
fallback). Testes que precisam de uma resposta da IA usam `girabot_chat`.
"""
from datetime import timedelta
from unittest import mock

import pytest
import requests
from django.utils import timezone

from accounts.models import Unit
from accounts.roles import PAPEIS
from core.tests.factories import criar_usuario, resposta_ia


@pytest.fixture(autouse=True)
def whatsapp_enviado():
    """Substitui o envio real pela Z-API; retorna o mock de send_text."""
    with mock.patch('core.tasks.send_text', return_value={'ok': True, 'response': '{}'}) as send_text:
        yield send_text


@pytest.fixture(autouse=True)
def sem_rede():
    with mock.patch('requests.post', side_effect=requests.ConnectionError('rede desabilitada nos testes')):
        yield


@pytest.fixture
def girabot_chat():
    """
    Mock de GiraBotClient.chat.

    Uso:
        girabot_chat.side_effect = [resposta_ia('texto'), resposta_ia('{"quality": "approved"}')]
    """
    with mock.patch('girabot.client.GiraBotClient.chat') as chat:
        chat.return_value = resposta_ia('ok')
        yield chat


@pytest.fixture
def unidade(db):
    return Unit.objects.create(code='SP-001', name='Loja Paulista', city='São Paulo', state='SP')


@pytest.fixture
def admin_user(db):
    return criar_usuario('admin_teste', PAPEIS.ADMIN)


@pytest.fixture
def gestor(db):
    return criar_usuario('gestor_teste', PAPEIS.GESTOR_SETOR)


@pytest.fixture
def colaborador(db, unidade):
    return criar_usuario('colaborador_teste', PAPEIS.COLABORADOR, unit=unidade)


@pytest.fixture
def franqueado(db, unidade):
    return criar_usuario('franqueado_teste', PAPEIS.FRANQUEADO, unit=unidade)


@pytest.fixture
def categoria_mural(db, gestor):
    from mural.models import MuralCategory

    return MuralCategory.objects.create(key='ajuda', name='Pedido de Ajuda', curator=gestor)


@pytest.fixture
def ideia_em_votacao(db, colaborador):
    """Ideia aberta para votação até amanhã."""
    from ideias.models import Idea
    from ideias.workflow import IdeaStatus

    now = timezone.now()
    return Idea.objects.create(
        code='IDEA-2020-001',
        title='Cartão fidelidade digital',
        description='Substituir o cartão de papel por um app.',
        category='tecnologia',
        status=IdeaStatus.EM_VOTACAO,
        submitted_by=colaborador,
        vote_start=now - timedelta(days=6),
        vote_end=now + timedelta(days=1),
        evaluating_at=now - timedelta(days=6),
    )
