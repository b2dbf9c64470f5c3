"""
Testes do IdeaService: votação, curadoria, implementação e apuração.
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

import pytest
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError
from django.utils import timezone

from accounts.roles import PAPEIS
from core.models import Setting
from core.tests.factories import criar_usuario, resposta_ia
from feed.models import FeedPost
from feed.services import FeedMirrorService
from ideias.models import Idea, IdeaFeedback, IdeaNotification, IdeaNotificationType, IdeaVote
from ideias.services import IdeaService
from ideias.workflow import IdeaStatus, TransicaoInvalida


def _votar(idea, positivos, negativos):
    for i in range(positivos):
        IdeaService.cast_vote(idea, criar_usuario(f'a_favor_{i}', PAPEIS.COLABORADOR), True)
    for i in range(negativos):
        IdeaService.cast_vote(idea, criar_usuario(f'contra_{i}', PAPEIS.COLABORADOR), False)
    idea.refresh_from_db()
    return idea


def _expirar(idea):
    Idea.objects.filter(pk=idea.pk).update(vote_end=timezone.now() - timedelta(minutes=1))


@pytest.fixture
def ideia(colaborador):
    return IdeaService.submit_idea(colaborador, 'Reduzir tempo de fila', 'Senha eletrônica no caixa.', 'processo')


class TestSubmissao:

    def test_cria_em_triagem_com_codigo(self, ideia, colaborador, unidade):
        year = timezone.localdate().year
        assert ideia.code == f'IDEA-{year}-001'
        assert ideia.status == IdeaStatus.TRIAGEM
        assert ideia.unit == unidade
        assert ideia.ai_category == ''

        segunda = IdeaService.submit_idea(colaborador, 'Outra', 'Mais uma ideia.', 'outro')
        assert segunda.code == f'IDEA-{year}-002'

    def test_classificacao_do_girabot(self, colaborador, girabot_chat):
        girabot_chat.return_value = resposta_ia('"Inovação de Processo"')
        idea = IdeaService.submit_idea(colaborador, 'Fila', 'Senha eletrônica.', 'processo')
        assert idea.ai_category == 'Inovação de Processo'

    def test_classificacao_fora_da_lista_fica_vazia(self, colaborador, girabot_chat):
        girabot_chat.return_value = resposta_ia('Categoria inventada')
        idea = IdeaService.submit_idea(colaborador, 'Fila', 'Senha eletrônica.', 'processo')
        assert idea.ai_category == ''

    @pytest.mark.parametrize('title, description, category', [
        ('', 'Descrição', 'processo'),
        ('Título', '   ', 'processo'),
        ('Título', 'Descrição', 'marketing'),
    ])
    def test_validacao(self, colaborador, title, description, category):
        with pytest.raises(ValidationError):
            IdeaService.submit_idea(colaborador, title, description, category)
        assert not Idea.objects.exists()


class TestVotacao:

    def test_voto_atualiza_contadores(self, ideia_em_votacao, colaborador, gestor):
        IdeaService.cast_vote(ideia_em_votacao, colaborador, True)
        IdeaService.cast_vote(ideia_em_votacao, gestor, False, comment='Caro demais')
        ideia_em_votacao.refresh_from_db()
        assert (ideia_em_votacao.positive_votes, ideia_em_votacao.negative_votes) == (1, 1)
        assert ideia_em_votacao.total_votes == 2
        assert ideia_em_votacao.approval_rate == Decimal('50.00')

    def test_trocar_voto_nao_duplica(self, ideia_em_votacao, colaborador):
        IdeaService.cast_vote(ideia_em_votacao, colaborador, True)
        IdeaService.cast_vote(ideia_em_votacao, colaborador, False)
        ideia_em_votacao.refresh_from_db()
        assert IdeaVote.objects.filter(idea=ideia_em_votacao).count() == 1
        assert ideia_em_votacao.total_votes == 1
        assert ideia_em_votacao.negative_votes == 1

    def test_fora_de_votacao(self, ideia, colaborador):
        with pytest.raises(ValidationError):
            IdeaService.cast_vote(ideia, colaborador, True)

    def test_votacao_encerrada(self, ideia_em_votacao, colaborador):
        _expirar(ideia_em_votacao)
        with pytest.raises(ValidationError):
            IdeaService.cast_vote(ideia_em_votacao, colaborador, True)


class TestAprovarParaVotacao:

    @pytest.mark.parametrize('dias', [7, 10, 14, 21])
    def test_vote_end_igual_inicio_mais_duracao(self, ideia, gestor, dias):
        idea = IdeaService.approve_for_voting(ideia, dias, gestor)
        assert idea.status == IdeaStatus.EM_VOTACAO
        assert idea.vote_end - idea.vote_start == timedelta(days=dias)

    def test_datas_exatas(self, ideia, gestor):
        inicio = datetime(2024, 1, 1, 0, 0, tzinfo=dt_timezone.utc)
        with mock.patch('django.utils.timezone.now', return_value=inicio):
            idea = IdeaService.approve_for_voting(ideia, 7, gestor)
        assert idea.vote_start == inicio
        assert idea.vote_end == datetime(2024, 1, 8, 0, 0, tzinfo=dt_timezone.utc)

    def test_notifica_o_autor(self, ideia, gestor, colaborador):
        IdeaService.approve_for_voting(ideia, 14, gestor)
        notification = IdeaNotification.objects.get(idea=ideia)
        assert notification.user == colaborador
        assert 'aprovada para votação pública' in notification.message

    def test_duracao_invalida(self, ideia, gestor):
        with pytest.raises(ValidationError):
            IdeaService.approve_for_voting(ideia, 5, gestor)
        ideia.refresh_from_db()
        assert ideia.status == IdeaStatus.TRIAGEM

    def test_apenas_curadores(self, ideia, franqueado):
        with pytest.raises(PermissionDenied):
            IdeaService.approve_for_voting(ideia, 7, franqueado)

    def test_so_a_partir_da_triagem(self, ideia_em_votacao, gestor):
        with pytest.raises(TransicaoInvalida):
            IdeaService.approve_for_voting(ideia_em_votacao, 7, gestor)


class TestCuradoria:

    @pytest.mark.parametrize('decision', ['aprovada', 'recusada'])
    def test_devolutiva_obrigatoria(self, ideia_em_votacao, gestor, decision):
        with pytest.raises(ValidationError):
            IdeaService.curate(ideia_em_votacao, decision, '   ', gestor)
        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.EM_VOTACAO
        assert not IdeaFeedback.objects.exists()
        assert not IdeaNotification.objects.exists()

    def test_aprovar(self, ideia_em_votacao, gestor, colaborador):
        idea = IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ótima ideia', gestor, 'alto', 'medio')
        assert idea.status == IdeaStatus.APROVADA
        assert idea.curator == gestor
        assert idea.resolved_at is not None
        feedback = IdeaFeedback.objects.get(idea=idea)
        assert feedback.status_update == 'aprovada'
        assert feedback.viability_level == 'alto'
        notification = IdeaNotification.objects.get(idea=idea, user=colaborador)
        assert notification.message == f'Sua ideia "{idea.title}" foi aprovada. Ótima ideia'
        assert not FeedPost.objects.exists()

    def test_recusar_da_triagem(self, ideia, gestor):
        idea = IdeaService.curate(ideia, 'recusada', 'Fora do escopo', gestor)
        assert idea.status == IdeaStatus.RECUSADA

    def test_aprovar_da_triagem_e_invalido(self, ideia, gestor):
        with pytest.raises(TransicaoInvalida):
            IdeaService.curate(ideia, 'aprovada', 'Pulou a votação', gestor)

    def test_nivel_invalido(self, ideia_em_votacao, gestor):
        with pytest.raises(ValidationError):
            IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor, viability_level='enorme')

    def test_publicacao_automatica_no_feed(self, ideia_em_votacao, gestor):
        Setting.set_value('ideas_auto_publish_to_feed', {'enabled': True})
        IdeaService.curate(ideia_em_votacao, 'aprovada', 'Aprovada', gestor)
        post = FeedPost.objects.get()
        assert post.mirror_key == f'idea_approved:{ideia_em_votacao.pk}'
        assert post.title == f'💡 Ideia Aprovada: {ideia_em_votacao.title}'
        assert post.pinned is False


class TestImplementacao:

    @pytest.fixture
    def aprovada(self, ideia_em_votacao, gestor):
        return IdeaService.curate(ideia_em_votacao, 'aprovada', 'Aprovada', gestor)

    def test_inicia(self, aprovada, gestor, admin_user, colaborador):
        prazo = timezone.localdate() + timedelta(days=30)
        idea = IdeaService.start_implementation(aprovada, admin_user, prazo, gestor, notes='Fase 1')
        assert idea.status == IdeaStatus.EM_IMPLEMENTACAO
        assert idea.implemented_by == admin_user
        assert idea.implementation_deadline == prazo
        designacao = IdeaNotification.objects.get(user=admin_user)
        assert designacao.notification_type == IdeaNotificationType.ASSIGNMENT
        assert IdeaNotification.objects.filter(user=colaborador, message__startswith='🚀').exists()

    def test_prazo_hoje_e_aceito(self, aprovada, gestor):
        idea = IdeaService.start_implementation(aprovada, gestor, timezone.localdate(), gestor)
        assert idea.status == IdeaStatus.EM_IMPLEMENTACAO

    @pytest.mark.parametrize('sem_responsavel, sem_prazo', [(True, False), (False, True), (True, True)])
    def test_campos_obrigatorios(self, aprovada, gestor, sem_responsavel, sem_prazo):
        responsible = None if sem_responsavel else gestor
        deadline = None if sem_prazo else timezone.localdate()
        with pytest.raises(ValidationError):
            IdeaService.start_implementation(aprovada, responsible, deadline, gestor)

    def test_prazo_no_passado(self, aprovada, gestor):
        with pytest.raises(ValidationError):
            IdeaService.start_implementation(aprovada, gestor, timezone.localdate() - timedelta(days=1), gestor)
        aprovada.refresh_from_db()
        assert aprovada.status == IdeaStatus.APROVADA

    def test_responsavel_precisa_ser_admin_ou_gestor(self, aprovada, gestor, franqueado):
        with pytest.raises(ValidationError):
            IdeaService.start_implementation(aprovada, franqueado, timezone.localdate(), gestor)

    def test_concluir_so_em_implementacao(self, aprovada, gestor):
        with pytest.raises(TransicaoInvalida):
            IdeaService.mark_implemented(aprovada, gestor)


class TestFluxoCompleto:

    def test_da_submissao_ao_feed(self, colaborador, gestor, admin_user):
        idea = IdeaService.submit_idea(
            colaborador, 'Reduzir tempo de fila', 'Senha eletrônica no caixa.', 'processo'
        )
        IdeaService.approve_for_voting(idea, 7, admin_user)
        idea = _votar(idea, positivos=5, negativos=0)
        assert idea.approval_rate >= Decimal('80')

        IdeaService.curate(idea, 'aprovada', 'Quórum atingido', admin_user)
        IdeaService.start_implementation(idea, gestor, timezone.localdate() + timedelta(days=15), admin_user)
        IdeaService.mark_implemented(idea, admin_user, 'Fila caiu pela metade', publish_to_feed=True)

        idea.refresh_from_db()
        assert idea.status == IdeaStatus.IMPLEMENTADA
        assert idea.implemented_at is not None

        posts = FeedPost.objects.filter(reference_id=str(idea.pk), pinned=True)
        assert posts.count() == 1
        assert posts.get().title == '🚀 Ideia Implementada com Sucesso'
        assert IdeaNotification.objects.filter(user=colaborador, idea=idea).count() == 4

    def test_publicacao_nao_duplica(self, ideia_em_votacao, gestor):
        IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor)
        IdeaService.start_implementation(ideia_em_votacao, gestor, timezone.localdate(), gestor)
        IdeaService.mark_implemented(ideia_em_votacao, gestor, publish_to_feed=True)
        with pytest.raises(TransicaoInvalida):
            IdeaService.mark_implemented(ideia_em_votacao, gestor, publish_to_feed=True)
        assert FeedPost.objects.filter(pinned=True).count() == 1


class TestApuracao:

    def test_atinge_quorum(self, ideia_em_votacao):
        _votar(ideia_em_votacao, positivos=4, negativos=1)
        _expirar(ideia_em_votacao)
        resultados = IdeaService.close_expired_voting()
        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.APROVADA
        assert ideia_em_votacao.quorum == Decimal('80.00')
        assert resultados == [{'code': ideia_em_votacao.code, 'status': 'aprovada', 'approval_rate': 80.0}]

    def test_abaixo_do_quorum(self, ideia_em_votacao, colaborador):
        _votar(ideia_em_votacao, positivos=3, negativos=1)
        _expirar(ideia_em_votacao)
        IdeaService.close_expired_voting()
        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.RECUSADA
        notification = IdeaNotification.objects.get(user=colaborador)
        assert 'não atingiu o quórum mínimo' in notification.message

    def test_sem_votos_e_recusada(self, ideia_em_votacao):
        _expirar(ideia_em_votacao)
        IdeaService.close_expired_voting()
        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.RECUSADA
        assert ideia_em_votacao.quorum == Decimal('0.00')

    def test_quorum_configuravel(self, ideia_em_votacao):
        Setting.set_value('ideas_voting_quorum', {'percentage': 60})
        _votar(ideia_em_votacao, positivos=2, negativos=1)
        _expirar(ideia_em_votacao)
        IdeaService.close_expired_voting()
        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.APROVADA

    def test_votacao_em_andamento_nao_e_apurada(self, ideia_em_votacao):
        assert IdeaService.close_expired_voting() == []
        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.EM_VOTACAO

    def test_parabeniza_por_whatsapp(self, ideia_em_votacao, colaborador, whatsapp_enviado):
        Setting.set_value('ideas_whatsapp_notifications', {'enabled': True})
        profile = colaborador.profile
        profile.phone = '(11) 98765-4321'
        profile.receive_whatsapp_notifications = True
        profile.save()

        _votar(ideia_em_votacao, positivos=1, negativos=0)
        _expirar(ideia_em_votacao)
        IdeaService.close_expired_voting()

        whatsapp_enviado.assert_called_once()
        phone, message = whatsapp_enviado.call_args[0]
        assert phone == '(11) 98765-4321'
        assert 'Parabéns' in message

    def test_sem_whatsapp_quando_desligado(self, ideia_em_votacao, colaborador, whatsapp_enviado):
        profile = colaborador.profile
        profile.phone = '11987654321'
        profile.receive_whatsapp_notifications = True
        profile.save()
        _votar(ideia_em_votacao, positivos=1, negativos=0)
        _expirar(ideia_em_votacao)
        IdeaService.close_expired_voting()
        whatsapp_enviado.assert_not_called()

    def test_falha_em_uma_ideia_nao_interrompe_as_demais(self, ideia_em_votacao, colaborador):
        outra = Idea.objects.create(
            code='IDEA-2020-002',
            title='Pátio com bicicletário',
            description='Vagas para bicicletas na frente da loja.',
            category='ambiente',
            status=IdeaStatus.EM_VOTACAO,
            submitted_by=colaborador,
            vote_start=timezone.now() - timedelta(days=8),
            vote_end=timezone.now() - timedelta(days=1),
        )
        _expirar(ideia_em_votacao)
        criar = IdeaNotification.objects.create

        def falha_na_primeira(**kwargs):
            if kwargs['idea'].pk == ideia_em_votacao.pk:
                raise DatabaseError('falha simulada')
            return criar(**kwargs)

        with mock.patch.object(IdeaNotification.objects, 'create', side_effect=falha_na_primeira):
            resultados = IdeaService.close_expired_voting()

        assert resultados == [{'code': outra.code, 'status': 'recusada', 'approval_rate': 0.0}]
        ideia_em_votacao.refresh_from_db()
        outra.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.EM_VOTACAO
        assert ideia_em_votacao.resolved_at is None
        assert outra.status == IdeaStatus.RECUSADA
        assert IdeaNotification.objects.filter(idea=outra).count() == 1

        # a ideia que falhou é apurada na execução seguinte
        assert [r['code'] for r in IdeaService.close_expired_voting()] == [ideia_em_votacao.code]


class TestConfiguracaoForaDoFormato:
    """Configurações salvas como booleano puro em vez de {"enabled": bool}."""

    def test_publicacao_no_feed_com_booleano(self, ideia_em_votacao, gestor):
        Setting.set_value('ideas_auto_publish_to_feed', True)
        idea = IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor)
        assert idea.status == IdeaStatus.APROVADA
        assert FeedPost.objects.filter(mirror_key=f'idea_approved:{idea.pk}').exists()

    def test_publicacao_desligada_com_booleano(self, ideia_em_votacao, gestor):
        Setting.set_value('ideas_auto_publish_to_feed', False)
        IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor)
        assert not FeedPost.objects.exists()

    def test_apuracao_com_whatsapp_booleano(self, ideia_em_votacao, colaborador, whatsapp_enviado):
        Setting.set_value('ideas_whatsapp_notifications', True)
        Setting.set_value('ideas_auto_publish_to_feed', True)
        profile = colaborador.profile
        profile.phone = '11987654321'
        profile.receive_whatsapp_notifications = True
        profile.save()
        _votar(ideia_em_votacao, positivos=1, negativos=0)
        _expirar(ideia_em_votacao)

        resultados = IdeaService.close_expired_voting()

        assert resultados[0]['status'] == 'aprovada'
        whatsapp_enviado.assert_called_once()
        assert FeedPost.objects.filter(mirror_key=f'idea_approved:{ideia_em_votacao.pk}').exists()


class TestAtomicidade:
    """Status, devolutiva, notificações e post do Feed são gravados juntos."""

    def _falhar_notificacao(self, tipo=None):
        criar = IdeaNotification.objects.create

        def falha(**kwargs):
            if tipo is None or kwargs['notification_type'] == tipo:
                raise DatabaseError('falha simulada')
            return criar(**kwargs)

        return mock.patch.object(IdeaNotification.objects, 'create', side_effect=falha)

    def test_curadoria_desfeita_se_notificacao_falha(self, ideia_em_votacao, gestor):
        Setting.set_value('ideas_auto_publish_to_feed', {'enabled': True})
        with self._falhar_notificacao(), pytest.raises(DatabaseError):
            IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ótima ideia', gestor)

        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.EM_VOTACAO
        assert ideia_em_votacao.curator is None
        assert ideia_em_votacao.feedback == ''
        assert not IdeaFeedback.objects.exists()
        assert not FeedPost.objects.exists()

    def test_curadoria_desfeita_se_feed_falha(self, ideia_em_votacao, gestor):
        Setting.set_value('ideas_auto_publish_to_feed', {'enabled': True})
        with mock.patch.object(FeedMirrorService, 'mirror', side_effect=DatabaseError('falha simulada')), \
                pytest.raises(DatabaseError):
            IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ótima ideia', gestor)

        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.EM_VOTACAO
        assert not IdeaFeedback.objects.exists()
        assert not IdeaNotification.objects.exists()
        assert not FeedPost.objects.exists()

    def test_implementacao_desfeita_se_designacao_falha(self, ideia_em_votacao, gestor):
        IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor)
        notificacoes = IdeaNotification.objects.count()

        with self._falhar_notificacao(IdeaNotificationType.ASSIGNMENT), pytest.raises(DatabaseError):
            IdeaService.start_implementation(ideia_em_votacao, gestor, timezone.localdate(), gestor)

        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.APROVADA
        assert ideia_em_votacao.implemented_by is None
        assert ideia_em_votacao.implementation_deadline is None
        assert IdeaNotification.objects.count() == notificacoes

    def test_conclusao_desfeita_se_feed_falha(self, ideia_em_votacao, gestor):
        IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor)
        IdeaService.start_implementation(ideia_em_votacao, gestor, timezone.localdate(), gestor)
        notificacoes = IdeaNotification.objects.count()
        feedbacks = IdeaFeedback.objects.count()

        with mock.patch.object(FeedMirrorService, 'mirror', side_effect=DatabaseError('falha simulada')), \
                pytest.raises(DatabaseError):
            IdeaService.mark_implemented(ideia_em_votacao, gestor, 'Concluída', publish_to_feed=True)

        ideia_em_votacao.refresh_from_db()
        assert ideia_em_votacao.status == IdeaStatus.EM_IMPLEMENTACAO
        assert ideia_em_votacao.implemented_at is None
        assert ideia_em_votacao.feedback == 'Ok'
        assert IdeaNotification.objects.count() == notificacoes
        assert IdeaFeedback.objects.count() == feedbacks
        assert not FeedPost.objects.exists()


class TestDuplicidade:

    def test_sem_ideias_recentes_nao_chama_a_ia(self, ideia, girabot_chat):
        result = IdeaService.detect_duplicates(ideia)
        assert result['is_duplicate'] is False
        girabot_chat.assert_not_called()

    def test_resultado_da_ia(self, ideia, ideia_em_votacao, girabot_chat):
        girabot_chat.return_value = resposta_ia(
            '```json\n{"isDuplicate": true, "similarIdeas": [{"code": "IDEA-2020-001", '
            '"title": "Cartão fidelidade digital", "similarity": 90, "reason": "mesmo tema"}], '
            '"reason": "Muito parecida"}\n```'
        )
        result = IdeaService.detect_duplicates(ideia)
        assert result['is_duplicate'] is True
        assert result['similar_ideas'][0]['code'] == 'IDEA-2020-001'
        assert result['reason'] == 'Muito parecida'


class TestEstatisticas:

    def test_stats(self, ideia, ideia_em_votacao, gestor):
        IdeaService.curate(ideia_em_votacao, 'aprovada', 'Ok', gestor)
        stats = IdeaService.stats()
        assert stats['total'] == 2
        assert stats['em_triagem'] == 1
        assert stats['by_status']['aprovada'] == 1
        assert stats['approval_rate'] == 100.0
