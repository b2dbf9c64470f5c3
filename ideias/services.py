"""
Services Layer do módulo de Ideias.

Regras de negócio do ciclo de vida de uma ideia:
- Submissão (código IDEA-<ano>-<seq> e classificação pelo GiraBot)
- Votação e apuração contra o quórum configurado
- Curadoria, implementação e publicação no Feed

Cada operação de workflow roda em uma única transação: status,
devolutiva, notificações e post do Feed são gravados juntos ou nenhum é.
"""
import logging
from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from accounts.roles import PAPEIS, is_curador, resolve_role
from core.models import Setting
from core.services import get_setting
from core.tasks import enviar_whatsapp
from feed.models import FeedPostType
from feed.services import FeedMirrorService
from girabot.client import GiraBotError, get_client

from .models import (
    Idea,
    IdeaCategory,
    IdeaFeedback,
    IdeaNotification,
    IdeaNotificationType,
    IdeaVote,
    Level,
    TargetAudience,
)
from .workflow import IdeaEvento, IdeaStatus

logger = logging.getLogger(__name__)

DURACOES_VOTACAO = (7, 10, 14, 21)

CATEGORIAS_IA = [
    'Inovação de Processo',
    'Melhoria de Experiência',
    'Sugestão de Comunicação',
    'Proposta Operacional',
    'Sugestão Cultural',
]

PROMPT_CLASSIFICACAO = (
    'Você é o GiraBot, IA da rede Cresci e Perdi.\n'
    'Classifique ideias em UMA destas categorias:\n'
    + '\n'.join(f'- "{c}"' for c in CATEGORIAS_IA)
    + '\nRetorne APENAS o nome da categoria, nada mais.'
)

PROMPT_DUPLICIDADE = """Você é um detector de ideias duplicadas para uma rede de franquias.
Compare a ideia atual com a lista de ideias recentes e identifique se há duplicatas ou ideias muito similares.
Considere duplicata quando:
- O objetivo/problema é o mesmo (mesmo que a solução seja diferente)
- A categoria é a mesma e o tema é extremamente similar (>85% de similaridade)
Retorne SEMPRE um JSON válido com esta estrutura:
{
  "isDuplicate": boolean,
  "similarIdeas": [
    {"code": "IDEA-2025-001", "title": "título da ideia similar", "similarity": 95, "reason": "motivo"}
  ],
  "reason": "Explicação geral da análise"
}
Se não houver duplicatas, retorne isDuplicate: false e similarIdeas: []"""

JANELA_DUPLICIDADE_DIAS = 183
LIMITE_DUPLICIDADE = 50


def _formatar_data(value):
    if hasattr(value, 'hour'):
        value = timezone.localtime(value)
    return value.strftime('%d/%m/%Y')


def _notificar(idea, user, message, notification_type=IdeaNotificationType.STATUS):
    notification = IdeaNotification.objects.create(
        user=user,
        idea=idea,
        notification_type=notification_type,
        message=message,
    )
    logger.info("Ideia %s: notificação para %s", idea.code, user.username)
    return notification


def _exigir_curador(actor):
    if not is_curador(actor):
        raise PermissionDenied("Apenas administradores e gestores de setor podem moderar ideias.")


def quorum_minimo():
    """Percentual mínimo de aprovação (setting ideas_voting_quorum, padrão 80)."""
    value = get_setting('ideas_voting_quorum')
    percentage = value.get('percentage') if isinstance(value, dict) else value
    if percentage in (None, ''):
        percentage = 80
    return Decimal(str(percentage))


def _publicar_aprovacao(idea, description, created_by):
    """Espelha a ideia aprovada no Feed se ideas_auto_publish_to_feed estiver ligado."""
    if not Setting.is_enabled('ideas_auto_publish_to_feed'):
        return None
    post, _ = FeedMirrorService.mirror(
        'idea_approved', idea.pk,
        post_type=FeedPostType.IDEA,
        title=f'💡 Ideia Aprovada: {idea.title}',
        description=description,
        module_link=f'/ideias/{idea.pk}',
        reference_id=str(idea.pk),
        media_url=idea.first_media_url,
        created_by=created_by,
    )
    return post


class IdeaService:
    """Operações sobre ideias."""

    @staticmethod
    def next_code(year=None):
        """Próximo código no formato IDEA-<ano>-<seq com 3 dígitos>."""
        year = year or timezone.localdate().year
        prefix = f'IDEA-{year}-'
        sequencias = [
            int(code[len(prefix):])
            for code in Idea.objects.filter(code__startswith=prefix).values_list('code', flat=True)
            if code[len(prefix):].isdigit()
        ]
        return f'{prefix}{max(sequencias, default=0) + 1:03d}'

    @staticmethod
    def submit_idea(user, title, description, category, target_audience=TargetAudience.AMBOS, media_urls=None):
        """
        Registra uma nova ideia em triagem.

        A classificação do GiraBot é best-effort: se falhar, ai_category
        fica vazio e a ideia é criada mesmo assim.

        Raises:
            ValidationError: título/descrição vazios, categoria ou público inválidos
        """
        title = (title or '').strip()
        description = (description or '').strip()
        if not title or not description:
            raise ValidationError("Título e descrição são obrigatórios.")
        if category not in IdeaCategory.values:
            raise ValidationError(f"Categoria inválida: {category}")
        if target_audience not in TargetAudience.values:
            raise ValidationError(f"Público-alvo inválido: {target_audience}")

        profile = getattr(user, 'profile', None)
        with transaction.atomic():
            idea = Idea.objects.create(
                code=IdeaService.next_code(),
                title=title,
                description=description,
                category=category,
                target_audience=target_audience,
                media_urls=list(media_urls or []),
                submitted_by=user,
                unit=profile.unit if profile else None,
            )
        logger.info("Ideia %s submetida por %s", idea.code, user.username)

        ai_category = IdeaService.classify(idea)
        if ai_category:
            idea.ai_category = ai_category
            idea.save(update_fields=['ai_category', 'updated_at'])
        return idea

    @staticmethod
    def classify(idea):
        """Categoria do GiraBot entre CATEGORIAS_IA, ou '' se a IA falhar ou responder fora da lista."""
        prompt = f'Título: {idea.title}\nDescrição: {idea.description}\nCategoria original: {idea.category}'
        try:
            answer = get_client().ask(PROMPT_CLASSIFICACAO, prompt)
        except GiraBotError as e:
            logger.warning("Ideia %s: classificação indisponível (%s)", idea.code, e)
            return ''
        answer = answer.strip().strip('"').strip()
        for categoria in CATEGORIAS_IA:
            if categoria.lower() == answer.lower():
                return categoria
        logger.warning("Ideia %s: classificação fora da lista: %s", idea.code, answer[:100])
        return ''

    @staticmethod
    def detect_duplicates(idea):
        """
        Compara a ideia com as dos últimos seis meses (até 50) usando o GiraBot.

        Resultado apenas consultivo, nunca bloqueia a votação.

        Returns:
            dict com is_duplicate, similar_ideas e reason

        Raises:
            GiraBotError: falha no gateway de IA
        """
        since = timezone.now() - timedelta(days=JANELA_DUPLICIDADE_DIAS)
        recentes = list(
            Idea.objects.exclude(pk=idea.pk)
            .filter(created_at__gte=since)
            .order_by('-created_at')[:LIMITE_DUPLICIDADE]
        )
        if not recentes:
            return {
                'is_duplicate': False,
                'similar_ideas': [],
                'reason': 'Nenhuma ideia recente encontrada para comparação',
            }

        logger.info("Ideia %s: comparando com %s ideias recentes", idea.code, len(recentes))
        lista = '\n---\n'.join(
            f'[{i.code}] {i.title}\nCategoria: {i.category}\nDescrição: {i.description}\nStatus: {i.status}'
            for i in recentes
        )
        prompt = (
            f'**Ideia atual:**\nTítulo: {idea.title}\nDescrição: {idea.description}\n'
            f'Categoria: {idea.category}\n\n**Ideias recentes para comparar:**\n{lista}'
        )
        result = get_client().ask_json(PROMPT_DUPLICIDADE, prompt)
        if not isinstance(result, dict):
            raise GiraBotError("Resposta da detecção de duplicidade em formato inesperado.")
        similares = result.get('similarIdeas') or []
        return {
            'is_duplicate': bool(result.get('isDuplicate')),
            'similar_ideas': [
                {
                    'code': s.get('code', ''),
                    'title': s.get('title', ''),
                    'similarity': s.get('similarity', 0),
                    'reason': s.get('reason', ''),
                }
                for s in similares if isinstance(s, dict)
            ],
            'reason': result.get('reason', ''),
        }

    @staticmethod
    @transaction.atomic
    def cast_vote(idea, user, is_positive, comment=''):
        """
        Registra (ou altera) o voto do usuário e recalcula os contadores.

        Raises:
            ValidationError: ideia fora de votação ou votação encerrada
        """
        idea = Idea.objects.select_for_update().get(pk=idea.pk)
        if idea.status != IdeaStatus.EM_VOTACAO:
            raise ValidationError("A votação desta ideia não está aberta.")
        if idea.vote_end and timezone.now() > idea.vote_end:
            raise ValidationError("A votação desta ideia já foi encerrada.")

        vote, _ = IdeaVote.objects.update_or_create(
            idea=idea,
            user=user,
            defaults={'is_positive': bool(is_positive), 'comment': (comment or '').strip()},
        )
        IdeaService.recount_votes(idea)
        return vote

    @staticmethod
    def recount_votes(idea):
        counts = idea.votes.aggregate(
            total=Count('id'),
            positive=Count('id', filter=Q(is_positive=True)),
        )
        idea.total_votes = counts['total']
        idea.positive_votes = counts['positive']
        idea.negative_votes = counts['total'] - counts['positive']
        idea.save(update_fields=['total_votes', 'positive_votes', 'negative_votes', 'updated_at'])
        return idea

    @staticmethod
    @transaction.atomic
    def approve_for_voting(idea, duration_days, actor):
        """
        Abre a votação pública da ideia por `duration_days` dias.

        Raises:
            PermissionDenied: actor não é curador
            ValidationError: duração fora de 7, 10, 14 ou 21 dias
            TransicaoInvalida: ideia fora de triagem
        """
        _exigir_curador(actor)
        try:
            duration_days = int(duration_days)
        except (TypeError, ValueError):
            raise ValidationError("Duração da votação inválida.")
        if duration_days not in DURACOES_VOTACAO:
            raise ValidationError(
                f"Duração da votação deve ser {', '.join(str(d) for d in DURACOES_VOTACAO)} dias."
            )

        idea.aplicar(IdeaEvento.ABRIR_VOTACAO)
        now = timezone.now()
        idea.vote_start = now
        idea.vote_end = now + timedelta(days=duration_days)
        idea.evaluating_at = now
        idea.save()

        _notificar(
            idea, idea.submitted_by,
            f'Sua ideia "{idea.title}" foi aprovada para votação pública! '
            f'Votação aberta até {_formatar_data(idea.vote_end)}.'
        )
        logger.info("Ideia %s em votação por %s dias (por %s)", idea.code, duration_days, actor.username)
        return idea

    @staticmethod
    @transaction.atomic
    def curate(idea, decision, feedback_text, curator, viability_level='', impact_level=''):
        """
        Decisão de curadoria: aprovar ou recusar a ideia.

        Da triagem só é possível recusar; a aprovação vale para ideias em
        votação. Se aprovada e ideas_auto_publish_to_feed estiver ligado, a
        ideia é publicada no Feed.

        Raises:
            PermissionDenied: curador sem papel de curadoria
            ValidationError: devolutiva vazia, decisão ou níveis inválidos
            TransicaoInvalida: decisão não permitida no status atual
        """
        _exigir_curador(curator)
        feedback_text = (feedback_text or '').strip()
        if not feedback_text:
            raise ValidationError("A devolutiva é obrigatória.")
        eventos = {IdeaStatus.APROVADA: IdeaEvento.APROVAR, IdeaStatus.RECUSADA: IdeaEvento.RECUSAR}
        if decision not in eventos:
            raise ValidationError("Decisão deve ser 'aprovada' ou 'recusada'.")
        for level in (viability_level, impact_level):
            if level and level not in Level.values:
                raise ValidationError(f"Nível inválido: {level}")

        idea.aplicar(eventos[decision])
        idea.feedback = feedback_text
        idea.viability_level = viability_level or ''
        idea.impact_level = impact_level or ''
        idea.curator = curator
        idea.resolved_at = timezone.now()
        idea.quorum = idea.approval_rate
        idea.save()

        IdeaFeedback.objects.create(
            idea=idea,
            curator=curator,
            feedback_text=feedback_text,
            status_update=decision,
            viability_level=idea.viability_level,
            impact_level=idea.impact_level,
        )
        _notificar(idea, idea.submitted_by, f'Sua ideia "{idea.title}" foi {decision}. {feedback_text}')

        if decision == IdeaStatus.APROVADA:
            _publicar_aprovacao(idea, idea.description, curator)
        logger.info("Ideia %s %s na curadoria de %s", idea.code, decision, curator.username)
        return idea

    @staticmethod
    @transaction.atomic
    def start_implementation(idea, responsible, deadline, actor, notes=''):
        """
        Coloca uma ideia aprovada em implementação.

        Raises:
            PermissionDenied: actor não é curador
            ValidationError: responsável/prazo ausentes, prazo no passado
                ou responsável sem papel admin/gestor_setor
            TransicaoInvalida: ideia não está aprovada
        """
        _exigir_curador(actor)
        if responsible is None or deadline is None:
            raise ValidationError("Responsável e prazo são obrigatórios.")
        if deadline < timezone.localdate():
            raise ValidationError("O prazo não pode ser anterior a hoje.")
        if resolve_role(responsible) not in PAPEIS.RESPONSAVEIS_IMPLEMENTACAO:
            raise ValidationError("O responsável deve ser administrador ou gestor de setor.")

        idea.aplicar(IdeaEvento.INICIAR_IMPLEMENTACAO)
        idea.implemented_by = responsible
        idea.implementation_deadline = deadline
        idea.implementation_notes = (notes or '').strip()
        idea.save()

        _notificar(
            idea, idea.submitted_by,
            f'🚀 Sua ideia "{idea.title}" entrou em implementação! Previsão: {_formatar_data(deadline)}'
        )
        _notificar(
            idea, responsible,
            f'Você foi designado responsável pela implementação da ideia "{idea.title}"',
            notification_type=IdeaNotificationType.ASSIGNMENT,
        )
        logger.info("Ideia %s em implementação (responsável %s)", idea.code, responsible.username)
        return idea

    @staticmethod
    @transaction.atomic
    def mark_implemented(idea, actor, feedback_text='', publish_to_feed=False):
        """
        Conclui a implementação.

        Com publish_to_feed, publica um comunicado fixado no Feed (uma única
        vez por ideia).

        Raises:
            PermissionDenied: actor não é curador
            TransicaoInvalida: ideia não está em implementação
        """
        _exigir_curador(actor)
        feedback_text = (feedback_text or '').strip()

        idea.aplicar(IdeaEvento.CONCLUIR_IMPLEMENTACAO)
        if feedback_text:
            idea.feedback = feedback_text
        idea.implemented_at = timezone.now()
        idea.save()

        message = f'🎉 Sua ideia "{idea.title}" foi implementada com sucesso!'
        if feedback_text:
            message += f'\n\n{feedback_text}'
        _notificar(idea, idea.submitted_by, message)

        if publish_to_feed:
            description = f'"{idea.title}" foi implementada e já está ativa em toda a rede!\n\n{idea.description}'
            if feedback_text:
                description += f'\n\n**Resultado:** {feedback_text}'
            FeedMirrorService.mirror(
                'idea_implemented', idea.pk,
                post_type=FeedPostType.IDEA,
                title='🚀 Ideia Implementada com Sucesso',
                description=description,
                module_link=f'/ideias/{idea.pk}',
                reference_id=str(idea.pk),
                media_url=idea.first_media_url,
                created_by=idea.submitted_by,
                pinned=True,
            )
        logger.info("Ideia %s implementada (por %s)", idea.code, actor.username)
        return idea

    @staticmethod
    def close_expired_voting(now=None):
        """
        Apura as votações vencidas (status em_votacao e vote_end no passado).

        Cada ideia é apurada na própria transação: aprovação
        (favoráveis/total*100, 0 sem votos) >= quórum → aprovada, senão
        recusada. Uma ideia que falha continua em votação e volta a ser
        apurada na próxima execução.

        Returns:
            lista de dicts com code, status e approval_rate das ideias apuradas
        """
        now = now or timezone.now()
        expiradas = list(
            Idea.objects.select_related('submitted_by__profile')
            .filter(status=IdeaStatus.EM_VOTACAO, vote_end__lt=now)
        )
        logger.info("%s votações expiradas encontradas", len(expiradas))
        if not expiradas:
            return []

        minimo = quorum_minimo()
        resultados = []
        for idea in expiradas:
            # falha em uma ideia desfaz só a apuração dela; as demais seguem
            try:
                resultados.append(IdeaService._apurar(idea, minimo, now))
            except Exception:
                logger.exception("Ideia %s: falha ao apurar votação, mantida em votação", idea.code)
        return resultados

    @staticmethod
    @transaction.atomic
    def _apurar(idea, minimo, now):
        rate = idea.approval_rate
        aprovada = rate >= minimo
        idea.aplicar(IdeaEvento.APROVAR if aprovada else IdeaEvento.RECUSAR)
        idea.quorum = rate
        idea.resolved_at = now
        idea.save()

        if aprovada:
            message = f'🎉 Sua ideia "{idea.title}" foi aprovada pela comunidade com {rate:.1f}% de aprovação!'
        else:
            message = (
                f'Sua ideia "{idea.title}" não atingiu o quórum mínimo '
                f'({rate:.1f}% de {minimo:g}% necessário).'
            )
        _notificar(idea, idea.submitted_by, message)
        logger.info("Ideia %s: %s (%.1f%%)", idea.code, idea.status, rate)

        if aprovada:
            _publicar_aprovacao(
                idea,
                f'"{idea.title}" foi aprovada com {rate:.1f}% dos votos!\n\n{idea.description}',
                idea.submitted_by,
            )
            IdeaService._parabenizar_por_whatsapp(idea, rate)
        return {'code': idea.code, 'status': idea.status, 'approval_rate': float(rate)}

    @staticmethod
    def _parabenizar_por_whatsapp(idea, rate):
        if not Setting.is_enabled('ideas_whatsapp_notifications'):
            return False
        profile = getattr(idea.submitted_by, 'profile', None)
        if profile is None or not profile.wants_whatsapp:
            return False
        message = (
            f'🎉 *Parabéns, {profile.display_name}!*\n\n'
            f'Sua ideia *"{idea.title}"* foi aprovada pela comunidade com *{rate:.1f}% de aprovação*!\n\n'
            'Em breve você receberá atualizações sobre a implementação.\n\n'
            '_Cresci e Perdi - Rede de Inovação_'
        )
        enviar_whatsapp.delay(profile.phone, message)
        return True

    @staticmethod
    def stats():
        """Números do painel de ideias."""
        por_status = dict(
            Idea.objects.values_list('status').annotate(total=Count('id')).order_by()
        )
        total = sum(por_status.values())
        aprovadas = sum(
            por_status.get(s, 0)
            for s in (IdeaStatus.APROVADA, IdeaStatus.EM_IMPLEMENTACAO, IdeaStatus.IMPLEMENTADA)
        )
        recusadas = por_status.get(IdeaStatus.RECUSADA, 0)
        decididas = aprovadas + recusadas
        taxa = round(aprovadas * 100 / decididas, 1) if decididas else 0.0
        votos = Idea.objects.aggregate(total=Sum('total_votes'))['total'] or 0
        return {
            'total': total,
            'by_status': {status: por_status.get(status, 0) for status in IdeaStatus.values},
            'em_triagem': por_status.get(IdeaStatus.TRIAGEM, 0) + por_status.get(IdeaStatus.PENDING, 0),
            'em_votacao': por_status.get(IdeaStatus.EM_VOTACAO, 0),
            'implementadas': por_status.get(IdeaStatus.IMPLEMENTADA, 0),
            'approval_rate': taxa,
            'total_votes': votos,
        }
