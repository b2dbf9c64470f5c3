"""
Services do Mural.

Fluxo de cada postagem (ou resposta):
    1. anonimização pelo GiraBot
    2. termos proibidos → rejected
    3. classificação de qualidade: approved | rejected | review
    4. gravação com status, approval_source e approved_at
    5. approved → Feed (postagens) e aviso ao autor
       review   → aviso aos moderadores

Se a IA falhar, o texto original é mantido, a postagem fica pending, a
etapa que falhou é registrada em metadata["ai_fallback"] e os
moderadores são avisados.
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.models import Profile
from accounts.roles import is_curador
from core.models import NotificationType
from core.services import NotificationService, get_setting
from feed.models import FeedPostType
from feed.services import FeedMirrorService
from girabot.client import GiraBotError, get_client

from .config import default_for
from .models import ApprovalSource, MuralPost, MuralResponse, MuralSetting, MuralStatus
from .validators import validate_mural_image

logger = logging.getLogger(__name__)

TAMANHO_MINIMO = 10

QUALIDADES = ('approved', 'rejected', 'review')

PROMPT_ANONIMIZACAO = """Você é o GiraBot, moderador do Mural de pedidos de ajuda anônimos.

CONTEÚDO ORIGINAL:
${content}

Sua tarefa é ANONIMIZAR o texto removendo TODAS as informações identificáveis:
- Nomes completos de pessoas (ex: "João Silva" → "um colaborador")
- CPF e CNPJ (→ "[removido]")
- Nomes de cidades específicas (→ "uma cidade", "a região")
- Códigos/números de unidades (ex: "loja 123" → "uma unidade")
- Endereços completos, telefones, emails, placas de veículos
- Números de conta ou documento
- Qualquer dado que possa identificar uma pessoa ou local específico

MANTER: a essência da mensagem, o contexto, categorias gerais e siglas de estados.

IMPORTANTE:
- NÃO adicione explicações ou comentários
- Retorne APENAS o texto anonimizado, mantendo o tom original
- Se a mensagem não tiver dados pessoais, retorne igual"""

PROMPT_SISTEMA_ANONIMIZACAO = (
    'Você é um assistente de anonimização. Retorne APENAS o texto anonimizado, sem explicações.'
)

PROMPT_VALIDACAO = """Você é o GiraBot, moderador do Mural Cresci e Perdi, um espaço anônimo
onde colaboradores pedem ajuda e compartilham conquistas.
Classifique a mensagem:
- "approved": construtiva, respeitosa e adequada ao Mural
- "rejected": ofensiva, discriminatória, spam ou sem relação com o trabalho
- "review": dúvida, reclamação sensível ou qualquer caso incerto
Retorne SEMPRE um JSON válido:
{"quality": "approved" | "rejected" | "review", "reason": "motivo curto", "confidence": 0.0 a 1.0}"""


def mural_setting(key):
    return MuralSetting.get_value(key, default_for(key))


def mural_enabled(key):
    return MuralSetting.is_enabled(key, default=default_for(key)['enabled'])


def anonymize(content):
    """
    Remove dados identificáveis do texto.

    O prompt pode ser trocado pelo setting mural_ai_prompt_filter
    (o marcador ${content} recebe o texto).

    Raises:
        GiraBotError: falha no gateway de IA
    """
    prompt = get_setting('mural_ai_prompt_filter') or PROMPT_ANONIMIZACAO
    if isinstance(prompt, dict):
        prompt = prompt.get('prompt') or PROMPT_ANONIMIZACAO
    if '${content}' in prompt:
        prompt = prompt.replace('${content}', content)
    else:
        prompt = f'{prompt}\n\nCONTEÚDO ORIGINAL:\n{content}'
    return get_client().ask(PROMPT_SISTEMA_ANONIMIZACAO, prompt) or content


def validate_quality(content, category_name=''):
    """
    Classificação de qualidade pelo GiraBot.

    Returns:
        dict com quality (approved/rejected/review), reason e confidence
        (1.0 quando a IA não informa)

    Raises:
        GiraBotError: falha no gateway de IA
    """
    result = get_client().ask_json(PROMPT_VALIDACAO, f'Categoria: {category_name}\nMensagem: {content}')
    if not isinstance(result, dict):
        raise GiraBotError("Resposta da validação em formato inesperado.")
    quality = str(result.get('quality', 'review')).lower()
    if quality not in QUALIDADES:
        quality = 'review'
    try:
        confidence = float(result['confidence'])
    except (KeyError, TypeError, ValueError):
        confidence = 1.0
    return {
        'quality': quality,
        'reason': str(result.get('reason') or 'Validação automática'),
        'confidence': confidence,
    }


def find_forbidden_words(content):
    words = mural_setting('forbidden_words')
    words = words.get('words', []) if isinstance(words, dict) else (words or [])
    lowered = content.lower()
    return [w for w in words if w and w.lower() in lowered]


def moderate_content(content, category_name=''):
    """
    Executa anonimização e classificação.

    Returns:
        dict com content (texto a publicar), quality, reason e fallback
        (lista das etapas de IA que falharam)
    """
    fallback = []
    try:
        clean = anonymize(content)
    except GiraBotError as e:
        logger.warning("Mural: anonimização indisponível, texto original mantido (%s)", e)
        clean = content
        fallback.append('anonimizacao')

    proibidos = find_forbidden_words(content)
    if proibidos:
        logger.info("Mural: conteúdo rejeitado por termos proibidos")
        return {
            'content': clean,
            'quality': 'rejected',
            'reason': 'Conteúdo contém termos não permitidos.',
            'fallback': fallback,
        }

    if not mural_enabled('ai_moderation'):
        return {'content': clean, 'quality': 'review', 'reason': 'Moderação manual', 'fallback': fallback}

    try:
        result = validate_quality(clean, category_name)
    except GiraBotError as e:
        logger.warning("Mural: validação indisponível, enviando para revisão (%s)", e)
        fallback.append('validacao')
        return {'content': clean, 'quality': 'review', 'reason': 'Validação automática indisponível', 'fallback': fallback}

    quality = result['quality']
    if quality == 'approved':
        auto = mural_setting('auto_approve')
        auto = auto if isinstance(auto, dict) else {}
        min_confidence = float(auto.get('min_confidence', 0.7))
        if not auto.get('enabled') or result['confidence'] < min_confidence:
            quality = 'review'
    if fallback:
        # falha parcial da IA sempre vai para revisão manual
        quality = 'review'
    return {'content': clean, 'quality': quality, 'reason': result['reason'], 'fallback': fallback}


def _status_inicial(quality):
    return {
        'approved': MuralStatus.APPROVED,
        'rejected': MuralStatus.REJECTED,
    }.get(quality, MuralStatus.PENDING)


def _validar_texto(content):
    content = (content or '').strip()
    if not content:
        raise ValidationError("Por favor, escreva sua mensagem.")
    if len(content) < TAMANHO_MINIMO:
        raise ValidationError(f"Por favor, escreva pelo menos {TAMANHO_MINIMO} caracteres.")
    return content


def notify_moderators(content_type, content_id, reason, category=None):
    """
    Avisa os moderadores de que há conteúdo aguardando revisão.

    Destinatários: curador da categoria e perfis ativos com papel em
    mural_curator_roles. Retorna quantos foram avisados.
    """
    roles = get_setting('mural_curator_roles') or []
    profiles = {
        p.user_id: p
        for p in Profile.objects.select_related('user').filter(role__in=roles, is_active=True)
    }
    users = {p.user_id: p.user for p in profiles.values()}
    if category is not None and category.curator_id:
        users.setdefault(category.curator_id, category.curator)

    label = 'post' if content_type == 'post' else 'resposta'
    title = f'🔍 Nova {label} para revisar'
    message = f'Uma {label} no Mural Cresci e Perdi precisa de moderação manual: {reason}'
    for user in users.values():
        NotificationService.notify(
            user, NotificationType.MURAL_MODERATION, title, message,
            reference_id=content_id, send_whatsapp=True,
        )
    logger.info("Mural: %s moderadores avisados (%s %s)", len(users), content_type, content_id)
    return len(users)


def mirror_to_feed(post, approval_source):
    """
    Publica a postagem aprovada no Feed (uma única vez por postagem).

    Título: prefixo pela origem (🤖 IA, ✅ moderador), nome da categoria
    e quantidade de respostas aprovadas.
    """
    if not mural_enabled('auto_integrate_feed'):
        return None
    prefix = {'ai': '🤖', 'admin': '✅'}.get(approval_source, '💬')
    respostas = post.responses.filter(status=MuralStatus.APPROVED).count()
    title = f'{prefix} {post.category.name}'
    if respostas:
        title += f" - {respostas} {'resposta' if respostas == 1 else 'respostas'}"

    feed_post, created = FeedMirrorService.mirror(
        'mural', post.pk,
        post_type=FeedPostType.MURAL,
        title=title,
        description=post.content,
        module_link=f'/mural/{post.pk}',
        reference_id=str(post.pk),
    )
    if created:
        post.metadata = {
            **(post.metadata or {}),
            'feed_post_id': feed_post.pk,
            'feed_integrated_at': timezone.now().isoformat(),
            'feed_integration_source': approval_source,
        }
        post.save(update_fields=['metadata', 'updated_at'])
    return feed_post


class MuralService:
    """Submissão e moderação de postagens e respostas."""

    @staticmethod
    def submit_post(author, category, content, image=None):
        """
        Cria uma postagem passando pelo fluxo de anonimização e moderação.

        Raises:
            ValidationError: texto vazio/curto, categoria inativa ou imagem inválida
        """
        content = _validar_texto(content)
        if not category.is_active:
            raise ValidationError("Categoria inativa.")
        if image:
            validate_mural_image(image)

        result = moderate_content(content, category.name)
        status = _status_inicial(result['quality'])

        with transaction.atomic():
            post = MuralPost(
                author=author,
                category=category,
                content=result['content'],
                status=status,
                ai_reason=result['reason'],
            )
            if image:
                post.image = image
            if result['fallback']:
                post.metadata = {'ai_fallback': result['fallback']}
            if status == MuralStatus.APPROVED:
                post.approval_source = ApprovalSource.AI
                post.approved_at = timezone.now()
            post.save()

            if status == MuralStatus.APPROVED:
                mirror_to_feed(post, 'ai')
                NotificationService.notify(
                    author, NotificationType.MURAL_APPROVED,
                    '🧠 Sua postagem foi aprovada pela IA',
                    'Seu pedido no Mural Cresci e Perdi foi aprovado automaticamente e está visível para todos.',
                    reference_id=post.pk,
                )
            elif status == MuralStatus.PENDING:
                notify_moderators('post', post.pk, result['reason'], category=category)

        logger.info("Mural: postagem %s criada com status %s", post.pk, post.status)
        return post

    @staticmethod
    def submit_response(responder, post, content):
        """
        Cria uma resposta para uma postagem aprovada, com a mesma moderação.

        Raises:
            ValidationError: texto vazio/curto ou postagem não aprovada
        """
        content = _validar_texto(content)
        if post.status != MuralStatus.APPROVED:
            raise ValidationError("Só é possível responder postagens aprovadas.")

        result = moderate_content(content, post.category.name)
        status = _status_inicial(result['quality'])

        with transaction.atomic():
            response = MuralResponse(
                post=post,
                responder=responder,
                content=result['content'],
                status=status,
                ai_reason=result['reason'],
            )
            if result['fallback']:
                response.metadata = {'ai_fallback': result['fallback']}
            if status == MuralStatus.APPROVED:
                response.approval_source = ApprovalSource.AI
                response.approved_at = timezone.now()
            response.save()

            if status == MuralStatus.APPROVED:
                MuralService._on_response_approved(response)
            elif status == MuralStatus.PENDING:
                notify_moderators('response', response.pk, result['reason'], category=post.category)

        logger.info("Mural: resposta %s criada com status %s", response.pk, response.status)
        return response

    @staticmethod
    def _on_response_approved(response):
        post = response.post
        post.response_count = post.responses.filter(status=MuralStatus.APPROVED).count()
        post.save(update_fields=['response_count', 'updated_at'])
        if post.author_id != response.responder_id:
            NotificationService.notify(
                post.author, NotificationType.MURAL_RESPONSE,
                '🧩 Resposta no Mural',
                'O seu pedido de ajuda recebeu uma resposta no Mural Cresci e Perdi.',
                reference_id=post.pk,
                send_whatsapp=True,
            )

    @staticmethod
    def _decidir(obj, decision, moderator):
        if not is_curador(moderator):
            raise PermissionDenied("Apenas moderadores podem revisar o Mural.")
        targets = {'approve': MuralStatus.APPROVED, 'reject': MuralStatus.REJECTED}
        if decision not in targets:
            raise ValidationError("Decisão deve ser 'approve' ou 'reject'.")
        status = targets[decision]
        if obj.status == status:
            raise ValidationError(f"Conteúdo já está {obj.get_status_display().lower()}.")

        obj.status = status
        obj.reviewed_by = moderator
        obj.approval_source = ApprovalSource.MANUAL
        obj.approved_at = timezone.now() if status == MuralStatus.APPROVED else None
        obj.save()
        return status

    @staticmethod
    @transaction.atomic
    def moderate_post(post, decision, moderator):
        """
        Aprovação ou rejeição manual de uma postagem.

        Raises:
            PermissionDenied: moderador sem papel de curadoria
            ValidationError: decisão inválida ou igual ao status atual
        """
        status = MuralService._decidir(post, decision, moderator)
        if status == MuralStatus.APPROVED:
            mirror_to_feed(post, 'admin')
            NotificationService.notify(
                post.author, NotificationType.MURAL_APPROVED,
                '✅ Sua postagem foi aprovada',
                'Sua postagem no Mural Cresci e Perdi foi aprovada por um moderador e está visível para todos.',
                reference_id=post.pk,
            )
        else:
            NotificationService.notify(
                post.author, NotificationType.MURAL_REJECTED,
                'Sua postagem não foi aprovada',
                'Sua postagem no Mural Cresci e Perdi não atende aos critérios de publicação.',
                reference_id=post.pk,
            )
        logger.info("Mural: postagem %s %s por %s", post.pk, status, moderator.username)
        return post

    @staticmethod
    @transaction.atomic
    def moderate_response(response, decision, moderator):
        """Aprovação ou rejeição manual de uma resposta."""
        status = MuralService._decidir(response, decision, moderator)
        if status == MuralStatus.APPROVED:
            MuralService._on_response_approved(response)
        else:
            post = response.post
            post.response_count = post.responses.filter(status=MuralStatus.APPROVED).count()
            post.save(update_fields=['response_count', 'updated_at'])
        logger.info("Mural: resposta %s %s por %s", response.pk, status, moderator.username)
        return response
