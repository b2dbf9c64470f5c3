"""
Chat do GiraBot (girabot-universal).
"""
import logging

from django.core.exceptions import ValidationError

from accounts.roles import resolve_role

from .client import get_client
from .models import AIModule, AISession

logger = logging.getLogger(__name__)

HISTORICO_MAXIMO = 10

PROMPT_BASE = 'Você é o GiraBot, assistente institucional da rede Cresci e Perdi.'

CONTEXTO_MODULOS = {
    AIModule.FEED: 'Módulo Feed - comunicação interna com posts, curtidas e comentários.',
    AIModule.TREINAMENTOS: 'Módulo Treinamentos - capacitação com treinamentos, quizzes e certificados.',
    AIModule.MURAL: 'Módulo Mural - espaço anônimo para compartilhar conquistas e pedir ajuda.',
    AIModule.IDEIAS: 'Módulo Ideias - submissão e votação de ideias de melhoria.',
    AIModule.GERAL: 'Portal Cresci e Perdi - comunicação interna e operação das unidades.',
}

INSTRUCOES = """INSTRUÇÕES:
1. Responda de forma clara, concisa e profissional
2. Use o contexto fornecido para dar respostas precisas
3. Se não souber algo, admita e sugira onde procurar
4. Adapte sua resposta ao cargo do usuário: {role}
5. Use emojis moderadamente"""


def build_system_prompt(module, role, field_name=''):
    contexto = CONTEXTO_MODULOS.get(module, CONTEXTO_MODULOS[AIModule.GERAL])
    if field_name:
        contexto += f'\n\nCampo em questão: {field_name}'
    return (
        f'{PROMPT_BASE}\n\nPAPEL E CONTEXTO:\n{contexto}\n\n'
        + INSTRUCOES.format(role=role or 'colaborador')
    )


def history_messages(user, conversation_id):
    """Últimas trocas da conversa, da mais antiga para a mais recente."""
    sessions = list(
        AISession.objects.filter(user=user, conversation_id=conversation_id)
        .order_by('-created_at')[:HISTORICO_MAXIMO]
    )
    messages = []
    for session in reversed(sessions):
        messages.append({'role': 'user', 'content': session.question})
        messages.append({'role': 'assistant', 'content': session.answer})
    return messages


def ask(user, message, module=AIModule.GERAL, conversation_id=None, field_name=''):
    """
    Envia a pergunta ao GiraBot e grava a troca em ai_sessions.

    Raises:
        ValidationError: mensagem vazia ou módulo desconhecido
        GiraBotError: falha no gateway de IA (nada é gravado)
    """
    message = (message or '').strip()
    if not message:
        raise ValidationError('A mensagem é obrigatória.')
    if module not in AIModule.values:
        raise ValidationError(f'Módulo inválido: {module}')

    messages = [{'role': 'system', 'content': build_system_prompt(module, resolve_role(user), field_name)}]
    if conversation_id:
        messages.extend(history_messages(user, conversation_id))
    messages.append({'role': 'user', 'content': message})

    logger.info("GiraBot: pergunta de %s no módulo %s", user.username, module)
    result = get_client().chat(messages, temperature=0.7)

    extra = {'conversation_id': conversation_id} if conversation_id else {}
    return AISession.objects.create(
        user=user,
        module=module,
        question=message,
        answer=result['content'],
        model_used=result['model'],
        tokens_used=result['tokens_used'],
        response_time_ms=result['response_time_ms'],
        **extra,
    )
