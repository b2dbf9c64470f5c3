"""
Correção de quizzes de treinamento e feedback do GiraBot.
"""
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction

from accounts.roles import resolve_role
from core.models import NotificationType
from core.services import NotificationService, get_setting
from girabot.client import GiraBotError, get_client

from .models import QuizAttempt

logger = logging.getLogger(__name__)

FEEDBACK_PADRAO = 'Sua resposta não está correta. Revise o conteúdo e tente novamente.'

PROMPT_FEEDBACK = """Você é GiraBot, assistente de treinamento da Cresci e Perdi.
Sua função é dar feedback pedagógico sobre respostas de quiz.
Seja gentil, instrutivo e específico. Use emojis para tornar o feedback amigável.
Explique por que a resposta está incorreta e oriente o colaborador sobre o conceito correto.
Mantenha o feedback em 2-3 frases curtas."""


def nota_minima():
    value = get_setting('training_min_score')
    percentage = value.get('percentage') if isinstance(value, dict) else value
    return Decimal(str(percentage if percentage not in (None, '') else 70))


def quiz_feedback(question, answer_index, context=''):
    """
    Feedback para uma resposta errada.

    Se o GiraBot falhar, usa a explicação cadastrada na pergunta.
    """
    prompt = (
        f'Questão: {question.question}\n'
        f'Resposta do colaborador: {question.option_text(answer_index)}\n'
        f'Resposta correta: {question.option_text(question.correct_option)}\n'
    )
    if context:
        prompt += f'Contexto adicional: {context}\n'
    prompt += 'Dê um feedback construtivo explicando o erro e orientando sobre o conceito correto.'
    try:
        return get_client().ask(PROMPT_FEEDBACK, prompt), 'ai'
    except GiraBotError as e:
        logger.warning("Quiz: feedback do GiraBot indisponível para a pergunta %s (%s)", question.pk, e)
        return question.explanation or FEEDBACK_PADRAO, 'static'


def _parse_answers(answers):
    parsed = {}
    for key, value in (answers or {}).items():
        try:
            parsed[int(key)] = int(value) if value is not None else None
        except (TypeError, ValueError):
            raise ValidationError(f"Resposta inválida para a pergunta {key}.")
    return parsed


class QuizService:

    @staticmethod
    def submit_attempt(user, training, answers):
        """
        Corrige o quiz e grava a tentativa.

        Args:
            answers: {id_da_pergunta: índice_da_alternativa}

        Raises:
            ValidationError: treinamento inativo, sem perguntas, indisponível
                para o papel do usuário ou respostas inválidas
        """
        if not training.is_active:
            raise ValidationError("Treinamento inativo.")
        if not training.is_available_for(resolve_role(user)):
            raise ValidationError("Este treinamento não está disponível para o seu perfil.")
        questions = list(training.questions.all())
        if not questions:
            raise ValidationError("Este treinamento não possui quiz.")
        answers = _parse_answers(answers)

        correct = 0
        feedback = []
        for question in questions:
            answer = answers.get(question.pk)
            if answer == question.correct_option:
                correct += 1
                continue
            text, source = quiz_feedback(question, answer, context=training.title)
            feedback.append({
                'question_id': question.pk,
                'answer': answer,
                'correct_option': question.correct_option,
                'feedback': text,
                'source': source,
            })

        score = (Decimal(correct) * 100 / Decimal(len(questions))).quantize(Decimal('0.01'))
        passed = score >= nota_minima()

        with transaction.atomic():
            attempt = QuizAttempt.objects.create(
                training=training,
                user=user,
                answers={str(k): v for k, v in answers.items()},
                correct_count=correct,
                total_questions=len(questions),
                score=score,
                passed=passed,
                feedback=feedback,
            )
            if passed:
                NotificationService.notify(
                    user, NotificationType.TRAINING,
                    '🎓 Treinamento concluído',
                    f'Você foi aprovado no quiz de "{training.title}" com {score:.0f}% de acertos.',
                    reference_id=training.pk,
                )
        logger.info(
            "Quiz do treinamento %s: %s fez %s%% (%s)",
            training.pk, user.username, score, 'aprovado' if passed else 'reprovado',
        )
        return attempt
