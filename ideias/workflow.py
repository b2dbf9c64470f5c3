"""
Máquina de estados das ideias.

Fluxo:
    triagem/pending → em_votacao → aprovada → em_implementacao → implementada
                   ↘ recusada     ↘ recusada

`pending` é o nome antigo de `triagem`; os dois aceitam os mesmos eventos.
Qualquer par (status, evento) fora de TRANSICOES levanta TransicaoInvalida.
"""
from django.core.exceptions import ValidationError
from django.db import models


class IdeaStatus(models.TextChoices):
    TRIAGEM = 'triagem', 'Em Triagem'
    PENDING = 'pending', 'Pendente'
    EM_VOTACAO = 'em_votacao', 'Em Votação'
    APROVADA = 'aprovada', 'Aprovada'
    RECUSADA = 'recusada', 'Recusada'
    EM_IMPLEMENTACAO = 'em_implementacao', 'Em Implementação'
    IMPLEMENTADA = 'implementada', 'Implementada'


class IdeaEvento(models.TextChoices):
    ABRIR_VOTACAO = 'abrir_votacao', 'abrir votação para'
    APROVAR = 'aprovar', 'aprovar'
    RECUSAR = 'recusar', 'recusar'
    INICIAR_IMPLEMENTACAO = 'iniciar_implementacao', 'iniciar a implementação de'
    CONCLUIR_IMPLEMENTACAO = 'concluir_implementacao', 'concluir a implementação de'


STATUS_FINAIS = (IdeaStatus.IMPLEMENTADA, IdeaStatus.RECUSADA)

TRANSICOES = {
    (IdeaStatus.TRIAGEM, IdeaEvento.ABRIR_VOTACAO): IdeaStatus.EM_VOTACAO,
    (IdeaStatus.TRIAGEM, IdeaEvento.RECUSAR): IdeaStatus.RECUSADA,
    (IdeaStatus.PENDING, IdeaEvento.ABRIR_VOTACAO): IdeaStatus.EM_VOTACAO,
    (IdeaStatus.PENDING, IdeaEvento.RECUSAR): IdeaStatus.RECUSADA,
    (IdeaStatus.EM_VOTACAO, IdeaEvento.APROVAR): IdeaStatus.APROVADA,
    (IdeaStatus.EM_VOTACAO, IdeaEvento.RECUSAR): IdeaStatus.RECUSADA,
    (IdeaStatus.APROVADA, IdeaEvento.INICIAR_IMPLEMENTACAO): IdeaStatus.EM_IMPLEMENTACAO,
    (IdeaStatus.EM_IMPLEMENTACAO, IdeaEvento.CONCLUIR_IMPLEMENTACAO): IdeaStatus.IMPLEMENTADA,
}


class TransicaoInvalida(ValidationError):
    """O evento não é permitido no status atual da ideia."""

    def __init__(self, status, evento):
        self.status = status
        self.evento = evento
        super().__init__(
            f"Transição inválida: não é possível {_label(IdeaEvento, evento)} "
            f"uma ideia com status '{_label(IdeaStatus, status)}'."
        )


def _label(enum, value):
    try:
        return enum(value).label
    except ValueError:
        return value


def proximo_status(status, evento):
    """
    Retorna o status resultante de aplicar `evento` em `status`.

    Raises:
        TransicaoInvalida: se a transição não existir
    """
    try:
        return TRANSICOES[(IdeaStatus(status), IdeaEvento(evento))]
    except (KeyError, ValueError):
        raise TransicaoInvalida(status, evento)


def eventos_permitidos(status):
    """Eventos aceitos no status informado (usado pela API para montar as ações)."""
    return [evento for (origem, evento) in TRANSICOES if origem == status]
