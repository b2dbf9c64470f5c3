"""
Valores padrão das configurações de negócio (tabela settings).

Quando a chave não existe no banco os services usam estes valores;
o comando `seed_configuracoes` grava todos eles.
"""

SETTINGS_PADRAO = {
    'ideas_voting_quorum': (
        {'percentage': 80},
        'Percentual mínimo de votos favoráveis para aprovar uma ideia',
    ),
    'ideas_auto_publish_to_feed': (
        {'enabled': False},
        'Publica no Feed as ideias aprovadas',
    ),
    'ideas_whatsapp_notifications': (
        {'enabled': False},
        'Avisa por WhatsApp o autor de uma ideia aprovada pela comunidade',
    ),
    'mural_curator_roles': (
        ['admin', 'gestor_setor'],
        'Papéis que recebem os pedidos de moderação do Mural',
    ),
    'whatsapp_queue_delay_min': (3, 'Intervalo mínimo (s) entre mensagens de WhatsApp'),
    'whatsapp_queue_delay_max': (5, 'Intervalo máximo (s) entre mensagens de WhatsApp'),
    'training_min_score': (
        {'percentage': 70},
        'Nota mínima (%) para aprovação em quiz de treinamento',
    ),
}


def default_for(key):
    return SETTINGS_PADRAO[key][0]
