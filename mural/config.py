"""
Valores padrão das configurações do Mural (tabela mural_settings).
"""

MURAL_SETTINGS_PADRAO = {
    'auto_approve': (
        {'enabled': True, 'min_confidence': 0.7},
        'Aprovação automática pela IA e confiança mínima exigida',
    ),
    'ai_moderation': (
        {'enabled': True},
        'Classificação de qualidade das postagens pelo GiraBot',
    ),
    'auto_integrate_feed': (
        {'enabled': True},
        'Publica no Feed as postagens aprovadas',
    ),
    'forbidden_words': (
        {'words': []},
        'Termos que rejeitam a postagem antes da análise da IA',
    ),
}


def default_for(key):
    return MURAL_SETTINGS_PADRAO[key][0]
