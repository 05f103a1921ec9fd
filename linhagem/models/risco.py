# =================================================================
# ARQUIVO: risco.py (VERSÃO 1.0.0)
# OBJETIVO: Classificar o percentual de parentesco em faixas de risco
#           e conselhos de compra/acasalamento.
# =================================================================
from typing import Dict

# Limites fixos (em %) das faixas de risco
LIMITE_RISCO_MODERADO = 3.0
LIMITE_RISCO_ALTO = 8.0

TEXTOS_RECOMENDACAO = {
    'low': 'Acasalamento seguro, com baixo risco de consanguinidade. Recomendado para preservar a genética.',
    'moderate': 'Risco moderado de consanguinidade. Aceitável com acompanhamento veterinário e avaliação genética.',
    'high': 'Alto risco de consanguinidade. NÃO recomendado. Procure alternativas com maior diversidade genética.',
}

CONSELHOS_COMPRA = {
    'low': 'recommended',
    'moderate': 'consider_carefully',
    'high': 'not_recommended',
}


def nivel_de_risco(percentual: float) -> str:
    if percentual < LIMITE_RISCO_MODERADO:
        return 'low'
    if percentual < LIMITE_RISCO_ALTO:
        return 'moderate'
    return 'high'


def classificar_risco(percentual: float) -> Dict[str, str]:
    """
    Classifica o percentual de parentesco (coeficiente * 100).

    <3 -> low/recommended, 3 a <8 -> moderate/consider_carefully,
    >=8 -> high/not_recommended.
    """
    nivel = nivel_de_risco(percentual)
    return {
        "nivel_risco": nivel,
        "recomendacao": TEXTOS_RECOMENDACAO[nivel],
        "conselho_compra": CONSELHOS_COMPRA[nivel],
    }
