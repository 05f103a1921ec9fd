# =================================================================
# ARQUIVO: normalizacao.py (VERSÃO 1.0.0)
# OBJETIVO: Forma canônica dos nomes de ancestrais para comparação
#           entre registros (maiúsculas, sem acentos, sem pontuação).
# =================================================================
import re
import unicodedata
from typing import Any

import pandas as pd

_FORA_DO_ALFABETO = re.compile(r'[^A-Z0-9\s]')
_ESPACOS = re.compile(r'\s+')


def normalizar_nome(valor: Any) -> str:
    """
    Normaliza um nome de ancestral.

    Dois ancestrais são o mesmo indivíduo se, e somente se, os nomes
    normalizados forem iguais. Não há comparação aproximada: grafias
    parecidas ("TORO A" / "TORO-AA") continuam sendo animais distintos.
    """
    if valor is None:
        return ''
    if not isinstance(valor, str) and pd.isna(valor):
        return ''

    nome = _ESPACOS.sub(' ', str(valor).strip()).upper()
    # Remove acentos: decompõe (É -> E + ´) e descarta as marcas combinantes
    nome = ''.join(
        c for c in unicodedata.normalize('NFKD', nome)
        if not unicodedata.combining(c)
    )
    nome = _FORA_DO_ALFABETO.sub('', nome)
    return _ESPACOS.sub(' ', nome).strip()
