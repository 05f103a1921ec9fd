# =================================================================
# ARQUIVO: campos.py (VERSÃO 1.0.0)
# OBJETIVO: Catálogo fixo dos 62 campos de pedigree (5 gerações) e
#           utilitários para ler registros de animais do rebanho.
# =================================================================
from typing import Any, Dict, List, Mapping, Union

import pandas as pd
from pydantic import BaseModel

GERACAO_1 = ['father_id', 'mother_id']

GERACAO_2 = [
    'paternal_grandfather_id', 'paternal_grandmother_id',
    'maternal_grandfather_id', 'maternal_grandmother_id',
]

GERACAO_3 = [
    'paternal_great_grandfather_paternal_id', 'paternal_great_grandmother_paternal_id',
    'paternal_great_grandfather_maternal_id', 'paternal_great_grandmother_maternal_id',
    'maternal_great_grandfather_paternal_id', 'maternal_great_grandmother_paternal_id',
    'maternal_great_grandfather_maternal_id', 'maternal_great_grandmother_maternal_id',
]

_SUFIXOS_GERACAO_4 = ['ggggf', 'ggggm', 'gggmf', 'gggmm', 'ggfgf', 'ggfgm', 'ggmgf', 'ggmgm']

GERACAO_4 = (
    [f'gen4_paternal_{s}_p' for s in _SUFIXOS_GERACAO_4] +
    [f'gen4_maternal_{s}_m' for s in _SUFIXOS_GERACAO_4]
)

GERACAO_5 = (
    [f'gen5_paternal_{i}' for i in range(1, 17)] +
    [f'gen5_maternal_{i}' for i in range(1, 17)]
)

# Geração -> campos, na ordem: metade paterna primeiro, depois a materna
CAMPOS_POR_GERACAO: Dict[int, List[str]] = {
    1: GERACAO_1,
    2: GERACAO_2,
    3: GERACAO_3,
    4: GERACAO_4,
    5: GERACAO_5,
}

CAMPOS_PEDIGREE: List[str] = [c for g in sorted(CAMPOS_POR_GERACAO) for c in CAMPOS_POR_GERACAO[g]]

GERACAO_MAXIMA = 5

CAMPOS_IDENTIDADE = [
    'id', 'name', 'tag', 'species', 'breed', 'gender',
    'birth_date', 'health_status', 'pedigree_max_generation',
]

Rebanho = Union[pd.DataFrame, List[Mapping[str, Any]], List[BaseModel]]


def valor_preenchido(valor: Any) -> bool:
    """True se o campo contém algo além de vazio/None/NaN."""
    if valor is None:
        return False
    if isinstance(valor, str):
        return bool(valor.strip())
    try:
        return not pd.isna(valor)
    except (TypeError, ValueError):
        return True


def para_registro(animal: Union[Mapping[str, Any], BaseModel]) -> Dict[str, Any]:
    """Converte um animal (dict, linha ou modelo pydantic) em dict simples."""
    if isinstance(animal, BaseModel):
        return animal.model_dump()
    return dict(animal)


def registros_do_rebanho(rebanho: Rebanho) -> List[Dict[str, Any]]:
    """
    Aceita o rebanho como DataFrame (formato retornado pelo banco) ou
    como lista de registros e devolve uma lista de dicts em que os
    valores ausentes (NaN) viram None.
    """
    if rebanho is None:
        return []
    if isinstance(rebanho, pd.DataFrame):
        if rebanho.empty:
            return []
        df = rebanho.astype(object).where(pd.notna(rebanho), None)
        return df.to_dict('records')
    return [para_registro(a) for a in rebanho]


def detectar_profundidade_pedigree(registro: Mapping[str, Any]) -> int:
    """Retorna a geração mais profunda com dados (mínimo 1, os pais)."""
    profundidade = 0
    for geracao in sorted(CAMPOS_POR_GERACAO):
        if any(valor_preenchido(registro.get(c)) for c in CAMPOS_POR_GERACAO[geracao]):
            profundidade = geracao
    return profundidade or 1


def geracao_aplicavel(registro: Mapping[str, Any], geracao: int) -> bool:
    """
    Gerações além de pedigree_max_generation são "não aplicáveis"
    (e não "desconhecidas"). Sem o campo declarado, todas se aplicam.
    """
    declarada = registro.get('pedigree_max_generation')
    if not valor_preenchido(declarada):
        return 1 <= geracao <= GERACAO_MAXIMA
    return 1 <= geracao <= min(int(declarada), GERACAO_MAXIMA)


def chave_id(valor: Any) -> str:
    """
    Chave textual de um ID. Colunas numéricas com NaN viram float no
    pandas (3 -> 3.0), então IDs inteiros são comparados sem o '.0'.
    """
    if isinstance(valor, float) and valor.is_integer():
        return str(int(valor))
    return str(valor).strip()
