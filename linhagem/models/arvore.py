# =================================================================
# ARQUIVO: arvore.py (VERSÃO 1.0.0)
# OBJETIVO: Montar a árvore de ancestrais (nome normalizado -> menor
#           distância em gerações) a partir dos 62 campos de pedigree.
# =================================================================
from typing import Any, Dict, Mapping, Optional, Union

from linhagem.models.campos import (
    CAMPOS_POR_GERACAO, CAMPOS_PEDIGREE, chave_id, para_registro, valor_preenchido,
)
from linhagem.models.normalizacao import normalizar_nome
from linhagem.models.schemas import PedigreeExterno


def _adicionar_ancestral(ancestrais: Dict[str, int], nome: Any, geracao: int) -> None:
    normalizado = normalizar_nome(nome)
    if not normalizado:
        return
    # Mantém a menor geração (caminho mais próximo do animal)
    if normalizado not in ancestrais or ancestrais[normalizado] > geracao:
        ancestrais[normalizado] = geracao


def construir_arvore(
    registro: Mapping[str, Any],
    nomes_por_id: Optional[Mapping[str, str]] = None,
) -> Dict[str, int]:
    """
    Percorre as gerações 1 a 5 do registro e devolve {nome: geração}.

    Se `nomes_por_id` for informado, campos que guardam o ID de um animal
    cadastrado são trocados pelo nome desse animal antes da normalização,
    para que ancestrais cadastrados casem com nomes digitados em outro
    pedigree. Todas as gerações preenchidas entram, inclusive as que
    passam de `pedigree_max_generation` (usado só na exibição).
    """
    ancestrais: Dict[str, int] = {}
    for geracao in sorted(CAMPOS_POR_GERACAO):
        for campo in CAMPOS_POR_GERACAO[geracao]:
            valor = registro.get(campo)
            if not valor_preenchido(valor):
                continue
            if nomes_por_id:
                valor = nomes_por_id.get(chave_id(valor), valor)
            _adicionar_ancestral(ancestrais, valor, geracao)
    return ancestrais


def registro_externo(pedigree: Union[PedigreeExterno, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Aceita o pedigree externo no formato aninhado (PedigreeExterno) ou já
    no formato plano de um registro do rebanho.
    """
    if isinstance(pedigree, PedigreeExterno):
        return pedigree.para_registro()
    registro = para_registro(pedigree)
    if any(campo in registro for campo in CAMPOS_PEDIGREE):
        return registro
    return PedigreeExterno.model_validate(registro).para_registro()


def construir_arvore_externa(pedigree: Union[PedigreeExterno, Mapping[str, Any]]) -> Dict[str, int]:
    """Árvore de ancestrais de um animal externo (nomes em texto livre)."""
    return construir_arvore(registro_externo(pedigree))
