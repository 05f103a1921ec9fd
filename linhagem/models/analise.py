# =================================================================
# ARQUIVO: analise.py (VERSÃO 1.0.0)
# OBJETIVO: Comparar o pedigree de um animal externo (candidato à
#           compra) com cada animal do rebanho e separar os resultados
#           em compatíveis, cautelosos e a evitar.
# =================================================================
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Union

from linhagem.models.arvore import construir_arvore, registro_externo
from linhagem.models.campos import (
    Rebanho, chave_id, detectar_profundidade_pedigree, registros_do_rebanho, valor_preenchido,
)
from linhagem.models.genealogia import calcular_parentesco, descrever_caminho
from linhagem.models.risco import classificar_risco
from linhagem.models.schemas import PedigreeExterno

logger = logging.getLogger(__name__)

SEM_ESPECIFICAR = 'Não especificado'


def _analisar_animal(
    arvore_externa: Mapping[str, int],
    animal: Mapping[str, Any],
    nomes_por_id: Mapping[str, str],
) -> Dict[str, Any]:
    resultado = calcular_parentesco(arvore_externa, construir_arvore(animal, nomes_por_id))
    coeficiente = resultado["coeficiente"]
    percentual = coeficiente * 100
    return {
        "animal_id": chave_id(animal['id']) if animal.get('id') is not None else None,
        "animal_nome": animal.get('name'),
        "animal_tag": str(animal["tag"]) if valor_preenchido(animal.get("tag")) else None,
        "animal_raca": animal.get('breed') or SEM_ESPECIFICAR,
        "animal_sexo": animal.get('gender') or SEM_ESPECIFICAR,
        "coeficiente_consanguinidade": coeficiente,
        "percentual_consanguinidade": percentual,
        "ancestrais_comuns": resultado["ancestrais_comuns"],
        **classificar_risco(percentual),
        "caminho_detalhado": descrever_caminho(resultado["ancestrais_comuns"]),
        "profundidade_pedigree": detectar_profundidade_pedigree(animal),
    }


def analisar_rebanho(
    pedigree: Union[PedigreeExterno, Mapping[str, Any]],
    rebanho: Rebanho,
) -> Dict[str, Any]:
    """
    Calcula o parentesco do animal externo com cada animal do rebanho.

    As listas `compativeis` e `cautelosos` vêm em ordem crescente de
    percentual; `evitar` vem em ordem decrescente (pior caso primeiro).
    Um animal que falhar na análise é registrado no log e ignorado, sem
    interromper o lote.
    """
    externo = registro_externo(pedigree)
    arvore_externa = construir_arvore(externo)
    logger.info(f"🌳 Animal externo '{externo.get('name')}' tem {len(arvore_externa)} ancestrais")

    animais = registros_do_rebanho(rebanho)
    nomes_por_id = {
        chave_id(a['id']): a['name'] for a in animais
        if a.get('id') is not None and a.get('name')
    }

    buckets: Dict[str, List[Dict[str, Any]]] = {'low': [], 'moderate': [], 'high': []}
    falhas = 0
    for animal in animais:
        try:
            item = _analisar_animal(arvore_externa, animal, nomes_por_id)
        except Exception:
            falhas += 1
            logger.exception(f"❌ Erro ao analisar o animal {animal.get('id')}; registro ignorado")
            continue
        buckets[item["nivel_risco"]].append(item)

    compativeis = sorted(buckets['low'], key=lambda r: r["percentual_consanguinidade"])
    cautelosos = sorted(buckets['moderate'], key=lambda r: r["percentual_consanguinidade"])
    evitar = sorted(buckets['high'], key=lambda r: r["percentual_consanguinidade"], reverse=True)

    logger.info(
        f"✅ Análise concluída: {len(compativeis)} compatíveis, "
        f"{len(cautelosos)} cautelosos, {len(evitar)} a evitar, {falhas} falhas"
    )

    return {
        "animal_externo": {
            "nome": externo.get('name'),
            "raca": externo.get('breed'),
            "sexo": externo.get('gender'),
            "data_nascimento": externo.get('birth_date'),
        },
        "compativeis": compativeis,
        "cautelosos": cautelosos,
        "evitar": evitar,
        "total_animais_analisados": len(animais),
        "total_falhas": falhas,
        "data_analise": datetime.now(timezone.utc).isoformat(),
    }
