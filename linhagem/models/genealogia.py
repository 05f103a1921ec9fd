# =================================================================
# ARQUIVO: genealogia.py (VERSÃO 2.0 - PARENTESCO POR ÁRVORE DE NOMES)
# OBJETIVO: Coeficiente de parentesco de Wright aproximado sobre as
#           árvores de 5 gerações (contagem de caminhos).
# =================================================================
import logging
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from linhagem.models.arvore import construir_arvore
from linhagem.models.campos import Rebanho, chave_id, registros_do_rebanho
from linhagem.models.risco import classificar_risco

logger = logging.getLogger(__name__)

DESCRICOES_GERACAO = {
    1: 'Pai/Mãe',
    2: 'Avô/Avó',
    3: 'Bisavô/Bisavó',
    4: 'Trisavô/Trisavó',
    5: 'Tetravô/Tetravó',
}


def descrever_geracao(geracao: int) -> str:
    return DESCRICOES_GERACAO.get(geracao, f'Geração {geracao}')


def calcular_parentesco(arvore_a: Mapping[str, int], arvore_b: Mapping[str, int]) -> Dict[str, Any]:
    """
    Coeficiente de parentesco entre dois animais a partir das árvores.

    Para cada ancestral presente nas duas árvores, com distâncias g1 e g2,
    soma 0.5 ** (g1 + g2 + 1). Ancestrais além da 5ª geração, ou escritos
    de forma diferente nos dois pedigrees, não entram no cálculo.
    """
    # Percorre a menor árvore e consulta a maior
    if len(arvore_a) <= len(arvore_b):
        menor, maior, invertido = arvore_a, arvore_b, False
    else:
        menor, maior, invertido = arvore_b, arvore_a, True

    coeficiente = 0.0
    ancestrais_comuns: List[Dict[str, Any]] = []
    for nome, geracao_menor in menor.items():
        geracao_maior = maior.get(nome)
        if geracao_maior is None:
            continue
        g1, g2 = (geracao_maior, geracao_menor) if invertido else (geracao_menor, geracao_maior)
        contribuicao = 0.5 ** (g1 + g2 + 1)
        coeficiente += contribuicao
        ancestrais_comuns.append({
            "nome": nome,
            "geracao_a": g1,
            "geracao_b": g2,
            "geracoes": min(g1, g2),
            "contribuicao": contribuicao,
            "caminho": f"{descrever_geracao(g1)} - {descrever_geracao(g2)}",
        })

    ancestrais_comuns.sort(key=lambda a: (-a["contribuicao"], a["nome"]))
    return {"coeficiente": coeficiente, "ancestrais_comuns": ancestrais_comuns}


def descrever_caminho(ancestrais_comuns: List[Dict[str, Any]]) -> str:
    if not ancestrais_comuns:
        return 'Sem ancestrais comuns'
    return ', '.join(f"{a['nome']} ({a['caminho']})" for a in ancestrais_comuns)


def _resultado_pareamento(arvore_a: Mapping[str, int], arvore_b: Mapping[str, int]) -> Dict[str, Any]:
    resultado = calcular_parentesco(arvore_a, arvore_b)
    percentual = resultado["coeficiente"] * 100
    return {
        "coeficiente": resultado["coeficiente"],
        "percentual": percentual,
        "ancestrais_comuns": resultado["ancestrais_comuns"],
        **classificar_risco(percentual),
        "caminho_detalhado": descrever_caminho(resultado["ancestrais_comuns"]),
    }


def analisar_pareamento(
    animal_a: Mapping[str, Any],
    animal_b: Mapping[str, Any],
    nomes_por_id: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Parentesco e classificação de risco entre dois registros de animais."""
    return _resultado_pareamento(
        construir_arvore(animal_a, nomes_por_id),
        construir_arvore(animal_b, nomes_por_id),
    )


class CalculadorConsanguinidade:
    """
    Indexa o rebanho por ID e calcula o parentesco entre dois animais
    cadastrados, com cache (memoização) das árvores já montadas.
    """
    def __init__(self, rebanho: Rebanho):
        if isinstance(rebanho, pd.DataFrame):
            rebanho = rebanho.copy()
        self._registros = registros_do_rebanho(rebanho)
        self._por_id = {chave_id(r["id"]): r for r in self._registros if r.get("id") is not None}
        self._nomes_por_id = {
            animal_id: r['name'] for animal_id, r in self._por_id.items() if r.get('name')
        }
        self._arvores_cache: Dict[str, Dict[str, int]] = {}

    @property
    def nomes_por_id(self) -> Dict[str, str]:
        return self._nomes_por_id

    def _get_animal(self, animal_id: Any) -> Dict[str, Any]:
        animal = self._por_id.get(chave_id(animal_id))
        if animal is None:
            raise ValueError(f"Animal com ID {animal_id} não encontrado no rebanho.")
        return animal

    def arvore(self, animal_id: Any) -> Dict[str, int]:
        chave = chave_id(animal_id)
        if chave not in self._arvores_cache:
            self._arvores_cache[chave] = construir_arvore(self._get_animal(chave), self._nomes_por_id)
        return self._arvores_cache[chave]

    def analisar_pareamento(self, id_a: Any, id_b: Any) -> Dict[str, Any]:
        """Analisa o acasalamento entre dois animais do rebanho."""
        if not self._por_id:
            raise ValueError("Dados de genealogia não foram carregados. Não é possível analisar.")

        resultado = _resultado_pareamento(self.arvore(id_a), self.arvore(id_b))
        logger.info(f"🧬 Pareamento {id_a} x {id_b}: {resultado['percentual']:.2f}% de parentesco")
        return resultado
