# =================================================================
# ARQUIVO: recomendacoes.py (VERSÃO 1.0.0)
# OBJETIVO: Gerar recomendações de acasalamento (macho x fêmea) dentro
#           do rebanho, com verificação rápida de consanguinidade e
#           pontuação de compatibilidade.
# =================================================================
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from linhagem.models.cache import CacheRecomendacoes
from linhagem.models.campos import GERACAO_2, Rebanho, chave_id, registros_do_rebanho, valor_preenchido
from linhagem.models.normalizacao import normalizar_nome

logger = logging.getLogger(__name__)

MAX_RESULTADOS = 20

SEXO_MACHO = {'male', 'macho', 'm', 'masculino', 'mâle', 'sire'}
SEXO_FEMEA = {'female', 'hembra', 'fêmea', 'femea', 'f', 'femenino', 'feminino', 'femelle', 'dam'}

# Sinônimos aceitos para o estado de saúde
SAUDE_SINONIMOS = {
    'healthy': 'healthy', 'saudavel': 'healthy', 'saudável': 'healthy',
    'sano': 'healthy', 'saludable': 'healthy',
    'good': 'good', 'bom': 'good', 'bueno': 'good', 'stable': 'good', 'estavel': 'good', 'estável': 'good',
    'sick': 'sick', 'doente': 'sick', 'enfermo': 'sick',
    'treatment': 'treatment', 'in_treatment': 'treatment', 'in treatment': 'treatment',
    'tratamento': 'treatment', 'em tratamento': 'treatment', 'tratamiento': 'treatment',
    'en tratamiento': 'treatment',
}

AJUSTE_RISCO = {'low': 20, 'moderate': -10, 'high': -40}


def limites_para_profundidade(max_depth: int) -> Tuple[int, int]:
    """(candidatos por sexo, total de pares avaliados) para a profundidade."""
    if max_depth <= 2:
        return 8, 25
    return 12, 50


def _sexo(animal: Mapping[str, Any]) -> str:
    valor = animal.get('gender')
    return str(valor).strip().lower() if valor_preenchido(valor) else ''


def eh_macho(animal: Mapping[str, Any]) -> bool:
    return _sexo(animal) in SEXO_MACHO


def eh_femea(animal: Mapping[str, Any]) -> bool:
    return _sexo(animal) in SEXO_FEMEA


def normalizar_saude(valor: Any) -> str:
    # Sem informação de saúde o animal é tratado como saudável
    if not valor_preenchido(valor):
        return 'healthy'
    texto = str(valor).strip().lower()
    return SAUDE_SINONIMOS.get(texto, texto)


def _referencia(animal: Mapping[str, Any], campo: str) -> str:
    valor = animal.get(campo)
    return chave_id(valor) if valor_preenchido(valor) else ''


def _eh_pai_ou_mae(progenitor: Mapping[str, Any], filho: Mapping[str, Any]) -> bool:
    """O campo father_id/mother_id do filho aponta para o progenitor (por ID ou nome)."""
    id_progenitor = _referencia(progenitor, 'id')
    nome_progenitor = normalizar_nome(progenitor.get('name'))
    for campo in ('father_id', 'mother_id'):
        referencia = _referencia(filho, campo)
        if not referencia:
            continue
        if referencia == id_progenitor or (nome_progenitor and normalizar_nome(referencia) == nome_progenitor):
            return True
    return False


def _mesmo_ancestral(a: Mapping[str, Any], b: Mapping[str, Any], campo: str) -> bool:
    ref_a, ref_b = _referencia(a, campo), _referencia(b, campo)
    return bool(ref_a and ref_b) and normalizar_nome(ref_a) == normalizar_nome(ref_b)


def _avos(animal: Mapping[str, Any]) -> set:
    return {normalizar_nome(_referencia(animal, c)) for c in GERACAO_2} - {''}


def calcular_risco_simplificado(macho: Mapping[str, Any], femea: Mapping[str, Any], max_depth: int) -> str:
    """
    Verificação rasa de consanguinidade, sem o cálculo completo de 5
    gerações: pai/filho e irmãos sempre; avós em comum só com
    max_depth > 2.
    """
    if _eh_pai_ou_mae(macho, femea) or _eh_pai_ou_mae(femea, macho):
        logger.warning(f"🚫 {macho.get('name')} x {femea.get('name')}: pai/mãe e filho(a)")
        return 'high'
    if _mesmo_ancestral(macho, femea, 'mother_id') or _mesmo_ancestral(macho, femea, 'father_id'):
        logger.warning(f"🚫 {macho.get('name')} x {femea.get('name')}: irmãos")
        return 'high'

    if max_depth <= 2:
        return 'low'

    avos_comuns = _avos(macho) & _avos(femea)
    if avos_comuns:
        logger.info(f"⚠️ Avós em comum detectados: {', '.join(sorted(avos_comuns))}")
        return 'moderate'
    return 'low'


def calcular_pontuacao_compatibilidade(macho: Mapping[str, Any], femea: Mapping[str, Any], risco: str) -> int:
    pontuacao = 50
    saude_macho = normalizar_saude(macho.get('health_status'))
    saude_femea = normalizar_saude(femea.get('health_status'))
    problemas = {'sick', 'treatment'}

    if saude_macho == 'healthy' and saude_femea == 'healthy':
        pontuacao += 30
    elif saude_macho in ('healthy', 'good') and saude_femea in ('healthy', 'good'):
        pontuacao += 20
    elif saude_macho not in problemas and saude_femea not in problemas:
        pontuacao += 10  # Ambos ao menos estáveis

    pontuacao += AJUSTE_RISCO[risco]

    if macho.get('species') == femea.get('species'):
        pontuacao += 10

    if 'sick' in (saude_macho, saude_femea):
        pontuacao -= 20
    if 'treatment' in (saude_macho, saude_femea):
        pontuacao -= 15

    return int(np.clip(pontuacao, 0, 100))


def _textos_recomendacao(macho: Mapping[str, Any], femea: Mapping[str, Any], risco: str, pontuacao: int) -> List[str]:
    textos = []
    if risco == 'low':
        textos.append('✅ Excelente compatibilidade genética')
    elif risco == 'moderate':
        textos.append('⚡ Compatibilidade moderada - acompanhar a descendência')
    else:
        textos.append('⚠️ Alto risco de consanguinidade - não recomendado')

    if pontuacao > 80:
        textos.append('🌟 Alta compatibilidade esperada')
    elif pontuacao > 60:
        textos.append('📈 Boa compatibilidade')
    else:
        textos.append('📉 Compatibilidade limitada')

    if normalizar_saude(macho.get('health_status')) == 'healthy' and normalizar_saude(femea.get('health_status')) == 'healthy':
        textos.append('💪 Ambos os animais em excelente estado de saúde')

    textos.append(f"Macho: {macho.get('name')} ({macho.get('species')})")
    textos.append(f"Fêmea: {femea.get('name')} ({femea.get('species')})")
    return textos


def analisar_par(macho: Mapping[str, Any], femea: Mapping[str, Any], max_depth: int) -> Optional[Dict[str, Any]]:
    """Recomendação para um par, ou None se forem de espécies diferentes."""
    if macho.get('species') != femea.get('species'):
        return None

    risco = calcular_risco_simplificado(macho, femea, max_depth)
    pontuacao = calcular_pontuacao_compatibilidade(macho, femea, risco)
    textos = _textos_recomendacao(macho, femea, risco, pontuacao)
    id_macho, id_femea = _referencia(macho, 'id'), _referencia(femea, 'id')
    return {
        "id": f"{id_macho}-{id_femea}",
        "id_macho": id_macho,
        "nome_macho": macho.get('name'),
        "id_femea": id_femea,
        "nome_femea": femea.get('name'),
        "especie": macho.get('species'),
        "pontuacao_compatibilidade": pontuacao,
        "ganho_diversidade_genetica": int(round(pontuacao * 0.8)),
        "risco_consanguinidade": risco,
        "recomendacoes": textos[:3],
        "justificativa": textos[3:],
    }


class GeradorRecomendacoes:
    """
    Gera o ranking de acasalamentos do rebanho. O cache é injetado pelo
    chamador; sem cache, um novo é criado com validade de 1 hora.
    """
    def __init__(self, cache: Optional[CacheRecomendacoes] = None):
        self.cache = cache if cache is not None else CacheRecomendacoes()

    @staticmethod
    def chave_cache(max_depth: int) -> str:
        return f"recomendacoes_{max_depth}"

    def gerar(self, rebanho: Rebanho, max_depth: int = 2) -> List[Dict[str, Any]]:
        chave = self.chave_cache(max_depth)
        em_cache = self.cache.get(chave)
        if em_cache is not None:
            logger.info("📋 Retornando recomendações de acasalamento do cache")
            return copy.deepcopy(em_cache)

        animais = registros_do_rebanho(rebanho)
        machos = [a for a in animais if eh_macho(a)]
        femeas = [a for a in animais if eh_femea(a)]
        logger.info(f"📈 Distribuição por sexo: {len(machos)} machos, {len(femeas)} fêmeas")

        if not machos or not femeas:
            logger.info("❌ Falta um dos sexos - nenhuma recomendação possível")
            return []

        por_lado, max_pares = limites_para_profundidade(max_depth)
        recomendacoes = []
        pares = 0
        for macho in machos[:por_lado]:
            for femea in femeas[:por_lado]:
                if pares >= max_pares:
                    break
                if _referencia(macho, 'id') and _referencia(macho, 'id') == _referencia(femea, 'id'):
                    continue
                recomendacao = analisar_par(macho, femea, max_depth)
                if recomendacao:
                    recomendacoes.append(recomendacao)
                pares += 1

        resultado = sorted(recomendacoes, key=lambda r: r["pontuacao_compatibilidade"], reverse=True)[:MAX_RESULTADOS]
        self.cache.set(chave, resultado)
        logger.info(f"✅ {pares} pares avaliados, {len(resultado)} recomendações geradas")
        return copy.deepcopy(resultado)

    def limpar_cache(self) -> None:
        self.cache.clear()
