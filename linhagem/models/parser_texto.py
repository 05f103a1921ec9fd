# =================================================================
# ARQUIVO: parser_texto.py (VERSÃO 1.0.0)
# OBJETIVO: Interpretar pedigrees em texto estruturado por geração
#           ("Geração 1", "Generation 2"...) e escolher o parser certo
#           para o texto recebido.
# =================================================================
import logging
import re
from typing import Dict, List, Optional

from linhagem.models.parser_ascii import parse_arvore_ascii
from linhagem.models.schemas import VAGAS_POR_LADO, LinhaGeracao, PedigreeAnalisado

logger = logging.getLogger(__name__)

_MARCADOR_GERACAO = re.compile(
    r'^\W*(?:gen(?:eration)?|generaci[óo]n|gera[çc][ãa]o|g[ée]n[ée]ration)\s*([1-5])\b',
    re.IGNORECASE,
)
_MARCADOR_ORDINAL = re.compile(
    r'^\W*(primeira|primera|segunda|terceira|tercera|quarta|cuarta|quinta)\s+genera(?:ci[óo]n|[çc][ãa]o)',
    re.IGNORECASE,
)
_ORDINAIS = {
    'primeira': 1, 'primera': 1, 'segunda': 2, 'terceira': 3, 'tercera': 3,
    'quarta': 4, 'cuarta': 4, 'quinta': 5,
}

_LADO_PATERNO = re.compile(
    r"ligne paternelle|paternal line|l[íi]nea paterna|lado paterno|linha paterna|father's side|^\W*paternal",
    re.IGNORECASE,
)
_LADO_MATERNO = re.compile(
    r"ligne maternelle|maternal line|l[íi]nea materna|lado materno|linha materna|mother's side|^\W*maternal",
    re.IGNORECASE,
)

# (padrão do rótulo, geração, lado, posição)
_ROTULOS = [
    (re.compile(r'abuelo paterno|paternal grandfather|av[ôo] paterno\b', re.IGNORECASE), 2, 'paterna', 0),
    (re.compile(r'abuela paterna|paternal grandmother|av[óo] paterna\b', re.IGNORECASE), 2, 'paterna', 1),
    (re.compile(r'abuelo materno|maternal grandfather|av[ôo] materno\b', re.IGNORECASE), 2, 'materna', 0),
    (re.compile(r'abuela materna|maternal grandmother|av[óo] materna\b', re.IGNORECASE), 2, 'materna', 1),
    (re.compile(r'\b(?:padre|father|sire|pai|p[èe]re)\b', re.IGNORECASE), 1, 'paterna', 0),
    (re.compile(r'\b(?:madre|mother|dam|m[ãa]e|m[èe]re)\b', re.IGNORECASE), 1, 'materna', 0),
]


def limpar_nome(nome: str) -> str:
    nome = nome.strip()
    nome = re.sub(r'^[-•*]\s*', '', nome)
    nome = re.sub(r'^\d+\.\s*', '', nome)
    return re.sub(r'\s+', ' ', nome).strip()


def detectar_geracao(linha: str) -> Optional[int]:
    encontrado = _MARCADOR_GERACAO.match(linha)
    if encontrado:
        return int(encontrado.group(1))
    encontrado = _MARCADOR_ORDINAL.match(linha)
    if encontrado:
        return _ORDINAIS[encontrado.group(1).lower()]
    return None


def detectar_lado(linha: str) -> Optional[str]:
    if _LADO_PATERNO.search(linha):
        return 'paterna'
    if _LADO_MATERNO.search(linha):
        return 'materna'
    return None


def _valor_rotulado(linha: str, padrao: re.Pattern) -> str:
    if ':' in linha:
        return limpar_nome(linha.split(':', 1)[1])
    return limpar_nome(padrao.sub('', linha))


def parse_texto_estruturado(texto: Optional[str]) -> Optional[PedigreeAnalisado]:
    """
    Lê pedigrees divididos em seções por geração. Nas gerações 1 e 2 os
    ancestrais são identificados pelo rótulo (pai, avó materna...); da 3
    em diante, pela seção de linhagem ou, sem ela, preenchendo primeiro o
    lado paterno.
    """
    if not texto or not texto.strip():
        return None

    nomes: Dict[int, Dict[str, List[str]]] = {
        g: {'paterna': [''] * v if g <= 2 else [], 'materna': [''] * v if g <= 2 else []}
        for g, v in VAGAS_POR_LADO.items()
    }
    geracao_atual = 0
    lado_atual: Optional[str] = None

    for linha in (l for l in texto.splitlines() if l.strip()):
        geracao = detectar_geracao(linha)
        if geracao:
            geracao_atual, lado_atual = geracao, None
            logger.debug(f"📊 Entrando na geração {geracao_atual}")
            continue

        lado = detectar_lado(linha)
        if lado and ':' not in linha:
            lado_atual = lado
            continue

        if geracao_atual in (1, 2):
            for padrao, geracao, lado_rotulo, posicao in _ROTULOS:
                if geracao != geracao_atual or not padrao.search(linha):
                    continue
                nome = _valor_rotulado(linha, padrao)
                if nome:
                    nomes[geracao][lado_rotulo][posicao] = nome
                break
        elif geracao_atual >= 3:
            nome = limpar_nome(linha.split(':')[-1])
            if len(nome) <= 1:
                continue
            vagas = VAGAS_POR_LADO[geracao_atual]
            if lado_atual:
                nomes[geracao_atual][lado_atual].append(nome)
            elif len(nomes[geracao_atual]['paterna']) < vagas:
                nomes[geracao_atual]['paterna'].append(nome)
            else:
                nomes[geracao_atual]['materna'].append(nome)

    linhas = {}
    for geracao, vagas in VAGAS_POR_LADO.items():
        por_lado = {}
        for lado in ('paterna', 'materna'):
            lista = nomes[geracao][lado][:vagas]
            if len(nomes[geracao][lado]) != vagas and geracao >= 3:
                logger.warning(
                    f"⚠️ Geração {geracao} ({lado}): {len(nomes[geracao][lado])} nomes (esperado: {vagas})"
                )
            por_lado[lado] = lista + [''] * (vagas - len(lista))
        linhas[f'geracao{geracao}'] = LinhaGeracao(**por_lado)

    pedigree = PedigreeAnalisado(**linhas)
    if pedigree.total_ancestrais() == 0:
        return None
    logger.info(f"✅ Pedigree estruturado interpretado: {pedigree.total_ancestrais()} ancestrais")
    return pedigree


def eh_texto_estruturado(texto: str) -> bool:
    return any(detectar_geracao(linha) for linha in texto.splitlines())


def parse_pedigree(texto: Optional[str]) -> Optional[PedigreeAnalisado]:
    """Usa o parser estruturado se houver marcadores de geração; senão, o ASCII."""
    if not texto or not texto.strip():
        return None
    if eh_texto_estruturado(texto):
        return parse_texto_estruturado(texto)
    return parse_arvore_ascii(texto)
