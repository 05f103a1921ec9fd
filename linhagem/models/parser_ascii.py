# =================================================================
# ARQUIVO: parser_ascii.py (VERSÃO 1.0.0)
# OBJETIVO: Interpretar o texto de um pedigree em árvore ASCII (sujeito
#           no meio, linhagem do pai acima e da mãe abaixo) e mapear os
#           ancestrais para os campos do cadastro.
# =================================================================
import logging
import re
from typing import Dict, List, NamedTuple, Optional

from linhagem.models.campos import CAMPOS_POR_GERACAO
from linhagem.models.schemas import VAGAS_POR_LADO, LinhaGeracao, PedigreeAnalisado

logger = logging.getLogger(__name__)

_CARACTERES_CAIXA = re.compile(r'[┌┐└┘│├┤┬┴┼─━┃┏┓┗┛┣┫┳┻╋╭╮╯╰═║╔╗╚╝╠╣╦╩╬]')
# Desenho em ASCII puro (|, +, `, -) só é apagado no recuo antes do nome
_PREFIXO_ASCII = re.compile(r'^[\s|+`\-]+')
_MARCADORES_INICIAIS = re.compile(r'^[•►▶→➜>*\-]+\s*')
_ESPACOS = re.compile(r'\s+')

_CABECALHOS = re.compile(
    r'^(pedigree|pedigr[ií]|genealogy|genealog[ií]a|g[ée]n[ée]alogie|family tree|'
    r'[áa]rbol geneal[óo]gico|[áa]rvore geneal[óo]gica|arbre g[ée]n[ée]alogique)\b',
    re.IGNORECASE,
)
_FAIXA_GERACAO = re.compile(
    r'^(gen|generation|generaci[óo]n|gera[çc][ãa]o|g[ée]n[ée]ration)\s*\d+\s*:?$',
    re.IGNORECASE,
)
_ROTULOS_PAIS = {
    'father', 'mother', 'sire', 'dam',
    'padre', 'madre',
    'pai', 'mãe', 'mae',
    'père', 'pere', 'mère', 'mere',
}

TAMANHO_MINIMO = 2


class No(NamedTuple):
    nivel: int
    indice: int
    nome: str


def _apagar_desenho(linha: str) -> str:
    texto = _CARACTERES_CAIXA.sub(' ', linha)
    prefixo = _PREFIXO_ASCII.match(texto)
    if prefixo:
        texto = ' ' * prefixo.end() + texto[prefixo.end():]
    return texto


def limpar_linha(linha: str) -> str:
    texto = _apagar_desenho(linha).strip()
    texto = _MARCADORES_INICIAIS.sub('', texto)
    return _ESPACOS.sub(' ', texto).strip()


def nivel_indentacao(linha: str) -> int:
    """Coluna do primeiro caractere do nome, com os traços da caixa em branco."""
    texto = _apagar_desenho(linha.expandtabs(4))
    conteudo = texto.lstrip()
    nivel = len(texto) - len(conteudo)
    marcador = _MARCADORES_INICIAIS.match(conteudo)
    return nivel + (marcador.end() if marcador else 0)


def eh_ruido(limpo: str) -> bool:
    if len(limpo) < TAMANHO_MINIMO:
        return True
    if 'UELN:' in limpo.upper():
        return True
    if limpo.rstrip(':').strip().lower() in _ROTULOS_PAIS:
        return True
    return bool(_CABECALHOS.match(limpo) or _FAIXA_GERACAO.match(limpo))


def extrair_nos(texto: str) -> List[No]:
    nos = []
    for linha in texto.splitlines():
        limpo = limpar_linha(linha)
        if not limpo or eh_ruido(limpo):
            continue
        nos.append(No(nivel=nivel_indentacao(linha), indice=len(nos), nome=limpo))
    return nos


def localizar_sujeito(nos: List[No]) -> int:
    """
    O sujeito é o único nó no menor nível de indentação. Se nenhum ou
    vários nós empatam nesse nível, usa o meio da lista (heurística).
    """
    nivel_minimo = min(n.nivel for n in nos)
    candidatos = [n for n in nos if n.nivel == nivel_minimo]
    if len(candidatos) == 1:
        return candidatos[0].indice
    logger.debug("⚠️ Sujeito ambíguo no pedigree; usando o meio da lista")
    return len(nos) // 2


def _completar(nomes: List[str], vagas: int) -> List[str]:
    return nomes + [''] * (vagas - len(nomes))


def _fatiar_paterna(nomes: List[str]) -> Dict[int, List[str]]:
    # Do pai (logo acima do sujeito) para cima
    fatias, fim = {}, len(nomes)
    for geracao, vagas in VAGAS_POR_LADO.items():
        inicio = max(0, fim - vagas)
        janela = nomes[inicio:fim]
        if geracao == 2:
            # Avô é a linha colada ao pai, avó vem logo acima
            janela = janela[::-1]
        fatias[geracao] = _completar(janela, vagas)
        fim = inicio
    return fatias


def _fatiar_materna(nomes: List[str]) -> Dict[int, List[str]]:
    # Da mãe (logo abaixo do sujeito) para baixo
    fatias, inicio = {}, 0
    for geracao, vagas in VAGAS_POR_LADO.items():
        fatias[geracao] = _completar(nomes[inicio:inicio + vagas], vagas)
        inicio += vagas
    return fatias


def parse_arvore_ascii(texto: Optional[str]) -> Optional[PedigreeAnalisado]:
    """
    Interpreta um pedigree em árvore ASCII. Retorna None se não houver
    nenhuma linha aproveitável. A identificação do sujeito é heurística:
    em entradas irregulares o resultado é o melhor esforço, não garantido.
    """
    if not texto or not texto.strip():
        return None

    try:
        nos = extrair_nos(texto)
        if not nos:
            logger.warning("❌ Nenhum nome aproveitável no texto do pedigree")
            return None

        posicao = localizar_sujeito(nos)
        nomes = [n.nome for n in nos]
        paterna = _fatiar_paterna(nomes[:posicao])
        materna = _fatiar_materna(nomes[posicao + 1:])

        pedigree = PedigreeAnalisado(
            sujeito=nomes[posicao],
            **{
                f'geracao{g}': LinhaGeracao(paterna=paterna[g], materna=materna[g])
                for g in VAGAS_POR_LADO
            },
        )
        logger.info(
            f"✅ Pedigree ASCII interpretado: sujeito '{pedigree.sujeito}', "
            f"{pedigree.total_ancestrais()} ancestrais"
        )
        return pedigree

    except Exception as e:
        logger.exception(f"❌ Erro ao interpretar pedigree ASCII: {e}")
        return None


def mapear_pedigree_para_campos(pedigree: PedigreeAnalisado) -> Dict[str, str]:
    """
    Projeta o pedigree nos campos do cadastro. Vagas vazias ficam de fora,
    assim uma importação parcial só acrescenta dados, nunca apaga.
    """
    campos: Dict[str, str] = {}
    for geracao, nomes_campos in CAMPOS_POR_GERACAO.items():
        linha = pedigree.geracao(geracao)
        for campo, nome in zip(nomes_campos, linha.paterna + linha.materna):
            if nome:
                campos[campo] = nome
    return campos
