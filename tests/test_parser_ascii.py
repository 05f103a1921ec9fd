import pytest

from linhagem.models.parser_ascii import (
    extrair_nos, limpar_linha, localizar_sujeito, mapear_pedigree_para_campos, nivel_indentacao, parse_arvore_ascii,
)
from linhagem.models.schemas import PedigreeAnalisado

ARVORE_PEQUENA = """\
Pedigree
        ┌── VACA VELHA
        ├── José Ñandú
    ┌── TORO PAI
BEZERRO DE TESTE
    └── VACA MAE
        ├── AVO MATERNO
        └── AVO MATERNA
"""


def _arvore_completa():
    paterna = [f"    P{i:02d}" for i in range(1, 32)]
    materna = [f"    M{i:02d}" for i in range(1, 32)]
    return "\n".join(paterna + ["SUJEITO"] + materna)


@pytest.mark.parametrize("texto", [None, "", "   \n\t\n"])
def test_texto_vazio(texto):
    assert parse_arvore_ascii(texto) is None


def test_so_ruido():
    assert parse_arvore_ascii("Pedigree\nGeneration 1\nSire:\nUELN: 123456\nx") is None


def test_limpeza_de_linhas():
    assert limpar_linha("│   ├──  TORO   PAI ") == "TORO PAI"
    assert limpar_linha("  • Vaca") == "Vaca"
    assert nivel_indentacao("    ┌── TORO") == nivel_indentacao("        TORO")
    assert nivel_indentacao("BEZERRO") == 0


def test_desenho_ascii_so_no_recuo():
    assert limpar_linha("|   +-- A+B") == "A+B"
    assert limpar_linha("`-- TORO | PAI") == "TORO | PAI"
    assert nivel_indentacao("|   +-- TORO") == 8
    assert nivel_indentacao("|   +-- TORO") == nivel_indentacao("│   ├── TORO")


def test_arvore_pequena():
    pedigree = parse_arvore_ascii(ARVORE_PEQUENA)
    assert pedigree.sujeito == "BEZERRO DE TESTE"
    assert pedigree.pai == "TORO PAI"
    assert pedigree.mae == "VACA MAE"
    assert pedigree.geracao2.paterna == ["José Ñandú", "VACA VELHA"]
    assert pedigree.geracao2.materna == ["AVO MATERNO", "AVO MATERNA"]
    assert pedigree.geracao3.paterna == ["", "", "", ""]
    assert pedigree.total_ancestrais() == 6


def test_avo_paterno_e_a_linha_colada_ao_pai():
    pedigree = parse_arvore_ascii("        AVO A\n        AVO B\n    PAI\nSUJEITO\n    MAE")
    assert pedigree.geracao2.paterna == ["AVO B", "AVO A"]
    campos = mapear_pedigree_para_campos(pedigree)
    assert campos["paternal_grandfather_id"] == "AVO B"
    assert campos["paternal_grandmother_id"] == "AVO A"


def test_arvore_com_63_linhas():
    pedigree = parse_arvore_ascii(_arvore_completa())
    assert pedigree.sujeito == "SUJEITO"
    assert pedigree.pai == "P31"
    assert pedigree.geracao2.paterna == ["P30", "P29"]
    assert pedigree.geracao5.paterna == [f"P{i:02d}" for i in range(1, 17)]
    assert pedigree.mae == "M01"
    assert pedigree.geracao3.materna == ["M04", "M05", "M06", "M07"]
    assert pedigree.geracao5.materna == [f"M{i:02d}" for i in range(16, 32)]

    for g, vagas in {1: 1, 2: 2, 3: 4, 4: 8, 5: 16}.items():
        linha = pedigree.geracao(g)
        assert len(linha.paterna) == len(linha.materna) == vagas
        assert all(linha.paterna) and all(linha.materna)
    assert pedigree.total_ancestrais() == 62


def test_sujeito_ambiguo_usa_o_meio():
    nos = extrair_nos("AA\nBB\nCC\nDD\nEE")
    assert localizar_sujeito(nos) == 2
    pedigree = parse_arvore_ascii("AA\nBB\nCC\nDD\nEE")
    assert (pedigree.pai, pedigree.sujeito, pedigree.mae) == ("BB", "CC", "DD")


@pytest.mark.parametrize("texto", ["☃☃☃\n###", "│\n──\n┌┐", "\t\tA\n" * 200, "a" * 10000])
def test_entrada_estranha_nao_quebra(texto):
    resultado = parse_arvore_ascii(texto)
    assert resultado is None or isinstance(resultado, PedigreeAnalisado)


def test_mapeamento_para_campos():
    campos = mapear_pedigree_para_campos(parse_arvore_ascii(ARVORE_PEQUENA))
    assert campos == {
        "father_id": "TORO PAI",
        "mother_id": "VACA MAE",
        "paternal_grandfather_id": "José Ñandú",
        "paternal_grandmother_id": "VACA VELHA",
        "maternal_grandfather_id": "AVO MATERNO",
        "maternal_grandmother_id": "AVO MATERNA",
    }


def test_mapeamento_completo():
    campos = mapear_pedigree_para_campos(parse_arvore_ascii(_arvore_completa()))
    assert len(campos) == 62
    assert campos["gen4_paternal_ggggf_p"] == "P17"
    assert campos["paternal_grandfather_id"] == "P30"
    assert campos["paternal_grandmother_id"] == "P29"
    assert campos["gen5_maternal_16"] == "M31"
