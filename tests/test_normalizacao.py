import numpy as np
import pytest

from linhagem.models.normalizacao import normalizar_nome


def test_remove_acentos_e_espacos():
    assert normalizar_nome("José  Ñandú") == "JOSE NANDU"
    assert normalizar_nome("  toro   bravo ") == "TORO BRAVO"


@pytest.mark.parametrize("vazio", [None, "", "   ", np.nan, float("nan")])
def test_vazios(vazio):
    assert normalizar_nome(vazio) == ""


def test_remove_pontuacao():
    assert normalizar_nome("Toro-A (Imp.)") == "TOROA IMP"
    assert normalizar_nome("Mâle n° 7") == "MALE N 7"


def test_valores_numericos():
    assert normalizar_nome(42) == "42"


@pytest.mark.parametrize("nome", ["José  Ñandú", "Vaca d'Ouro", "ÇAÇÃO 2º", "  x  "])
def test_idempotente(nome):
    assert normalizar_nome(normalizar_nome(nome)) == normalizar_nome(nome)
