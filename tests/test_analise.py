from datetime import datetime

import numpy as np

from linhagem.models.analise import analisar_rebanho
from linhagem.models.schemas import AnaliseParentesco, PedigreeExterno
from tests.fixtures import animal


def _candidato():
    return PedigreeExterno(
        animalName="Candidato",
        breed="Murrah",
        father={"name": "Toro A"},
        mother={"name": "Vaca B"},
    )


def _rebanho():
    return [
        animal("H1", "MEIO IRMAO", "M", father_id="Toro A"),
        animal("H2", "IRMAO", "M", father_id="TORO A", mother_id="Vaca B"),
        animal("H3", "SOBRINHO", "F", paternal_grandfather_id="Toro A"),
        animal("H4", "ESTRANHO", "F", father_id="Outro"),
        animal("H5", "PRIMO", "F", paternal_great_grandfather_paternal_id="Vaca B"),
    ]


def test_separa_por_risco_e_ordena():
    resultado = analisar_rebanho(_candidato(), _rebanho())

    assert [r["animal_id"] for r in resultado["compativeis"]] == ["H4"]
    assert [r["animal_id"] for r in resultado["cautelosos"]] == ["H5", "H3"]
    assert [r["animal_id"] for r in resultado["evitar"]] == ["H2", "H1"]

    irmao = resultado["evitar"][0]
    assert np.isclose(irmao["percentual_consanguinidade"], 25.0)
    assert irmao["conselho_compra"] == "not_recommended"
    assert irmao["profundidade_pedigree"] == 1
    assert resultado["cautelosos"][0]["profundidade_pedigree"] == 3
    assert resultado["compativeis"][0]["caminho_detalhado"] == "Sem ancestrais comuns"

    assert resultado["total_animais_analisados"] == 5
    assert resultado["total_falhas"] == 0
    assert resultado["animal_externo"]["nome"] == "Candidato"
    datetime.fromisoformat(resultado["data_analise"])
    AnaliseParentesco.model_validate(resultado)


class NomeIlegivel:
    def __str__(self):
        raise ValueError("nome corrompido")


def test_registro_com_erro_e_ignorado():
    rebanho = _rebanho() + [animal("H6", "QUEBRADO", "F", father_id=NomeIlegivel())]
    resultado = analisar_rebanho(_candidato(), rebanho)
    assert resultado["total_falhas"] == 1
    assert resultado["total_animais_analisados"] == 6
    ids = [r["animal_id"] for lista in ("compativeis", "cautelosos", "evitar") for r in resultado[lista]]
    assert "H6" not in ids
    assert len(ids) == 5


def test_aceita_pedigree_plano_e_rebanho_vazio():
    resultado = analisar_rebanho({"name": "Candidato", "father_id": "Toro A"}, [])
    assert resultado["compativeis"] == resultado["cautelosos"] == resultado["evitar"] == []
    assert resultado["total_animais_analisados"] == 0


def test_campos_ausentes_ficam_nao_especificados():
    sem_raca = {"id": 10, "name": "SEM RACA", "father_id": "Toro A"}
    item = analisar_rebanho(_candidato(), [sem_raca])["evitar"][0]
    assert item["animal_raca"] == "Não especificado"
    assert item["animal_sexo"] == "Não especificado"
    assert item["animal_id"] == "10"
