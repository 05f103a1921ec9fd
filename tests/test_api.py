import pandas as pd
import pytest
from fastapi.testclient import TestClient

from linhagem import database
from linhagem import main
from tests.fixtures import animal


class BancoFalso:
    origem = 'csv'

    def __init__(self, animais=None, erro=None):
        self.animais = animais or []
        self.erro = erro
        self.usuarios = []

    def get_animais_data(self, id_usuario=None):
        if self.erro:
            raise self.erro
        self.usuarios.append(id_usuario)
        return pd.DataFrame(self.animais)


@pytest.fixture
def banco(monkeypatch):
    falso = BancoFalso([
        animal("1", "TOURO REI", "M"),
        animal("2", "ESTRELA", "F", father_id="1"),
        animal("3", "LUA", "F", father_id="Touro Rei"),
        animal("4", "MIMOSA", "F", species="bovino"),
    ])
    monkeypatch.setattr(database, "supabase_db", falso)
    main.gerador.limpar_cache()
    yield falso
    main.gerador.limpar_cache()


@pytest.fixture
def client():
    return TestClient(main.app)


def test_status(client, banco):
    resposta = client.get("/")
    assert resposta.status_code == 200
    corpo = resposta.json()
    assert corpo["status"] == "API Operacional"
    assert corpo["origem_rebanho"] == "csv"


def test_analisar_consanguinidade(client, banco):
    corpo = {
        "pedigree": {"animalName": "Candidato", "father": {"name": "Touro Rei"}},
        "id_usuario": "usuario_1",
    }
    resposta = client.post("/analisar-consanguinidade", json=corpo)
    assert resposta.status_code == 200
    dados = resposta.json()
    assert banco.usuarios == ["usuario_1"]
    assert {r["animal_id"] for r in dados["evitar"]} == {"2", "3"}
    assert {r["animal_id"] for r in dados["compativeis"]} == {"1", "4"}
    assert dados["total_animais_analisados"] == 4


def test_analisar_consanguinidade_corpo_invalido(client, banco):
    resposta = client.post("/analisar-consanguinidade", json={"pedigree": {"gender": "M"}})
    assert resposta.status_code == 422


def test_analisar_pareamento(client, banco):
    resposta = client.post("/analisar-pareamento", json={"id_animal_a": "2", "id_animal_b": "3"})
    assert resposta.status_code == 200
    dados = resposta.json()
    assert dados["percentual"] == pytest.approx(12.5)
    assert dados["nivel_risco"] == "high"


def test_analisar_pareamento_animal_inexistente(client, banco):
    resposta = client.post("/analisar-pareamento", json={"id_animal_a": "2", "id_animal_b": "99"})
    assert resposta.status_code == 404


def test_recomendacoes(client, banco):
    resposta = client.get("/recomendacoes-acasalamento", params={"max_depth": 2})
    assert resposta.status_code == 200
    dados = resposta.json()
    # MIMOSA é de outra espécie
    assert {r["id_femea"] for r in dados} == {"2", "3"}
    riscos = {r["id_femea"]: r["risco_consanguinidade"] for r in dados}
    assert riscos == {"2": "high", "3": "high"}
    assert len(main.gerador.cache) == 1


def test_recomendacoes_profundidade_invalida(client, banco):
    assert client.get("/recomendacoes-acasalamento", params={"max_depth": 9}).status_code == 422


def test_limpar_cache(client, banco):
    client.get("/recomendacoes-acasalamento")
    resposta = client.delete("/recomendacoes-acasalamento/cache")
    assert resposta.status_code == 200
    assert len(main.gerador.cache) == 0


def test_importar_texto(client, banco):
    texto = "        AVO PATERNO\n    TORO PAI\nBEZERRO\n    VACA MAE"
    resposta = client.post("/pedigree/importar-texto", json={"texto": texto})
    assert resposta.status_code == 200
    dados = resposta.json()
    assert dados["sujeito"] == "BEZERRO"
    assert dados["total_ancestrais"] == 3
    assert dados["campos"] == {
        "father_id": "TORO PAI",
        "mother_id": "VACA MAE",
        "paternal_grandfather_id": "AVO PATERNO",
    }


def test_importar_texto_vazio(client, banco):
    assert client.post("/pedigree/importar-texto", json={"texto": "  "}).status_code == 422


def test_erro_interno(client, monkeypatch):
    monkeypatch.setattr(database, "supabase_db", BancoFalso(erro=RuntimeError("banco fora do ar")))
    main.gerador.limpar_cache()
    resposta = client.get("/recomendacoes-acasalamento")
    assert resposta.status_code == 500
    assert "banco fora do ar" not in resposta.text
