import pandas as pd

from linhagem.database import SupabaseConnection
from tests.fixtures import animal


def _conexao_csv(tmp_path):
    caminho = tmp_path / "animais.csv"
    pd.DataFrame([
        dict(animal("A1", "TOURO REI", "M"), user_id="u1"),
        dict(animal("A2", "ESTRELA", "F", father_id="A1"), user_id="u2"),
    ]).to_csv(caminho, index=False)
    return SupabaseConnection(db_url="", csv_animais=str(caminho))


def test_sem_banco_usa_csv(tmp_path):
    conexao = _conexao_csv(tmp_path)
    assert conexao.origem == "csv"
    assert not conexao.test_connection()
    assert list(conexao.get_animais_data()["id"]) == ["A1", "A2"]
    assert list(conexao.get_animais_data("u2")["name"]) == ["ESTRELA"]


def test_busca_por_id_no_csv(tmp_path):
    conexao = _conexao_csv(tmp_path)
    estrela = conexao.get_animal_by_id("A2")
    assert estrela["name"] == "ESTRELA"
    assert estrela["father_id"] == "A1"
    assert conexao.get_animal_by_id("X9") is None


def test_csv_inexistente(tmp_path):
    conexao = SupabaseConnection(db_url="", csv_animais=str(tmp_path / "nao_existe.csv"))
    assert conexao.get_animais_data().empty
    assert conexao.get_animal_by_id("A1") is None
