"""Rebanhos pequenos usados pelos testes."""
import pandas as pd
import pytest

from tests.fixtures import animal


@pytest.fixture
def rebanho():
    return pd.DataFrame(
        [
            animal("1", "TOURO REI", "M"),
            animal("2", "ESTRELA", "F", father_id="1"),
            animal("3", "LUA", "F", father_id="Touro Rei", mother_id="Estrela"),
            animal("4", "TROVAO", "M", father_id="Zeus", mother_id="Hera"),
            animal("5", "MIMOSA", "F", paternal_grandfather_id="Zeus"),
        ]
    )
