# =================================================================
# ARQUIVO: gerar_dados.py (VERSÃO 4.0 - REBANHO COM PEDIGREE)
# OBJETIVO: Criar um rebanho sintético com pedigree nominal de 5
#           gerações (62 campos), com ancestrais compartilhados para
#           que existam casos de consanguinidade.
# =================================================================
import random
from datetime import date, timedelta
from typing import Dict, List

import numpy as np
import pandas as pd
from faker import Faker

from linhagem.models.campos import CAMPOS_POR_GERACAO, GERACAO_MAXIMA

# --- Configurações Iniciais ---
NUM_ANIMAIS = 200
NUM_FUNDADORES = 30
TAMANHO_POOL_ANCESTRAIS = 80
DATA_INICIAL = date(2015, 1, 1)
DATA_FINAL = date(2024, 1, 1)

RACAS = {
    'bufalo': ['Murrah', 'Mediterrâneo', 'Jafarabadi', 'Carabao'],
    'bovino': ['Nelore', 'Gir', 'Girolando'],
}
ESTADOS_SAUDE = ['healthy', 'good', 'sick', 'treatment']
PESOS_SAUDE = [0.65, 0.2, 0.08, 0.07]


def _nome_animal(fake: Faker) -> str:
    return f"{fake.first_name()} {fake.last_name()}".upper()


def _ancestrais_fundador(pool: List[str]) -> Dict[int, List[str]]:
    """Ancestrais de um fundador sorteados de um pool comum (gera parentesco)."""
    return {g: random.sample(pool, 2 ** g) for g in range(1, GERACAO_MAXIMA + 1)}


def _ancestrais_filho(pai: dict, mae: dict) -> Dict[int, List[str]]:
    # Geração g do filho = geração g-1 do pai seguida da geração g-1 da mãe
    ancestrais = {1: [pai['name'], mae['name']]}
    for g in range(2, GERACAO_MAXIMA + 1):
        ancestrais[g] = pai['_ancestrais'][g - 1] + mae['_ancestrais'][g - 1]
    return ancestrais


def gerar_rebanho(num_animais: int = NUM_ANIMAIS, seed: int = 42) -> pd.DataFrame:
    """
    Gera o rebanho em ordem de nascimento. Os primeiros animais são
    fundadores (ancestrais vindos do pool); os demais são filhos de
    animais anteriores, com pai e mãe referenciados por ID.
    """
    random.seed(seed)
    np.random.seed(seed)
    Faker.seed(seed)
    fake = Faker('pt_BR')

    pool = list(dict.fromkeys(_nome_animal(fake) for _ in range(TAMANHO_POOL_ANCESTRAIS * 2)))[:TAMANHO_POOL_ANCESTRAIS]
    datas = sorted(
        DATA_INICIAL + timedelta(days=random.randint(0, (DATA_FINAL - DATA_INICIAL).days))
        for _ in range(num_animais)
    )
    saude = np.random.choice(ESTADOS_SAUDE, size=num_animais, p=PESOS_SAUDE)

    animais: List[dict] = []
    for i in range(num_animais):
        especie = 'bufalo' if random.random() < 0.85 else 'bovino'
        animal = {
            "id": f"A{i + 1:04d}",
            "name": _nome_animal(fake),
            "tag": f"{random.randint(1000, 9999)}",
            "species": especie,
            "breed": random.choice(RACAS[especie]),
            "gender": random.choice(['M', 'F']),
            "birth_date": datas[i].isoformat(),
            "health_status": str(saude[i]),
            "pedigree_max_generation": GERACAO_MAXIMA,
            "lifecycle_status": 'active',
            "user_id": f"usuario_{random.randint(1, 3)}",
        }

        pais = [a for a in animais if a['species'] == especie and a['birth_date'] < animal['birth_date']]
        machos = [a for a in pais if a['gender'] == 'M']
        femeas = [a for a in pais if a['gender'] == 'F']

        if i >= NUM_FUNDADORES and machos and femeas:
            pai, mae = random.choice(machos), random.choice(femeas)
            animal['_ancestrais'] = _ancestrais_filho(pai, mae)
            ancestrais = {**animal['_ancestrais'], 1: [pai['id'], mae['id']]}
        else:
            ancestrais = _ancestrais_fundador(pool)
            animal['_ancestrais'] = ancestrais

        for g, campos in CAMPOS_POR_GERACAO.items():
            animal.update(zip(campos, ancestrais[g]))
        animais.append(animal)

    for animal in animais:
        del animal['_ancestrais']
    return pd.DataFrame(animais)


if __name__ == "__main__":
    print("Iniciando a geração do rebanho sintético...")
    df_animais = gerar_rebanho()
    print(f"Distribuição por sexo: {df_animais['gender'].value_counts().to_dict()}")
    print(f"Distribuição por espécie: {df_animais['species'].value_counts().to_dict()}")
    df_animais.to_csv('animais.csv', index=False)
    print("\nArquivo 'animais.csv' gerado com sucesso!")
