# =================================================================
# ARQUIVO: schemas.py (VERSÃO 1.0.0)
# OBJETIVO: Modelos de dados (DTOs) de entrada e saída da análise
#           genealógica e a estrutura do pedigree interpretado.
# =================================================================
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from linhagem.models.campos import (
    GERACAO_2, GERACAO_3, GERACAO_4, GERACAO_5, CAMPOS_POR_GERACAO,
)

NivelRisco = Literal['low', 'moderate', 'high']
ConselhoCompra = Literal['recommended', 'consider_carefully', 'not_recommended']

# Quantidade de ancestrais por lado (paterno ou materno) em cada geração
VAGAS_POR_LADO = {1: 1, 2: 2, 3: 4, 4: 8, 5: 16}


# --- Pedigree de animal externo (candidato à compra) ---

class AnimalParente(BaseModel):
    nome: str = Field(..., alias='name')
    detalhes: Optional[Dict[str, Any]] = Field(None, alias='details')

    model_config = ConfigDict(populate_by_name=True)


class LinhasGeracao(BaseModel):
    linha_paterna: List[str] = Field(default_factory=list, alias='paternalLine')
    linha_materna: List[str] = Field(default_factory=list, alias='maternalLine')

    model_config = ConfigDict(populate_by_name=True)


class PedigreeExterno(BaseModel):
    """Pedigree de um animal que não está no rebanho (nomes em texto livre)."""
    nome_animal: str = Field(..., alias='animalName')
    sexo: Optional[str] = Field(None, alias='gender')
    raca: Optional[str] = Field(None, alias='breed')
    especie: Optional[str] = Field(None, alias='species')
    data_nascimento: Optional[str] = Field(None, alias='birthDate')
    numero_registro: Optional[str] = Field(None, alias='registrationNumber')
    pai: Optional[AnimalParente] = Field(None, alias='father')
    mae: Optional[AnimalParente] = Field(None, alias='mother')
    avo_paterno: Optional[str] = Field(None, alias='paternalGrandfather')
    avo_paterna: Optional[str] = Field(None, alias='paternalGrandmother')
    avo_materno: Optional[str] = Field(None, alias='maternalGrandfather')
    avo_materna: Optional[str] = Field(None, alias='maternalGrandmother')
    bisavos_paternos: List[str] = Field(default_factory=list, alias='paternalGreatGrandparents')
    bisavos_maternos: List[str] = Field(default_factory=list, alias='maternalGreatGrandparents')
    geracao4: Optional[LinhasGeracao] = Field(None, alias='generation4')
    geracao5: Optional[LinhasGeracao] = Field(None, alias='generation5')

    model_config = ConfigDict(populate_by_name=True)

    def para_registro(self) -> Dict[str, Optional[str]]:
        """Projeta o pedigree aninhado nos 62 campos planos do rebanho."""
        registro: Dict[str, Optional[str]] = {
            'id': None,
            'name': self.nome_animal,
            'breed': self.raca,
            'gender': self.sexo,
            'species': self.especie,
            'birth_date': self.data_nascimento,
            'father_id': self.pai.nome if self.pai else None,
            'mother_id': self.mae.nome if self.mae else None,
        }
        registro.update(zip(GERACAO_2, [self.avo_paterno, self.avo_paterna,
                                        self.avo_materno, self.avo_materna]))
        registro.update(zip(GERACAO_3[:4], self.bisavos_paternos))
        registro.update(zip(GERACAO_3[4:], self.bisavos_maternos))
        if self.geracao4:
            registro.update(zip(GERACAO_4[:8], self.geracao4.linha_paterna))
            registro.update(zip(GERACAO_4[8:], self.geracao4.linha_materna))
        if self.geracao5:
            registro.update(zip(GERACAO_5[:16], self.geracao5.linha_paterna))
            registro.update(zip(GERACAO_5[16:], self.geracao5.linha_materna))
        return registro


# --- Pedigree interpretado a partir de texto ---

class LinhaGeracao(BaseModel):
    paterna: List[str]
    materna: List[str]


def _geracao_vazia(geracao: int) -> LinhaGeracao:
    vagas = VAGAS_POR_LADO[geracao]
    return LinhaGeracao(paterna=[''] * vagas, materna=[''] * vagas)


class PedigreeAnalisado(BaseModel):
    """
    Ancestrais por geração. Cada lado tem tamanho fixo (1, 2, 4, 8, 16);
    vagas sem ancestral são strings vazias, nunca None.
    """
    sujeito: str = ''
    geracao1: LinhaGeracao = Field(default_factory=lambda: _geracao_vazia(1))
    geracao2: LinhaGeracao = Field(default_factory=lambda: _geracao_vazia(2))
    geracao3: LinhaGeracao = Field(default_factory=lambda: _geracao_vazia(3))
    geracao4: LinhaGeracao = Field(default_factory=lambda: _geracao_vazia(4))
    geracao5: LinhaGeracao = Field(default_factory=lambda: _geracao_vazia(5))

    def geracao(self, numero: int) -> LinhaGeracao:
        return getattr(self, f'geracao{numero}')

    @property
    def pai(self) -> str:
        return self.geracao1.paterna[0]

    @property
    def mae(self) -> str:
        return self.geracao1.materna[0]

    @property
    def avo_paterno(self) -> str:
        return self.geracao2.paterna[0]

    @property
    def avo_paterna(self) -> str:
        return self.geracao2.paterna[1]

    @property
    def avo_materno(self) -> str:
        return self.geracao2.materna[0]

    @property
    def avo_materna(self) -> str:
        return self.geracao2.materna[1]

    def total_ancestrais(self) -> int:
        return sum(
            1 for g in CAMPOS_POR_GERACAO
            for nome in self.geracao(g).paterna + self.geracao(g).materna if nome
        )


# --- Resultados da análise ---

class AncestralComum(BaseModel):
    nome: str
    geracao_a: int
    geracao_b: int
    geracoes: int
    contribuicao: float
    caminho: str


class RecomendacaoPareamento(BaseModel):
    animal_id: Optional[str] = None
    animal_nome: Optional[str] = None
    animal_tag: Optional[str] = None
    animal_raca: str
    animal_sexo: str
    coeficiente_consanguinidade: float
    percentual_consanguinidade: float
    nivel_risco: NivelRisco
    ancestrais_comuns: List[AncestralComum]
    recomendacao: str
    caminho_detalhado: str
    conselho_compra: ConselhoCompra
    profundidade_pedigree: int


class AnaliseParentesco(BaseModel):
    animal_externo: Dict[str, Optional[str]]
    compativeis: List[RecomendacaoPareamento]
    cautelosos: List[RecomendacaoPareamento]
    evitar: List[RecomendacaoPareamento]
    total_animais_analisados: int
    total_falhas: int
    data_analise: str


class AnalisePareamento(BaseModel):
    coeficiente: float
    percentual: float
    ancestrais_comuns: List[AncestralComum]
    nivel_risco: NivelRisco
    recomendacao: str
    conselho_compra: ConselhoCompra
    caminho_detalhado: str


class RecomendacaoAcasalamento(BaseModel):
    id: str
    id_macho: str
    nome_macho: Optional[str] = None
    id_femea: str
    nome_femea: Optional[str] = None
    especie: Optional[str] = None
    pontuacao_compatibilidade: int
    ganho_diversidade_genetica: int
    risco_consanguinidade: NivelRisco
    recomendacoes: List[str]
    justificativa: List[str]


# --- Corpos de requisição ---

class AnaliseConsanguinidadeInput(BaseModel):
    pedigree: PedigreeExterno
    id_usuario: Optional[str] = Field(None, description="Restringe o rebanho a um usuário.")


class PareamentoInput(BaseModel):
    id_animal_a: str = Field(..., description="ID do primeiro animal do rebanho.")
    id_animal_b: str = Field(..., description="ID do segundo animal do rebanho.")


class TextoPedigreeInput(BaseModel):
    texto: str = Field(..., description="Texto extraído do documento de pedigree.")


class CamposPedigreeResponse(BaseModel):
    sujeito: str
    total_ancestrais: int
    campos: Dict[str, str]

