# =================================================================
# ARQUIVO: main.py (VERSÃO 2.0.0 - Genealogia)
# OBJETIVO: API de análise genealógica: consanguinidade com animais
#           externos, pareamentos, recomendações de acasalamento e
#           importação de pedigree em texto.
# =================================================================
from fastapi import FastAPI, HTTPException, Query
import logging
from typing import Any, Callable, Dict, List

from linhagem import config, database
from linhagem.models.analise import analisar_rebanho
from linhagem.models.cache import CacheRecomendacoes
from linhagem.models.genealogia import CalculadorConsanguinidade
from linhagem.models.parser_ascii import mapear_pedigree_para_campos
from linhagem.models.parser_texto import parse_pedigree
from linhagem.models.recomendacoes import GeradorRecomendacoes
from linhagem.models.schemas import (
    AnaliseConsanguinidadeInput,
    AnalisePareamento,
    AnaliseParentesco,
    CamposPedigreeResponse,
    PareamentoInput,
    RecomendacaoAcasalamento,
    TextoPedigreeInput,
)

logger = logging.getLogger(__name__)

# Um único gerador por processo; o cache vale para todas as requisições
gerador = GeradorRecomendacoes(CacheRecomendacoes(ttl_segundos=config.CACHE_TTL_SEGUNDOS))


def _executar(operacao: Callable[[], Any], descricao: str) -> Any:
    """Centraliza o tratamento de erros dos endpoints."""
    try:
        return operacao()
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"❌ ERRO INTERNO ao {descricao}: {e}")
        raise HTTPException(status_code=500, detail=f"Ocorreu um erro interno ao {descricao}.")


# --- API Endpoints ---
app = FastAPI(
    title="Linhagem API",
    version="2.0.0",
    description="API de análise genealógica e consanguinidade para rebanhos."
)

@app.get("/", tags=["Status"])
def read_root():
    """Endpoint principal que retorna o status da API e a origem do rebanho."""
    return {
        "status": "API Operacional",
        "origem_rebanho": database.supabase_db.origem,
        "cache_recomendacoes": {
            "ttl_segundos": gerador.cache.ttl_segundos,
            "entradas": len(gerador.cache),
        },
    }

@app.post("/analisar-consanguinidade", response_model=AnaliseParentesco, tags=["Genealogia"])
def analisar_consanguinidade(data: AnaliseConsanguinidadeInput):
    """
    Compara o pedigree de um animal externo (candidato à compra) com
    todos os animais ativos do rebanho.
    """
    def operacao():
        rebanho = database.supabase_db.get_animais_data(data.id_usuario)
        logger.info(f"🧬 Analisando '{data.pedigree.nome_animal}' contra {len(rebanho)} animais")
        return analisar_rebanho(data.pedigree, rebanho)

    return _executar(operacao, "analisar a consanguinidade")

@app.post("/analisar-pareamento", response_model=AnalisePareamento, tags=["Genealogia"])
def analisar_pareamento(data: PareamentoInput):
    """Parentesco e risco entre dois animais cadastrados no rebanho."""
    def operacao():
        calculador = CalculadorConsanguinidade(database.supabase_db.get_animais_data())
        return calculador.analisar_pareamento(data.id_animal_a, data.id_animal_b)

    return _executar(operacao, "analisar o pareamento")

@app.get(
    "/recomendacoes-acasalamento",
    response_model=List[RecomendacaoAcasalamento],
    tags=["Acasalamento"],
)
def recomendacoes_acasalamento(
    max_depth: int = Query(2, ge=1, le=5, description="Profundidade da verificação de parentesco.")
):
    """Ranking dos melhores acasalamentos dentro do rebanho (até 20)."""
    def operacao():
        return gerador.gerar(database.supabase_db.get_animais_data(), max_depth=max_depth)

    return _executar(operacao, "gerar as recomendações de acasalamento")

@app.delete("/recomendacoes-acasalamento/cache", tags=["Acasalamento"])
def limpar_cache_recomendacoes() -> Dict[str, str]:
    """Invalida o cache (usar quando o rebanho mudar)."""
    gerador.limpar_cache()
    return {"status": "Cache de recomendações limpo"}

@app.post("/pedigree/importar-texto", response_model=CamposPedigreeResponse, tags=["Pedigree"])
def importar_pedigree_texto(data: TextoPedigreeInput):
    """
    Interpreta o texto de um pedigree (árvore ASCII ou seções por geração)
    e devolve os campos do cadastro preenchidos.
    """
    pedigree = _executar(lambda: parse_pedigree(data.texto), "interpretar o pedigree")
    if pedigree is None:
        raise HTTPException(status_code=422, detail="Não foi possível identificar ancestrais no texto.")

    campos = mapear_pedigree_para_campos(pedigree)
    return CamposPedigreeResponse(
        sujeito=pedigree.sujeito,
        total_ancestrais=pedigree.total_ancestrais(),
        campos=campos,
    )

if __name__ == "__main__":
    import uvicorn
    # Para rodar: uvicorn linhagem.main:app --reload --port 5001
    uvicorn.run(app, host="0.0.0.0", port=5001)
