# =================================================================
# ARQUIVO: cache.py (VERSÃO 1.0.0)
# OBJETIVO: Cache em memória com validade (TTL) para resultados de
#           recomendação. Apenas otimização: expirou, recalcula.
# =================================================================
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class CacheRecomendacoes:
    """
    Mapa chave -> (dados, instante da gravação). Protegido por lock porque
    o FastAPI executa endpoints síncronos em um pool de threads.
    """
    def __init__(self, ttl_segundos: float = 3600, relogio: Callable[[], float] = time.monotonic):
        self.ttl_segundos = ttl_segundos
        self._relogio = relogio
        self._dados: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, chave: str) -> Optional[Any]:
        with self._lock:
            entrada = self._dados.get(chave)
            if entrada is None:
                return None
            dados, gravado_em = entrada
            if self._relogio() - gravado_em >= self.ttl_segundos:
                del self._dados[chave]
                return None
            return dados

    def set(self, chave: str, dados: Any) -> None:
        with self._lock:
            self._dados[chave] = (dados, self._relogio())

    def clear(self) -> None:
        with self._lock:
            self._dados.clear()
        logger.info("🗑️ Cache de recomendações limpo")

    def __len__(self) -> int:
        with self._lock:
            return len(self._dados)
