# =================================================================
# ARQUIVO: config.py (VERSÃO 1.0.0)
# OBJETIVO: Centralizar variáveis de ambiente e configuração de logs.
# =================================================================
import os
import logging
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv('LINHAGEM_LOG_LEVEL', 'INFO').upper()

# Configurar logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))

SUPABASE_DB_URL = os.getenv('SUPABASE_DB_URL')
CSV_ANIMAIS = os.getenv('LINHAGEM_CSV_ANIMAIS', 'animais.csv')

# Validade do cache de recomendações (1 hora)
CACHE_TTL_SEGUNDOS = int(os.getenv('LINHAGEM_CACHE_TTL_SEGUNDOS', '3600'))
