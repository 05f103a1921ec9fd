import os
import pandas as pd
from sqlalchemy import create_engine, text
from typing import Optional
import logging

from linhagem import config
from linhagem.models.campos import CAMPOS_IDENTIDADE, CAMPOS_PEDIGREE, chave_id

logger = logging.getLogger(__name__)

_COLUNAS = ',\n                '.join(f'a.{c}' for c in CAMPOS_IDENTIDADE + CAMPOS_PEDIGREE)


class SupabaseConnection:
    def __init__(self, db_url: Optional[str] = None, csv_animais: Optional[str] = None):
        self.db_url = db_url if db_url is not None else config.SUPABASE_DB_URL
        self.csv_animais = csv_animais or config.CSV_ANIMAIS
        self.engine = None

        if self.db_url:
            try:
                self.engine = create_engine(self.db_url, pool_pre_ping=True)
                logger.info("✅ Conexão com Supabase configurada")
            except Exception as e:
                logger.error(f"❌ Erro ao conectar com Supabase: {e}")
        else:
            logger.warning("⚠️ SUPABASE_DB_URL não configurada, usando rebanho do CSV")

    @property
    def origem(self) -> str:
        return 'supabase' if self.engine else 'csv'

    def test_connection(self) -> bool:
        """Testa a conexão com o banco."""
        if not self.engine:
            return False

        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"❌ Erro na conexão: {e}")
            return False

    def _ler_csv(self) -> pd.DataFrame:
        if not os.path.exists(self.csv_animais):
            logger.warning(f"⚠️ Arquivo {self.csv_animais} não encontrado, rebanho vazio")
            return pd.DataFrame(columns=CAMPOS_IDENTIDADE + CAMPOS_PEDIGREE)
        logger.info(f"📁 Usando rebanho do CSV ({self.csv_animais})")
        return pd.read_csv(self.csv_animais, dtype={'id': str})

    def get_animais_data(self, id_usuario: Optional[str] = None) -> pd.DataFrame:
        """Busca os animais ativos com os 62 campos de pedigree."""
        if not self.engine:
            df = self._ler_csv()
            if id_usuario and 'user_id' in df.columns:
                df = df[df['user_id'].astype(str) == str(id_usuario)]
            return df

        try:
            query = f"""
            SELECT
                {_COLUNAS}
            FROM animals a
            WHERE a.lifecycle_status = 'active'
            """
            params = {}
            if id_usuario:
                query += " AND a.user_id = %(id_usuario)s"
                params["id_usuario"] = id_usuario
            query += " ORDER BY a.name"

            df = pd.read_sql(query, self.engine, params=params or None)
            logger.info(f"✅ Carregados {len(df)} animais do Supabase")
            return df

        except Exception as e:
            logger.error(f"❌ Erro ao buscar animais: {e}")
            logger.info("📁 Usando rebanho do CSV como fallback")
            return self._ler_csv()

    def get_animal_by_id(self, id_animal: str) -> Optional[dict]:
        """Busca um animal específico por ID."""
        if not self.engine:
            df = self._ler_csv()
            if df.empty:
                return None
            encontrados = df[df['id'].map(chave_id) == chave_id(id_animal)]
            if encontrados.empty:
                return None
            return encontrados.astype(object).where(pd.notna(encontrados), None).iloc[0].to_dict()

        try:
            query = f"""
            SELECT
                {_COLUNAS}
            FROM animals a
            WHERE a.id = :id_animal AND a.lifecycle_status = 'active'
            """

            with self.engine.connect() as conn:
                result = conn.execute(text(query), {"id_animal": id_animal})
                row = result.fetchone()

                if row:
                    return dict(row._mapping)
                return None

        except Exception as e:
            logger.error(f"❌ Erro ao buscar animal {id_animal}: {e}")
            return None


# Instância global
supabase_db = SupabaseConnection()
