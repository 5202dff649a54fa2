# backend/category_tree/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Category Tree API"
    PROJECT_VERSION: str = "1.0.0"

    # Configuración de la base de datos
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "postgres")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "categories_db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # Permite usar cualquier URL asíncrona de SQLAlchemy (p.ej. sqlite+aiosqlite:///./categories.db)
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Conexión inicial con reintentos
    DB_CONNECT_MAX_RETRIES: int = 5
    DB_CONNECT_RETRY_DELAY: float = 2.0
    DB_CREATE_TABLES: bool = False
    DB_ECHO: bool = False

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

# Instancia global de la configuración
settings = Settings()
