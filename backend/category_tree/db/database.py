# backend/category_tree/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo define los componentes básicos de persistencia:
- Clase base para modelos (Base)
- Database: motor asíncrono + fábrica de sesiones con ciclo de vida propio
  (connect con reintentos, create_tables, dispose)

No existe un motor global: la aplicación crea una instancia de Database en
su lifespan y la inyecta en los endpoints a través de app/api/deps.py.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from category_tree.core.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


class Database:
    """
    Gestiona el motor de SQLAlchemy y las sesiones asíncronas.

    Args:
        url: URL asíncrona de SQLAlchemy (postgresql+asyncpg://..., sqlite+aiosqlite://...)
        connect_max_retries: Número máximo de intentos de conexión en connect()
        connect_retry_delay: Segundos de espera entre intentos
        echo: Si se registran las sentencias SQL emitidas
    """

    def __init__(
        self,
        url: str,
        connect_max_retries: int = 5,
        connect_retry_delay: float = 2.0,
        echo: bool = False,
    ):
        self.url = url
        self.connect_max_retries = connect_max_retries
        self.connect_retry_delay = connect_retry_delay

        if url.startswith("sqlite"):
            # Una única conexión compartida: necesario para bases ":memory:"
            engine_options = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        else:
            engine_options = {"pool_pre_ping": True}

        self.engine = create_async_engine(url, echo=echo, **engine_options)

        # expire_on_commit=False es importante para que los objetos sigan siendo utilizables
        # después de que la transacción se haya confirmado.
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def connect(self) -> None:
        """
        Verifica la conexión con la base de datos, reintentando si falla.

        Raises:
            DatabaseConnectionError: Si no se logra conectar tras connect_max_retries intentos
        """
        for attempt in range(1, self.connect_max_retries + 1):
            try:
                async with self.engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                logger.info("Connected to the database")
                return
            except (SQLAlchemyError, OSError) as e:
                logger.warning(f"Error connecting to the database (Attempt {attempt}): {e}")
                if attempt < self.connect_max_retries:
                    await asyncio.sleep(self.connect_retry_delay)

        raise DatabaseConnectionError(
            f"Unable to connect to the database after {self.connect_max_retries} attempts"
        )

    async def create_tables(self) -> None:
        """Crea las tablas declaradas en los modelos si no existen."""
        # Importar los modelos para que queden registrados en Base.metadata
        from category_tree.db.models import category_model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Comprueba en un único intento si la base de datos responde."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database ping failed: {e}")
            return False

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Proporciona una sesión que se cierra siempre al salir del contexto."""
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        """Cierra el pool de conexiones del motor."""
        await self.engine.dispose()
        logger.info("Database connections closed")
