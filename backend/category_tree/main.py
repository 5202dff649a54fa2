# backend/category_tree/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de rutas, manejadores de excepciones,
documentación automática y el ciclo de vida de la base de datos.

Características principales:
- Configuración centralizada de la aplicación
- Registro de routers de la API con prefijos
- Documentación automática (OpenAPI/Swagger)
- Ciclo de vida (lifespan): conexión con reintentos al arrancar y cierre al parar
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse

from category_tree.api import deps
from category_tree.api.v1.api_router import api_router_v1  # Router principal de la API v1
from category_tree.core.config import Settings, settings  # Configuración centralizada de la aplicación
from category_tree.core.exceptions import setup_exception_handlers
from category_tree.core.logging_config import setup_logging
from category_tree.db.database import Database

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None, app_settings: Settings = settings) -> FastAPI:
    """
    Construye la aplicación FastAPI.

    Args:
        database: Base de datos a inyectar; si es None se crea a partir de la configuración
        app_settings: Configuración de la aplicación

    Returns:
        Aplicación FastAPI lista para servir
    """
    if database is None:
        database = Database(
            app_settings.DATABASE_URL,
            connect_max_retries=app_settings.DB_CONNECT_MAX_RETRIES,
            connect_retry_delay=app_settings.DB_CONNECT_RETRY_DELAY,
            echo=app_settings.DB_ECHO,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # STARTUP: verificar la conexión (con reintentos) y preparar el esquema
        await app.state.database.connect()
        if app_settings.DB_CREATE_TABLES:
            await app.state.database.create_tables()
        logger.info(f"{app_settings.PROJECT_NAME} v{app_settings.PROJECT_VERSION} started")
        yield
        # SHUTDOWN: liberar el pool de conexiones
        await app.state.database.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        openapi_url=f"{app_settings.API_V1_STR}/openapi.json",
        version=app_settings.PROJECT_VERSION,
        description="API for managing hierarchical categories",
        lifespan=lifespan,
    )
    app.state.database = database

    setup_exception_handlers(app)
    app.include_router(api_router_v1, prefix=app_settings.API_V1_STR)

    @app.get("/", tags=["Root"])
    async def read_root():
        """Endpoint raíz para verificación básica del estado de la API."""
        return {"message": f"Welcome to {app_settings.PROJECT_NAME} v{app_settings.PROJECT_VERSION}"}

    @app.get("/health", tags=["Root"])
    async def health_check(database: Database = Depends(deps.get_database)):
        """Comprueba que la base de datos responde."""
        if await database.ping():
            return {"status": "ok", "database": "connected"}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "database": "unreachable"},
        )

    return app


def run() -> None:
    """
    Arranca el servidor uvicorn con la configuración actual.

    El logging y la aplicación se crean aquí y no al importar el módulo.
    """
    import uvicorn

    setup_logging(settings)
    uvicorn.run("category_tree.main:create_app", factory=True, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
