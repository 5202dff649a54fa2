# backend/category_tree/api/deps.py
"""
Módulo de dependencias para FastAPI.

Centraliza las dependencias que se inyectan en los endpoints de la API.
La instancia de Database vive en app.state (creada en el lifespan de main.py),
de modo que los tests pueden sustituirla sin tocar variables globales.
"""

from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.db.database import Database


def get_database(request: Request) -> Database:
    """
    Dependencia de FastAPI que devuelve la base de datos de la aplicación.
    """
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with get_database(request).session() as session:
        yield session
