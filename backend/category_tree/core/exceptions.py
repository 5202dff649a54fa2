# backend/category_tree/core/exceptions.py
"""
Excepciones de dominio y sus manejadores HTTP.

La capa de servicios lanza estas excepciones tipadas en lugar de
HTTPException, de modo que la capa HTTP decide el código de estado
sin inspeccionar el texto del mensaje.

Jerarquía:
- CategoryTreeError
  - NotFoundError          -> 404
  - InvalidOperationError  -> 400
    - CycleDetectedError   -> 409
  - DatabaseConnectionError (solo en el arranque)
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CategoryTreeError(Exception):
    """Excepción base de la aplicación."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CategoryTreeError):
    """Una categoría referenciada (sujeto, padre o destino) no existe."""

    def __init__(self, entity: str, entity_id: Optional[int]):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class InvalidOperationError(CategoryTreeError):
    """La operación solicitada no es válida para el estado actual del árbol."""


class CycleDetectedError(InvalidOperationError):
    """Mover la categoría la convertiría en ancestro de sí misma."""

    def __init__(self, category_id: int, target_parent_id: int):
        self.category_id = category_id
        self.target_parent_id = target_parent_id
        super().__init__(
            f"Moving category {category_id} under {target_parent_id} would create a cycle in the hierarchy."
        )


class DatabaseConnectionError(CategoryTreeError):
    """No se pudo conectar a la base de datos tras agotar los reintentos."""


# ========================================
# MANEJADORES DE EXCEPCIONES
# ========================================

async def not_found_exception_handler(request: Request, exc: NotFoundError):
    """Recurso no encontrado -> 404."""
    logger.warning(f"Not Found Error: {exc.message}")
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


async def cycle_detected_exception_handler(request: Request, exc: CycleDetectedError):
    """Movimiento que crearía un ciclo -> 409."""
    logger.warning(f"Cycle Detected: {exc.message}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


async def invalid_operation_exception_handler(request: Request, exc: InvalidOperationError):
    """Operación inválida genérica -> 400."""
    logger.warning(f"Invalid Operation: {exc.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


def setup_exception_handlers(app: FastAPI) -> None:
    """Registra los manejadores de excepciones de dominio en la aplicación."""
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(CycleDetectedError, cycle_detected_exception_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_exception_handler)
