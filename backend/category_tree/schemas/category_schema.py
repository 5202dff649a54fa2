# backend/category_tree/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Los esquemas definen la estructura de datos que fluye a través de la API:
- Validación automática de tipos de datos
- Serialización/deserialización JSON
- Documentación automática en OpenAPI/Swagger
- Separación entre modelo de base de datos y API

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryMove: Para re-asignar el padre de una categoría (PATCH .../move)
- CategoryResponse: Para respuestas de la API
- CategoryTree: Respuesta con hijos anidados (GET)
"""

from datetime import datetime
from typing import Annotated, Optional, List
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str = Field(..., min_length=1, max_length=255, examples=["movie"])
    parent_id: Optional[int] = Field(default=None, examples=[1])


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear una nueva categoría. El ID lo asigna la base de datos."""
    # Se recortan los espacios antes de validar: un nombre solo con espacios no es válido
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)] = Field(
        ..., examples=["movie"]
    )


class CategoryMove(BaseModel):
    """
    Esquema para mover una categoría bajo otro padre.

    target_parent_id es obligatorio en el cuerpo; null convierte la categoría en raíz.
    """
    target_parent_id: Optional[int] = Field(..., examples=[1])


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryTree(CategoryResponse):
    """Categoría con sus hijos anidados (profundidad limitada)."""
    children: List["CategoryTree"] = []


CategoryTree.model_rebuild()
