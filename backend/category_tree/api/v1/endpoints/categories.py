"""
Endpoints REST para la gestión del árbol de categorías.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from category_tree.api import deps
from category_tree.schemas import category_schema
from category_tree.services.category_service import category_service

logger = logging.getLogger(__name__)
router = APIRouter()

_NOT_FOUND = {"description": "Category not found."}


@router.post(
    "/",
    response_model=category_schema.CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new category",
    responses={status.HTTP_404_NOT_FOUND: {"description": "Parent category not found."}},
)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_in: category_schema.CategoryCreate,
) -> category_schema.CategoryResponse:
    """Crea una nueva categoría, opcionalmente bajo un padre existente."""
    logger.info(f"🆕 CATEGORÍA: Creando '{category_in.name}' bajo padre {category_in.parent_id}")
    category = await category_service.create_new_category(db=db, category_in=category_in)
    return category


@router.get(
    "/{category_id}",
    response_model=category_schema.CategoryTree,
    summary="Get a subtree by providing a parent node ID",
    responses={status.HTTP_404_NOT_FOUND: _NOT_FOUND},
)
async def read_subtree(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int = Path(..., description="ID of the parent category"),
) -> category_schema.CategoryTree:
    """Obtiene una categoría con sus hijos y nietos."""
    logger.debug(f"🔍 CATEGORÍA: Buscando subárbol de {category_id}")
    return await category_service.find_subtree(db=db, category_id=category_id)


@router.delete(
    "/{category_id}",
    response_model=category_schema.CategoryResponse,
    summary="Remove a category",
    responses={status.HTTP_404_NOT_FOUND: _NOT_FOUND},
)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int = Path(..., description="ID of the category to delete"),
) -> category_schema.CategoryResponse:
    """Elimina una categoría; sus hijos pasan a ser categorías raíz."""
    logger.info(f"🗑️ CATEGORÍA: Eliminando categoría {category_id}")
    deleted_category = await category_service.delete_existing_category(db=db, category_id=category_id)
    return deleted_category


@router.patch(
    "/{category_id}/move",
    response_model=category_schema.CategoryResponse,
    summary="Move a subtree from one parent to another",
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "Category or target parent not found."},
        status.HTTP_409_CONFLICT: {"description": "The move would create a cycle."},
    },
)
async def move_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int = Path(..., description="ID of the category to move"),
    move_in: category_schema.CategoryMove,
) -> category_schema.CategoryResponse:
    """Mueve una categoría (y su subárbol) bajo otro padre, o a la raíz con null."""
    logger.info(f"🔄 CATEGORÍA: Moviendo {category_id} bajo {move_in.target_parent_id}")
    moved_category = await category_service.move_category(db=db, category_id=category_id, move_in=move_in)
    return moved_category
