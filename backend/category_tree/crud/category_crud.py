# backend/category_tree/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para categorías,
proporcionando una capa de abstracción entre la capa de servicios y la base de datos.

Funcionalidades principales:
- Consultas por ID y por padre
- Recuperación de descendientes por niveles (profundidad acotada)
- Actualización del único campo mutable de la jerarquía (parent_id)
- Borrado con huérfanos explícitos (los hijos pasan a ser raíz)

Las funciones no validan reglas de negocio; eso es responsabilidad de
services/category_service.py.
"""

from typing import Dict, List, Optional, Tuple
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.db.models.category_model import Category

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID.

    Args:
        db: Sesión de SQLAlchemy
        category_id: ID único de la categoría

    Returns:
        Objeto Category si existe, None si no se encuentra
    """
    result = await db.execute(
        select(Category)
        .filter(Category.id == category_id)
        .execution_options(populate_existing=True)  # Nunca devolver estado en caché de la sesión
    )
    return result.scalars().first()


async def get_parent_id(db: AsyncSession, category_id: int) -> Tuple[bool, Optional[int]]:
    """
    Obtiene solo el parent_id de una categoría.

    Returns:
        Tupla (encontrada, parent_id). Si la categoría no existe devuelve (False, None).
    """
    result = await db.execute(select(Category.parent_id).filter(Category.id == category_id))
    row = result.first()
    if row is None:
        return False, None
    return True, row.parent_id


async def get_category_with_descendants(
    db: AsyncSession, category_id: int, depth: int = 2
) -> Optional[Tuple[Category, Dict[int, List[Category]]]]:
    """
    Obtiene una categoría junto con sus descendientes hasta `depth` niveles.

    Se realiza una consulta por nivel (WHERE parent_id IN (...)), nunca una
    por nodo.

    Args:
        db: Sesión de SQLAlchemy
        category_id: ID de la categoría raíz del subárbol
        depth: Número de niveles de hijos a recuperar

    Returns:
        Tupla (categoría, hijos agrupados por parent_id), o None si la categoría no existe.
        Los nodos del último nivel no aparecen como clave del diccionario.
    """
    root = await get_category(db, category_id)
    if root is None:
        return None

    children_by_parent: Dict[int, List[Category]] = {}
    frontier = [root.id]
    for _ in range(depth):
        if not frontier:
            break
        result = await db.execute(
            select(Category)
            .filter(Category.parent_id.in_(frontier))
            .order_by(Category.id)
            .execution_options(populate_existing=True)
        )
        level = list(result.scalars().all())
        for parent_id in frontier:
            children_by_parent[parent_id] = []
        for child in level:
            children_by_parent[child.parent_id].append(child)
        # Un nodo ya expandido solo reaparece si los datos contienen un ciclo
        frontier = [child.id for child in level if child.id not in children_by_parent]

    return root, children_by_parent


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_category(db: AsyncSession, name: str, parent_id: Optional[int] = None) -> Category:
    """
    Crea una nueva categoría en la base de datos.

    El ID y las marcas de tiempo los asigna la base de datos. Es importante
    validar que el parent_id existe antes de llamar esta función.

    Returns:
        Objeto Category recién creado y persistido
    """
    db_category = Category(name=name, parent_id=parent_id)
    db.add(db_category)
    await db.commit()  # Persiste en la base de datos
    await db.refresh(db_category)  # Recarga id, created_at y updated_at
    return db_category


async def update_category_parent(db: AsyncSession, category_id: int, parent_id: Optional[int]) -> Optional[Category]:
    """
    Actualiza únicamente el parent_id de una categoría.

    Se usa una sentencia UPDATE explícita para que updated_at se refresque
    incluso cuando el valor de parent_id no cambia.

    Returns:
        Objeto Category actualizado, o None si no existe
    """
    await db.execute(
        update(Category)
        .where(Category.id == category_id)
        .values(parent_id=parent_id)
    )
    await db.commit()
    return await db.get(Category, category_id, populate_existing=True)


async def delete_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Elimina una categoría de la base de datos.

    Los hijos directos quedan huérfanos (parent_id = NULL) en la misma
    transacción. La foreign key también declara ON DELETE SET NULL, pero no
    todos los motores la aplican (SQLite sin PRAGMA foreign_keys), así que
    se hace de forma explícita.

    Returns:
        Objeto Category eliminado (estado previo al borrado), o None si no existía
    """
    db_category = await get_category(db, category_id)
    if db_category:
        await db.execute(
            update(Category)
            .where(Category.parent_id == category_id)
            .values(parent_id=None)
        )
        await db.delete(db_category)
        await db.commit()
    return db_category
