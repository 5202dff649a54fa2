# backend/category_tree/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio mantiene los invariantes de forma del árbol de categorías:
- Un padre declarado debe existir al crear o mover
- Mover una categoría nunca puede crear un ciclo
- Los subárboles se devuelven con profundidad acotada (SUBTREE_DEPTH)

El servicio no guarda estado entre llamadas: toda la información vive en la
base de datos y cada operación recibe su propia sesión.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.core.exceptions import CycleDetectedError, NotFoundError
from category_tree.crud import category_crud
from category_tree.db.models.category_model import Category
from category_tree.schemas import category_schema

logger = logging.getLogger(__name__)

# Niveles de hijos que se expanden en find_subtree (hijos y nietos)
SUBTREE_DEPTH = 2


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Encapsula la creación, consulta de subárboles, borrado y movimiento de
    categorías. Lanza excepciones tipadas (NotFoundError, CycleDetectedError)
    que la capa HTTP traduce a códigos de estado.
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category_by_id(self, db: AsyncSession, category_id: int) -> Category:
        """
        Obtiene una categoría por su ID.

        Raises:
            NotFoundError: Si la categoría no existe
        """
        category = await category_crud.get_category(db, category_id=category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def find_subtree(self, db: AsyncSession, category_id: int) -> category_schema.CategoryTree:
        """
        Obtiene una categoría con sus hijos y nietos anidados.

        Los descendientes más allá de SUBTREE_DEPTH no se expanden: los nodos
        del último nivel se devuelven con una lista de hijos vacía.

        Args:
            db: Sesión de SQLAlchemy
            category_id: ID de la categoría raíz del subárbol

        Returns:
            CategoryTree con la estructura anidada

        Raises:
            NotFoundError: Si la categoría no existe
        """
        found = await category_crud.get_category_with_descendants(db, category_id, depth=SUBTREE_DEPTH)
        if found is None:
            raise NotFoundError("Category", category_id)

        root, children_by_parent = found
        return self._build_tree(root, children_by_parent, level=0)

    def _build_tree(
        self, node: Category, children_by_parent: Dict[int, List[Category]], level: int
    ) -> category_schema.CategoryTree:
        # Cortar por nivel y no por clave: con un ciclo previo en los datos la raíz reaparece como nieta
        children = []
        if level < SUBTREE_DEPTH:
            children = [
                self._build_tree(child, children_by_parent, level + 1)
                for child in children_by_parent.get(node.id, [])
            ]
        tree = category_schema.CategoryTree.model_validate(node)
        tree.children = children
        return tree

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_category(self, db: AsyncSession, category_in: category_schema.CategoryCreate) -> Category:
        """
        Crea una nueva categoría, verificando antes que el padre exista.

        Args:
            db: Sesión de SQLAlchemy
            category_in: Esquema Pydantic con nombre y padre opcional

        Returns:
            Objeto Category recién creado, con ID y marcas de tiempo

        Raises:
            NotFoundError: Si parent_id se indica y no existe (no se inserta nada)
        """
        if category_in.parent_id is not None:
            parent = await category_crud.get_category(db, category_id=category_in.parent_id)
            if parent is None:
                raise NotFoundError("Parent category", category_in.parent_id)

        category = await category_crud.create_category(db, name=category_in.name, parent_id=category_in.parent_id)
        logger.info(f"Category {category.id} '{category.name}' created under parent {category.parent_id}")
        return category

    async def delete_existing_category(self, db: AsyncSession, category_id: int) -> Category:
        """
        Elimina una categoría y devuelve su estado previo al borrado.

        No borra en cascada: los hijos directos pasan a ser categorías raíz.

        Raises:
            NotFoundError: Si la categoría no existe
        """
        await self.get_category_by_id(db, category_id)

        deleted = await category_crud.delete_category(db, category_id=category_id)
        if deleted is None:
            # Borrada por otra petición entre la comprobación y el borrado
            raise NotFoundError("Category", category_id)

        logger.info(f"Category {category_id} deleted, children orphaned to root")
        return deleted

    async def move_category(
        self, db: AsyncSession, category_id: int, move_in: category_schema.CategoryMove
    ) -> Category:
        """
        Cambia el padre de una categoría.

        Args:
            db: Sesión de SQLAlchemy
            category_id: ID de la categoría a mover
            move_in: Padre destino; None convierte la categoría en raíz

        Returns:
            Objeto Category actualizado

        Raises:
            NotFoundError: Si la categoría o el padre destino no existen
            CycleDetectedError: Si el destino es la propia categoría o uno de sus descendientes
        """
        await self.get_category_by_id(db, category_id)

        target_parent_id = move_in.target_parent_id
        if target_parent_id is not None:
            target_parent = await category_crud.get_category(db, category_id=target_parent_id)
            if target_parent is None:
                raise NotFoundError("Target parent category", target_parent_id)

            await self._validate_no_cycle(db, category_id, target_parent_id)

        moved = await category_crud.update_category_parent(db, category_id, target_parent_id)
        if moved is None:
            raise NotFoundError("Category", category_id)

        logger.info(f"Category {category_id} moved under parent {target_parent_id}")
        return moved

    async def _validate_no_cycle(self, db: AsyncSession, category_id: int, target_parent_id: int) -> None:
        """
        Recorre los ancestros del destino hacia arriba buscando la categoría movida.

        Termina al llegar a una raíz (parent_id NULL) o a una referencia colgante.
        """
        current_id: Optional[int] = target_parent_id
        visited = set()

        while current_id is not None:
            if current_id == category_id:
                raise CycleDetectedError(category_id, target_parent_id)

            if current_id in visited:
                # Datos ya corruptos con un ciclo ajeno a category_id
                logger.warning(f"Existing cycle found above category {target_parent_id} at {current_id}")
                return
            visited.add(current_id)

            found, parent_id = await category_crud.get_parent_id(db, current_id)
            if not found:
                break
            current_id = parent_id

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

# El servicio no tiene estado, una única instancia basta para todos los endpoints
category_service = CategoryService()
