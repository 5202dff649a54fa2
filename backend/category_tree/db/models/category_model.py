# backend/category_tree/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría para la aplicación.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.sql import func

from category_tree.db.database import Base

class Category(Base):
    """
    Nodo del bosque de categorías.

    Los hijos no se modelan como relationship: se obtienen siempre con una
    consulta explícita sobre parent_id (ver category_crud.get_category_with_descendants).
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # Al borrar el padre, los hijos pasan a ser raíz
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        # En SQLite, sin AUTOINCREMENT se reutilizaría el ID del último registro borrado
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r} parent_id={self.parent_id}>"
