# backend/category_tree/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

from category_tree.api.v1.endpoints import categories

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ROUTER DE CATEGORÍAS
# Crear, consultar subárboles, eliminar y mover categorías jerárquicas
api_router_v1.include_router(
    categories.router,              # Router con endpoints de categorías
    prefix="/categories",           # Prefijo: /api/v1/categories
    tags=["Categories"]             # Tag para documentación OpenAPI/Swagger
)
