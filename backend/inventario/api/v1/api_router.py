# backend/inventario/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from inventario.api.v1.endpoints import (
    catalog,
    categories,
    products,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# CATÁLOGO PÚBLICO
# Sin autenticación, solo productos activos
api_router_v1.include_router(
    catalog.router,
    prefix="/catalog",              # Prefijo: /api/v1/catalog
    tags=["Catalog"]
)

# ROUTER DE PRODUCTOS
# Catálogo de empleados, CRUD, stock e imágenes
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# ROUTER DE CATEGORÍAS
api_router_v1.include_router(
    categories.router,
    prefix="/categories",
    tags=["Categories"]
)
