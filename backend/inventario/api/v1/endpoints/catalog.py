# backend/inventario/api/v1/endpoints/catalog.py

"""
Endpoints públicos del catálogo de productos.

No requieren autenticación y solo muestran productos activos.
"""

import logging
from typing import Tuple

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventario.api import deps
from inventario.schemas.catalog_schema import (
    CatalogFilters,
    CatalogPageRequest,
    CatalogPageResponse,
    CatalogSort,
    CatalogVariant,
)
from inventario.schemas.product_schema import ProductResponse
from inventario.schemas.response_schema import ApiResponse, success_response
from inventario.services.catalog_query import CatalogPage
from inventario.services.product_service import ProductService

logger = logging.getLogger(__name__)
router = APIRouter()


def to_page_response(result: CatalogPage) -> CatalogPageResponse:
    return CatalogPageResponse(
        items=[ProductResponse.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("", response_model=ApiResponse[CatalogPageResponse])
async def read_public_catalog(
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
    params: Tuple[CatalogFilters, CatalogSort, CatalogPageRequest] = Depends(deps.public_catalog_params),
):
    """
    Catálogo público de productos activos con filtros, orden y paginación.

    Query params opcionales: categoria, precioMin, precioMax, esPromocion,
    page (1), limit (12), ordenarPor (nombre|precio|reciente), orden (asc|desc).

    Ejemplo: /catalog?categoria=1&precioMin=10&precioMax=100&ordenarPor=precio&orden=asc
    """
    filters, sort, page = params
    result = await service.get_catalog(db, CatalogVariant.PUBLIC, filters, sort, page)
    message = "Catálogo obtenido correctamente." if result.total else "No hay productos disponibles actualmente."
    return success_response(to_page_response(result), message)


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def read_public_product(
    product_id: int,
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
):
    """Detalle público de un producto. 404 si no existe o no está activo."""
    product = await service.get_public_product(db, product_id)
    return success_response(ProductResponse.model_validate(product), "Producto obtenido correctamente.")
