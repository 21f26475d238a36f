# backend/inventario/api/v1/endpoints/products.py

"""
Endpoints REST para la gestión de productos (requieren autenticación).

- Lectura y ajuste de stock: empleados y administradores
- Alta, modificación, baja y subida de imagen: solo administradores
"""

import logging
from typing import Tuple

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventario.api import deps
from inventario.api.v1.endpoints.catalog import to_page_response
from inventario.core.config import Settings
from inventario.schemas import product_schema
from inventario.schemas.catalog_schema import (
    CatalogFilters,
    CatalogPageRequest,
    CatalogPageResponse,
    CatalogSort,
    CatalogVariant,
)
from inventario.schemas.response_schema import ApiResponse, success_response
from inventario.services.product_service import ProductService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[CatalogPageResponse],
    dependencies=[Depends(deps.require_staff)],
)
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
    params: Tuple[CatalogFilters, CatalogSort, CatalogPageRequest] = Depends(deps.employee_catalog_params),
):
    """
    Catálogo de empleados: todos los productos con filtros completos.

    Query params opcionales: nombre, categoria, activo, esPromocion, precioMin,
    precioMax, page (1), limit (20), ordenarPor (nombre|precio|reciente|stock), orden.
    """
    filters, sort, page = params
    result = await service.get_catalog(db, CatalogVariant.EMPLOYEE, filters, sort, page)
    message = "Productos obtenidos correctamente." if result.total else "No existen productos registrados."
    return success_response(to_page_response(result), message)


@router.get(
    "/{product_id}",
    response_model=ApiResponse[product_schema.ProductResponse],
    dependencies=[Depends(deps.require_staff)],
)
async def read_product(
    product_id: int,
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
):
    """Obtiene un producto por ID, esté activo o no."""
    product = await service.get_product(db, product_id)
    return success_response(product_schema.ProductResponse.model_validate(product), "Producto obtenido correctamente.")


@router.post(
    "",
    response_model=ApiResponse[product_schema.ProductResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(deps.require_admin)],
)
async def create_product(
    product_in: product_schema.ProductCreate,
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
):
    """Crea un nuevo producto. Sin urlImagen se asigna la imagen por defecto."""
    logger.info(f"🆕 PRODUCTO: Creando producto '{product_in.name}'")
    product = await service.create_product(db, product_in)
    return success_response(product_schema.ProductResponse.model_validate(product), "Producto creado correctamente.")


@router.put(
    "/{product_id}",
    response_model=ApiResponse[product_schema.ProductResponse],
    dependencies=[Depends(deps.require_admin)],
)
async def update_product(
    product_id: int,
    product_in: product_schema.ProductUpdate,
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
):
    """Actualiza los campos enviados de un producto existente."""
    logger.info(f"🔄 PRODUCTO: Actualizando producto {product_id}")
    product = await service.update_product(db, product_id, product_in)
    return success_response(product_schema.ProductResponse.model_validate(product), "Producto actualizado correctamente.")


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(deps.require_admin)],
)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
):
    """Elimina un producto y su imagen almacenada (salvo la imagen por defecto)."""
    logger.info(f"🗑️ PRODUCTO: Eliminando producto {product_id}")
    await service.delete_product(db, product_id)
    return success_response(None, "Producto eliminado correctamente.")


@router.patch(
    "/{product_id}/stock",
    response_model=ApiResponse[product_schema.ProductResponse],
    dependencies=[Depends(deps.require_staff)],
)
async def adjust_product_stock(
    product_id: int,
    adjustment: product_schema.StockAdjustment,
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
):
    """Suma o resta unidades al stock. Nunca deja el stock en negativo."""
    product = await service.adjust_stock(db, product_id, adjustment.quantity_change)
    return success_response(
        product_schema.ProductResponse.model_validate(product),
        f"Stock actualizado correctamente. Nuevo stock: {product.current_stock}",
    )


@router.post(
    "/{product_id}/imagen",
    response_model=ApiResponse[product_schema.ProductResponse],
    dependencies=[Depends(deps.require_admin)],
)
async def upload_product_image(
    product_id: int,
    imagen: UploadFile = File(...),
    db: AsyncSession = Depends(deps.get_db),
    service: ProductService = Depends(deps.get_product_service),
    settings: Settings = Depends(deps.get_settings),
):
    """Sube una imagen (JPEG, PNG, WEBP o SVG, máx. 5MB) y reemplaza la actual."""
    # Se lee un byte más del máximo para detectar ficheros demasiado grandes
    content = await imagen.read(settings.MAX_IMAGE_SIZE_BYTES + 1)
    product = await service.replace_image(db, product_id, content, imagen.content_type)
    return success_response(product_schema.ProductResponse.model_validate(product), "Imagen actualizada correctamente.")
