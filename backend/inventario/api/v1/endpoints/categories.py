"""
Endpoints REST para operaciones CRUD de categorías.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventario.api import deps
from inventario.schemas import category_schema
from inventario.schemas.response_schema import ApiResponse, success_response
from inventario.services.category_service import CategoryService

router = APIRouter()

@router.post(
    "",
    response_model=ApiResponse[category_schema.CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(deps.require_admin)],
)
async def create_category(
    category_in: category_schema.CategoryCreate,
    db: AsyncSession = Depends(deps.get_db),
    service: CategoryService = Depends(deps.get_category_service),
):
    """Crea una nueva categoría."""
    category = await service.create_category(db, category_in)
    return success_response(category_schema.CategoryResponse.model_validate(category), "Categoría creada correctamente.")

@router.put(
    "/{category_id}",
    response_model=ApiResponse[category_schema.CategoryResponse],
    dependencies=[Depends(deps.require_admin)],
)
async def update_category(
    category_id: int,
    category_in: category_schema.CategoryUpdate,
    db: AsyncSession = Depends(deps.get_db),
    service: CategoryService = Depends(deps.get_category_service),
):
    """Actualiza una categoría existente."""
    category = await service.update_category(db, category_id, category_in)
    return success_response(category_schema.CategoryResponse.model_validate(category), "Categoría actualizada correctamente.")

@router.delete(
    "/{category_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(deps.require_admin)],
)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
    service: CategoryService = Depends(deps.get_category_service),
):
    """Elimina una categoría. Sus productos se conservan sin categoría."""
    await service.delete_category(db, category_id)
    return success_response(None, "Categoría eliminada correctamente.")

@router.get(
    "/{category_id}",
    response_model=ApiResponse[category_schema.CategoryResponse],
    dependencies=[Depends(deps.require_staff)],
)
async def read_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
    service: CategoryService = Depends(deps.get_category_service),
):
    """Obtiene los detalles de una categoría específica por su ID."""
    category = await service.get_category(db, category_id)
    return success_response(category_schema.CategoryResponse.model_validate(category), "Categoría obtenida correctamente.")

@router.get(
    "",
    response_model=ApiResponse[category_schema.CategoryListResponse],
    dependencies=[Depends(deps.require_staff)],
)
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
    service: CategoryService = Depends(deps.get_category_service),
):
    """Obtiene todas las categorías."""
    categories = await service.list_categories(db)
    data = category_schema.CategoryListResponse(
        categories=[category_schema.CategoryResponse.model_validate(c) for c in categories],
        total=len(categories),
    )
    return success_response(data, "Categorías obtenidas correctamente.")
