# backend/inventario/schemas/catalog_schema.py

"""
Esquemas del catálogo de productos: filtros, ordenamiento, paginación y la
página de resultados que devuelve la API.
"""

import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .product_schema import ProductResponse


class CatalogVariant(str, enum.Enum):
    """Quién consulta el catálogo. Determina pre-filtro, claves de orden y límite por defecto."""
    PUBLIC = "public"
    EMPLOYEE = "employee"


class SortKey(str, enum.Enum):
    NAME = "nombre"
    PRICE = "precio"
    RECENT = "reciente"
    STOCK = "stock"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class CatalogFilters(BaseModel):
    """Filtros opcionales; se combinan con AND. None significa filtro ausente."""
    name: Optional[str] = None
    category_id: Optional[int] = None
    active: Optional[bool] = None
    is_promotion: Optional[bool] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class CatalogSort(BaseModel):
    order_by: SortKey = SortKey.NAME
    direction: SortDirection = SortDirection.ASC

    model_config = ConfigDict(frozen=True)


class CatalogPageRequest(BaseModel):
    """Página solicitada. Sin limit se usa el límite por defecto de la variante."""
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)


class CatalogPageResponse(BaseModel):
    items: List[ProductResponse] = Field(serialization_alias="productos")
    total: int
    page: int = Field(serialization_alias="pagina")
    total_pages: int = Field(serialization_alias="totalPaginas")
