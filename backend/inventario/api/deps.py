# backend/inventario/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API:
- Sesión de base de datos por petición
- Configuración y servicios construidos una vez en create_app() (app.state)
- Autenticación por JWT y control de roles
- Lectura tolerante de los parámetros de consulta del catálogo
"""

from typing import AsyncGenerator, Callable, Optional, Tuple

from fastapi import Cookie, Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inventario.core.config import Settings
from inventario.core.security import (
    ACCESS_TOKEN_COOKIE,
    CurrentUser,
    UserType,
    authenticate,
    extract_token,
    require_roles,
)
from inventario.schemas.catalog_schema import (
    CatalogFilters,
    CatalogPageRequest,
    CatalogSort,
    SortDirection,
    SortKey,
)
from inventario.services.category_service import CategoryService
from inventario.services.product_service import ProductService

# ========================================
# RECURSOS DE LA APLICACIÓN
# ========================================

async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with request.app.state.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service


# ========================================
# AUTENTICACIÓN Y ROLES
# ========================================

def get_current_user(
    settings: Settings = Depends(get_settings),
    access_token: Optional[str] = Cookie(default=None, alias=ACCESS_TOKEN_COOKIE),
    authorization: Optional[str] = Header(default=None),
) -> CurrentUser:
    """Usuario autenticado a partir de la cookie accessToken o del header Bearer."""
    token = extract_token(access_token, authorization)
    return authenticate(token, settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM)


def roles_required(*allowed: UserType) -> Callable[..., CurrentUser]:
    """Dependencia que exige un usuario activo con alguno de los roles indicados."""
    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        return require_roles(user, allowed)
    return dependency


require_staff = roles_required(UserType.EMPLOYEE, UserType.ADMIN)
require_admin = roles_required(UserType.ADMIN)


# ========================================
# PARÁMETROS DEL CATÁLOGO
# ========================================
# Los valores inválidos (no numéricos, negativos, fuera de la lista permitida)
# se descartan y se tratan como si no se hubieran enviado.

def parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_positive_int(raw: Optional[str]) -> Optional[int]:
    value = parse_int(raw)
    return value if value is not None and value > 0 else None


def parse_non_negative_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if value != value or value < 0:  # NaN
        return None
    return value


def parse_bool(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    return raw.strip().lower() in ("true", "1")


def parse_sort_key(raw: Optional[str], allow_stock: bool) -> SortKey:
    try:
        key = SortKey(raw) if raw else SortKey.NAME
    except ValueError:
        return SortKey.NAME
    if key == SortKey.STOCK and not allow_stock:
        return SortKey.NAME
    return key


def parse_direction(raw: Optional[str]) -> SortDirection:
    try:
        return SortDirection(raw) if raw else SortDirection.ASC
    except ValueError:
        return SortDirection.ASC


def _page_request(page: Optional[str], limit: Optional[str]) -> CatalogPageRequest:
    return CatalogPageRequest(
        page=parse_positive_int(page) or 1,
        limit=parse_positive_int(limit),
    )


def public_catalog_params(
    categoria: Optional[str] = Query(default=None),
    precio_min: Optional[str] = Query(default=None, alias="precioMin"),
    precio_max: Optional[str] = Query(default=None, alias="precioMax"),
    es_promocion: Optional[str] = Query(default=None, alias="esPromocion"),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    ordenar_por: Optional[str] = Query(default=None, alias="ordenarPor"),
    orden: Optional[str] = Query(default=None),
) -> Tuple[CatalogFilters, CatalogSort, CatalogPageRequest]:
    filters = CatalogFilters(
        category_id=parse_int(categoria),
        is_promotion=parse_bool(es_promocion),
        price_min=parse_non_negative_float(precio_min),
        price_max=parse_non_negative_float(precio_max),
    )
    sort = CatalogSort(order_by=parse_sort_key(ordenar_por, allow_stock=False), direction=parse_direction(orden))
    return filters, sort, _page_request(page, limit)


def employee_catalog_params(
    nombre: Optional[str] = Query(default=None),
    categoria: Optional[str] = Query(default=None),
    activo: Optional[str] = Query(default=None),
    precio_min: Optional[str] = Query(default=None, alias="precioMin"),
    precio_max: Optional[str] = Query(default=None, alias="precioMax"),
    es_promocion: Optional[str] = Query(default=None, alias="esPromocion"),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    ordenar_por: Optional[str] = Query(default=None, alias="ordenarPor"),
    orden: Optional[str] = Query(default=None),
) -> Tuple[CatalogFilters, CatalogSort, CatalogPageRequest]:
    filters = CatalogFilters(
        name=nombre if nombre and nombre.strip() else None,
        category_id=parse_int(categoria),
        active=parse_bool(activo),
        is_promotion=parse_bool(es_promocion),
        price_min=parse_non_negative_float(precio_min),
        price_max=parse_non_negative_float(precio_max),
    )
    sort = CatalogSort(order_by=parse_sort_key(ordenar_por, allow_stock=True), direction=parse_direction(orden))
    return filters, sort, _page_request(page, limit)
