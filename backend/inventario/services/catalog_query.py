# backend/inventario/services/catalog_query.py

"""
Motor de consulta del catálogo de productos.

Recibe una instantánea de productos ya cargada y produce una página ordenada
y determinista. Una única implementación sirve al catálogo público y al de
empleados; la variante decide:

- PUBLIC: solo productos activos, se ignora el filtro 'active', se ordena por
  nombre, precio o reciente; 12 productos por página.
- EMPLOYEE: todos los productos, filtro 'active' disponible, se puede ordenar
  también por stock; 20 productos por página.

El motor es puro: no accede a la base de datos, no guarda estado y no lanza
excepciones. Los parámetros llegan ya validados por la capa de API.

Orden: se usa sorted(), que es estable también con reverse=True. Los
productos con la misma clave conservan su orden relativo original tanto en
orden ascendente como descendente.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional

from inventario.schemas.catalog_schema import (
    CatalogFilters,
    CatalogPageRequest,
    CatalogSort,
    CatalogVariant,
    SortDirection,
    SortKey,
)


@dataclass(frozen=True)
class VariantRules:
    active_only: bool
    allowed_sort_keys: FrozenSet[SortKey]
    default_limit: int


PUBLIC_SORT_KEYS = frozenset({SortKey.NAME, SortKey.PRICE, SortKey.RECENT})
EMPLOYEE_SORT_KEYS = PUBLIC_SORT_KEYS | {SortKey.STOCK}

DEFAULT_VARIANT_RULES: Dict[CatalogVariant, VariantRules] = {
    CatalogVariant.PUBLIC: VariantRules(active_only=True, allowed_sort_keys=PUBLIC_SORT_KEYS, default_limit=12),
    CatalogVariant.EMPLOYEE: VariantRules(active_only=False, allowed_sort_keys=EMPLOYEE_SORT_KEYS, default_limit=20),
}


@dataclass
class CatalogPage:
    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


def _price(product: Any) -> Decimal:
    return Decimal(str(product.price))


_SORT_KEYS: Dict[SortKey, Callable[[Any], Any]] = {
    SortKey.NAME: lambda p: p.name.casefold(),
    SortKey.PRICE: _price,
    SortKey.RECENT: lambda p: p.product_id or 0,
    SortKey.STOCK: lambda p: p.current_stock,
}


def _build_predicates(filters: CatalogFilters, rules: VariantRules) -> List[Callable[[Any], bool]]:
    predicates: List[Callable[[Any], bool]] = []

    if rules.active_only:
        predicates.append(lambda p: bool(p.active))
    elif filters.active is not None:
        predicates.append(lambda p: bool(p.active) == filters.active)

    if filters.name is not None and filters.name.strip():
        needle = filters.name.casefold()
        predicates.append(lambda p: needle in p.name.casefold())

    if filters.category_id is not None:
        predicates.append(lambda p: p.category_id == filters.category_id)

    if filters.is_promotion is not None:
        predicates.append(lambda p: bool(p.is_promotion) == filters.is_promotion)

    # Los límites de precio solo se aplican con valores no negativos
    if filters.price_min is not None and filters.price_min >= 0:
        price_min = Decimal(str(filters.price_min))
        predicates.append(lambda p: _price(p) >= price_min)

    if filters.price_max is not None and filters.price_max >= 0:
        price_max = Decimal(str(filters.price_max))
        predicates.append(lambda p: _price(p) <= price_max)

    return predicates


def apply_filters(products: Iterable[Any], filters: CatalogFilters, rules: VariantRules) -> List[Any]:
    """Devuelve los productos que cumplen todos los filtros, en su orden original."""
    predicates = _build_predicates(filters, rules)
    return [p for p in products if all(check(p) for check in predicates)]


def sort_products(products: List[Any], sort: CatalogSort, rules: VariantRules) -> List[Any]:
    order_by = sort.order_by if sort.order_by in rules.allowed_sort_keys else SortKey.NAME
    return sorted(
        products,
        key=_SORT_KEYS[order_by],
        reverse=sort.direction == SortDirection.DESC,
    )


def query_catalog(
    source: Iterable[Any],
    filters: Optional[CatalogFilters] = None,
    sort: Optional[CatalogSort] = None,
    page: Optional[CatalogPageRequest] = None,
    variant: CatalogVariant = CatalogVariant.EMPLOYEE,
    rules: Optional[VariantRules] = None,
) -> CatalogPage:
    """
    Filtra, ordena y pagina una instantánea de productos.

    Args:
        source: productos a consultar (cualquier objeto con los atributos de Product)
        filters: filtros opcionales combinados con AND
        sort: clave y dirección de orden (por defecto nombre ascendente)
        page: página y tamaño de página
        variant: catálogo público o de empleados
        rules: reglas explícitas de la variante; por defecto DEFAULT_VARIANT_RULES[variant]

    Returns:
        CatalogPage con los elementos de la página, el total filtrado,
        la página pedida y el número total de páginas.
    """
    snapshot = list(source)
    if not snapshot:
        return CatalogPage(items=[], total=0, page=1, total_pages=0)

    rules = rules or DEFAULT_VARIANT_RULES[variant]
    filters = filters or CatalogFilters()
    sort = sort or CatalogSort()
    page = page or CatalogPageRequest()

    filtered = apply_filters(snapshot, filters, rules)
    ordered = sort_products(filtered, sort, rules)

    limit = page.limit or rules.default_limit
    total = len(ordered)
    total_pages = math.ceil(total / limit) if total else 0
    start = (page.page - 1) * limit

    return CatalogPage(
        items=ordered[start:start + limit],
        total=total,
        page=page.page,
        total_pages=total_pages,
    )
