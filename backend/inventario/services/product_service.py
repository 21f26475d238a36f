# backend/inventario/services/product_service.py

"""
Capa de servicios para operaciones de negocio relacionadas con productos.

Esta capa orquesta las operaciones CRUD, aplica las reglas de negocio del
inventario y coordina el ciclo de vida de las imágenes de producto.

Responsabilidades principales:
- Validación del registro completo (campos obligatorios, precio y stock no
  negativos, stockActual >= stockMinimo) al crear y al actualizar
- Catálogo público y de empleados sobre el motor de catalog_query
- Ajuste de stock dentro de una única transacción con bloqueo de fila
- Imagen por defecto al crear, borrado del fichero anterior al reemplazar y
  del fichero asociado al eliminar el producto

Los errores se comunican con las excepciones de inventario.core.exceptions;
los endpoints no capturan nada, los manejadores globales construyen la respuesta.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inventario.core.config import Settings
from inventario.core.exceptions import InvalidOperationError, NotFoundError, ValidationError
from inventario.crud import category_crud, product_crud
from inventario.db.models.product_model import Product
from inventario.schemas import product_schema
from inventario.schemas.product_schema import MAX_INT_VALUE
from inventario.schemas.catalog_schema import (
    CatalogFilters,
    CatalogPageRequest,
    CatalogSort,
    CatalogVariant,
)
from inventario.services.catalog_query import (
    CatalogPage,
    EMPLOYEE_SORT_KEYS,
    PUBLIC_SORT_KEYS,
    VariantRules,
    query_catalog,
)
from inventario.services.image_storage_service import ImageStorageService

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Producto no encontrado."
PRODUCT_UNAVAILABLE = "Este producto ya no está disponible."
IMAGE_NOT_OWNED = "La imagen indicada no pertenece a este producto."

# Nombre público de cada campo, para los mensajes de validación
_PUBLIC_FIELD_NAMES = {
    "name": "nombre",
    "price": "precio",
    "current_stock": "stockActual",
    "minimum_stock": "stockMinimo",
    "active": "activo",
}
REQUIRED_FIELDS = ("name", "price", "current_stock", "minimum_stock", "active")


class ProductService:
    """
    Servicio para operaciones de negocio relacionadas con productos.

    Se construye una vez por proceso en create_app() y se inyecta en los
    endpoints mediante dependencias de FastAPI.
    """

    def __init__(self, settings: Settings, image_storage: ImageStorageService):
        self.settings = settings
        self.image_storage = image_storage
        self.catalog_rules = {
            CatalogVariant.PUBLIC: VariantRules(
                active_only=True,
                allowed_sort_keys=PUBLIC_SORT_KEYS,
                default_limit=settings.PUBLIC_CATALOG_DEFAULT_LIMIT,
            ),
            CatalogVariant.EMPLOYEE: VariantRules(
                active_only=False,
                allowed_sort_keys=EMPLOYEE_SORT_KEYS,
                default_limit=settings.EMPLOYEE_CATALOG_DEFAULT_LIMIT,
            ),
        }

    # ========================================
    # VALIDACIONES DE NEGOCIO
    # ========================================

    @staticmethod
    def validate_product_data(data: Dict[str, Any]) -> None:
        """
        Valida un registro completo de producto.

        Raises:
            ValidationError: con el primer problema encontrado.
        """
        missing = [_PUBLIC_FIELD_NAMES[key] for key in REQUIRED_FIELDS if data.get(key) is None]
        if missing:
            raise ValidationError(f"Faltan campos obligatorios: {', '.join(missing)}.")
        if not str(data["name"]).strip():
            raise ValidationError("nombre no puede estar vacío.")
        if data["price"] < 0:
            raise ValidationError("precio debe ser mayor o igual a 0.")
        if data["current_stock"] < 0:
            raise ValidationError("stockActual debe ser mayor o igual a 0.")
        if data["minimum_stock"] < 0:
            raise ValidationError("stockMinimo debe ser mayor o igual a 0.")
        if data["current_stock"] < data["minimum_stock"]:
            raise ValidationError("stockActual no puede ser menor que stockMinimo.")

    @staticmethod
    def _snapshot(product: Product) -> Dict[str, Any]:
        return {
            "name": product.name,
            "price": product.price,
            "current_stock": product.current_stock,
            "minimum_stock": product.minimum_stock,
            "active": product.active,
        }

    @staticmethod
    async def _check_category(db: AsyncSession, category_id: Optional[int]) -> None:
        if category_id is None:
            return
        if not await category_crud.get_category(db, category_id):
            raise ValidationError("La categoría indicada no existe.")

    def _resolve_new_image(self, product: Product, requested: Optional[str]) -> str:
        """
        Decide la referencia de imagen resultante de una actualización.

        Vacío o None vuelve a la imagen por defecto. Una referencia local a un
        fichero inexistente se rechaza o se ignora según IMAGE_MISSING_REFERENCE_POLICY.
        Un fichero guardado para otro producto se rechaza siempre: al reemplazarse
        o eliminarse cualquiera de los dos se borraría la imagen del otro.
        """
        if not requested or not requested.strip():
            return self.image_storage.default_image_url
        if self.image_storage.exists(requested):
            if not self.image_storage.belongs_to(requested, product.product_id):
                raise ValidationError(IMAGE_NOT_OWNED)
            return requested
        if self.settings.IMAGE_MISSING_REFERENCE_POLICY == "revert":
            logger.warning(
                f"Producto {product.product_id}: imagen '{requested}' inexistente, se conserva '{product.image_url}'"
            )
            return product.image_url
        raise ValidationError("La imagen indicada no existe en el servidor.")

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_product(self, db: AsyncSession, product_id: int) -> Product:
        product = await product_crud.get_product(db, product_id)
        if not product:
            raise NotFoundError(PRODUCT_NOT_FOUND)
        return product

    async def get_public_product(self, db: AsyncSession, product_id: int) -> Product:
        """Detalle público: los productos inactivos se tratan como inexistentes."""
        product = await product_crud.get_product(db, product_id)
        if not product or not product.active:
            raise NotFoundError(PRODUCT_UNAVAILABLE)
        return product

    async def list_products(self, db: AsyncSession) -> List[Product]:
        return await product_crud.get_all_products(db)

    async def get_products_by_category(self, db: AsyncSession, category_id: int) -> List[Product]:
        return await product_crud.get_products_by_category(db, category_id)

    async def get_products_by_active(self, db: AsyncSession, active: bool) -> List[Product]:
        return await product_crud.get_products_by_active(db, active)

    async def get_catalog(
        self,
        db: AsyncSession,
        variant: CatalogVariant,
        filters: CatalogFilters,
        sort: CatalogSort,
        page: CatalogPageRequest,
    ) -> CatalogPage:
        """
        Catálogo filtrado, ordenado y paginado.

        El catálogo público parte solo de productos activos; el de empleados de todos.
        """
        if variant == CatalogVariant.PUBLIC:
            source = await self.get_products_by_active(db, True)
        else:
            source = await self.list_products(db)

        result = query_catalog(
            source, filters, sort, page, variant=variant, rules=self.catalog_rules[variant]
        )
        logger.debug(
            f"Catálogo {variant.value}: {result.total} resultados, página {result.page}/{result.total_pages}"
        )
        return result

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_product(self, db: AsyncSession, product_in: product_schema.ProductCreate) -> Product:
        values = product_in.model_dump()
        self.validate_product_data(values)
        await self._check_category(db, values.get("category_id"))

        if values.get("is_promotion") is None:
            values["is_promotion"] = False
        image_url = values.get("image_url")
        if not image_url or not image_url.strip():
            values["image_url"] = self.image_storage.default_image_url
        elif self.image_storage.is_local(image_url) and not self.image_storage.is_default(image_url):
            # El producto aún no tiene ID, ningún fichero guardado puede ser suyo
            raise ValidationError(IMAGE_NOT_OWNED)

        product = await product_crud.create_product(db, values)
        logger.info(f"Producto creado: {product.product_id} '{product.name}'")
        return product

    async def update_product(
        self, db: AsyncSession, product_id: int, product_in: product_schema.ProductUpdate
    ) -> Product:
        product = await self.get_product(db, product_id)

        changes = product_in.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No hay cambios para aplicar.")

        self.validate_product_data({**self._snapshot(product), **changes})
        await self._check_category(db, changes.get("category_id"))

        previous_image = product.image_url
        if "image_url" in changes:
            changes["image_url"] = self._resolve_new_image(product, changes["image_url"])
        if "is_promotion" in changes and changes["is_promotion"] is None:
            changes["is_promotion"] = False

        updated = await product_crud.update_product(db, product, changes)

        if updated.image_url != previous_image:
            self.image_storage.delete_if_not_default(previous_image)

        logger.info(f"Producto actualizado: {product_id} ({', '.join(sorted(changes))})")
        return updated

    async def delete_product(self, db: AsyncSession, product_id: int) -> None:
        product = await self.get_product(db, product_id)
        image_url = product.image_url
        await product_crud.delete_product(db, product)
        self.image_storage.delete_if_not_default(image_url)
        logger.info(f"Producto eliminado: {product_id}")

    async def adjust_stock(self, db: AsyncSession, product_id: int, delta: int) -> Product:
        """
        Suma (o resta, con delta negativo) unidades al stock actual.

        La lectura y la escritura ocurren en la misma transacción con la fila
        bloqueada, de modo que ajustes concurrentes no pierden actualizaciones.

        Raises:
            NotFoundError: el producto no existe.
            InvalidOperationError: el stock resultante sería negativo o superaría
                el máximo almacenable.
        """
        product = await product_crud.get_product_for_update(db, product_id)
        if not product:
            await db.rollback()
            raise NotFoundError(PRODUCT_NOT_FOUND)

        new_stock = product.current_stock + delta
        if new_stock < 0:
            await db.rollback()
            raise InvalidOperationError(
                f"Stock insuficiente. Stock actual: {product.current_stock}, cantidad solicitada: {abs(delta)}"
            )
        if new_stock > MAX_INT_VALUE:
            await db.rollback()
            raise InvalidOperationError(
                f"El stock resultante supera el máximo permitido ({MAX_INT_VALUE})."
            )

        updated = await product_crud.set_stock(db, product, new_stock)
        logger.info(f"Stock del producto {product_id}: {new_stock} ({delta:+d})")
        return updated

    async def replace_image(
        self, db: AsyncSession, product_id: int, content: bytes, content_type: Optional[str]
    ) -> Product:
        """Guarda una imagen subida como nueva imagen del producto y borra la anterior."""
        product = await self.get_product(db, product_id)
        previous_image = product.image_url

        new_url = self.image_storage.save_product_image(product_id, content, content_type)
        try:
            updated = await product_crud.update_product(db, product, {"image_url": new_url})
        except Exception:
            self.image_storage.delete_if_not_default(new_url)
            raise

        if previous_image != new_url:
            self.image_storage.delete_if_not_default(previous_image)
        logger.info(f"Imagen del producto {product_id} reemplazada: {new_url}")
        return updated
