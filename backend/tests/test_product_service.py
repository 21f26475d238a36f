"""Tests de las reglas de negocio de ProductService."""

import pytest

from inventario.core.exceptions import InvalidOperationError, NotFoundError, ValidationError
from inventario.schemas.product_schema import ProductUpdate
from inventario.services.image_storage_service import ImageStorageService
from inventario.services.product_service import ProductService

VALID = {"name": "Té", "price": 2, "current_stock": 3, "minimum_stock": 3, "active": False}


class TestValidateProductData:

    def test_valid_record(self):
        ProductService.validate_product_data(VALID)

    def test_stock_equal_to_minimum_is_valid(self):
        ProductService.validate_product_data({**VALID, "current_stock": 0, "minimum_stock": 0})

    def test_false_counts_as_present(self):
        ProductService.validate_product_data({**VALID, "active": False})

    def test_missing_fields_are_listed(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductService.validate_product_data({"name": "Té", "active": True})
        assert exc_info.value.message == "Faltan campos obligatorios: precio, stockActual, stockMinimo."


class TestStockAdjustment:

    async def test_adjust_and_read_back(self, app, db, products):
        service = app.state.product_service

        updated = await service.adjust_stock(db, products[1].product_id, -20)

        assert updated.current_stock == 0

    async def test_failed_adjustment_leaves_stock_unchanged(self, app, db, products):
        service = app.state.product_service
        product_id = products[2].product_id

        with pytest.raises(InvalidOperationError):
            await service.adjust_stock(db, product_id, -4)

        product = await service.get_product(db, product_id)
        assert product.current_stock == 3

    async def test_missing_product(self, app, db):
        with pytest.raises(NotFoundError):
            await app.state.product_service.adjust_stock(db, 42, 1)


class TestImageReferencePolicy:

    async def test_revert_policy_keeps_previous_image(self, settings, db, products):
        revert_settings = settings.model_copy(update={"IMAGE_MISSING_REFERENCE_POLICY": "revert"})
        service = ProductService(revert_settings, ImageStorageService(revert_settings))

        updated = await service.update_product(
            db, products[0].product_id, ProductUpdate(urlImagen="/images/no-existe.png", precio=11)
        )

        assert updated.image_url == "/images/default-product.svg"
        assert float(updated.price) == 11.0

    async def test_blank_image_returns_to_default(self, app, db, products, settings):
        service = app.state.product_service
        stored = service.image_storage.save_product_image(products[0].product_id, b"GIF-ish", "image/png")
        await service.update_product(db, products[0].product_id, ProductUpdate(urlImagen=stored))

        updated = await service.update_product(db, products[0].product_id, ProductUpdate(urlImagen=""))

        assert updated.image_url == "/images/default-product.svg"
        assert not (settings.IMAGES_DIR / stored.rsplit("/", 1)[1]).exists()


class TestReads:

    async def test_products_by_active(self, app, db, products):
        service = app.state.product_service

        active = await service.get_products_by_active(db, True)
        inactive = await service.get_products_by_active(db, False)

        assert [p.name for p in active] == ["Café", "Azúcar"]
        assert [p.name for p in inactive] == ["Sal"]

    async def test_list_products_includes_inactive(self, app, db, products):
        assert len(await app.state.product_service.list_products(db)) == 3
