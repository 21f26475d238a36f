"""Tests del almacenamiento local de imágenes."""

import pytest

from inventario.core.config import Settings
from inventario.core.exceptions import ValidationError
from inventario.services.image_storage_service import ImageStorageService
from tests.conftest import JWT_SECRET


@pytest.fixture
def storage(tmp_path):
    service = ImageStorageService(
        Settings(JWT_SECRET_KEY=JWT_SECRET, IMAGES_DIR=tmp_path / "imgs", MAX_IMAGE_SIZE_BYTES=1024 * 1024)
    )
    service.ensure_images_dir()
    return service


def test_default_image_is_created(storage):
    assert storage.default_image_url == "/images/default-product.svg"
    assert (storage.images_dir / "default-product.svg").read_text(encoding="utf-8").startswith("<svg")


def test_save_and_delete(storage):
    url = storage.save_product_image(7, b"\xff\xd8\xff" + b"0" * 10, "image/jpeg")

    assert url.startswith("/images/producto-7-")
    assert url.endswith(".jpg")
    assert storage.exists(url)

    storage.delete_if_not_default(url)
    assert not storage.exists(url)


def test_default_image_is_never_deleted(storage):
    storage.delete_if_not_default(storage.default_image_url)
    assert storage.exists(storage.default_image_url)


def test_external_references(storage):
    url = "https://cdn.example.com/foto.png"
    assert storage.exists(url)
    assert not storage.is_local(url)
    storage.delete_if_not_default(url)


def test_deleting_missing_file_is_silent(storage):
    storage.delete_if_not_default("/images/no-existe.png")


def test_path_traversal_stays_in_images_dir(storage, tmp_path):
    outside = tmp_path / "secreto.txt"
    outside.write_text("x")

    storage.delete_if_not_default("/images/../secreto.txt")

    assert outside.exists()


@pytest.mark.parametrize(
    "content, content_type, message",
    [
        (b"abc", "application/pdf", "Tipo de archivo no permitido. Solo imágenes JPEG, PNG, WEBP o SVG."),
        (b"abc", None, "Tipo de archivo no permitido. Solo imágenes JPEG, PNG, WEBP o SVG."),
        (b"", "image/png", "No se recibió ningún archivo de imagen."),
        (b"0" * (1024 * 1024 + 1), "image/png", "La imagen supera el tamaño máximo permitido de 1MB."),
    ],
)
def test_rejected_uploads(storage, content, content_type, message):
    with pytest.raises(ValidationError) as exc_info:
        storage.save_product_image(1, content, content_type)
    assert exc_info.value.message == message
    assert [p.name for p in storage.images_dir.iterdir()] == ["default-product.svg"]


def test_stored_image_belongs_only_to_its_product(storage):
    url = storage.save_product_image(1, b"\x89PNG", "image/png")

    assert storage.belongs_to(url, 1)
    assert not storage.belongs_to(url, 12)
    assert storage.belongs_to(storage.default_image_url, 12)
    assert storage.belongs_to("https://cdn.example.com/foto.png", 12)
