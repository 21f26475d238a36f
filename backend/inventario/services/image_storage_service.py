# backend/inventario/services/image_storage_service.py
"""
Almacenamiento local de imágenes de producto.

Las imágenes se guardan en settings.IMAGES_DIR y se publican bajo
settings.IMAGES_PUBLIC_PATH (por defecto /images). Cualquier referencia que no
empiece por esa ruta se considera externa (p. ej. una URL https) y nunca se
borra ni se comprueba en disco.
"""

import logging
import time
import uuid
from pathlib import Path, PurePosixPath
from typing import Optional

from inventario.core.config import Settings
from inventario.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}

DEFAULT_IMAGE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">'
    '<rect width="200" height="200" fill="#e5e7eb"/>'
    '<text x="100" y="105" font-family="sans-serif" font-size="16" fill="#6b7280" '
    'text-anchor="middle">Sin imagen</text></svg>'
)


class ImageStorageService:
    """Guarda, comprueba y elimina ficheros de imagen de productos."""

    def __init__(self, settings: Settings):
        self.images_dir = Path(settings.IMAGES_DIR)
        self.public_path = settings.IMAGES_PUBLIC_PATH.rstrip("/")
        self.default_filename = settings.DEFAULT_PRODUCT_IMAGE_FILENAME
        self.max_size_bytes = settings.MAX_IMAGE_SIZE_BYTES

    @property
    def default_image_url(self) -> str:
        return self.build_url(self.default_filename)

    def build_url(self, filename: str) -> str:
        return f"{self.public_path}/{filename}"

    def is_default(self, url: Optional[str]) -> bool:
        if not url:
            return False
        return url == self.default_image_url or url.endswith(f"/{self.default_filename}")

    def is_local(self, url: Optional[str]) -> bool:
        return bool(url) and url.startswith(f"{self.public_path}/")

    def belongs_to(self, url: Optional[str], product_id: int) -> bool:
        """True si la referencia es externa, la imagen por defecto o un fichero guardado para ese producto."""
        if not self.is_local(url) or self.is_default(url):
            return True
        return PurePosixPath(url).name.startswith(f"producto-{product_id}-")

    def _path_for_url(self, url: str) -> Path:
        # Solo el nombre del fichero: evita salir del directorio de imágenes
        return self.images_dir / PurePosixPath(url).name

    def ensure_images_dir(self) -> None:
        """Crea el directorio de imágenes y la imagen por defecto si no existen."""
        self.images_dir.mkdir(parents=True, exist_ok=True)
        default_path = self.images_dir / self.default_filename
        if not default_path.exists():
            default_path.write_text(DEFAULT_IMAGE_SVG, encoding="utf-8")
            logger.info(f"Imagen por defecto creada en {default_path}")

    def exists(self, url: Optional[str]) -> bool:
        """True si la referencia es externa o si el fichero local existe."""
        if not url:
            return False
        if not self.is_local(url):
            return True
        return self._path_for_url(url).is_file()

    def delete_if_not_default(self, url: Optional[str]) -> None:
        """Borra el fichero asociado a la URL salvo que sea la imagen por defecto o externa."""
        if not url or self.is_default(url) or not self.is_local(url):
            return
        path = self._path_for_url(url)
        try:
            path.unlink()
            logger.info(f"Imagen eliminada: {path.name}")
        except FileNotFoundError:
            logger.debug(f"Imagen ya inexistente: {path.name}")

    def save_product_image(self, product_id: int, content: bytes, content_type: Optional[str]) -> str:
        """
        Valida y guarda una imagen subida para un producto.

        Returns:
            URL pública de la imagen guardada.

        Raises:
            ValidationError: tipo no permitido, fichero vacío o demasiado grande.
        """
        extension = ALLOWED_MIME_TYPES.get(content_type or "")
        if extension is None:
            raise ValidationError("Tipo de archivo no permitido. Solo imágenes JPEG, PNG, WEBP o SVG.")
        if not content:
            raise ValidationError("No se recibió ningún archivo de imagen.")
        if len(content) > self.max_size_bytes:
            max_mb = self.max_size_bytes / (1024 * 1024)
            raise ValidationError(f"La imagen supera el tamaño máximo permitido de {max_mb:g}MB.")

        self.images_dir.mkdir(parents=True, exist_ok=True)
        filename = f"producto-{product_id}-{int(time.time() * 1000)}-{uuid.uuid4()}{extension}"
        (self.images_dir / filename).write_bytes(content)
        logger.info(f"Imagen guardada para producto {product_id}: {filename}")
        return self.build_url(filename)
