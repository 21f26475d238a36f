# backend/inventario/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional
from pathlib import Path

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Sistema de Inventario API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos
    POSTGRES_SERVER: str = "postgres"
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_DB: str = "inventario_db"
    POSTGRES_PORT: str = "5432"
    # Permite apuntar a otro motor (p. ej. sqlite+aiosqlite en tests)
    DATABASE_URL_OVERRIDE: Optional[str] = None
    SQL_ECHO: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # JWT - REQUERIDO del .env (sensible)
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"

    # Imágenes de producto
    IMAGES_DIR: Path = BASE_DIR / "images"
    IMAGES_PUBLIC_PATH: str = "/images"
    DEFAULT_PRODUCT_IMAGE_FILENAME: str = "default-product.svg"
    MAX_IMAGE_SIZE_BYTES: int = 5 * 1024 * 1024
    # 'reject' devuelve 400, 'revert' conserva la imagen anterior sin avisar
    IMAGE_MISSING_REFERENCE_POLICY: Literal["reject", "revert"] = "reject"

    # Catálogo
    PUBLIC_CATALOG_DEFAULT_LIMIT: int = 12
    EMPLOYEE_CATALOG_DEFAULT_LIMIT: int = 20

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


def get_settings() -> Settings:
    """Construye la configuración a partir del entorno."""
    return Settings()
