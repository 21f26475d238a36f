# backend/inventario/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo define los componentes básicos de acceso a datos:
- Clase base para modelos (Base)
- Construcción del motor asíncrono (build_engine)
- Fábrica de sesiones (build_session_factory)

El motor y la fábrica se crean una sola vez en create_app() y se guardan en
app.state; la dependencia get_db() de inventario/api/deps.py abre una sesión por
petición a partir de esa fábrica.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from inventario.core.config import Settings

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """Crea el motor de base de datos asíncrono."""
    return create_async_engine(settings.DATABASE_URL, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False es importante para que los objetos sigan siendo utilizables
    # después de que la transacción se haya confirmado.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Crea las tablas que aún no existan."""
    # Registra los modelos en Base.metadata
    from inventario.db.models import category_model, product_model  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
