# backend/inventario/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para categorías,
proporcionando una capa de abstracción entre los servicios y la base de datos.
Las funciones de escritura confirman la transacción; las de lectura no.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventario.db.models.category_model import Category
from inventario.db.models.product_model import Product

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID.

    Args:
        db: Sesión de SQLAlchemy
        category_id: ID único de la categoría

    Returns:
        Objeto Category si existe, None si no se encuentra
    """
    result = await db.execute(select(Category).filter(Category.category_id == category_id))
    return result.scalars().first()


async def get_categories(db: AsyncSession) -> List[Category]:
    """Obtiene todas las categorías ordenadas por ID."""
    result = await db.execute(select(Category).order_by(Category.category_id))
    return list(result.scalars().all())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_category(db: AsyncSession, name: str) -> Category:
    db_category = Category(name=name)
    db.add(db_category)
    await db.commit()
    await db.refresh(db_category)
    return db_category


async def update_category(db: AsyncSession, db_category: Category, values: Dict[str, Any]) -> Category:
    for key, value in values.items():
        setattr(db_category, key, value)
    await db.commit()
    await db.refresh(db_category)
    return db_category


async def delete_category(db: AsyncSession, db_category: Category) -> None:
    """
    Elimina una categoría.

    Los productos que la referencian se conservan y quedan sin categoría; se
    hace explícitamente para no depender de que el motor aplique ON DELETE SET NULL.
    """
    await db.execute(
        update(Product)
        .where(Product.category_id == db_category.category_id)
        .values(category_id=None)
    )
    await db.delete(db_category)
    await db.commit()
