# backend/inventario/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Este módulo implementa las operaciones de Create, Read, Update, Delete para productos.
El filtrado, ordenamiento y paginación del catálogo no se hace en SQL: las
consultas de lectura devuelven la instantánea completa (todos los productos o
solo los activos) y el motor de services/catalog_query.py trabaja en memoria.

Funcionalidades principales:
- Lectura por ID, por estado activo y por categoría
- Escritura con confirmación de la transacción
- Ajuste de stock atómico con bloqueo de fila (SELECT ... FOR UPDATE)
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventario.db.models.product_model import Product

import logging

logger = logging.getLogger(__name__)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    """Obtiene un producto por su ID."""
    result = await db.execute(select(Product).filter(Product.product_id == product_id))
    return result.scalars().first()


async def get_all_products(db: AsyncSession) -> List[Product]:
    """Obtiene todos los productos, activos e inactivos, en orden de ID."""
    result = await db.execute(select(Product).order_by(Product.product_id))
    return list(result.scalars().all())


async def get_products_by_active(db: AsyncSession, active: bool) -> List[Product]:
    """Obtiene los productos con el estado indicado, en orden de ID."""
    result = await db.execute(
        select(Product).filter(Product.active == active).order_by(Product.product_id)
    )
    return list(result.scalars().all())


async def get_products_by_category(db: AsyncSession, category_id: int) -> List[Product]:
    result = await db.execute(
        select(Product).filter(Product.category_id == category_id).order_by(Product.product_id)
    )
    return list(result.scalars().all())


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_product(db: AsyncSession, values: Dict[str, Any]) -> Product:
    """Crea un nuevo producto en la base de datos."""
    db_product = Product(**values)
    db.add(db_product)
    await db.commit()
    await db.refresh(db_product)
    return db_product


async def update_product(db: AsyncSession, db_product: Product, values: Dict[str, Any]) -> Product:
    """Aplica los valores indicados a un producto existente."""
    for key, value in values.items():
        setattr(db_product, key, value)
    await db.commit()
    await db.refresh(db_product)
    return db_product


async def delete_product(db: AsyncSession, db_product: Product) -> None:
    await db.delete(db_product)
    await db.commit()


async def get_product_for_update(db: AsyncSession, product_id: int) -> Optional[Product]:
    """
    Obtiene un producto bloqueando su fila hasta el final de la transacción.

    Dos ajustes de stock concurrentes sobre el mismo producto se serializan:
    el segundo lee el stock ya actualizado por el primero.
    """
    result = await db.execute(
        select(Product)
        .filter(Product.product_id == product_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def set_stock(db: AsyncSession, db_product: Product, new_stock: int) -> Product:
    # El commit libera el bloqueo adquirido en get_product_for_update
    db_product.current_stock = new_stock
    await db.commit()
    await db.refresh(db_product)
    return db_product
