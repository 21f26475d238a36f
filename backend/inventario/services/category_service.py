# backend/inventario/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Valida los datos de entrada y delega el acceso a datos en category_crud.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inventario.core.exceptions import NotFoundError, ValidationError
from inventario.crud import category_crud
from inventario.db.models.category_model import Category
from inventario.schemas import category_schema

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = "Categoría no encontrada."
MAX_NAME_LENGTH = 100


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Las categorías son planas (sin jerarquía) y los productos las referencian
    de forma débil: eliminar una categoría no elimina sus productos.
    """

    @staticmethod
    def validate_name(name: Optional[str]) -> str:
        """
        Normaliza y valida el nombre de una categoría.

        Returns:
            El nombre sin espacios en los extremos.
        """
        if name is None or not str(name).strip():
            raise ValidationError("nombre es obligatorio.")
        name = str(name).strip()
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"nombre no debe exceder {MAX_NAME_LENGTH} caracteres.")
        return name

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category(self, db: AsyncSession, category_id: int) -> Category:
        category = await category_crud.get_category(db, category_id=category_id)
        if not category:
            raise NotFoundError(CATEGORY_NOT_FOUND)
        return category

    async def list_categories(self, db: AsyncSession) -> List[Category]:
        return await category_crud.get_categories(db)

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_category(self, db: AsyncSession, category_in: category_schema.CategoryCreate) -> Category:
        name = self.validate_name(category_in.name)
        category = await category_crud.create_category(db, name=name)
        logger.info(f"Categoría creada: {category.category_id} '{category.name}'")
        return category

    async def update_category(
        self, db: AsyncSession, category_id: int, category_in: category_schema.CategoryUpdate
    ) -> Category:
        category = await self.get_category(db, category_id)

        changes = category_in.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = self.validate_name(changes["name"])
        if not changes:
            return category

        updated = await category_crud.update_category(db, category, changes)
        logger.info(f"Categoría actualizada: {category_id}")
        return updated

    async def delete_category(self, db: AsyncSession, category_id: int) -> None:
        category = await self.get_category(db, category_id)
        await category_crud.delete_category(db, category)
        logger.info(f"Categoría eliminada: {category_id}")
