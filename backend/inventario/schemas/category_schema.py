# backend/inventario/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryUpdate: Para actualizar categorías existentes (PUT)
- CategoryResponse: Para respuestas de la API (GET)

En el JSON los campos viajan con sus nombres públicos (idCategoria, nombre).
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(BaseModel):
    """Esquema para crear una nueva categoría. El ID lo asigna la base de datos."""
    name: Optional[str] = Field(default=None, alias="nombre")

    model_config = ConfigDict(populate_by_name=True)


class CategoryUpdate(BaseModel):
    """Esquema para actualizar una categoría. Todos los campos son opcionales."""
    name: Optional[str] = Field(default=None, alias="nombre")

    model_config = ConfigDict(populate_by_name=True)


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class CategoryResponse(BaseModel):
    """Esquema para las respuestas de la API al leer categorías."""
    category_id: int = Field(serialization_alias="idCategoria")
    name: str = Field(serialization_alias="nombre")

    model_config = ConfigDict(from_attributes=True)


class CategoryListResponse(BaseModel):
    categories: List[CategoryResponse] = Field(serialization_alias="categorias")
    total: int
