# backend/inventario/schemas/product_schema.py

"""
Esquemas Pydantic para el modelo Product.

Los campos usan nombres en inglés dentro del código y viajan en el JSON con
sus nombres públicos (idProducto, nombre, precio, stockActual, ...).

Las comprobaciones de forma (tipos, longitudes, no negativos) se hacen aquí;
las reglas que dependen del registro completo (campos obligatorios tras una
actualización parcial, stockActual >= stockMinimo) las aplica ProductService.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Mayor valor que admite una columna Integer
MAX_INT_VALUE = 2**31 - 1

# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ProductWrite(BaseModel):
    """
    Campos escribibles de un producto, todos opcionales en forma.

    Ejemplo:
    {
        "nombre": "Café molido 500g",
        "precio": 45.99,
        "stockActual": 50,
        "stockMinimo": 5,
        "esPromocion": true,
        "activo": true,
        "descripcion": "Tostado medio",
        "idCategoria": 1
    }
    """
    name: Optional[str] = Field(default=None, alias="nombre", max_length=100)
    price: Optional[Decimal] = Field(
        default=None, alias="precio", allow_inf_nan=False, max_digits=10, decimal_places=2
    )
    current_stock: Optional[int] = Field(default=None, alias="stockActual", le=MAX_INT_VALUE)
    minimum_stock: Optional[int] = Field(default=None, alias="stockMinimo", le=MAX_INT_VALUE)
    is_promotion: Optional[bool] = Field(default=None, alias="esPromocion")
    active: Optional[bool] = Field(default=None, alias="activo")
    description: Optional[str] = Field(default=None, alias="descripcion", max_length=255)
    image_url: Optional[str] = Field(default=None, alias="urlImagen")
    category_id: Optional[int] = Field(default=None, alias="idCategoria", le=MAX_INT_VALUE)

    # Los textos se guardan sin espacios en los extremos; max_length se mide ya recortado
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)


class ProductCreate(ProductWrite):
    """Esquema para crear un producto (POST)."""


class ProductUpdate(ProductWrite):
    """Esquema para actualizar un producto (PUT). Solo se aplican los campos enviados."""


class StockAdjustment(BaseModel):
    """Cuerpo de PATCH /products/{id}/stock. Positivo incrementa, negativo decrementa."""
    quantity_change: int = Field(alias="cantidadCambio", strict=True)

    model_config = ConfigDict(populate_by_name=True)


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class ProductResponse(BaseModel):
    product_id: int = Field(serialization_alias="idProducto")
    name: str = Field(serialization_alias="nombre")
    price: float = Field(serialization_alias="precio")
    current_stock: int = Field(serialization_alias="stockActual")
    minimum_stock: int = Field(serialization_alias="stockMinimo")
    is_promotion: bool = Field(default=False, serialization_alias="esPromocion")
    active: bool = Field(serialization_alias="activo")
    description: Optional[str] = Field(default=None, serialization_alias="descripcion")
    image_url: str = Field(serialization_alias="urlImagen")
    category_id: Optional[int] = Field(default=None, serialization_alias="idCategoria")

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("price")
    def serialize_price(self, value: float) -> float:
        return round(float(value), 2)
