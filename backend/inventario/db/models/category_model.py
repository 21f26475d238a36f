# backend/inventario/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría de producto.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from inventario.db.database import Base

class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False)

    # Referencia débil: al borrar la categoría los productos quedan sin categoría
    products = relationship("Product", back_populates="category", passive_deletes=True)
