# backend/inventario/db/models/product_model.py
from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from inventario.db.database import Base

class Product(Base):
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    current_stock = Column(Integer, nullable=False, default=1)
    minimum_stock = Column(Integer, nullable=False, default=0)
    is_promotion = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, index=True)
    description = Column(String(255), nullable=True)
    image_url = Column(Text, nullable=False)

    category = relationship("Category", back_populates="products")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("current_stock >= 0", name="ck_product_current_stock_non_negative"),
        CheckConstraint("minimum_stock >= 0", name="ck_product_minimum_stock_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Product {self.product_id} {self.name!r}>"
