from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime
from sqlalchemy.sql import func
from vibecommerce.core.database import Base


class Product(Base):
    """
    Catalog entry and the single source of truth for stock.

    Stock only bounds cart quantities; checkout does not decrement it.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String, nullable=True)  # URL of the product image
    category = Column(String, nullable=True, index=True)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
