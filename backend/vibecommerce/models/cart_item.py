from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from vibecommerce.core.database import Base


class CartItem(Base):
    """
    One line of a user's cart.

    There is at most one line per (user, product); the cart service merges
    repeated adds into the existing line instead of inserting a second one.
    """
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Joined when the cart is read so subtotals use the current price
    product = relationship("Product")
