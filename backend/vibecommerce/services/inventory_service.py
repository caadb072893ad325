import logging
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from vibecommerce.core.exceptions import InsufficientStock, NotFound, ValidationFailed
from vibecommerce.models.cart_item import CartItem
from vibecommerce.models.product import Product

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND_MESSAGE = "Product not found"

# Fields an admin may set on a product
EDITABLE_FIELDS = {"name", "price", "description", "image", "category", "stock"}
REQUIRED_FIELDS = {"name", "price", "stock"}


class InventoryService:
    """Product records and stock availability"""

    @staticmethod
    def get(db: Session, product_id: int) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            raise NotFound(PRODUCT_NOT_FOUND_MESSAGE)
        return product

    @staticmethod
    def list_products(db: Session) -> List[Product]:
        return db.query(Product).order_by(Product.id).all()

    @staticmethod
    def check_availability(product: Product, requested_qty: int) -> None:
        """
        Raise InsufficientStock if requested_qty exceeds current stock.

        Read-then-compare only; nothing is reserved.
        """
        if requested_qty > product.stock:
            logger.info(
                f"Stock check failed for product {product.id}: "
                f"requested {requested_qty}, available {product.stock}"
            )
            raise InsufficientStock(available=product.stock)

    @staticmethod
    def _apply_fields(product: Product, data: Dict[str, Any]) -> None:
        for field, value in data.items():
            if field not in EDITABLE_FIELDS:
                continue
            if value is None and field in REQUIRED_FIELDS:
                raise ValidationFailed(f"{field} cannot be empty")
            setattr(product, field, value)

        if product.price is not None and product.price < 0:
            raise ValidationFailed("Price must be non-negative")
        if product.stock is not None and product.stock < 0:
            raise ValidationFailed("Stock must be non-negative")

    @staticmethod
    def create(db: Session, data: Dict[str, Any]) -> Product:
        product = Product()
        InventoryService._apply_fields(product, data)
        db.add(product)
        db.commit()
        db.refresh(product)
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    @staticmethod
    def update(db: Session, product_id: int, data: Dict[str, Any]) -> Product:
        """Replace the given fields; fields not present in data are left alone"""
        product = InventoryService.get(db, product_id)
        try:
            InventoryService._apply_fields(product, data)
        except ValidationFailed:
            db.rollback()
            raise
        db.commit()
        db.refresh(product)
        logger.info(f"Updated product {product.id}: {sorted(data)}")
        return product

    @staticmethod
    def delete(db: Session, product_id: int) -> None:
        """
        Delete a product and every cart line pointing at it in one commit.

        Orders keep their own snapshot of the product, so they are untouched.
        """
        product = InventoryService.get(db, product_id)
        removed_lines = db.query(CartItem).filter(
            CartItem.product_id == product_id
        ).delete(synchronize_session=False)
        db.delete(product)
        db.commit()
        logger.info(f"Deleted product {product_id} and {removed_lines} cart lines")


inventory_service = InventoryService()
