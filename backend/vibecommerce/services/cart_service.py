import logging
from decimal import Decimal
from typing import Any, Dict, List
from sqlalchemy.orm import Session, joinedload
from vibecommerce.core.exceptions import NotFound, ValidationFailed
from vibecommerce.models.cart_item import CartItem
from vibecommerce.services.inventory_service import inventory_service
from vibecommerce.utils.money import present, to_decimal

logger = logging.getLogger(__name__)

CART_ITEM_NOT_FOUND_MESSAGE = "Cart item not found"


def _require_positive(quantity: int) -> None:
    if quantity is None or quantity < 1:
        raise ValidationFailed("Quantity must be at least 1")


class CartService:
    """
    Per-user cart lines bounded by product stock.

    Every mutation either applies completely or not at all: the stock check
    runs before anything is written.
    """

    @staticmethod
    def _get_owned_line(db: Session, user_id: int, cart_item_id: int) -> CartItem:
        # A line owned by someone else is reported exactly like a missing one
        line = db.query(CartItem).filter(
            CartItem.id == cart_item_id,
            CartItem.user_id == user_id
        ).first()
        if line is None:
            raise NotFound(CART_ITEM_NOT_FOUND_MESSAGE)
        return line

    @staticmethod
    def add_item(db: Session, user_id: int, product_id: int, quantity: int) -> CartItem:
        """
        Merge-add quantity of a product into the user's cart.

        The resulting line quantity (existing + quantity) must fit in stock.
        """
        _require_positive(quantity)
        product = inventory_service.get(db, product_id)

        existing = db.query(CartItem).filter(
            CartItem.user_id == user_id,
            CartItem.product_id == product_id
        ).first()

        new_quantity = quantity + (existing.quantity if existing else 0)
        inventory_service.check_availability(product, new_quantity)

        if existing:
            # Store-level increment rather than writing back new_quantity
            existing.quantity = CartItem.quantity + quantity
            line = existing
        else:
            line = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
            db.add(line)

        db.commit()
        db.refresh(line)
        logger.info(f"User {user_id} cart: product {product_id} now x{line.quantity}")
        return line

    @staticmethod
    def set_quantity(db: Session, user_id: int, cart_item_id: int, quantity: int) -> CartItem:
        """Set an absolute quantity on one of the user's lines"""
        _require_positive(quantity)
        line = CartService._get_owned_line(db, user_id, cart_item_id)
        product = inventory_service.get(db, line.product_id)
        inventory_service.check_availability(product, quantity)

        line.quantity = quantity
        db.commit()
        db.refresh(line)
        logger.info(f"User {user_id} cart: line {cart_item_id} set to x{quantity}")
        return line

    @staticmethod
    def remove_item(db: Session, user_id: int, cart_item_id: int) -> None:
        line = CartService._get_owned_line(db, user_id, cart_item_id)
        db.delete(line)
        db.commit()
        logger.info(f"User {user_id} cart: removed line {cart_item_id}")

    @staticmethod
    def snapshot(db: Session, user_id: int) -> Dict[str, Any]:
        """
        Read the cart with current product data joined in.

        Subtotals and total are recomputed on every read and only rounded
        to cents on the way out.
        """
        lines = (
            db.query(CartItem)
            .options(joinedload(CartItem.product))
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.created_at.desc(), CartItem.id.desc())
            .all()
        )

        items: List[Dict[str, Any]] = []
        total = Decimal("0")
        for line in lines:
            price = to_decimal(line.product.price)
            subtotal = price * line.quantity
            total += subtotal
            items.append({
                "id": line.id,
                "quantity": line.quantity,
                "created_at": line.created_at,
                "product_id": line.product.id,
                "name": line.product.name,
                "price": present(price),
                "description": line.product.description,
                "image": line.product.image,
                "category": line.product.category,
                "subtotal": present(subtotal),
            })

        return {
            "items": items,
            "total": present(total),
            "item_count": len(items),
        }

    @staticmethod
    def clear(db: Session, user_id: int) -> int:
        """
        Delete every line in the user's cart without committing.

        The caller owns the transaction - checkout commits this together with the order.
        """
        return db.query(CartItem).filter(
            CartItem.user_id == user_id
        ).delete(synchronize_session=False)


cart_service = CartService()
