import logging
import re
from decimal import Decimal
from typing import Any, Dict, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from vibecommerce.core.config import settings
from vibecommerce.core.exceptions import Internal, NotFound, ValidationFailed
from vibecommerce.models.order import ORDER_STATUSES, Order
from vibecommerce.services.cart_service import cart_service
from vibecommerce.services.order_status import OrderStatusPolicy, get_policy
from vibecommerce.utils.money import present, to_decimal

logger = logging.getLogger(__name__)

THANK_YOU_MESSAGE = "Thank you for your purchase!"
ORDER_NOT_FOUND_MESSAGE = "Order not found"

# Basic shape only: something@something.tld
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CheckoutService:
    """
    Turns a cart snapshot into an order and empties the cart.

    The total comes from the prices in the submitted snapshot, not from the
    current catalog, so the receipt matches what the shopper saw. Stock is
    not decremented.
    """

    def __init__(self, status_policy: OrderStatusPolicy):
        self.status_policy = status_policy

    @staticmethod
    def _validate_customer(customer_name: str, customer_email: str) -> None:
        if not customer_name or not customer_name.strip() or not customer_email or not customer_email.strip():
            raise ValidationFailed("Customer name and email are required")
        if not EMAIL_PATTERN.match(customer_email.strip()):
            raise ValidationFailed("Customer email is invalid")

    @staticmethod
    def _snapshot_items(line_items: List[Dict[str, Any]]) -> tuple[List[Dict[str, Any]], Decimal]:
        items = []
        total = Decimal("0")
        for item in line_items:
            try:
                price = to_decimal(item["price"])
                quantity = int(item["quantity"])
            except (KeyError, TypeError, ValueError, ArithmeticError):
                raise ValidationFailed("Each item needs a price and a quantity")
            if price < 0 or quantity < 1:
                raise ValidationFailed("Each item needs a non-negative price and a quantity of at least 1")
            subtotal = price * quantity
            total += subtotal
            # Keep whatever the client sent, with a subtotal that matches price x quantity
            items.append({**item, "price": float(price), "quantity": quantity, "subtotal": present(subtotal)})
        return items, total

    def checkout(
        self,
        db: Session,
        user_id: int,
        customer_name: str,
        customer_email: str,
        line_items: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Create a pending order and clear the user's cart in one transaction.

        Returns the receipt.
        """
        self._validate_customer(customer_name, customer_email)
        if not line_items:
            raise ValidationFailed("Cart is empty")

        items, total = self._snapshot_items(line_items)

        order = Order(
            user_id=user_id,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            total=total,
            items=items,
            status="pending",
        )
        try:
            db.add(order)
            cleared = cart_service.clear(db, user_id)
            db.commit()
        except SQLAlchemyError as e:
            # Neither the order nor the cart deletion survives
            db.rollback()
            logger.error(f"Checkout failed for user {user_id}: {str(e)}")
            raise Internal("Failed to process checkout")
        db.refresh(order)

        logger.info(
            f"Order {order.id} placed by user {user_id}: "
            f"{len(items)} items, total {present(total)}, cleared {cleared} cart lines"
        )

        return {
            "order_id": order.id,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "items": items,
            "total": present(total),
            "timestamp": order.created_at,
            "status": order.status,
            "message": THANK_YOU_MESSAGE,
        }

    @staticmethod
    def list_orders(db: Session, user_id: int | None = None) -> List[Order]:
        """Orders newest first, optionally only one user's"""
        query = db.query(Order)
        if user_id is not None:
            query = query.filter(Order.user_id == user_id)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def set_status(self, db: Session, order_id: int, new_status: str) -> Order:
        if new_status not in ORDER_STATUSES:
            raise ValidationFailed(f"Invalid status. Allowed: {', '.join(ORDER_STATUSES)}")

        order = db.query(Order).filter(Order.id == order_id).first()
        if order is None:
            raise NotFound(ORDER_NOT_FOUND_MESSAGE)

        if not self.status_policy.allows(order.status, new_status):
            raise ValidationFailed(f"Cannot change order status from {order.status} to {new_status}")

        previous = order.status
        order.status = new_status
        db.commit()
        db.refresh(order)
        logger.info(f"Order {order_id} status {previous} -> {new_status}")
        return order


checkout_service = CheckoutService(get_policy(settings.ORDER_STATUS_POLICY))
