from datetime import datetime
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import ConfigDict, Field, field_serializer
from decimal import Decimal
from vibecommerce.api.schemas import CamelModel
from vibecommerce.core.database import get_db
from vibecommerce.core.security import Identity
from vibecommerce.api.dependencies import get_current_identity
from vibecommerce.services.checkout_service import checkout_service
from vibecommerce.utils.money import present

router = APIRouter(tags=["orders"])


class CheckoutItem(CamelModel):
    # Cart lines are sent back as read from GET /cart, extra keys included
    model_config = ConfigDict(extra="allow")

    product_id: int | None = None
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)


class CheckoutRequest(CamelModel):
    customer_name: str
    customer_email: str
    cart_items: List[CheckoutItem] = []


class ReceiptResponse(CamelModel):
    order_id: int
    customer_name: str
    customer_email: str
    items: List[Dict[str, Any]]
    total: float
    timestamp: datetime | None
    status: str
    message: str


class OrderResponse(CamelModel):
    id: int
    user_id: int
    customer_name: str
    customer_email: str
    total: Decimal
    items: List[Dict[str, Any]]
    status: str
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('total')
    def serialize_total(self, value: Decimal, _info):
        return present(value)


@router.post("/checkout", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    request: CheckoutRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Place an order for the submitted cart snapshot and clear the cart"""
    return checkout_service.checkout(
        db,
        identity.id,
        request.customer_name,
        request.customer_email,
        [item.model_dump(mode="json", by_alias=True) for item in request.cart_items],
    )


@router.get("/orders", response_model=List[OrderResponse])
def list_my_orders(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Order history for the caller, newest first"""
    return checkout_service.list_orders(db, identity.id)
