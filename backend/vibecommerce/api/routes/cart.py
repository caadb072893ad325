from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import Field
from vibecommerce.api.schemas import CamelModel
from vibecommerce.core.database import get_db
from vibecommerce.core.security import Identity
from vibecommerce.api.dependencies import get_current_identity
from vibecommerce.services.cart_service import cart_service

router = APIRouter(prefix="/cart", tags=["cart"])


class CartAdd(CamelModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartUpdate(CamelModel):
    quantity: int = Field(ge=1)


class CartLineResponse(CamelModel):
    id: int
    quantity: int
    created_at: Optional[datetime]
    product_id: int
    name: str
    price: float
    description: Optional[str]
    image: Optional[str]
    category: Optional[str]
    subtotal: float


class CartResponse(CamelModel):
    items: List[CartLineResponse]
    total: float
    item_count: int


@router.get("/", response_model=CartResponse)
def get_cart(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get the caller's cart with current prices and total"""
    return cart_service.snapshot(db, identity.id)


@router.post("/", status_code=status.HTTP_201_CREATED)
def add_to_cart(
    item: CartAdd,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Add a product to the cart, merging with an existing line"""
    line = cart_service.add_item(db, identity.id, item.product_id, item.quantity)
    return {"message": "Item added to cart", "id": line.id, "quantity": line.quantity}


@router.put("/{cart_item_id}")
def update_cart_item(
    cart_item_id: int,
    update: CartUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Set the quantity of a cart line"""
    cart_service.set_quantity(db, identity.id, cart_item_id, update.quantity)
    return {"message": "Cart item updated"}


@router.delete("/{cart_item_id}")
def remove_cart_item(
    cart_item_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Remove a line from the cart"""
    cart_service.remove_item(db, identity.id, cart_item_id)
    return {"message": "Item removed from cart"}
