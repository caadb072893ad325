from typing import List, Optional
from decimal import Decimal
from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from pydantic import Field
from vibecommerce.api.schemas import CamelModel
from vibecommerce.core.database import get_db
from vibecommerce.api.dependencies import require_admin
from vibecommerce.api.routes.auth import UserResponse
from vibecommerce.api.routes.orders import OrderResponse
from vibecommerce.models.order import Order
from vibecommerce.models.user import User
from vibecommerce.services.checkout_service import checkout_service
from vibecommerce.services.inventory_service import inventory_service
from vibecommerce.utils.money import present

# Every route in this module requires an admin token
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    stock: int = Field(default=0, ge=0)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)


class StatusUpdate(CamelModel):
    status: str


class StatsResponse(CamelModel):
    total_users: int
    total_orders: int
    total_revenue: float
    pending_orders: int


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    """Aggregate counts and revenue for the dashboard"""
    revenue = db.query(func.coalesce(func.sum(Order.total), 0)).scalar()
    return {
        "total_users": db.query(func.count(User.id)).scalar(),
        "total_orders": db.query(func.count(Order.id)).scalar(),
        "total_revenue": present(revenue),
        "pending_orders": db.query(func.count(Order.id)).filter(Order.status == "pending").scalar(),
    }


@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    """List all users (password hashes are never included)"""
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


@router.get("/orders", response_model=List[OrderResponse])
def list_orders(db: Session = Depends(get_db)):
    """List every order, newest first"""
    return checkout_service.list_orders(db)


@router.put("/orders/{order_id}/status", response_model=OrderResponse)
def update_order_status(order_id: int, update: StatusUpdate, db: Session = Depends(get_db)):
    """Change an order's status"""
    return checkout_service.set_status(db, order_id, update.status)


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(product: ProductCreate, db: Session = Depends(get_db)):
    """Create a product"""
    created = inventory_service.create(db, product.model_dump())
    return {"message": "Product created", "id": created.id}


@router.put("/products/{product_id}")
def update_product(product_id: int, product: ProductUpdate, db: Session = Depends(get_db)):
    """Update the fields present in the request body"""
    inventory_service.update(db, product_id, product.model_dump(exclude_unset=True))
    return {"message": "Product updated"}


@router.delete("/products/{product_id}")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    """Delete a product and any cart lines holding it"""
    inventory_service.delete(db, product_id)
    return {"message": "Product deleted"}
