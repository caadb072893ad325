from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import ConfigDict, field_serializer
from decimal import Decimal
from vibecommerce.api.schemas import CamelModel
from vibecommerce.core.database import get_db
from vibecommerce.services.inventory_service import inventory_service
from vibecommerce.utils.money import present

router = APIRouter(prefix="/products", tags=["products"])


class ProductResponse(CamelModel):
    id: int
    name: str
    price: Decimal
    description: Optional[str]
    image: Optional[str]
    category: Optional[str]
    stock: int

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('price')
    def serialize_price(self, value: Decimal, _info):
        return present(value)


@router.get("/", response_model=List[ProductResponse])
def list_products(db: Session = Depends(get_db)):
    """List the catalog"""
    return inventory_service.list_products(db)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a single product"""
    return inventory_service.get(db, product_id)
