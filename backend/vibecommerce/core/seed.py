"""
Startup seeding for the demo store.

- Catalog: ten products, only inserted when the products table is empty
- Admin: one account from settings, only created when its email is unused
"""

import logging
from decimal import Decimal
from sqlalchemy.orm import Session
from vibecommerce.core.config import settings
from vibecommerce.models.product import Product
from vibecommerce.services.user_service import user_service

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    ("Wireless Headphones", "79.99", "Premium wireless headphones with noise cancellation",
     "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400", "Electronics", 25),
    ("Smart Watch", "199.99", "Feature-packed smartwatch with fitness tracking",
     "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400", "Electronics", 15),
    ("Running Shoes", "89.99", "Comfortable running shoes for all terrains",
     "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=400", "Footwear", 40),
    ("Laptop Backpack", "49.99", "Durable backpack with laptop compartment",
     "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=400", "Accessories", 30),
    ("Bluetooth Speaker", "59.99", "Portable speaker with rich sound quality",
     "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?w=400", "Electronics", 20),
    ("Coffee Maker", "129.99", "Programmable coffee maker with thermal carafe",
     "https://images.unsplash.com/photo-1517668808822-9ebb02f2a0e6?w=400", "Appliances", 10),
    ("Yoga Mat", "34.99", "Non-slip yoga mat with carrying strap",
     "https://images.unsplash.com/photo-1601925260368-ae2f83cf8b7f?w=400", "Fitness", 50),
    ("Desk Lamp", "44.99", "LED desk lamp with adjustable brightness",
     "https://images.unsplash.com/photo-1507473885765-e6ed057f782c?w=400", "Home", 35),
    ("Water Bottle", "24.99", "Insulated stainless steel water bottle",
     "https://images.unsplash.com/photo-1602143407151-7111542de6e8?w=400", "Accessories", 60),
    ("Sunglasses", "69.99", "Polarized sunglasses with UV protection",
     "https://images.unsplash.com/photo-1572635196237-14b3f281503f?w=400", "Accessories", 45),
]


def seed_products(db: Session) -> int:
    if db.query(Product).first() is not None:
        return 0

    for name, price, description, image, category, stock in DEMO_PRODUCTS:
        db.add(Product(
            name=name,
            price=Decimal(price),
            description=description,
            image=image,
            category=category,
            stock=stock,
        ))
    db.commit()
    logger.info(f"Database seeded with {len(DEMO_PRODUCTS)} products")
    return len(DEMO_PRODUCTS)


def seed_database(db: Session) -> None:
    if settings.SEED_PRODUCTS:
        seed_products(db)
    user_service.ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME)
