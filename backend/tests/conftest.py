from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vibecommerce.main import app
from vibecommerce.core.database import Base, get_db
from vibecommerce.core.security import token_service
from vibecommerce.models.product import Product
from vibecommerce.services.user_service import user_service


# Every test gets its own in-memory database; StaticPool keeps the single
# connection alive so the test session and request sessions see the same data
@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email="shopper@example.com", password="secret1", name="Shopper", role="user"):
        return user_service.create_user(db, email, password, name, role=role)
    return _make_user


@pytest.fixture
def make_product(db):
    def _make_product(name="Widget", price="10.00", stock=10, category="Misc"):
        product = Product(name=name, price=Decimal(price), stock=stock, category=category)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make_product


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user(email="other@example.com", name="Other")


@pytest.fixture
def admin(make_user):
    return make_user(email="boss@example.com", name="Boss", role="admin")


def auth_header(user):
    return {"Authorization": f"Bearer {token_service.issue(user)}"}
