import inspect

from fastapi.routing import APIRoute
from sqlalchemy.exc import OperationalError

from vibecommerce.main import app
from vibecommerce.services.inventory_service import inventory_service


def test_blocking_handlers_run_in_threadpool():
    # Handlers use a synchronous Session and bcrypt, so they must not be coroutines
    blocking = [
        route for route in app.routes
        if isinstance(route, APIRoute) and route.path.startswith("/api/") and route.path != "/api/health"
    ]

    assert blocking
    assert [route.path for route in blocking if inspect.iscoroutinefunction(route.endpoint)] == []


def test_database_errors_become_internal(client, monkeypatch):
    def broken(db):
        raise OperationalError("SELECT * FROM products", {}, Exception("database is locked"))

    monkeypatch.setattr(inventory_service, "list_products", broken)

    response = client.get("/api/products/")

    assert response.status_code == 500
    assert response.json() == {"detail": "Database error occurred", "kind": "internal"}
