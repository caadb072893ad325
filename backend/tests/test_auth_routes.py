from datetime import timedelta

from conftest import auth_header
from vibecommerce.core.security import token_service


def register(client, email="a@x.com", password="secret1", name="Alice"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": name})


def test_register_then_login_refers_to_same_user(client):
    registered = register(client)
    assert registered.status_code == 201
    body = registered.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["role"] == "user"
    assert "hashed_password" not in body["user"]

    login = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == body["user"]["id"]


def test_email_is_case_normalized(client):
    assert register(client, email="Alice@X.com").json()["user"]["email"] == "alice@x.com"

    duplicate = register(client, email="ALICE@x.com")
    assert duplicate.status_code == 400
    assert duplicate.json()["kind"] == "conflict"

    login = client.post("/api/auth/login", json={"email": "alice@X.COM", "password": "secret1"})
    assert login.status_code == 200


def test_register_rejects_short_password(client):
    response = register(client, password="12345")

    assert response.status_code == 400
    assert response.json()["kind"] == "validation_failed"


def test_wrong_password_and_unknown_email_look_the_same(client):
    register(client)

    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope123"})
    unknown_email = client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_me_returns_current_user(client, user):
    response = client.get("/api/auth/me", headers=auth_header(user))

    assert response.status_code == 200
    assert response.json()["email"] == user.email


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["kind"] == "unauthenticated"
    assert response.headers["www-authenticate"] == "Bearer"


def test_expired_token_is_unauthenticated(client, user):
    expired = token_service.issue(user, expires_delta=timedelta(minutes=-1))

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    garbage = client.get("/api/auth/me", headers={"Authorization": "Bearer junk"})

    assert response.status_code == 401
    # Expiry and bad signatures are not distinguished for the caller
    assert response.json() == garbage.json()


def test_me_for_deleted_user_is_not_found(client, db, user):
    headers = auth_header(user)
    db.delete(user)
    db.commit()

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 404


def test_malformed_login_email_is_plain_401(client):
    register(client)

    malformed = client.post("/api/auth/login", json={"email": "nobody", "password": "secret1"})
    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope123"})

    assert malformed.status_code == 401
    assert malformed.json() == wrong_password.json()
