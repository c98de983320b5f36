"""API tests for registration, login and token handling"""

from conftest import auth_headers
from lovejourney.core.security import create_access_token, create_refresh_token


def register(client, email="carol@example.com", password="lovejourney1", **extra):
    return client.post("/auth/register", json={"email": email, "password": password, **extra})


def test_register_and_login(client):
    created = register(client, username="carol", timezone="Europe/Paris")
    assert created.status_code == 201
    assert created.json()["timezone"] == "Europe/Paris"
    assert created.json()["role"] == "user"

    response = client.post("/auth/login", json={"email": "carol@example.com", "password": "lovejourney1"})

    assert response.status_code == 200
    tokens = response.json()
    assert tokens["token_type"] == "bearer"
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.json()["email"] == "carol@example.com"


def test_register_defaults_timezone(client):
    assert register(client).json()["timezone"] == "UTC"


def test_register_duplicate_email(client):
    register(client)

    response = register(client)

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_register_weak_password(client):
    assert register(client, password="onlyletters").status_code == 422


def test_login_with_wrong_password(client):
    register(client)

    response = client.post("/auth/login", json={"email": "carol@example.com", "password": "wrong-pass1"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_refresh_issues_new_pair(client, user):
    refresh = create_refresh_token(data={"sub": str(user.id)})

    response = client.post("/auth/refresh", json={"refresh_token": refresh})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == str(user.id)


def test_access_token_cannot_refresh(client, user):
    access = create_access_token(data={"sub": str(user.id)})

    response = client.post("/auth/refresh", json={"refresh_token": access})

    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_update_profile_timezone(client, user):
    response = client.put("/auth/me", json={"timezone": "Asia/Jakarta"}, headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["timezone"] == "Asia/Jakarta"


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["endpoints"]["functions"] == "/functions"
