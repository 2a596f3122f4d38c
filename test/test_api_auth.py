import jwt

from api import security
from conftest import register


def test_register_login_profile(app_env):
    client = app_env["client"]
    headers = register(client, email="Bob@Example.com", name="Bob")

    r = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "secret"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"]["email"] == "bob@example.com"
    assert "password_hash" not in body["user"]

    p = client.get("/api/auth/profile", headers=headers)
    assert p.status_code == 200
    assert p.json()["name"] == "Bob"


def test_duplicate_registration_rejected(app_env):
    client = app_env["client"]
    register(client)
    r = client.post("/api/auth/register", json={"email": "ana@example.com", "password": "x", "name": "A"})
    assert r.status_code == 400
    assert r.json()["detail"] == "User already exists"


def test_register_requires_all_fields(app_env):
    r = app_env["client"].post("/api/auth/register", json={"email": "a@b.c", "password": "x"})
    assert r.status_code == 422


def test_wrong_password(app_env):
    client = app_env["client"]
    register(client)
    r = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "nope"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid credentials"


def test_missing_and_invalid_tokens(app_env):
    client = app_env["client"]
    assert client.get("/api/auth/profile").status_code == 401
    r = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 403


def test_token_for_unknown_user_rejected(app_env):
    token = security.create_access_token("ghost", "ghost@example.com")
    r = app_env["client"].get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


def test_token_carries_user_id(app_env):
    client = app_env["client"]
    r = client.post("/api/auth/register", json={"email": "c@d.e", "password": "pw", "name": "C"})
    payload = jwt.decode(r.json()["token"], security.JWT_SECRET, algorithms=[security.JWT_ALGORITHM])
    assert payload["sub"] == r.json()["user"]["id"]


def test_password_hashing():
    stored = security.hash_password("hunter2")
    assert stored.startswith("$2b$")
    assert stored != security.hash_password("hunter2")
    assert security.verify_password("hunter2", stored)
    assert not security.verify_password("hunter3", stored)
    assert not security.verify_password("hunter2", "garbage")
