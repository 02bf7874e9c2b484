import pytest

from simaka.core.security import create_access_token, hash_password, verify_password


@pytest.fixture
def seeded_client(client):
    response = client.post("/api/v1/auth/init-users")
    assert response.status_code == 200
    return client


def test_password_hashing_roundtrip():
    hashed = hash_password("rahasia123")
    assert verify_password("rahasia123", hashed)
    assert not verify_password("salah", hashed)
    assert not verify_password("rahasia123", "")
    assert not verify_password("rahasia123", "bukan-hash")


def test_init_users_only_once(client):
    first = client.post("/api/v1/auth/init-users").json()
    assert [u["email"] for u in first["users"]] == ["admin@namira.sch.id", "teacher@namira.sch.id"]
    assert "password_hash" not in first["users"][0]

    second = client.post("/api/v1/auth/init-users").json()
    assert second["users"] == []


def test_login_and_me(seeded_client):
    response = seeded_client.post(
        "/api/v1/auth/login",
        json={"email": "Admin@namira.sch.id", "password": "admin12345"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "admin"

    me = seeded_client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "admin@namira.sch.id"


def test_login_wrong_password(seeded_client):
    response = seeded_client.post(
        "/api/v1/auth/login",
        json={"email": "admin@namira.sch.id", "password": "salah"},
    )
    assert response.status_code == 401


def test_verify_token(seeded_client):
    token = seeded_client.post(
        "/api/v1/auth/login",
        json={"email": "teacher@namira.sch.id", "password": "teacher12345"},
    ).json()["access_token"]

    body = seeded_client.post("/api/v1/auth/verify", json={"token": token}).json()
    assert body["valid"] is True
    assert body["user"]["role"] == "teacher"
    assert body["user"]["email"] == "teacher@namira.sch.id"


def test_verify_rejects_garbage(client):
    assert client.post("/api/v1/auth/verify", json={"token": "abc.def.ghi"}).status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/v1/auth/me").status_code == 401
    orphan = create_access_token(subject=999, extra={"email": "x@y.id", "role": "staff"})
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {orphan}"})
    assert response.status_code == 401
