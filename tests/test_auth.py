import pytest
import jwt

from storefront.core.config import settings
from storefront.core.security import create_access_token
from storefront.db.seed import seed_admin_user
from storefront.models import User
from tests.utils.factories import USER_PASSWORD, create_customer, fake


def _registration(**overrides):
    data = {
        "email": fake.unique.email(),
        "password": "Secret123",
        "first_name": "María",
        "last_name": "Gómez",
    }
    data.update(overrides)
    return data


# ═══════════════════════════════════════════════════════
# REGISTER
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_register_creates_user_and_sets_cookie(async_client):
    payload = _registration()
    response = await async_client.post("/api/auth/register", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["data"]["user"]["email"] == payload["email"].lower()
    assert body["data"]["user"]["role"] == "User"
    assert body["data"]["token"]
    assert settings.auth.cookie_name in response.cookies

    stored = await User.find_one(User.email == payload["email"].lower())
    assert stored is not None
    assert stored.password_hash != payload["password"]


@pytest.mark.asyncio
async def test_register_token_claims(async_client):
    response = await async_client.post("/api/auth/register", json=_registration())
    token = response.json()["data"]["token"]
    claims = jwt.decode(
        token,
        settings.auth.jwt_secret,
        algorithms=["HS256"],
        audience=settings.auth.jwt_audience,
        issuer=settings.auth.jwt_issuer,
    )
    assert claims["role"] == "User"
    assert claims["scope"] == "USER"
    assert claims["exp"] - claims["iat"] == settings.auth.token_expire_hours * 3600


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client):
    existing = await create_customer()
    response = await async_client.post("/api/auth/register", json=_registration(email=existing.email))
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Email is already registered"


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"email": "not-an-email"},
    {"email": "ana@@example.com"},
    {"email": "ana@example"},
    {"email": "a" * 250 + "@example.com"},
    {"password": "abc"},
    {"password": "alllowercase1"},
    {"first_name": "R2D2"},
    {"last_name": "x" * 51},
])
async def test_register_validation(async_client, overrides):
    response = await async_client.post("/api/auth/register", json=_registration(**overrides))
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"]


# ═══════════════════════════════════════════════════════
# LOGIN / LOGOUT
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_login_success(async_client):
    user = await create_customer()
    response = await async_client.post("/api/auth/login", json={"email": user.email, "password": USER_PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["data"]["user"]["id"] == str(user.id)
    assert settings.auth.cookie_name in response.cookies


@pytest.mark.asyncio
async def test_login_seeded_admin(async_client, admin_user):
    response = await async_client.post(
        "/api/auth/login",
        json={"email": settings.auth.admin_email, "password": settings.auth.admin_password},
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "Admin"


@pytest.mark.asyncio
async def test_login_wrong_password(async_client):
    user = await create_customer()
    response = await async_client.post("/api/auth/login", json={"email": user.email, "password": "Wrong123"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_email(async_client):
    response = await async_client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "Secret123"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_inactive_user(async_client):
    user = await create_customer()
    user.state = "Inactive"
    await user.save()
    response = await async_client.post("/api/auth/login", json={"email": user.email, "password": USER_PASSWORD})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_logout_clears_cookie(async_client):
    await async_client.post("/api/auth/register", json=_registration())
    assert async_client.cookies.get(settings.auth.cookie_name)

    response = await async_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"
    assert not async_client.cookies.get(settings.auth.cookie_name)


# ═══════════════════════════════════════════════════════
# TOKEN VALIDATION / PROFILE
# ═══════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_validate_with_bearer_token(async_client, user_headers):
    response = await async_client.get("/api/auth/validate", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Token is valid", "valid": True}


@pytest.mark.asyncio
async def test_validate_with_cookie(async_client):
    await async_client.post("/api/auth/register", json=_registration())
    response = await async_client.get("/api/auth/validate")
    assert response.status_code == 200
    assert response.json()["valid"] is True


@pytest.mark.asyncio
async def test_validate_without_token(async_client):
    response = await async_client.get("/api/auth/validate")
    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_validate_with_garbage_token(async_client):
    response = await async_client.get("/api/auth/validate", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_validate_with_wrong_audience(async_client, customer):
    payload = {"sub": str(customer.id), "aud": "someone-else", "iss": settings.auth.jwt_issuer}
    token = jwt.encode(payload, settings.auth.jwt_secret, algorithm="HS256")
    response = await async_client.get("/api/auth/validate", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_profile(async_client, customer, user_headers):
    response = await async_client.get("/api/auth/me", headers=user_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == customer.email
    assert data["full_name"] == "Ana Lopez"
    assert data["role"] == "User"


@pytest.mark.asyncio
async def test_deleted_user_token_rejected(async_client, customer):
    token = create_access_token(customer.id, customer.email, "User", "USER")
    await customer.delete()
    response = await async_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_register_normalizes_email(async_client):
    response = await async_client.post(
        "/api/auth/register",
        json=_registration(email="  Ana.Lopez@Example.COM "),
    )
    assert response.status_code == 201
    assert response.json()["data"]["user"]["email"] == "ana.lopez@example.com"
    assert await User.find_one(User.email == "ana.lopez@example.com") is not None


@pytest.mark.asyncio
async def test_seeded_admin_with_mixed_case_email_can_log_in(async_client, monkeypatch):
    monkeypatch.setattr(settings.auth, "admin_email", "Admin@Store.com")
    assert await seed_admin_user() is True

    for email in ("admin@store.com", "Admin@Store.com"):
        response = await async_client.post(
            "/api/auth/login",
            json={"email": email, "password": settings.auth.admin_password},
        )
        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "admin@store.com"


@pytest.mark.asyncio
async def test_admin_seed_skipped_when_users_exist(customer):
    assert await seed_admin_user() is False
    assert await User.find_one(User.email == settings.auth.admin_email) is None
