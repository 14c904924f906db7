"""
API tests for the authentication endpoints.
"""

import pytest
from fastapi import status
from httpx import AsyncClient

from app.core.config import settings
from app.core.security import decode_access_token
from tests.factories import DEFAULT_PASSWORD


class TestAuthController:
    @pytest.mark.asyncio
    async def test_register_sets_cookie(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/register",
            json={"name": "Dana", "email": "Dana@Example.com", "password": "secret1"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "dana@example.com"
        assert "password_hash" not in body["user"]

        token = response.cookies[settings.auth_cookie_name]
        payload = decode_access_token(token)
        assert str(payload.user_id) == body["user"]["id"]
        assert "httponly" in response.headers["set-cookie"].lower()

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_user):
        response = await client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "ALICE@example.com", "password": "secret1"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Email already registered"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, message",
        [
            (
                {"name": "Dana", "email": "dana@example.com", "password": "123"},
                "Password must be at least 6 characters",
            ),
            (
                {"name": "D", "email": "dana@example.com", "password": "secret1"},
                "Name must be at least 2 characters",
            ),
            (
                {"name": "Dana", "email": "not-an-email", "password": "secret1"},
                "Please enter a valid email",
            ),
        ],
    )
    async def test_register_validation(self, client: AsyncClient, payload, message):
        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == message

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user):
        response = await client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": DEFAULT_PASSWORD}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["id"] == str(test_user.id)
        assert settings.auth_cookie_name in response.cookies

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user):
        response = await client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Invalid email or password"
        assert settings.auth_cookie_name not in response.cookies

    @pytest.mark.asyncio
    async def test_me(self, authenticated_client: AsyncClient, test_user):
        response = await authenticated_client.get("/api/auth/me")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert set(body) == {"id", "name", "email", "created_at"}
        assert body["id"] == str(test_user.id)
        assert body["name"] == "Alice Owner"
        assert body["email"] == "alice@example.com"

    @pytest.mark.asyncio
    async def test_me_anonymous(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_me_tampered_cookie(self, client_factory):
        ac = client_factory()
        ac.cookies.set(settings.auth_cookie_name, "tampered.token.value")

        response = await ac.get("/api/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Logout successful"
        header = response.headers["set-cookie"]
        assert header.startswith(f"{settings.auth_cookie_name}=")
        assert "Max-Age=0" in header
