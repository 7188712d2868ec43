import pytest
from httpx import AsyncClient
from fastapi import status

from goods_transport.core.config import settings


@pytest.mark.asyncio
class TestAuth:
    """Signup, cookie session and logout"""

    async def test_first_user_becomes_superadmin(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/signup", json={"username": "founder", "password": "StrongPass123!"}
        )
        assert response.status_code == status.HTTP_201_CREATED

        data = response.json()
        assert data["message"] == "User created successfully."
        assert data["user"] == {"username": "founder", "role": "SUPERADMIN"}
        assert "hashed_password" not in data["user"]

    async def test_later_users_keep_requested_role(self, client: AsyncClient, superadmin_client):
        response = await client.post(
            "/api/v1/auth/signup",
            json={"username": "deputy", "password": "StrongPass123!", "role": "ADMIN"},
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["role"] == "ADMIN"

    async def test_superadmin_cannot_self_register(self, client: AsyncClient, superadmin_client):
        response = await client.post(
            "/api/v1/auth/signup",
            json={"username": "usurper", "password": "StrongPass123!", "role": "SUPERADMIN"},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"].startswith("Authorization required")

    async def test_duplicate_username(self, client: AsyncClient, superadmin_client):
        response = await client.post(
            "/api/v1/auth/signup", json={"username": "owner", "password": "StrongPass123!"}
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_signup_validation(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/signup", json={"username": "ab", "password": "short"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        data = response.json()
        assert data["message"] == "Validation Error"
        assert {error["field"] for error in data["errors"]} == {"username", "password"}

    async def test_login_sets_session_cookie(self, client: AsyncClient, superadmin_client):
        response = await client.post(
            "/api/v1/auth/login", json={"username": "owner", "password": "StrongPass123!"}
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "message": "Login successful.",
            "user": {"username": "owner", "role": "SUPERADMIN"},
        }

        cookie_header = response.headers["set-cookie"]
        assert cookie_header.startswith(f"{settings.SESSION_COOKIE_NAME}=")
        assert "HttpOnly" in cookie_header
        assert "Path=/" in cookie_header
        assert "Max-Age" not in cookie_header
        assert "Secure" not in cookie_header

    async def test_login_invalid_credentials(self, client: AsyncClient, superadmin_client):
        response = await client.post(
            "/api/v1/auth/login", json={"username": "owner", "password": "wrongpassword"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid username or password."}

        response = await client.post(
            "/api/v1/auth/login", json={"username": "nobody", "password": "StrongPass123!"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_current_session(self, admin_client: AsyncClient):
        response = await admin_client.get("/api/v1/auth/session")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["username"] == "manager"
        assert data["role"] == "ADMIN"
        assert isinstance(data["id"], int)

    async def test_session_requires_cookie(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/session")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_tampered_cookie_is_rejected(self, make_client):
        forged = await make_client("not-a-real-token")
        response = await forged.get("/api/v1/agencies")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_logout_expires_cookie(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/logout")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Logout successful."

        cookie_header = response.headers["set-cookie"]
        assert cookie_header.startswith(f'{settings.SESSION_COOKIE_NAME}=""')
        assert "Max-Age=0" in cookie_header
