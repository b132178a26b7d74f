"""Tests for login and bearer token enforcement."""

from datetime import timedelta

from httpx import AsyncClient

from clinic.core.config import settings
from clinic.core.security import create_access_token, decode_access_token
from clinic.models.user import User
from factories import TEST_PASSWORD, create_test_token


class TestLogin:
    """POST /api/v1/login."""

    async def test_login_returns_bearer_token(
        self, api_client: AsyncClient, test_user: User
    ) -> None:
        response = await api_client.post(
            "/api/v1/login",
            json={"email": test_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == settings.access_token_expire_minutes * 60

        payload = decode_access_token(data["access_token"])
        assert payload is not None
        assert payload["sub"] == str(test_user.id)

    async def test_login_email_is_case_insensitive(
        self, api_client: AsyncClient, test_user: User
    ) -> None:
        response = await api_client.post(
            "/api/v1/login",
            json={"email": test_user.email.upper(), "password": TEST_PASSWORD},
        )

        assert response.status_code == 200

    async def test_wrong_password_is_401(
        self, api_client: AsyncClient, test_user: User
    ) -> None:
        response = await api_client.post(
            "/api/v1/login",
            json={"email": test_user.email, "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_unknown_email_is_401(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/v1/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401

    async def test_disabled_account_cannot_log_in(
        self, api_client: AsyncClient, disabled_user: User
    ) -> None:
        response = await api_client.post(
            "/api/v1/login",
            json={"email": disabled_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 401

    async def test_malformed_body_is_400(self, api_client: AsyncClient) -> None:
        response = await api_client.post("/api/v1/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"email", "password"} <= fields


class TestTokenEnforcement:
    """Protected routes require a valid bearer token."""

    async def test_missing_token_is_401(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/v1/patients")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_invalid_token_is_401(self, api_client: AsyncClient) -> None:
        response = await api_client.get(
            "/api/v1/doctors",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    async def test_expired_token_is_401(
        self, api_client: AsyncClient, test_user: User
    ) -> None:
        token = create_test_token(test_user, expires_delta=timedelta(minutes=-5))

        response = await api_client.get(
            "/api/v1/patients",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401

    async def test_token_for_deleted_user_is_401(self, api_client: AsyncClient) -> None:
        token = create_access_token("99999")

        response = await api_client.get(
            "/api/v1/patients",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401

    async def test_disabled_account_is_403(
        self, api_client: AsyncClient, disabled_user: User
    ) -> None:
        token = create_test_token(disabled_user)

        response = await api_client.get(
            "/api/v1/patients",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 403

    async def test_appointment_routes_require_token(self, api_client: AsyncClient) -> None:
        response = await api_client.post("/api/v1/appointments", json={})

        assert response.status_code == 401

    async def test_valid_token_is_accepted(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.get("/api/v1/patients", headers=auth_headers)

        assert response.status_code == 200
