"""
Tests for POST /api/v1/auth/login, /logout and GET /api/v1/auth/session.

Login returns JWT tokens in HttpOnly cookies and in the body.
"""

from httpx import AsyncClient


class TestLoginSuccess:
    """Happy path login scenarios."""

    async def test_login_with_valid_credentials_returns_200(
        self, async_client: AsyncClient, test_user: dict
    ):
        """Login with correct email/password returns 200."""
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"], "password": test_user["password"]},
        )
        assert response.status_code == 200

    async def test_login_email_is_case_insensitive(
        self, async_client: AsyncClient, test_user: dict
    ):
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"].upper(), "password": test_user["password"]},
        )
        assert response.status_code == 200

    async def test_login_returns_identity_and_tokens(
        self, async_client: AsyncClient, test_user: dict
    ):
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"], "password": test_user["password"]},
        )
        data = response.json()
        assert data["userId"] == test_user["user_id"]
        assert data["email"] == test_user["email"]
        assert data["name"] == test_user["name"]
        assert data["accessToken"]
        assert data["refreshToken"]

    async def test_login_sets_session_cookies(
        self, async_client: AsyncClient, test_user: dict
    ):
        """Successful login sets both HttpOnly cookies."""
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"], "password": test_user["password"]},
        )
        assert "access_token" in response.cookies
        assert "refresh_token" in response.cookies
        for header in response.headers.get_list("set-cookie"):
            assert "httponly" in header.lower()

    async def test_login_token_opens_session(
        self, async_client: AsyncClient, test_user: dict
    ):
        """The returned access token resolves to the same identity."""
        login = await async_client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"], "password": test_user["password"]},
        )
        token = login.json()["accessToken"]

        response = await async_client.get(
            "/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200
        assert response.json() == {
            "userId": test_user["user_id"],
            "email": test_user["email"],
            "name": test_user["name"],
        }


class TestLoginFailure:
    """Rejected credentials."""

    async def test_login_wrong_password_returns_401(
        self, async_client: AsyncClient, test_user: dict
    ):
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"], "password": "WrongPassword"},
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_login_unknown_email_returns_401(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "whatever"},
        )
        assert response.status_code == 401

    async def test_login_provider_account_returns_401_with_hint(
        self, async_client: AsyncClient, provider_user: dict
    ):
        """Accounts without a password must use their identity provider."""
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": provider_user["email"], "password": "anything"},
        )
        assert response.status_code == 401
        assert "provider" in response.json()["error"]["message"]

    async def test_login_missing_password_returns_400(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/login", json={"email": "a@example.com"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["field"] == "password"


class TestSession:
    """GET /api/v1/auth/session and the identity gate."""

    async def test_session_with_cookie(self, async_client: AsyncClient, test_user: dict):
        """The access_token cookie is accepted in place of the header."""
        async_client.cookies.set("access_token", test_user["token"])
        response = await async_client.get("/api/v1/auth/session")
        assert response.status_code == 200
        assert response.json()["userId"] == test_user["user_id"]

    async def test_session_with_garbage_token_returns_401(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/v1/auth/session", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    async def test_session_with_refresh_token_returns_401(
        self, async_client: AsyncClient, test_user: dict
    ):
        """Refresh tokens can't be used as access tokens."""
        from portfolio.auth.jwt import create_refresh_token

        token = create_refresh_token(test_user["user_id"])
        response = await async_client.get(
            "/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    async def test_session_for_deleted_user_returns_401(self, async_client: AsyncClient):
        from portfolio.auth.jwt import create_access_token

        token = create_access_token("00000000-0000-0000-0000-000000000000")
        response = await async_client.get(
            "/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401


class TestLogout:
    async def test_logout_clears_cookies(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/auth/logout")
        assert response.status_code == 204
        cookies = " ".join(response.headers.get_list("set-cookie"))
        assert "access_token=" in cookies
        assert "refresh_token=" in cookies
