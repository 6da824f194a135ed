"""Refresh-token exchange: POST /api/v1/auth/refresh."""

from datetime import datetime, timedelta

from portfolio.auth.jwt import create_access_token, create_refresh_token


class TestRefreshSuccess:
    """A valid refresh cookie is exchanged for a new pair."""

    async def test_refresh_with_valid_token_returns_new_pair(
        self, async_client, test_user
    ):
        """A valid refresh token yields new tokens for the same user."""
        async_client.cookies.set("refresh_token", create_refresh_token(test_user["user_id"]))

        response = await async_client.post("/api/v1/auth/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["userId"] == test_user["user_id"]
        assert data["accessToken"]
        assert "access_token" in response.cookies
        assert "refresh_token" in response.cookies

    async def test_refreshed_access_token_is_usable(self, async_client, test_user):
        async_client.cookies.set("refresh_token", create_refresh_token(test_user["user_id"]))
        response = await async_client.post("/api/v1/auth/refresh")
        token = response.json()["accessToken"]

        session = await async_client.get(
            "/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"}
        )
        assert session.status_code == 200


class TestRefreshFailure:
    """Every rejected refresh is a 401."""

    async def test_refresh_without_cookie_returns_401(self, async_client):
        """No cookie at all."""
        response = await async_client.post("/api/v1/auth/refresh")
        assert response.status_code == 401

    async def test_refresh_with_invalid_token_returns_401(self, async_client):
        """Garbage in the cookie."""
        async_client.cookies.set("refresh_token", "invalid_token")
        response = await async_client.post("/api/v1/auth/refresh")
        assert response.status_code == 401

    async def test_refresh_with_access_token_returns_401(
        self, async_client, test_user
    ):
        """An access token cannot stand in for a refresh token."""
        access_token = create_access_token(test_user["user_id"])
        async_client.cookies.set("refresh_token", access_token)

        response = await async_client.post("/api/v1/auth/refresh")
        assert response.status_code == 401

    async def test_refresh_with_expired_token_returns_401(
        self, async_client, test_user, frozen_time
    ):
        """A refresh token past its 30 days."""
        with frozen_time(datetime.now() - timedelta(days=31)):
            expired_token = create_refresh_token(test_user["user_id"])

        async_client.cookies.set("refresh_token", expired_token)
        response = await async_client.post("/api/v1/auth/refresh")
        assert response.status_code == 401

    async def test_refresh_error_has_correct_format(self, async_client):
        """Error response should have the standard error body."""
        response = await async_client.post("/api/v1/auth/refresh")
        data = response.json()

        assert "error" in data
        assert data["error"]["code"] == "UNAUTHORIZED"
        assert "message" in data["error"]

    async def test_refresh_with_nonexistent_user_returns_401(self, async_client):
        """The token outlives the user it was issued to."""
        fake_user_id = "00000000-0000-0000-0000-000000000000"
        async_client.cookies.set("refresh_token", create_refresh_token(fake_user_id))

        response = await async_client.post("/api/v1/auth/refresh")
        assert response.status_code == 401
