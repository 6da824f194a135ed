"""Authentication schemas for request/response validation."""

from portfolio.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """
    User registration request schema.

    Fields are optional here so the registration workflow can report
    exactly which one is missing or malformed.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None


class RegisterResponse(CamelModel):
    """User registration response schema."""

    success: bool = True
    message: str = "User created successfully"
    user_id: str


class LoginRequest(CamelModel):
    """User login request schema."""

    email: str
    password: str


class LoginResponse(CamelModel):
    """Login response; the same tokens are also set as HttpOnly cookies."""

    user_id: str
    email: str
    name: str
    access_token: str
    refresh_token: str


class RefreshResponse(CamelModel):
    """Token refresh response schema (new tokens are set as cookies)."""

    user_id: str
    access_token: str
    refresh_token: str


class Identity(CamelModel):
    """The caller as resolved from a valid session credential."""

    user_id: str
    email: str
    name: str
