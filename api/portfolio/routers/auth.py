"""Authentication router for registration, login and session tokens."""

import logging

from fastapi import APIRouter, Cookie, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import get_current_identity
from portfolio.auth.jwt import create_tokens
from portfolio.config import settings
from portfolio.database import get_db
from portfolio.middleware.rate_limit import limiter
from portfolio.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
)
from portfolio.services.accounts import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])

REFRESH_COOKIE_PATH = "/api/v1/auth/refresh"


def _set_session_cookies(response: Response, tokens: dict[str, str]) -> None:
    # Access token - short TTL matching token expiry
    response.set_cookie(
        key="access_token",
        value=tokens["access_token"],
        httponly=True,
        secure=True,
        samesite="strict",
        max_age=settings.access_token_expire_minutes * 60,
    )

    # Refresh token - longer TTL, only sent to the refresh endpoint
    response.set_cookie(
        key="refresh_token",
        value=tokens["refresh_token"],
        httponly=True,
        secure=True,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.register_rate_limit)
async def register(
    request: Request,
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """
    Create a new user account and its blank profile.

    Email is stored trimmed and lowercased.
    """
    user = await AccountService(db).register(data)
    await db.commit()

    return RegisterResponse(user_id=str(user.id))


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate with email and password.

    Tokens are set as HttpOnly cookies and also returned in the body
    for clients that prefer the Authorization header.
    """
    user = await AccountService(db).authenticate(data.email, data.password)

    tokens = create_tokens(str(user.id))
    _set_session_cookies(response, tokens)
    logger.info("User %s logged in", user.id)

    return LoginResponse(
        user_id=str(user.id),
        email=user.email,
        name=user.name,
        access_token=tokens["access_token"],
        refresh_token=tokens["refresh_token"],
    )


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    status_code=status.HTTP_200_OK,
)
async def refresh(
    response: Response,
    db: AsyncSession = Depends(get_db),
    refresh_token: str | None = Cookie(default=None),
) -> RefreshResponse:
    """Exchange the refresh token cookie for a new token pair."""
    user = await AccountService(db).user_for_refresh(refresh_token)

    tokens = create_tokens(str(user.id))
    _set_session_cookies(response, tokens)

    return RefreshResponse(
        user_id=str(user.id),
        access_token=tokens["access_token"],
        refresh_token=tokens["refresh_token"],
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def logout(response: Response) -> None:
    """Clear the session cookies."""
    response.delete_cookie("access_token")
    response.delete_cookie("refresh_token", path=REFRESH_COOKIE_PATH)


@router.get(
    "/session",
    response_model=Identity,
    status_code=status.HTTP_200_OK,
)
async def get_session(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    """Return the identity behind the current session credential."""
    return identity
