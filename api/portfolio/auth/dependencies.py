"""Authentication dependencies for FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import Cookie, Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.jwt import decode_token
from portfolio.database import get_db
from portfolio.errors import Unauthorized
from portfolio.models.user import User
from portfolio.schemas.auth import Identity

logger = logging.getLogger(__name__)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session_user_id(
    authorization: str | None = Header(default=None),
    access_token: str | None = Cookie(default=None),
) -> UUID:
    """
    Verify the session credential and return the user id it was issued to.

    The credential is read from an ``Authorization: Bearer`` header,
    falling back to the ``access_token`` cookie.

    Raises:
        Unauthorized: if the credential is missing, invalid, expired or
            not an access token
    """
    token = _bearer_token(authorization) or access_token
    if not token:
        raise Unauthorized("Authentication required")

    payload = decode_token(token)
    if not payload:
        raise Unauthorized("Invalid or expired session")

    # Refresh tokens are only good for the refresh endpoint
    if payload.get("type") != "access":
        raise Unauthorized("Invalid token type")

    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        raise Unauthorized("Invalid or expired session")


async def get_current_identity(
    user_id: UUID = Depends(get_session_user_id),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """
    Resolve the session credential to the caller's identity.

    Identity fields are always taken from the stored user, never from
    the request.

    Raises:
        Unauthorized: if the user the credential was issued to no longer exists
    """
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        logger.warning("Session for unknown user %s rejected", user_id)
        raise Unauthorized("User not found")

    return Identity(user_id=str(user.id), email=user.email, name=user.name)
