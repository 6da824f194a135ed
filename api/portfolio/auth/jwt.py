"""Signed session tokens (HS256 JWT) for access and refresh."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from portfolio.config import settings

ALGORITHM = "HS256"


def _encode(user_id: str, token_type: str, lifetime: timedelta) -> str:
    claims = {
        "sub": user_id,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=ALGORITHM)


def create_access_token(user_id: str) -> str:
    """Session credential accepted by the identity gate."""
    return _encode(user_id, "access", timedelta(minutes=settings.access_token_expire_minutes))


def create_refresh_token(user_id: str) -> str:
    """Credential only accepted by the refresh endpoint."""
    return _encode(user_id, "refresh", timedelta(days=settings.refresh_token_expire_days))


def create_tokens(user_id: str) -> dict[str, str]:
    return {
        "access_token": create_access_token(user_id),
        "refresh_token": create_refresh_token(user_id),
    }


def decode_token(token: str) -> dict | None:
    """
    Verify signature and expiry and return the claims.

    Any failure (bad signature, malformed token, expired) gives None;
    callers decide which error to report.
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
