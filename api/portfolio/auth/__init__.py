"""Authentication utilities for the Portfolio API."""

from portfolio.auth.jwt import create_access_token, create_refresh_token, create_tokens, decode_token
from portfolio.auth.password import hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "create_tokens",
    "decode_token",
]
