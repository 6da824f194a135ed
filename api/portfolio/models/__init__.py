"""Database models for the Portfolio API."""

from portfolio.models.profile import Profile
from portfolio.models.user import User

__all__ = [
    "User",
    "Profile",
]
