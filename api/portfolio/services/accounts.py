"""Account registration and credential checks."""

import asyncio
import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.jwt import decode_token
from portfolio.auth.password import hash_password, verify_password
from portfolio.errors import Conflict, Unauthorized, ValidationFailed
from portfolio.models.profile import Profile
from portfolio.models.user import User
from portfolio.schemas.auth import RegisterRequest
from portfolio.schemas.base import is_valid_email, normalize_email
from portfolio.services.profiles import blank_profile_values

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AccountService:
    """Creates users together with their blank profile, and checks passwords."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def register(self, data: RegisterRequest) -> User:
        """
        Register a new user and create their empty profile.

        User and profile are flushed in the same transaction, so either
        both exist afterwards or neither does.

        Raises:
            ValidationFailed: a field is missing, the password is shorter
                than six characters, or the email is malformed
            Conflict: a user with this email (any case) already exists
        """
        for field in ("name", "email", "password"):
            value = getattr(data, field)
            if value is None or not value.strip():
                raise ValidationFailed(f"{field.capitalize()} is required", field=field)

        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        email = normalize_email(data.email)
        if not is_valid_email(email):
            raise ValidationFailed("Invalid email format", field="email")

        if await self.find_by_email(email):
            raise Conflict("User already exists with this email", field="email")

        # bcrypt is deliberately slow; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, data.password)

        user = User(
            name=data.name.strip(),
            email=email,
            password_hash=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.flush()  # Get user.id
            self.db.add(Profile(**blank_profile_values(user.id, user.name, user.email)))
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("User already exists with this email", field="email")

        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check an email/password pair.

        Raises:
            Unauthorized: unknown email, wrong password, or an account
                that has no password because it signs in elsewhere
        """
        user = await self.find_by_email(email)
        if not user:
            raise Unauthorized("Invalid email or password")

        if not user.password_hash:
            raise Unauthorized(
                "This account was created with an external provider. Sign in with that provider."
            )

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.warning("Failed login for user %s", user.id)
            raise Unauthorized("Invalid email or password")

        return user

    async def user_for_refresh(self, refresh_token: str | None) -> User:
        """
        Resolve a refresh token to its still-existing user.

        Raises:
            Unauthorized: no token, a bad or expired one, an access token
                presented in its place, or a deleted user
        """
        if not refresh_token:
            raise Unauthorized("Refresh token not provided")

        claims = decode_token(refresh_token)
        if not claims or claims.get("type") != "refresh":
            raise Unauthorized("Invalid or expired refresh token")

        try:
            user_id = UUID(str(claims.get("sub")))
        except ValueError:
            raise Unauthorized("Invalid or expired refresh token")

        user = await self.db.get(User, user_id)
        if user is None:
            logger.warning("Refresh for unknown user %s rejected", user_id)
            raise Unauthorized("User not found")
        return user
