"""Profile store access: one profile document per user."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.errors import NotFound
from portfolio.models.profile import Profile
from portfolio.schemas.auth import Identity
from portfolio.schemas.profile import ProfileUpdate
from portfolio.services.skills import unique_skills

logger = logging.getLogger(__name__)


def blank_profile_values(user_id: UUID, name: str, email: str) -> dict[str, Any]:
    """Column values for a freshly created, empty profile."""
    return {
        "created_by": user_id,
        "name": name or "",
        "email": email,
        "bio": "",
        "location": "",
        "website": "",
        "github": "",
        "linkedin": "",
        "skills": [],
        "education": [],
        "experience": [],
        "projects": [],
    }


class ProfileService:
    """Reads, lazily creates and updates the caller's profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, user_id: UUID, *, for_update: bool = False) -> Profile | None:
        query = select(Profile).where(Profile.created_by == user_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_owned(self, user_id: UUID, *, for_update: bool = False) -> Profile:
        """
        Load an existing profile without creating one.

        With ``for_update`` the row stays locked until the transaction
        ends, so read-modify-write sequences on the embedded arrays
        cannot interleave.

        Raises:
            NotFound: if the user has no profile
        """
        profile = await self._find(user_id, for_update=for_update)
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    async def get(self, identity: Identity) -> Profile:
        """
        Return the caller's profile, creating a blank one on first access.

        Creation is an ``INSERT ... ON CONFLICT DO NOTHING`` against the
        unique owner column, so concurrent first reads still produce a
        single profile.
        """
        user_id = UUID(identity.user_id)
        stmt = (
            pg_insert(Profile)
            .values(**blank_profile_values(user_id, identity.name, identity.email))
            .on_conflict_do_nothing(index_elements=[Profile.created_by])
        )
        try:
            result = await self.db.execute(stmt)
        except IntegrityError:
            await self.db.rollback()
            raise NotFound("User not found")

        if result.rowcount:
            logger.info("Created blank profile for user %s", user_id)

        return await self.get_owned(user_id)

    async def replace(self, identity: Identity, patch: ProfileUpdate) -> Profile:
        """
        Merge the supplied fields into the caller's profile (upsert).

        Unsupplied and null fields keep their stored value; the owner
        reference and projects are never touched.
        """
        user_id = UUID(identity.user_id)
        values = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "skills" in values:
            values["skills"] = unique_skills(values["skills"])

        insert_values = {
            **blank_profile_values(user_id, identity.name, identity.email),
            **values,
        }
        stmt = (
            pg_insert(Profile)
            .values(**insert_values)
            .on_conflict_do_update(
                index_elements=[Profile.created_by],
                set_={**values, "updated_at": func.now()},
            )
            .returning(Profile)
        )
        try:
            result = await self.db.scalars(
                stmt, execution_options={"populate_existing": True}
            )
            profile = result.one()
        except IntegrityError:
            await self.db.rollback()
            raise NotFound("User not found")

        logger.info("Updated profile fields %s for user %s", sorted(values), user_id)
        return profile

    @staticmethod
    def touch(profile: Profile) -> datetime:
        """Stamp the profile as modified now and return the timestamp."""
        now = datetime.now(timezone.utc)
        profile.updated_at = now
        return now
