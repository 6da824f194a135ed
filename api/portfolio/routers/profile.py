"""Profile router: the caller's own portfolio document."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import get_current_identity
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.profile import ProfileAction, ProfileResponse, ProfileUpdate
from portfolio.services.profiles import ProfileService
from portfolio.services.projects import ProjectService

router = APIRouter(prefix="/api/v1/profile", tags=["Profile"])


@router.get(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """
    Get the authenticated user's profile.

    A blank profile is created on first access.
    """
    profile = await ProfileService(db).get(identity)
    await db.commit()
    return ProfileResponse.model_validate(profile)


@router.put(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def update_profile(
    data: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """
    Merge the supplied fields into the authenticated user's profile.

    Creates the profile if it doesn't exist.
    """
    profile = await ProfileService(db).replace(identity, data)
    await db.commit()
    return ProfileResponse.model_validate(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def profile_project_action(
    data: ProfileAction,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """
    Apply addProject, updateProject or deleteProject to the profile.

    Returns the whole profile after the change.
    """
    profile = await ProjectService(db).dispatch(UUID(identity.user_id), data)
    await db.commit()
    return ProfileResponse.model_validate(profile)
