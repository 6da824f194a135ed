"""Skills router: frequency ranking of the skills used across projects."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import get_current_identity
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.projects import SkillCount
from portfolio.services.skills import SkillService

router = APIRouter(prefix="/api/v1/skills", tags=["Skills"])


@router.get(
    "",
    response_model=list[SkillCount],
    status_code=status.HTTP_200_OK,
)
async def top_skills(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> list[SkillCount]:
    """
    Rank the caller's skills by how many project entries use them.

    Skills are compared lowercased; ties keep first-seen order.
    """
    return await SkillService(db).top_skills(UUID(identity.user_id))
