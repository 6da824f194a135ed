"""Skill tag normalization and frequency aggregation."""

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.errors import NotFound
from portfolio.models.profile import Profile
from portfolio.schemas.projects import SkillCount


def normalize_skills(value: Any) -> list[str]:
    """
    Turn skill input into an ordered list of trimmed, non-empty tags.

    Accepts either a sequence (non-string and blank entries are dropped)
    or a single comma-separated string. Anything else yields an empty
    list. Case is preserved.

    >>> normalize_skills("Python, TensorFlow, ")
    ['Python', 'TensorFlow']
    """
    if isinstance(value, str):
        pieces = value.split(",")
    elif isinstance(value, (list, tuple)):
        pieces = [item for item in value if isinstance(item, str)]
    else:
        return []
    return [piece.strip() for piece in pieces if piece.strip()]


def unique_skills(value: Any) -> list[str]:
    """Normalize like normalize_skills, then drop repeats keeping the first."""
    seen: set[str] = set()
    result = []
    for skill in normalize_skills(value):
        if skill not in seen:
            seen.add(skill)
            result.append(skill)
    return result


def count_skills(projects: Iterable[Mapping[str, Any]]) -> list[SkillCount]:
    """
    Rank lowercased skills by how many times they occur across projects.

    Every occurrence counts, including repeats inside one project. Ties
    keep the order in which the skill was first seen.
    """
    counts: dict[str, int] = {}
    for project in projects:
        skills = project.get("skills") or []
        if not isinstance(skills, list):
            continue
        for skill in skills:
            if not isinstance(skill, str):
                continue
            name = skill.strip().lower()
            if name:
                counts[name] = counts.get(name, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [SkillCount(name=name, count=count) for name, count in ranked]


class SkillService:
    """Derives the skill ranking for a profile; never writes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def top_skills(self, user_id: UUID) -> list[SkillCount]:
        # Only the projects column is needed for the ranking
        result = await self.db.execute(
            select(Profile.projects).where(Profile.created_by == user_id)
        )
        row = result.one_or_none()
        if row is None:
            raise NotFound("Profile not found")
        return count_skills(row.projects or [])
