"""Project schemas."""

from datetime import datetime
from typing import Any

from portfolio.schemas.base import CamelModel


class ProjectCreate(CamelModel):
    """
    Request to create a project.

    ``skills`` may be a list or a comma-separated string; it is
    normalized by the service. ``title`` is checked by the service so a
    missing title is reported like every other validation failure.
    """

    title: str | None = None
    description: str | None = None
    skills: list[Any] | str | None = None
    github_url: str | None = None
    demo_url: str | None = None
    image_url: str | None = None


class ProjectUpdate(ProjectCreate):
    """Partial update; only fields present in the request are applied."""


class ProjectResponse(CamelModel):
    """A project embedded in a profile."""

    id: str
    title: str
    description: str = ""
    skills: list[str] = []
    github_url: str = ""
    demo_url: str = ""
    image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeleteResponse(CamelModel):
    success: bool = True


class SkillCount(CamelModel):
    """How many times a (lowercased) skill appears across a profile's projects."""

    name: str
    count: int
