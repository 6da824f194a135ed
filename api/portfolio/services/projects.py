"""Project entries embedded in a profile."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.errors import NotFound, ValidationFailed
from portfolio.models.profile import Profile
from portfolio.schemas.profile import ProfileAction
from portfolio.schemas.projects import ProjectCreate, ProjectUpdate
from portfolio.services.profiles import ProfileService
from portfolio.services.skills import normalize_skills

logger = logging.getLogger(__name__)

# Optional text fields copied verbatim; null becomes an empty string
TEXT_FIELDS = ("description", "github_url", "demo_url", "image_url")


def _require_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationFailed("Title is required", field="title")
    return title.strip()


def _find_index(projects: list[dict[str, Any]], project_id: str) -> int:
    for index, project in enumerate(projects):
        if str(project.get("id")) == project_id:
            return index
    raise NotFound("Project not found")


def build_project(fields: ProjectCreate, now: datetime) -> dict[str, Any]:
    """Create the stored form of a new project with a fresh id."""
    project = {
        "id": uuid4().hex,
        "title": _require_title(fields.title),
        "skills": normalize_skills(fields.skills),
        "created_at": now.isoformat(),
        "updated_at": now.isoformat(),
    }
    for name in TEXT_FIELDS:
        project[name] = getattr(fields, name) or ""
    return project


def apply_project_update(
    project: dict[str, Any], fields: ProjectUpdate, now: datetime
) -> dict[str, Any]:
    """Return a copy of ``project`` with only the supplied fields replaced."""
    updated = dict(project)
    supplied = fields.model_fields_set

    if "title" in supplied:
        updated["title"] = _require_title(fields.title)
    if "skills" in supplied:
        updated["skills"] = normalize_skills(fields.skills)
    for name in TEXT_FIELDS:
        if name in supplied:
            updated[name] = getattr(fields, name) or ""

    updated["updated_at"] = now.isoformat()
    return updated


def _parse(model: type[ProjectCreate], data: dict[str, Any] | None) -> ProjectCreate:
    try:
        return model.model_validate(data or {})
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ())) or None
        raise ValidationFailed(first.get("msg", "Invalid project data"), field=field)


class ProjectService:
    """
    Manages the ordered project list inside the caller's profile.

    Every mutation locks the profile row first, so two requests editing
    the same profile apply one after the other.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.profiles = ProfileService(db)

    async def list_projects(self, user_id: UUID) -> list[dict[str, Any]]:
        profile = await self.profiles.get_owned(user_id)
        return list(profile.projects or [])

    async def get(self, user_id: UUID, project_id: str) -> dict[str, Any]:
        profile = await self.profiles.get_owned(user_id)
        projects = profile.projects or []
        return projects[_find_index(projects, project_id)]

    async def create(self, user_id: UUID, fields: ProjectCreate) -> dict[str, Any]:
        profile = await self.profiles.get_owned(user_id, for_update=True)
        project = self._append(profile, fields)
        await self.db.flush()
        logger.info("Added project %s to profile of user %s", project["id"], user_id)
        return project

    async def update(
        self, user_id: UUID, project_id: str, fields: ProjectUpdate
    ) -> dict[str, Any]:
        profile = await self.profiles.get_owned(user_id, for_update=True)
        project = self._replace(profile, project_id, fields)
        await self.db.flush()
        logger.info("Updated project %s of user %s", project_id, user_id)
        return project

    async def delete(self, user_id: UUID, project_id: str) -> None:
        profile = await self.profiles.get_owned(user_id, for_update=True)
        self._remove(profile, project_id)
        await self.db.flush()
        logger.info("Deleted project %s of user %s", project_id, user_id)

    async def dispatch(self, user_id: UUID, request: ProfileAction) -> Profile:
        """
        Run a named project action from POST /profile and return the profile.

        Supported actions are ``addProject``, ``updateProject`` and
        ``deleteProject``; the latter two need ``projectId``.
        """
        if request.action not in {"addProject", "updateProject", "deleteProject"}:
            raise ValidationFailed("Invalid action", field="action")
        if request.action != "addProject" and not request.project_id:
            raise ValidationFailed("projectId is required", field="projectId")

        profile = await self.profiles.get_owned(user_id, for_update=True)

        if request.action == "addProject":
            project = self._append(profile, _parse(ProjectCreate, request.project_data))
            project_id = project["id"]
        elif request.action == "updateProject":
            project_id = request.project_id
            self._replace(profile, project_id, _parse(ProjectUpdate, request.project_data))
        else:
            project_id = request.project_id
            self._remove(profile, project_id)

        await self.db.flush()
        logger.info("Applied %s to project %s of user %s", request.action, project_id, user_id)
        return profile

    # The helpers below work on copies and reassign the column so the
    # change is picked up by the unit of work.

    def _append(self, profile: Profile, fields: ProjectCreate) -> dict[str, Any]:
        project = build_project(fields, datetime.now(timezone.utc))
        self.profiles.touch(profile)
        profile.projects = [*(profile.projects or []), project]
        return project

    def _replace(self, profile: Profile, project_id: str, fields: ProjectUpdate) -> dict[str, Any]:
        projects = list(profile.projects or [])
        index = _find_index(projects, project_id)
        now = self.profiles.touch(profile)
        projects[index] = apply_project_update(projects[index], fields, now)
        profile.projects = projects
        return projects[index]

    def _remove(self, profile: Profile, project_id: str) -> None:
        projects = list(profile.projects or [])
        index = _find_index(projects, project_id)
        del projects[index]
        self.profiles.touch(profile)
        profile.projects = projects
