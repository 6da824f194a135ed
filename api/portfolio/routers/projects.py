"""Projects router for the project entries of the caller's profile."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import get_current_identity
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.projects import (
    DeleteResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from portfolio.services.projects import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])


@router.get(
    "",
    response_model=list[ProjectResponse],
    status_code=status.HTTP_200_OK,
)
async def list_projects(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> list[ProjectResponse]:
    """List projects in their stored order."""
    projects = await ProjectService(db).list_projects(UUID(identity.user_id))
    return [ProjectResponse.model_validate(project) for project in projects]


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    data: ProjectCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """
    Append a project to the profile.

    ``skills`` may be a list or a comma-separated string.
    """
    project = await ProjectService(db).create(UUID(identity.user_id), data)
    await db.commit()
    return ProjectResponse.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    status_code=status.HTTP_200_OK,
)
async def get_project(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = await ProjectService(db).get(UUID(identity.user_id), project_id)
    return ProjectResponse.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    status_code=status.HTTP_200_OK,
)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Update only the fields present in the request body."""
    project = await ProjectService(db).update(UUID(identity.user_id), project_id, data)
    await db.commit()
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_project(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    await ProjectService(db).delete(UUID(identity.user_id), project_id)
    await db.commit()
    return DeleteResponse()
