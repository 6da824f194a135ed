"""Pydantic schemas for request/response validation."""

from portfolio.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
)
from portfolio.schemas.profile import (
    EducationEntry,
    ExperienceEntry,
    ProfileAction,
    ProfileResponse,
    ProfileUpdate,
)
from portfolio.schemas.projects import (
    DeleteResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    SkillCount,
)

__all__ = [
    "Identity",
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "RefreshResponse",
    "EducationEntry",
    "ExperienceEntry",
    "ProfileAction",
    "ProfileResponse",
    "ProfileUpdate",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "DeleteResponse",
    "SkillCount",
]
