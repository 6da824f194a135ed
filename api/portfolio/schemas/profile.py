"""Profile and embedded entry schemas."""

from datetime import datetime
from typing import Any

from pydantic import field_validator

from portfolio.schemas.base import CamelModel, is_valid_email
from portfolio.schemas.projects import ProjectResponse


def _required_text(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


class EducationEntry(CamelModel):
    """One education entry; identified only by its position in the list."""

    institution: str
    degree: str
    period: str = ""
    description: str = ""

    @field_validator("institution")
    @classmethod
    def validate_institution(cls, v: str) -> str:
        return _required_text(v, "Institution")

    @field_validator("degree")
    @classmethod
    def validate_degree(cls, v: str) -> str:
        return _required_text(v, "Degree")

    @field_validator("period", "description", mode="before")
    @classmethod
    def blank_if_null(cls, v: Any) -> Any:
        return "" if v is None else v


class ExperienceEntry(CamelModel):
    """One work experience entry."""

    company: str
    position: str
    period: str = ""
    description: str = ""

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        return _required_text(v, "Company")

    @field_validator("position")
    @classmethod
    def validate_position(cls, v: str) -> str:
        return _required_text(v, "Position")

    @field_validator("period", "description", mode="before")
    @classmethod
    def blank_if_null(cls, v: Any) -> Any:
        return "" if v is None else v


class ProfileResponse(CamelModel):
    """Full profile document as returned to its owner."""

    id: str
    created_by: str
    name: str
    email: str
    bio: str = ""
    location: str = ""
    website: str = ""
    github: str = ""
    linkedin: str = ""
    skills: list[str] = []
    education: list[EducationEntry] = []
    experience: list[ExperienceEntry] = []
    projects: list[ProjectResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", "created_by", mode="before")
    @classmethod
    def stringify_ids(cls, v: Any) -> str:
        return str(v)


class ProfileUpdate(CamelModel):
    """
    Fields accepted by PUT /profile.

    Only supplied fields are merged. The owner reference and the project
    list are not writable here.
    """

    name: str | None = None
    email: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    github: str | None = None
    linkedin: str | None = None
    skills: list[Any] | str | None = None
    education: list[EducationEntry] | None = None
    experience: list[ExperienceEntry] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _required_text(v, "Name")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not is_valid_email(v):
            raise ValueError("Invalid email format")
        return v


class ProfileAction(CamelModel):
    """Body of POST /profile: a named project action."""

    action: str
    project_id: str | None = None
    project_data: dict[str, Any] | None = None
