"""Services for the Portfolio API."""

from portfolio.services.accounts import AccountService
from portfolio.services.profiles import ProfileService
from portfolio.services.projects import ProjectService
from portfolio.services.skills import SkillService, count_skills, normalize_skills

__all__ = [
    "AccountService",
    "ProfileService",
    "ProjectService",
    "SkillService",
    "count_skills",
    "normalize_skills",
]
