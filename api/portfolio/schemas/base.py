"""Shared schema configuration and field checks."""

import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Deliberately loose: something@something.tld with no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def normalize_email(value: str) -> str:
    return value.strip().lower()


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire and accepting snake_case too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
