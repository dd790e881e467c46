import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# JSON bags (preferences, metadata, ...) are kept schema-agnostic
JSONMap = Dict[str, Any]


class CamelModel(BaseModel):
    """Base for request/response bodies: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email address")
    return value


def check_password_policy(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
        raise ValueError("Password must contain an uppercase letter, a lowercase letter and a digit")
    return value


def check_date(value: str) -> str:
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise ValueError("Date must be a valid YYYY-MM-DD date")


def check_time(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip() == "":
        return None
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value


class UserPublic(CamelModel):
    id: int
    email: str
    name: str


class Locations(CamelModel):
    home: str = ""
    work: str = ""
    frequent_places: List[str] = Field(default_factory=list)


class PersonalInfo(CamelModel):
    preferences: JSONMap = Field(default_factory=dict)
    daily_routine: List[str] = Field(default_factory=list)
    locations: Locations = Field(default_factory=Locations)


class SuccessResponse(BaseModel):
    success: bool
    message: str


class Timestamps(CamelModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
