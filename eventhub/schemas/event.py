import datetime as dt
import re
from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from eventhub.models.event import CATEGORIES
from eventhub.utils import sanitize_input
from .user import OrganizerOut

DATE_RE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

DATE_FORMAT_MESSAGE = "Date must be in YYYY-MM-DD format (MM and DD can be 1 or 2 digits)"
TIME_FORMAT_MESSAGE = "Time must be in HH:MM format (24-hour)"


def clean_text(value: Optional[str], label: str, max_length: int) -> str:
    value = sanitize_input(value) if value is not None else ""
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")
    return value


def parse_date(value) -> dt.date:
    """Accepts YYYY-M-D or YYYY-MM-DD and returns the calendar date."""
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        return value
    if not isinstance(value, str) or not DATE_RE.match(value.strip()):
        raise ValueError(DATE_FORMAT_MESSAGE)
    year, month, day = (int(part) for part in value.strip().split("-"))
    try:
        return dt.date(year, month, day)
    except ValueError:
        raise ValueError("Invalid date")


def parse_time(value) -> str:
    """Accepts H:MM or HH:MM (24-hour) and returns zero padded HH:MM."""
    if not isinstance(value, str) or not TIME_RE.match(value.strip()):
        raise ValueError(TIME_FORMAT_MESSAGE)
    return value.strip().zfill(5)


def check_category(value) -> str:
    if value not in CATEGORIES:
        raise ValueError("Category is invalid")
    return value


class EventCreate(BaseModel):
    name: str
    description: str
    date: dt.date
    time: str
    location: str
    category: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return clean_text(v, "Name", 100)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return clean_text(v, "Description", 1000)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return clean_text(v, "Location", 200)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return parse_date(v)

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return parse_time(v)

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        return check_category(v)


class EventUpdate(BaseModel):
    """Partial update. Only the fields the client sent are applied; an explicit
    null is rejected rather than clearing a required column."""

    name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return clean_text(v, "Name", 100)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return clean_text(v, "Description", 1000)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return clean_text(v, "Location", 200)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return parse_date(v)

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v):
        return parse_time(v)

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        return check_category(v)


class EventOut(BaseModel):
    id: str
    name: str
    description: str
    date: dt.date
    time: str
    location: str
    category: str
    organizer: OrganizerOut
    is_past: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel
