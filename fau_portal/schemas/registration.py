# fau_portal/schemas/registration.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, field_validator

from fau_portal.core.config import settings
from .base import CamelModel

Language = Literal["no", "en"]


class RegistrationCreate(CamelModel):
    event_id: str
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Kari Nordmann"})
    email: EmailStr
    phone: Optional[str] = None
    attendee_count: int = Field(1, ge=1, le=settings.MAX_ATTENDEES_PER_REGISTRATION)
    comments: Optional[str] = None
    language: Language = "no"
    # Required for photo events, one entry per child
    children_names: Optional[List[str]] = Field(
        None, max_length=settings.MAX_ATTENDEES_PER_REGISTRATION
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("children_names")
    @classmethod
    def drop_blank_children(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [name.strip() for name in v if name and name.strip()]


class Registration(CamelModel):
    id: str
    event_id: str
    name: str
    email: str
    phone: Optional[str] = None
    attendee_count: int
    comments: Optional[str] = None
    language: Language
    children_names: Optional[List[str]] = None
    time_slots: Optional[List[str]] = None
    registered_at: datetime
