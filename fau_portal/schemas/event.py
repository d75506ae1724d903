# fau_portal/schemas/event.py
from datetime import date as date_type, datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel

EventType = Literal["meeting", "event", "dugnad", "photo", "other"]
EventStatus = Literal["active", "cancelled"]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class EventBase(CamelModel):
    title: str = Field(..., min_length=1, json_schema_extra={"example": "Foreldremøte"})
    description: str = ""
    date: date_type
    time: str = Field(..., pattern=TIME_PATTERN, json_schema_extra={"example": "18:00"})
    location: str = Field(..., min_length=1, json_schema_extra={"example": "Møterom"})
    custom_location: Optional[str] = None
    max_attendees: Optional[int] = Field(
        None, ge=1, description="Leave empty for unlimited capacity."
    )
    type: EventType = "event"


class EventCreate(EventBase):
    # Any attendee count or status sent by the client is ignored.
    pass


class EventUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[date_type] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    location: Optional[str] = Field(None, min_length=1)
    custom_location: Optional[str] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    type: Optional[EventType] = None


class Event(EventBase):
    id: str = Field(..., json_schema_extra={"example": "evt_c5a6d8e0f9b1"})
    current_attendees: int
    status: EventStatus
    created_at: datetime
