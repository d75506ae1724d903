# fau_portal/schemas/contact_message.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, model_validator

from .base import CamelModel

ContactStatus = Literal["new", "responded", "archived"]

ANONYMOUS_SUBJECT = "anonymous"


class ContactMessageCreate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    subject: str = Field(..., min_length=1, json_schema_extra={"example": "general"})
    message: str = Field(..., min_length=1)

    @property
    def is_anonymous(self) -> bool:
        return self.subject == ANONYMOUS_SUBJECT

    @model_validator(mode="after")
    def check_contact_details(self):
        if self.is_anonymous:
            # Anonymous messages never keep contact details
            self.name = None
            self.email = None
            self.phone = None
        elif not self.name or not self.email:
            raise ValueError("Name and email are required unless the message is anonymous")
        return self


class ContactMessageUpdate(CamelModel):
    status: ContactStatus


class ContactMessage(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: str
    message: str
    status: ContactStatus
    created_at: datetime
