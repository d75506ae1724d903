# fau_portal/schemas/board_member.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class BoardMemberCreate(CamelModel):
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1, json_schema_extra={"example": "Leder"})
    sort_order: int = 0


class BoardMemberUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
    sort_order: Optional[int] = None


class BoardMember(BoardMemberCreate):
    id: str
    created_at: datetime
    updated_at: datetime
