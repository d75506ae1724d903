# fau_portal/schemas/email_domain_blacklist.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from .base import CamelModel

BlacklistAction = Literal["block", "suggest"]
BlacklistCategory = Literal["A", "B", "C", "D", "F"]


class EmailDomainBlacklistBase(CamelModel):
    domain: str = Field(..., min_length=1, json_schema_extra={"example": "gmail.no"})
    category: BlacklistCategory
    action: BlacklistAction = "block"
    suggested_fix: Optional[str] = Field(None, json_schema_extra={"example": "gmail.com"})
    description: Optional[str] = None


class EmailDomainBlacklistCreate(EmailDomainBlacklistBase):
    @field_validator("domain", "suggested_fix")
    @classmethod
    def normalize_domain(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower().lstrip("@")
        if not v:
            raise ValueError("Domain must not be blank")
        return v

    @model_validator(mode="after")
    def suggestion_needs_fix(self):
        if self.action == "suggest" and not self.suggested_fix:
            raise ValueError("suggestedFix is required when action is 'suggest'")
        return self


class EmailDomainBlacklistEntry(EmailDomainBlacklistBase):
    id: str
    created_at: datetime


class BlacklistSeedResult(CamelModel):
    inserted: int
    skipped: int
    total: int
