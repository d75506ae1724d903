# fau_portal/schemas/user.py
from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .token import Role


class User(CamelModel):
    id: str
    username: str
    name: str
    role: Role


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, json_schema_extra={"example": "admin@fau-erdal.no"})
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    user: User
    token: str
    csrf_token: str
    expires_at: datetime
