# fau_portal/schemas/token.py
from typing import Literal

from pydantic import BaseModel

Role = Literal["admin", "member", "user"]


class TokenPayload(BaseModel):
    """Validated claims of a session token."""

    sub: str
    username: str
    name: str
    role: Role
    iat: int
    exp: int
    csrf: str
