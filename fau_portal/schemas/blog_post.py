# fau_portal/schemas/blog_post.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel

BlogPostStatus = Literal["published", "archived"]


class BlogPostCreate(CamelModel):
    title: str = Field(..., min_length=1, json_schema_extra={"example": "Referat fra FAU-møte"})
    content: str = Field(..., min_length=1)
    # Defaults to now when omitted
    published_date: Optional[datetime] = None
    author: Optional[str] = None


class BlogPostUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    status: Optional[BlogPostStatus] = None
    published_date: Optional[datetime] = None
    author: Optional[str] = None


class BlogPost(CamelModel):
    id: str
    title: str
    content: str
    status: BlogPostStatus
    published_date: datetime
    author: Optional[str] = None
    created_at: datetime
    updated_at: datetime
