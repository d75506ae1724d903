# fau_portal/models/blog_post.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, CheckConstraint, Index

from fau_portal.db.base_class import Base


def _utcnow():
    return datetime.now(timezone.utc)


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(String, primary_key=True, default=lambda: f"post_{uuid.uuid4().hex[:12]}")
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    # Archived posts are hidden from the public list but kept for admins
    status = Column(String(16), nullable=False, default="published")
    published_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    author = Column(String, nullable=True)
    # Username of the admin who wrote the post
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("status IN ('published', 'archived')", name="check_blog_post_status"),
        Index("idx_blog_posts_status_published_date", "status", "published_date"),
    )

    def __repr__(self) -> str:
        return f"<BlogPost {self.id} status={self.status}>"
