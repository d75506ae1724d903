# fau_portal/crud/crud_blog_post.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.models.blog_post import BlogPost
from fau_portal.schemas.blog_post import BlogPostCreate, BlogPostUpdate


class CRUDBlogPost(CRUDBase[BlogPost, BlogPostCreate, BlogPostUpdate]):
    resource_name = "Blog post"

    def create_with_author(self, db: Session, *, obj_in: BlogPostCreate, created_by: str) -> BlogPost:
        """New posts are always published."""
        data = obj_in.model_dump()
        if data["published_date"] is None:
            data["published_date"] = datetime.now(timezone.utc)
        db_obj = self.model(**data, status="published", created_by=created_by)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_multi_published(self, db: Session) -> List[BlogPost]:
        return (
            db.query(self.model)
            .filter(self.model.status == "published")
            .order_by(self.model.published_date.desc())
            .all()
        )

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[BlogPost]:
        """Every post, archived included, newest first."""
        return (
            db.query(self.model)
            .order_by(self.model.published_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )


blog_post = CRUDBlogPost(BlogPost)
