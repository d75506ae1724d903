# fau_portal/api/v1/endpoints/blog_posts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.core.exceptions import Forbidden, Unauthorized
from fau_portal.db.session import get_db
from fau_portal.schemas.blog_post import BlogPost, BlogPostCreate, BlogPostUpdate
from fau_portal.schemas.token import TokenPayload

router = APIRouter(prefix="/blog-posts", tags=["Blog Posts"])


@router.get("", response_model=List[BlogPost])
def list_blog_posts(
    include_archived: bool = Query(False, alias="includeArchived"),
    db: Session = Depends(get_db),
    current_user: Optional[TokenPayload] = Depends(deps.get_current_user_optional),
):
    """
    Published posts, newest first. Public.

    With `includeArchived=true` admins also get archived posts.
    """
    if include_archived:
        if current_user is None:
            raise Unauthorized()
        if current_user.role != "admin":
            raise Forbidden()
        return crud.blog_post.get_multi(db)
    return crud.blog_post.get_multi_published(db)


@router.post("", response_model=BlogPost, status_code=status.HTTP_201_CREATED)
def create_blog_post(
    post_in: BlogPostCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return crud.blog_post.create_with_author(db, obj_in=post_in, created_by=current_user.username)


@router.put("/{post_id}", response_model=BlogPost)
def update_blog_post(
    post_id: str,
    post_in: BlogPostUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    post = crud.blog_post.get_or_404(db, id=post_id)
    # author may be cleared; the other fields are required columns
    update_data = {
        field: value
        for field, value in post_in.model_dump(exclude_unset=True).items()
        if value is not None or field == "author"
    }
    return crud.blog_post.update(db, db_obj=post, obj_in=update_data)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blog_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    crud.blog_post.remove(db, id=post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
