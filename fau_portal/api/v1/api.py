# fau_portal/api/v1/api.py

from fastapi import APIRouter
from fau_portal.api.v1.endpoints import (
    auth,
    events,
    registrations,
    contact_messages,
    board_members,
    blog_posts,
    email_domain_blacklist,
)

# This is the main router for the API. It is mounted under /api.
api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(registrations.router)
api_router.include_router(contact_messages.router)
api_router.include_router(board_members.router)
api_router.include_router(blog_posts.router)
api_router.include_router(email_domain_blacklist.router)
