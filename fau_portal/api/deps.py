# fau_portal/api/deps.py
import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError

from fau_portal.core.config import settings
from fau_portal.core.exceptions import Forbidden, Unauthorized
from fau_portal.core.security import decode_token
from fau_portal.schemas.token import TokenPayload

# Higher rank includes everything a lower rank may do
ROLE_RANK = {"user": 0, "member": 1, "admin": 2}

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

# The `tokenUrl` is only used by the OpenAPI docs. auto_error is off because
# browsers authenticate with the session cookie instead.
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def _check_csrf(request: Request, token_data: TokenPayload) -> None:
    """
    Double-submit check: the header must match both the csrf cookie and
    the value signed into the session token.
    """
    header_token = request.headers.get(settings.CSRF_HEADER_NAME)
    cookie_token = request.cookies.get(settings.CSRF_COOKIE_NAME)
    if not header_token or not cookie_token:
        raise Forbidden("CSRF token missing")
    if not (
        secrets.compare_digest(header_token, cookie_token)
        and secrets.compare_digest(header_token, token_data.csrf)
    ):
        raise Forbidden("CSRF token mismatch")


def get_current_user(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme_optional),
) -> TokenPayload:
    """
    Resolve the caller from the Bearer header or the session cookie.

    Cookie-authenticated requests that change state must also pass the CSRF
    check. Bearer requests are exempt: browsers never attach that header on
    their own.
    """
    via_cookie = False
    token = bearer_token
    if not token:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        via_cookie = True
    if not token:
        raise Unauthorized()

    try:
        token_data = TokenPayload(**decode_token(token))
    except ValidationError:
        raise Unauthorized("Invalid or expired session")

    if via_cookie and request.method not in SAFE_METHODS:
        _check_csrf(request, token_data)
    return token_data


def require_role(role: str):
    """Dependency factory: the caller's role must rank at least `role`."""
    required_rank = ROLE_RANK[role]

    def role_checker(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if current_user.role == "admin":
            return current_user
        if ROLE_RANK.get(current_user.role, -1) < required_rank:
            raise Forbidden()
        return current_user

    return role_checker


require_member = require_role("member")
require_admin = require_role("admin")


def get_current_user_optional(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[TokenPayload]:
    """
    Like get_current_user, but anonymous or expired sessions resolve to None.

    For public endpoints that show more to signed-in callers.
    """
    if not bearer_token and not request.cookies.get(settings.SESSION_COOKIE_NAME):
        return None
    try:
        return get_current_user(request, bearer_token)
    except Unauthorized:
        return None
