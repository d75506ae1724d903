# fau_portal/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.core import security
from fau_portal.core.config import settings
from fau_portal.core.exceptions import InvalidCredentials
from fau_portal.core.limiter import limiter, LOGIN_LIMIT
from fau_portal.db.session import get_db
from fau_portal.schemas.token import TokenPayload
from fau_portal.schemas.user import LoginRequest, LoginResponse, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _set_session_cookies(response: Response, issued: security.IssuedSession) -> None:
    max_age = settings.SESSION_TTL_MINUTES * 60
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=issued.token,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    # Readable by the web client so it can echo it in the CSRF header
    response.set_cookie(
        key=settings.CSRF_COOKIE_NAME,
        value=issued.csrf_token,
        max_age=max_age,
        httponly=False,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Exchange a username and password for a session.

    The token is returned in the body for Bearer clients and set as an
    HttpOnly cookie for the browser, next to a script-readable CSRF cookie.
    """
    try:
        user = crud.user.authenticate(
            db, username=credentials.username, password=credentials.password
        )
    except InvalidCredentials:
        logger.warning("Failed login attempt for %s", credentials.username)
        raise
    issued = security.issue_session(user)
    _set_session_cookies(response, issued)
    logger.info("User %s logged in", user.username)
    return LoginResponse(
        user=User.model_validate(user),
        token=issued.token,
        csrf_token=issued.csrf_token,
        expires_at=issued.expires_at,
    )


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    response.delete_cookie(settings.CSRF_COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/user", response_model=User)
def read_current_user(current_user: TokenPayload = Depends(deps.get_current_user)):
    return User(
        id=current_user.sub,
        username=current_user.username,
        name=current_user.name,
        role=current_user.role,
    )
