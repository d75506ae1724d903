# fau_portal/core/security.py
"""
Password hashing and session token issuance.

Sessions are stateless: a signed HS256 JWT carries the user's identity, role
and the paired anti-forgery value. Nothing is stored server-side, so a token
stays valid until it expires.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from fau_portal.core.config import settings
from fau_portal.core.exceptions import ConfigurationError, Unauthorized


@dataclass(frozen=True)
class IssuedSession:
    token: str
    csrf_token: str
    expires_at: datetime


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# Verified against when the username is unknown, so a miss costs the same
# bcrypt work as a wrong password.
_DUMMY_HASH = bcrypt.hashpw(b"fau-portal-dummy-password", bcrypt.gensalt(rounds=10)).decode("utf-8")


def burn_password_check(password: str) -> None:
    verify_password(password, _DUMMY_HASH)


def _signing_secret() -> str:
    if not settings.JWT_SECRET:
        raise ConfigurationError("JWT_SECRET is not configured")
    return settings.JWT_SECRET


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)


def issue_session(user) -> IssuedSession:
    """
    Sign a session token for `user` and pair it with a fresh CSRF token.

    The CSRF value is embedded in the signed claims as `csrf`, which lets the
    authorizer check that the cookie and header both belong to this session.
    """
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=settings.SESSION_TTL_MINUTES)
    csrf_token = generate_csrf_token()
    claims = {
        "sub": user.id,
        "username": user.username,
        "name": user.name,
        "role": user.role,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
        "csrf": csrf_token,
    }
    token = jwt.encode(claims, _signing_secret(), algorithm=settings.JWT_ALGORITHM)
    return IssuedSession(token=token, csrf_token=csrf_token, expires_at=expires_at)


def decode_token(token: str) -> dict:
    """Verify signature and expiry. Raises Unauthorized on any failure."""
    try:
        return jwt.decode(token, _signing_secret(), algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise Unauthorized("Invalid or expired session")
