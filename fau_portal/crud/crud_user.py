# fau_portal/crud/crud_user.py
import logging
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.core.exceptions import InvalidCredentials
from fau_portal.core.security import burn_password_check, hash_password, verify_password
from fau_portal.models.user import User

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, BaseModel, BaseModel]):
    resource_name = "User"

    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return (
            db.query(self.model)
            .filter(func.lower(self.model.username) == username.strip().lower())
            .first()
        )

    def authenticate(self, db: Session, *, username: str, password: str) -> User:
        """
        Return the user whose credentials match, or raise InvalidCredentials.

        The same error is raised for an unknown username and a wrong password.
        """
        user = self.get_by_username(db, username=username)
        if user is None:
            burn_password_check(password)
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return user

    def upsert_admin(
        self, db: Session, *, username: str, password: str, name: str
    ) -> User:
        """Create the admin account, or rotate its password if it already exists."""
        user = self.get_by_username(db, username=username)
        if user is None:
            user = User(
                username=username.strip().lower(),
                password_hash=hash_password(password),
                name=name,
                role="admin",
            )
            db.add(user)
            logger.info("Created admin user %s", user.username)
        else:
            user.password_hash = hash_password(password)
            user.role = "admin"
            logger.info("Rotated password for admin user %s", user.username)
        db.commit()
        db.refresh(user)
        return user


user = CRUDUser(User)
