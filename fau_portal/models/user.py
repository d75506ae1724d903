# fau_portal/models/user.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, CheckConstraint, Index, func

from fau_portal.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: f"usr_{uuid.uuid4().hex[:12]}")
    # The username is the member's email address
    username = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String(16), nullable=False, default="member")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'member', 'user')", name="check_user_role"),
    )

    def __repr__(self) -> str:
        return f"<User {self.username} role={self.role}>"


# Logins are matched case-insensitively, so usernames must be unique that way too
Index("uq_users_username_lower", func.lower(User.username), unique=True)
