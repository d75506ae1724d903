# fau_portal/models/email_domain_blacklist.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, CheckConstraint

from fau_portal.db.base_class import Base


class EmailDomainBlacklist(Base):
    """
    Email domains refused at registration.

    `block` entries reject the address outright. `suggest` entries are common
    provider typos (gmail.no) and carry the domain the parent most likely meant.
    """

    __tablename__ = "email_domain_blacklist"

    id = Column(String, primary_key=True, default=lambda: f"edb_{uuid.uuid4().hex[:12]}")
    # Stored lowercase, without the "@"
    domain = Column(String, nullable=False, unique=True, index=True)
    # A: RFC-reserved, B: placeholder, C: common fake, D: internal, F: provider typo
    category = Column(String(1), nullable=False)
    action = Column(String(16), nullable=False, default="block")
    suggested_fix = Column(String, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("action IN ('block', 'suggest')", name="check_blacklist_action"),
    )

    def __repr__(self) -> str:
        return f"<EmailDomainBlacklist {self.domain} action={self.action}>"
