import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from fau_portal.db.base_class import Base


def _utcnow():
    return datetime.now(timezone.utc)


class BoardMember(Base):
    __tablename__ = "fau_board_members"

    id = Column(String, primary_key=True, default=lambda: f"bm_{uuid.uuid4().hex[:12]}")
    name = Column(String, nullable=False)
    # "Leder", "Medlem", "Vara", ...
    role = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
