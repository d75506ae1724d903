# fau_portal/models/registration.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    JSON,
    CheckConstraint,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from fau_portal.db.base_class import Base


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id = Column(String, primary_key=True, default=lambda: f"reg_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String,
        ForeignKey("events.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    attendee_count = Column(Integer, nullable=False, default=1)
    comments = Column(Text, nullable=True)
    language = Column(String(2), nullable=False, default="no")

    # Photo events only: one named child per attendee and the slot assigned to each
    children_names = Column(JSON, nullable=True)
    time_slots = Column(JSON, nullable=True)

    registered_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    event = relationship("Event", back_populates="registrations")

    __table_args__ = (
        CheckConstraint("attendee_count >= 1", name="check_attendee_count_positive"),
        CheckConstraint("language IN ('no', 'en')", name="check_registration_language"),
    )

    def __repr__(self) -> str:
        return f"<EventRegistration {self.id} event={self.event_id} count={self.attendee_count}>"


# One registration per person per event, compared case-insensitively
Index(
    "uq_event_registrations_event_email",
    EventRegistration.event_id,
    func.lower(EventRegistration.email),
    unique=True,
)
