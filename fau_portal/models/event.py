# fau_portal/models/event.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, CheckConstraint, Index
from sqlalchemy.orm import relationship

from fau_portal.db.base_class import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}")
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=False)
    # Local wall-clock start time, "HH:MM"
    time = Column(String(5), nullable=False)
    location = Column(String, nullable=False)
    # Free text used when location is "Annet"/"Other"
    custom_location = Column(String, nullable=True)
    # NULL means unlimited
    max_attendees = Column(Integer, nullable=True)
    # Maintained only by the registration engine
    current_attendees = Column(Integer, nullable=False, default=0, server_default="0")
    type = Column(String(32), nullable=False, default="event")
    status = Column(String(16), nullable=False, default="active", server_default="active")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        order_by="EventRegistration.registered_at",
    )

    __table_args__ = (
        CheckConstraint("current_attendees >= 0", name="check_current_attendees_positive"),
        CheckConstraint(
            "max_attendees IS NULL OR max_attendees > 0", name="check_max_attendees_positive"
        ),
        CheckConstraint("status IN ('active', 'cancelled')", name="check_event_status"),
        Index("idx_events_date_time", "date", "time"),
    )

    def __repr__(self) -> str:
        return f"<Event {self.id} {self.title!r} status={self.status}>"
