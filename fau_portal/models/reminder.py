"""Sent-marker for event reminder emails."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint

from fau_portal.db.base_class import Base


class EventReminder(Base):
    """
    Records that the day-before reminder for an event date has been claimed.

    The (event_id, event_date) pair is unique, so a reminder is sent at most
    once per event date even across restarts or several scheduler instances.
    Rescheduling an event to a new date gets a fresh marker.
    """

    __tablename__ = "event_reminders"

    id = Column(String, primary_key=True, default=lambda: f"erm_{uuid.uuid4().hex[:12]}")
    event_id = Column(
        String,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_date = Column(Date, nullable=False)
    sent_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    recipient_count = Column(Integer, nullable=False, default=0)
    failed_count = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("event_id", "event_date", name="uq_event_reminder_event_date"),
    )

    def __repr__(self) -> str:
        return f"<EventReminder {self.event_id} {self.event_date}>"
