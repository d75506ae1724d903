"""CRUD operations for event reminder sent-markers."""

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.models.reminder import EventReminder

logger = logging.getLogger(__name__)


class CRUDEventReminder(CRUDBase[EventReminder, BaseModel, BaseModel]):
    resource_name = "Event reminder"

    def claim(self, db: Session, *, event_id: str, event_date: date) -> Optional[EventReminder]:
        """
        Claim the reminder for an event date.
        Returns None if it was already claimed (idempotent).
        """
        try:
            db_obj = self.model(event_id=event_id, event_date=event_date)
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
            return db_obj
        except IntegrityError:
            # Already claimed by an earlier tick or another instance
            db.rollback()
            logger.debug(f"Reminder already claimed: event={event_id}, date={event_date}")
            return None

    def record_result(
        self, db: Session, *, db_obj: EventReminder, sent: int, failed: int
    ) -> EventReminder:
        db_obj.recipient_count = sent
        db_obj.failed_count = failed
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def prune_before(self, db: Session, *, cutoff: date) -> int:
        """Delete markers for event dates earlier than `cutoff`."""
        deleted = (
            db.query(self.model)
            .filter(self.model.event_date < cutoff)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


event_reminder = CRUDEventReminder(EventReminder)
