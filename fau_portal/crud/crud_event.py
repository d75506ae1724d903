# fau_portal/crud/crud_event.py
from datetime import date
from typing import List, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.core.exceptions import Conflict, InvalidEventUpdate
from fau_portal.models.event import Event
from fau_portal.models.registration import EventRegistration
from fau_portal.schemas.event import EventCreate, EventUpdate

# Columns a PUT may explicitly clear
NULLABLE_FIELDS = {"custom_location", "max_attendees"}


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    resource_name = "Event"

    def create(self, db: Session, *, obj_in: EventCreate) -> Event:
        # Counters and status always start fresh, whatever the client sent.
        db_obj = self.model(**obj_in.model_dump(), current_attendees=0, status="active")
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_multi_public(self, db: Session) -> List[Event]:
        """Active and cancelled events, soonest first."""
        return (
            db.query(self.model)
            .filter(self.model.status.in_(("active", "cancelled")))
            .order_by(self.model.date.asc(), self.model.time.asc())
            .all()
        )

    def get_active_between(self, db: Session, *, start: date, end: date) -> List[Event]:
        return (
            db.query(self.model)
            .filter(
                self.model.status == "active",
                self.model.date >= start,
                self.model.date <= end,
            )
            .order_by(self.model.date.asc(), self.model.time.asc())
            .all()
        )

    def update(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        update_data = obj_in.model_dump(
            exclude_unset=True, exclude={"current_attendees", "status"}
        )
        update_data = {
            field: value
            for field, value in update_data.items()
            if value is not None or field in NULLABLE_FIELDS
        }

        new_max = update_data.get("max_attendees", db_obj.max_attendees)
        if new_max is not None and new_max < db_obj.current_attendees:
            raise InvalidEventUpdate(
                f"maxAttendees cannot be lower than the current attendee count ({db_obj.current_attendees})"
            )
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def cancel(self, db: Session, *, db_obj: Event) -> Event:
        """Mark the event cancelled. Attendee counts are left as they are."""
        db_obj.status = "cancelled"
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, id: str) -> Event:
        db_obj = self.get_or_404(db, id=id)
        registration_count = (
            db.query(func.count(EventRegistration.id))
            .filter(EventRegistration.event_id == id)
            .scalar()
        )
        if registration_count:
            raise Conflict("Cannot delete event with registrations. Cancel it instead.")
        db.delete(db_obj)
        db.commit()
        return db_obj

    # --- Capacity primitives. These never commit; the caller owns the transaction. ---

    def reserve_capacity(self, db: Session, *, event_id: str, count: int) -> Optional[int]:
        """
        Add `count` attendees if the event is active and has room.

        The check and the increment are one guarded UPDATE, so two concurrent
        reservations can never push the event past max_attendees.

        Returns:
            The new attendee total, or None if the guard refused the update.
        """
        stmt = (
            update(self.model)
            .where(
                self.model.id == event_id,
                self.model.status == "active",
                (self.model.max_attendees.is_(None))
                | (self.model.current_attendees + count <= self.model.max_attendees),
            )
            .values(current_attendees=self.model.current_attendees + count)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        if result.rowcount != 1:
            return None
        return db.execute(
            select(self.model.current_attendees).where(self.model.id == event_id)
        ).scalar_one()

    def release_capacity(self, db: Session, *, event_id: str, count: int) -> None:
        """Subtract `count` attendees, never going below zero."""
        remaining = self.model.current_attendees - count
        stmt = (
            update(self.model)
            .where(self.model.id == event_id)
            .values(current_attendees=case((remaining < 0, 0), else_=remaining))
            .execution_options(synchronize_session=False)
        )
        db.execute(stmt)


event = CRUDEvent(Event)
