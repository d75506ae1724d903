# fau_portal/services/registration_service.py
"""
Registration engine.

Owns the two invariants of an event's attendee list:

* at most one registration per (event, email), compared case-insensitively;
* `current_attendees` equals the sum of attendee counts of the event's
  registrations and never exceeds `max_attendees`.

Every counter change and its matching INSERT/DELETE happen in one
transaction. If either part fails, both are rolled back.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.core.config import settings
from fau_portal.core.exceptions import (
    BlockedEmailDomain,
    CapacityExceeded,
    DuplicateRegistration,
    EventCancelled,
    InvalidRegistration,
    SuggestedEmailDomain,
)
from fau_portal.models.event import Event
from fau_portal.models.registration import EventRegistration
from fau_portal.schemas.registration import RegistrationCreate

logger = logging.getLogger(__name__)

PHOTO_EVENT_TYPE = "photo"


def compute_time_slots(start_time: str, prior: int, count: int, slot_minutes: int) -> List[str]:
    """
    Consecutive "HH:MM" slots for `count` children, after the `prior` ones
    already booked.

    >>> compute_time_slots("09:00", 2, 2, 10)
    ['09:20', '09:30']
    """
    start = datetime.strptime(start_time, "%H:%M")
    return [
        (start + timedelta(minutes=(prior + i) * slot_minutes)).strftime("%H:%M")
        for i in range(count)
    ]


def _available(event: Event) -> Optional[int]:
    if event.max_attendees is None:
        return None
    return event.max_attendees - event.current_attendees


def check_email_domain(db: Session, *, email: str, language: str = "no") -> None:
    """
    Refuse addresses on blacklisted domains.

    Raises:
        BlockedEmailDomain: the domain is a placeholder or undeliverable.
        SuggestedEmailDomain: the domain is a known typo, e.g. gmail.no.
    """
    entry = crud.email_domain_blacklist.get_for_email(db, email=email)
    if entry is None:
        return
    if entry.action == "block":
        raise BlockedEmailDomain(entry.category, language)
    if entry.action == "suggest" and entry.suggested_fix:
        local_part = email.rpartition("@")[0]
        raise SuggestedEmailDomain(f"{local_part}@{entry.suggested_fix}", entry.category, language)


def register(db: Session, *, registration_in: RegistrationCreate) -> EventRegistration:
    """
    Register a person for an event.

    Raises:
        BlockedEmailDomain, SuggestedEmailDomain: the email domain is blacklisted.
        NotFound: the event does not exist.
        EventCancelled: the event is cancelled.
        InvalidRegistration: a photo event without children names.
        DuplicateRegistration: this email is already registered.
        CapacityExceeded: not enough places left.
    """
    email = str(registration_in.email)
    check_email_domain(db, email=email, language=registration_in.language)

    event_id = registration_in.event_id
    event = crud.event.get_or_404(db, id=event_id)

    if event.status == "cancelled":
        raise EventCancelled(event_id)

    is_photo = event.type == PHOTO_EVENT_TYPE
    if is_photo:
        if not registration_in.children_names:
            raise InvalidRegistration("Children names are required for photo events")
        children_names = registration_in.children_names
        count = len(children_names)
    else:
        children_names = None
        count = registration_in.attendee_count

    if crud.registration.get_by_event_and_email(db, event_id=event_id, email=registration_in.email):
        raise DuplicateRegistration(event_id)

    available = _available(event)
    if available is not None and count > available:
        raise CapacityExceeded(available)

    try:
        new_total = crud.event.reserve_capacity(db, event_id=event_id, count=count)
        if new_total is None:
            # Lost a race: someone else took the last places or cancelled
            # the event between our read and the guarded update.
            db.rollback()
            # The event may also have been deleted in the meantime
            event = crud.event.get_or_404(db, id=event_id)
            if event.status == "cancelled":
                raise EventCancelled(event_id)
            raise CapacityExceeded(_available(event) or 0)

        prior = new_total - count
        time_slots = None
        if is_photo:
            time_slots = compute_time_slots(
                event.time, prior, count, settings.PHOTO_SLOT_MINUTES
            )

        db_obj = EventRegistration(
            event_id=event_id,
            name=registration_in.name,
            email=email,
            phone=registration_in.phone,
            attendee_count=count,
            comments=registration_in.comments,
            language=registration_in.language,
            children_names=children_names,
            time_slots=time_slots,
        )
        db.add(db_obj)
        db.commit()
    except IntegrityError:
        # Unique (event_id, lower(email)) index: a concurrent duplicate won
        db.rollback()
        raise DuplicateRegistration(event_id)
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(db_obj)
    logger.info(
        "Registered %s for event %s (%d attendee(s), total %d)",
        db_obj.id, event_id, count, new_total,
    )
    return db_obj


def unregister(db: Session, *, registration_id: str) -> None:
    """Delete a registration and give its places back to the event."""
    db_obj = crud.registration.get_or_404(db, id=registration_id)
    event_id = db_obj.event_id
    count = db_obj.attendee_count
    try:
        crud.event.release_capacity(db, event_id=event_id, count=count)
        db.delete(db_obj)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Removed registration %s from event %s (%d attendee(s))", registration_id, event_id, count)


def list_for_event(db: Session, *, event_id: str) -> List[EventRegistration]:
    crud.event.get_or_404(db, id=event_id)
    return crud.registration.get_multi_by_event(db, event_id=event_id)
