"""
Background task for day-before event reminder emails.

Runs on an interval from the scheduler. Each tick:
1. Prunes sent-markers for events that are long past
2. Finds active events starting 23-25 hours from now
3. Claims each event date's marker; only a fresh claim sends emails
4. Sends one reminder per registrant and records the counts
"""

import logging
from datetime import datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.core.config import settings
from fau_portal.db.session import SessionLocal
from fau_portal.models.event import Event
from fau_portal.services.notifications import send_reminder

logger = logging.getLogger(__name__)


def event_start(event: Event, tz: ZoneInfo) -> datetime:
    """The event's local start as an aware datetime."""
    return datetime.combine(event.date, time.fromisoformat(event.time), tzinfo=tz)


def _send_for_event(db: Session, event: Event) -> Optional[tuple]:
    marker = crud.event_reminder.claim(db, event_id=event.id, event_date=event.date)
    if marker is None:
        return None

    sent = failed = 0
    for registration in crud.registration.get_multi_by_event(db, event_id=event.id):
        if send_reminder(event, registration):
            sent += 1
        else:
            failed += 1

    crud.event_reminder.record_result(db, db_obj=marker, sent=sent, failed=failed)
    logger.info(
        f"Reminders for event {event.id} ({event.date}): {sent} sent, {failed} failed"
    )
    return sent, failed


def send_event_reminders(now: Optional[datetime] = None) -> bool:
    """
    Background task: send reminders for events starting in about 24 hours.

    Safe to run any number of times; the persisted marker makes sure each
    event date is reminded once.
    """
    tz = ZoneInfo(settings.TIMEZONE)
    now = (now or datetime.now(tz)).astimezone(tz)
    window_start = timedelta(hours=settings.REMINDER_WINDOW_START_HOURS)
    window_end = timedelta(hours=settings.REMINDER_WINDOW_END_HOURS)

    db = SessionLocal()
    try:
        pruned = crud.event_reminder.prune_before(
            db, cutoff=now.date() - timedelta(days=settings.REMINDER_RETENTION_DAYS)
        )
        if pruned:
            logger.info(f"Pruned {pruned} old reminder markers")

        candidates = crud.event.get_active_between(
            db,
            start=(now + window_start).date(),
            end=(now + window_end).date(),
        )
        for event in candidates:
            until_start = event_start(event, tz) - now
            if window_start <= until_start <= window_end:
                _send_for_event(db, event)

        return True

    except Exception as e:
        logger.error(f"Error sending event reminders: {e}", exc_info=True)
        db.rollback()
        return False

    finally:
        db.close()
