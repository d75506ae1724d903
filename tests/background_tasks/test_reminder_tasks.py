# tests/background_tasks/test_reminder_tasks.py

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.background_tasks import reminder_tasks
from fau_portal.models.reminder import EventReminder
from fau_portal.schemas.registration import RegistrationCreate
from fau_portal.services import registration_service
from tests.utils.event import create_random_event

OSLO = ZoneInfo("Europe/Oslo")


@pytest.fixture(autouse=True)
def use_test_database(session_factory, monkeypatch):
    monkeypatch.setattr(reminder_tasks, "SessionLocal", session_factory)


def _event_in(db: Session, now: datetime, hours: float, **overrides):
    start = now + timedelta(hours=hours)
    return create_random_event(
        db, date=start.date(), time=start.strftime("%H:%M"), **overrides
    )


def _register(db: Session, event_id: str, email: str):
    registration_service.register(
        db,
        registration_in=RegistrationCreate(event_id=event_id, name="Forelder", email=email),
    )


def _markers(db: Session):
    db.expire_all()
    return db.query(EventReminder).all()


NOW = datetime(2025, 5, 20, 10, 0, tzinfo=OSLO)


def test_reminders_are_sent_once_per_registrant(db: Session, sent_emails):
    event = _event_in(db, NOW, 24)
    _register(db, event.id, "a@example.com")
    _register(db, event.id, "b@example.com")

    assert reminder_tasks.send_event_reminders(now=NOW) is True

    assert sorted(mail["to"] for mail in sent_emails) == ["a@example.com", "b@example.com"]
    assert all(mail["subject"].startswith("Påminnelse") for mail in sent_emails)
    markers = _markers(db)
    assert len(markers) == 1
    assert markers[0].recipient_count == 2


def test_second_tick_in_window_sends_nothing(db: Session, sent_emails):
    event = _event_in(db, NOW, 24.5)
    _register(db, event.id, "a@example.com")

    reminder_tasks.send_event_reminders(now=NOW)
    reminder_tasks.send_event_reminders(now=NOW + timedelta(hours=1))

    assert len(sent_emails) == 1


def test_events_outside_window_are_skipped(db: Session, sent_emails):
    for hours in (5, 22, 26, 48):
        event = _event_in(db, NOW, hours, title=f"In {hours}h")
        _register(db, event.id, f"parent{hours}@example.com")

    reminder_tasks.send_event_reminders(now=NOW)

    assert sent_emails == []
    assert _markers(db) == []


def test_cancelled_events_get_no_reminder(db: Session, sent_emails):
    event = _event_in(db, NOW, 24)
    _register(db, event.id, "a@example.com")
    crud.event.cancel(db, db_obj=event)

    reminder_tasks.send_event_reminders(now=NOW)

    assert sent_emails == []


def test_one_failing_send_does_not_stop_the_rest(db: Session, monkeypatch):
    delivered = []

    def flaky_send(to_email, subject, text, reply_to=None):
        if to_email == "broken@example.com":
            raise RuntimeError("mailbox unavailable")
        delivered.append(to_email)
        return {"id": "email"}

    monkeypatch.setattr("fau_portal.services.notifications.send_email", flaky_send)
    event = _event_in(db, NOW, 24)
    for email in ("a@example.com", "broken@example.com", "c@example.com"):
        _register(db, event.id, email)

    assert reminder_tasks.send_event_reminders(now=NOW) is True

    assert sorted(delivered) == ["a@example.com", "c@example.com"]
    marker = _markers(db)[0]
    assert (marker.recipient_count, marker.failed_count) == (2, 1)


def test_rescheduled_event_is_reminded_again(db: Session, sent_emails):
    event = _event_in(db, NOW, 24)
    _register(db, event.id, "a@example.com")
    reminder_tasks.send_event_reminders(now=NOW)

    later = NOW + timedelta(days=7)
    start = later + timedelta(hours=24)
    event.date = start.date()
    db.commit()
    reminder_tasks.send_event_reminders(now=later)

    assert len(sent_emails) == 2
    # The first date's marker is past retention by now and was pruned
    assert [m.event_date for m in _markers(db)] == [start.date()]


def test_old_markers_are_pruned(db: Session, sent_emails):
    old_event = create_random_event(db, date=NOW.date() - timedelta(days=4))
    recent_event = create_random_event(db, date=NOW.date() - timedelta(days=1))
    crud.event_reminder.claim(db, event_id=old_event.id, event_date=old_event.date)
    crud.event_reminder.claim(db, event_id=recent_event.id, event_date=recent_event.date)

    reminder_tasks.send_event_reminders(now=NOW)

    remaining = _markers(db)
    assert [m.event_id for m in remaining] == [recent_event.id]


def test_failing_tick_is_logged_and_reported(db: Session, monkeypatch, caplog):
    def broken_query(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(crud.event, "get_active_between", broken_query)

    assert reminder_tasks.send_event_reminders(now=NOW) is False
    assert "Error sending event reminders" in caplog.text
