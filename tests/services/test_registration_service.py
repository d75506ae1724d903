# tests/services/test_registration_service.py

import pytest
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.core.exceptions import (
    BlockedEmailDomain,
    CapacityExceeded,
    DuplicateRegistration,
    EventCancelled,
    InvalidRegistration,
    NotFound,
    SuggestedEmailDomain,
)
from fau_portal.models.event import Event
from fau_portal.models.email_domain_blacklist import EmailDomainBlacklist
from fau_portal.schemas.registration import RegistrationCreate
from fau_portal.services import registration_service
from fau_portal.services.registration_service import compute_time_slots
from tests.utils.event import create_random_event


def _register(db: Session, event_id: str, email: str, **kwargs):
    reg_in = RegistrationCreate(event_id=event_id, name="Kari Nordmann", email=email, **kwargs)
    return registration_service.register(db, registration_in=reg_in)


def _attendees(db: Session, event_id: str) -> int:
    event = crud.event.get(db, id=event_id)
    db.refresh(event)
    return event.current_attendees


def test_register_increments_attendee_count(db: Session):
    event = create_random_event(db, max_attendees=5)

    registration = _register(db, event.id, "a@example.com", attendee_count=3)

    assert registration.attendee_count == 3
    assert _attendees(db, event.id) == 3


def test_capacity_exceeded_reports_available_places(db: Session):
    event = create_random_event(db, max_attendees=2)
    _register(db, event.id, "a@example.com", attendee_count=2)

    with pytest.raises(CapacityExceeded) as exc_info:
        _register(db, event.id, "b@example.com", attendee_count=1)

    assert exc_info.value.available == 0
    assert "capacity" in exc_info.value.message
    assert _attendees(db, event.id) == 2


def test_partial_capacity_is_reported(db: Session):
    event = create_random_event(db, max_attendees=4)
    _register(db, event.id, "a@example.com", attendee_count=3)

    with pytest.raises(CapacityExceeded) as exc_info:
        _register(db, event.id, "b@example.com", attendee_count=2)

    assert exc_info.value.available == 1


def test_unlimited_event_accepts_any_count(db: Session):
    event = create_random_event(db, max_attendees=None)
    for i in range(5):
        _register(db, event.id, f"parent{i}@example.com", attendee_count=10)

    assert _attendees(db, event.id) == 50


def test_duplicate_email_is_case_insensitive(db: Session):
    event = create_random_event(db)
    _register(db, event.id, "x@y.com")

    with pytest.raises(DuplicateRegistration) as exc_info:
        _register(db, event.id, "X@Y.com")

    assert "already registered" in exc_info.value.message
    assert _attendees(db, event.id) == 1


def test_same_email_may_register_for_different_events(db: Session):
    first = create_random_event(db)
    second = create_random_event(db, title="Dugnad", type="dugnad")

    _register(db, first.id, "x@y.com")
    _register(db, second.id, "x@y.com")

    assert _attendees(db, first.id) == 1
    assert _attendees(db, second.id) == 1


def test_cancelled_event_rejects_registration(db: Session):
    event = create_random_event(db)
    crud.event.cancel(db, db_obj=event)

    with pytest.raises(EventCancelled) as exc_info:
        _register(db, event.id, "a@example.com")

    assert "cancelled" in exc_info.value.message


def test_unknown_event_raises_not_found(db: Session):
    with pytest.raises(NotFound):
        _register(db, "evt_missing", "a@example.com")


def test_unregister_gives_places_back(db: Session):
    event = create_random_event(db, max_attendees=2)
    registration = _register(db, event.id, "a@example.com", attendee_count=2)

    registration_service.unregister(db, registration_id=registration.id)

    assert _attendees(db, event.id) == 0
    assert crud.registration.get(db, id=registration.id) is None
    # The freed places can be taken again
    _register(db, event.id, "b@example.com", attendee_count=2)
    assert _attendees(db, event.id) == 2


def test_unregister_unknown_registration_raises_not_found(db: Session):
    with pytest.raises(NotFound):
        registration_service.unregister(db, registration_id="reg_missing")


def test_unregister_never_drives_count_negative(db: Session):
    event = create_random_event(db)
    registration = _register(db, event.id, "a@example.com", attendee_count=3)
    # Simulate a counter that drifted below the registration's count
    event.current_attendees = 1
    db.commit()

    registration_service.unregister(db, registration_id=registration.id)

    assert _attendees(db, event.id) == 0


def test_failed_insert_rolls_back_the_increment(db: Session, monkeypatch):
    """A unique-index violation on insert must leave the counter untouched."""
    event = create_random_event(db, max_attendees=5)
    _register(db, event.id, "a@example.com", attendee_count=2)

    # Skip the pre-check, as if a concurrent request registered in between
    monkeypatch.setattr(
        crud.registration, "get_by_event_and_email", lambda *args, **kwargs: None
    )
    with pytest.raises(DuplicateRegistration):
        _register(db, event.id, "A@example.com", attendee_count=2)

    assert _attendees(db, event.id) == 2
    assert len(crud.registration.get_multi_by_event(db, event_id=event.id)) == 1


def test_lost_capacity_race_is_reported_as_capacity(db: Session):
    event = create_random_event(db, max_attendees=2)
    # Another request took the places after this one read the event
    _register(db, event.id, "a@example.com", attendee_count=2)
    stale = crud.event.get(db, id=event.id)
    db.refresh(stale)
    # In-memory view that still shows free places; never flushed
    stale.current_attendees = 0

    with pytest.raises(CapacityExceeded) as exc_info:
        registration_service.register(
            db,
            registration_in=RegistrationCreate(
                event_id=event.id, name="B", email="b@example.com", attendee_count=1
            ),
        )

    assert exc_info.value.available == 0
    assert _attendees(db, event.id) == 2


def test_photo_event_assigns_consecutive_slots(db: Session):
    event = create_random_event(db, type="photo", time="09:00", max_attendees=20)

    first = _register(db, event.id, "a@example.com", children_names=["Ola", "Kari"])
    second = _register(db, event.id, "b@example.com", children_names=["Per"], attendee_count=5)

    assert first.attendee_count == 2
    assert first.time_slots == ["09:00", "09:10"]
    # attendeeCount is derived from the children, not taken from input
    assert second.attendee_count == 1
    assert second.time_slots == ["09:20"]
    assert _attendees(db, event.id) == 3


def test_photo_event_requires_children_names(db: Session):
    event = create_random_event(db, type="photo")

    with pytest.raises(InvalidRegistration):
        _register(db, event.id, "a@example.com")

    with pytest.raises(InvalidRegistration):
        _register(db, event.id, "a@example.com", children_names=["  "])


def test_children_names_are_ignored_for_regular_events(db: Session):
    event = create_random_event(db)

    registration = _register(db, event.id, "a@example.com", children_names=["Ola"])

    assert registration.children_names is None
    assert registration.time_slots is None


def test_compute_time_slots_wraps_past_the_hour():
    assert compute_time_slots("09:50", 0, 3, 10) == ["09:50", "10:00", "10:10"]
    assert compute_time_slots("12:00", 4, 1, 15) == ["13:00"]


def test_list_for_event_is_ordered_by_registration_time(db: Session):
    event = create_random_event(db)
    emails = ["first@example.com", "second@example.com", "third@example.com"]
    for email in emails:
        _register(db, event.id, email)

    registrations = registration_service.list_for_event(db, event_id=event.id)

    assert [r.email for r in registrations] == emails


def test_event_deleted_during_capacity_race_is_not_found(db: Session, monkeypatch):
    event = create_random_event(db, max_attendees=2)

    def reserve_after_delete(db, *, event_id, count):
        # An admin deleted the event after it was read
        db.query(Event).filter(Event.id == event_id).delete()
        db.commit()
        return None

    monkeypatch.setattr(crud.event, "reserve_capacity", reserve_after_delete)

    with pytest.raises(NotFound):
        _register(db, event.id, "a@example.com")


def _blacklist(db: Session, domain: str, category: str, action: str = "block", suggested_fix=None):
    db.add(
        EmailDomainBlacklist(
            domain=domain, category=category, action=action, suggested_fix=suggested_fix
        )
    )
    db.commit()


def test_blocked_domain_is_rejected_before_anything_else(db: Session):
    _blacklist(db, "fake.no", "B")
    event = create_random_event(db, max_attendees=2)

    with pytest.raises(BlockedEmailDomain) as exc_info:
        _register(db, event.id, "kari@FAKE.no")

    assert exc_info.value.message == "Ugyldig e-postadresse. Bruk en ekte e-post."
    assert exc_info.value.details == {"category": "B"}
    assert _attendees(db, event.id) == 0
    # Checked before the event lookup, like the rest of the input validation
    with pytest.raises(BlockedEmailDomain):
        _register(db, "evt_missing", "kari@fake.no")


def test_blocked_domain_message_follows_language(db: Session):
    _blacklist(db, "nei.no", "C")
    event = create_random_event(db)

    with pytest.raises(BlockedEmailDomain) as exc_info:
        _register(db, event.id, "kari@nei.no", language="en")

    assert exc_info.value.message == "Invalid email address. Please use a real email."


def test_typo_domain_gets_a_suggestion(db: Session):
    _blacklist(db, "gmail.no", "F", action="suggest", suggested_fix="gmail.com")
    event = create_random_event(db)

    with pytest.raises(SuggestedEmailDomain) as exc_info:
        _register(db, event.id, "kari.nordmann@gmail.no")

    assert exc_info.value.suggestion == "kari.nordmann@gmail.com"
    assert exc_info.value.message == 'Mente du "kari.nordmann@gmail.com"?'
    assert exc_info.value.details == {"suggestion": "kari.nordmann@gmail.com", "category": "F"}

    with pytest.raises(SuggestedEmailDomain) as exc_info:
        _register(db, event.id, "kari.nordmann@gmail.no", language="en")
    assert exc_info.value.message == 'Did you mean "kari.nordmann@gmail.com"?'


def test_suggest_entry_without_fix_lets_registration_through(db: Session):
    _blacklist(db, "live.no", "F", action="suggest")
    event = create_random_event(db)

    registration = _register(db, event.id, "ola@live.no")

    assert registration.email == "ola@live.no"


def test_seeded_blacklist_covers_every_category(db: Session):
    inserted, skipped = crud.email_domain_blacklist.seed_defaults(db)
    assert skipped == 0

    again = crud.email_domain_blacklist.seed_defaults(db)

    assert again == (0, inserted)
    categories = {entry.category for entry in crud.email_domain_blacklist.get_multi(db)}
    assert categories == {"A", "B", "C", "D", "F"}
    typo = crud.email_domain_blacklist.get_by_domain(db, domain="Hotmail.no")
    assert (typo.action, typo.suggested_fix) == ("suggest", "hotmail.com")
