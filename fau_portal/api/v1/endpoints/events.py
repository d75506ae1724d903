# fau_portal/api/v1/endpoints/events.py
import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.db.session import get_db
from fau_portal.schemas import event as event_schemas
from fau_portal.schemas.registration import Registration
from fau_portal.schemas.token import TokenPayload
from fau_portal.services.notifications import send_cancellations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=List[event_schemas.Event])
def list_events(db: Session = Depends(get_db)):
    """Active and cancelled events, ordered by date then time."""
    return crud.event.get_multi_public(db)


@router.get("/{event_id}", response_model=event_schemas.Event)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return crud.event.get_or_404(db, id=event_id)


@router.post(
    "", response_model=event_schemas.Event, status_code=status.HTTP_201_CREATED
)
def create_event(
    event_in: event_schemas.EventCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_member),
):
    event = crud.event.create(db, obj_in=event_in)
    logger.info("Event %s created by %s", event.id, current_user.username)
    return event


@router.put("/{event_id}", response_model=event_schemas.Event)
def update_event(
    event_id: str,
    event_in: event_schemas.EventUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    event = crud.event.get_or_404(db, id=event_id)
    return crud.event.update(db, db_obj=event, obj_in=event_in)


@router.patch("/{event_id}/cancel", response_model=event_schemas.Event)
def cancel_event(
    event_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    """
    Cancel an event and email every registrant.

    Registrations and attendee counts are kept. Cancelling an already
    cancelled event sends nothing.
    """
    event = crud.event.get_or_404(db, id=event_id)
    was_active = event.status == "active"
    event = crud.event.cancel(db, db_obj=event)

    if was_active:
        registrations = crud.registration.get_multi_by_event(db, event_id=event_id)
        # Snapshots, because the request's session is closed before the task runs
        background_tasks.add_task(
            send_cancellations,
            event_schemas.Event.model_validate(event),
            [Registration.model_validate(r) for r in registrations],
        )
        logger.info(
            "Event %s cancelled by %s, notifying %d registrant(s)",
            event_id, current_user.username, len(registrations),
        )
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    crud.event.remove(db, id=event_id)
    logger.info("Event %s deleted by %s", event_id, current_user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
