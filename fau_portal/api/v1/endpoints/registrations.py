# fau_portal/api/v1/endpoints/registrations.py
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.core.limiter import limiter, REGISTRATION_LIMIT
from fau_portal.db.session import get_db
from fau_portal.schemas.event import Event
from fau_portal.schemas.registration import Registration, RegistrationCreate
from fau_portal.schemas.token import TokenPayload
from fau_portal.services import registration_service
from fau_portal.services.notifications import send_confirmation

router = APIRouter(prefix="/registrations", tags=["Registrations"])


@router.post("", response_model=Registration, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTRATION_LIMIT)
def create_registration(
    request: Request,
    registration_in: RegistrationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Register for an event. Public.

    Fails with 400 when the email domain is blacklisted (a typo domain also
    gets a `suggestion`), the email is already registered, the event is
    cancelled, or there is not enough capacity left (the response then
    carries `available`). The confirmation email is sent after the response.
    """
    registration = registration_service.register(db, registration_in=registration_in)
    event = crud.event.get(db, id=registration.event_id)
    background_tasks.add_task(
        send_confirmation,
        Event.model_validate(event),
        Registration.model_validate(registration),
    )
    return registration


@router.get("", response_model=List[Registration])
def list_registrations(
    event_id: Optional[str] = Query(None, alias="eventId"),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_member),
):
    if event_id:
        return registration_service.list_for_event(db, event_id=event_id)
    return crud.registration.get_multi(db)


@router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_registration(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_member),
):
    registration_service.unregister(db, registration_id=registration_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
