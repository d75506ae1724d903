# fau_portal/api/v1/endpoints/contact_messages.py
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.core.limiter import limiter, CONTACT_LIMIT
from fau_portal.db.session import get_db
from fau_portal.schemas.contact_message import (
    ContactMessage,
    ContactMessageCreate,
    ContactMessageUpdate,
)
from fau_portal.schemas.token import TokenPayload
from fau_portal.services.notifications import send_contact_notification

router = APIRouter(prefix="/contact-messages", tags=["Contact"])


@router.post("", response_model=ContactMessage, status_code=status.HTTP_201_CREATED)
@limiter.limit(CONTACT_LIMIT)
def submit_contact_message(
    request: Request,
    message_in: ContactMessageCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """Store a contact-form message and forward it to the council mailbox."""
    message = crud.contact_message.create(db, obj_in=message_in)
    background_tasks.add_task(send_contact_notification, ContactMessage.model_validate(message))
    return message


@router.get("", response_model=List[ContactMessage])
def list_contact_messages(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_member),
):
    return crud.contact_message.get_multi(db)


@router.patch("/{message_id}", response_model=ContactMessage)
def update_contact_message(
    message_id: str,
    message_in: ContactMessageUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    message = crud.contact_message.get_or_404(db, id=message_id)
    return crud.contact_message.update(db, db_obj=message, obj_in=message_in)
