# fau_portal/crud/crud_contact_message.py
from typing import List

from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.models.contact_message import ContactMessage
from fau_portal.schemas.contact_message import ContactMessageCreate, ContactMessageUpdate


class CRUDContactMessage(CRUDBase[ContactMessage, ContactMessageCreate, ContactMessageUpdate]):
    resource_name = "Contact message"

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 200) -> List[ContactMessage]:
        """Newest first."""
        return (
            db.query(self.model)
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )


contact_message = CRUDContactMessage(ContactMessage)
