# fau_portal/crud/crud_registration.py
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.models.registration import EventRegistration
from fau_portal.schemas.registration import RegistrationCreate


class CRUDRegistration(CRUDBase[EventRegistration, RegistrationCreate, BaseModel]):
    resource_name = "Registration"

    def get_by_event_and_email(
        self, db: Session, *, event_id: str, email: str
    ) -> Optional[EventRegistration]:
        """Case-insensitive lookup of an existing registration for this email."""
        return (
            db.query(self.model)
            .filter(
                and_(
                    self.model.event_id == event_id,
                    func.lower(self.model.email) == email.strip().lower(),
                )
            )
            .first()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[EventRegistration]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.registered_at.asc())
            .all()
        )

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 500) -> List[EventRegistration]:
        return (
            db.query(self.model)
            .order_by(self.model.registered_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )


registration = CRUDRegistration(EventRegistration)
