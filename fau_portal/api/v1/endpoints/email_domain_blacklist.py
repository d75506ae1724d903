# fau_portal/api/v1/endpoints/email_domain_blacklist.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.core.exceptions import AlreadyExists
from fau_portal.crud.crud_email_domain_blacklist import DEFAULT_ENTRIES
from fau_portal.db.session import get_db
from fau_portal.schemas.email_domain_blacklist import (
    BlacklistSeedResult,
    EmailDomainBlacklistCreate,
    EmailDomainBlacklistEntry,
)
from fau_portal.schemas.token import TokenPayload

router = APIRouter(prefix="/email-domain-blacklist", tags=["Email Domain Blacklist"])


@router.get("", response_model=List[EmailDomainBlacklistEntry])
def list_blacklisted_domains(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return crud.email_domain_blacklist.get_multi(db)


@router.post("", response_model=EmailDomainBlacklistEntry, status_code=status.HTTP_201_CREATED)
def add_blacklisted_domain(
    entry_in: EmailDomainBlacklistCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    if crud.email_domain_blacklist.get_by_domain(db, domain=entry_in.domain):
        raise AlreadyExists("Blacklisted domain", entry_in.domain)
    return crud.email_domain_blacklist.create(db, obj_in=entry_in)


@router.post("/seed", response_model=BlacklistSeedResult)
def seed_blacklist(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    """Insert the built-in placeholder, fake and typo domains. Safe to repeat."""
    inserted, skipped = crud.email_domain_blacklist.seed_defaults(db)
    return BlacklistSeedResult(inserted=inserted, skipped=skipped, total=len(DEFAULT_ENTRIES))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_blacklisted_domain(
    entry_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    crud.email_domain_blacklist.remove(db, id=entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
