# fau_portal/crud/crud_email_domain_blacklist.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.models.email_domain_blacklist import EmailDomainBlacklist
from fau_portal.schemas.email_domain_blacklist import EmailDomainBlacklistCreate

logger = logging.getLogger(__name__)

# (domain, category, description, suggested_fix)
DEFAULT_ENTRIES = [
    # A: RFC-reserved, guaranteed invalid
    ("example.com", "A", "RFC-reserved", None),
    ("example.net", "A", "RFC-reserved", None),
    ("example.org", "A", "RFC-reserved", None),
    ("test", "A", "RFC-reserved", None),
    ("test.com", "A", "RFC-reserved", None),
    ("test.net", "A", "RFC-reserved", None),
    ("test.org", "A", "RFC-reserved", None),
    ("invalid", "A", "RFC-reserved", None),
    ("invalid.com", "A", "RFC-reserved", None),
    ("invalid.net", "A", "RFC-reserved", None),
    ("invalid.org", "A", "RFC-reserved", None),
    ("localhost", "A", "RFC-reserved", None),
    ("localhost.localdomain", "A", "RFC-reserved", None),
    # B: placeholder domains, common in Norwegian forms
    ("fake.no", "B", "Placeholder", None),
    ("fake.com", "B", "Placeholder", None),
    ("test.no", "B", "Placeholder", None),
    ("testing.no", "B", "Placeholder", None),
    ("demo.no", "B", "Placeholder", None),
    ("dummy.no", "B", "Placeholder", None),
    ("sample.no", "B", "Placeholder", None),
    ("domain.no", "B", "Placeholder", None),
    ("mittdomene.no", "B", "Placeholder", None),
    ("dittdomene.no", "B", "Placeholder", None),
    ("firma.no", "B", "Placeholder", None),
    ("selskap.no", "B", "Placeholder", None),
    ("bedrift.no", "B", "Placeholder", None),
    ("navn.no", "B", "Placeholder", None),
    ("epost.no", "B", "Placeholder", None),
    ("mail.no", "B", "Placeholder", None),
    ("email.no", "B", "Placeholder", None),
    ("noreply.no", "B", "Placeholder", None),
    ("no-reply.no", "B", "Placeholder", None),
    ("donotreply.no", "B", "Placeholder", None),
    ("do-not-reply.no", "B", "Placeholder", None),
    # C: looks real, almost always fake
    ("nei.no", "C", "Common fake", None),
    ("nei.com", "C", "Common fake", None),
    ("abc.no", "C", "Common fake", None),
    ("xyz.no", "C", "Common fake", None),
    ("asdf.no", "C", "Common fake", None),
    ("qwerty.no", "C", "Common fake", None),
    ("foo.no", "C", "Common fake", None),
    ("bar.no", "C", "Common fake", None),
    ("internet.no", "C", "Common fake", None),
    ("web.no", "C", "Common fake", None),
    ("online.no", "C", "Common fake", None),
    ("epost.com", "C", "Common fake", None),
    ("email.com", "C", "Common fake", None),
    ("domain.com", "C", "Common fake", None),
    ("company.com", "C", "Common fake", None),
    ("business.com", "C", "Common fake", None),
    # D: internal, non-deliverable
    ("local", "D", "Invalid internal", None),
    ("localdomain", "D", "Invalid internal", None),
    ("internal", "D", "Invalid internal", None),
    ("intranet", "D", "Invalid internal", None),
    ("corp", "D", "Invalid internal", None),
    ("lan", "D", "Invalid internal", None),
    # F: provider typos
    ("gmail.no", "F", "Provider typo", "gmail.com"),
    ("outlook.no", "F", "Provider typo", "outlook.com"),
    ("hotmail.no", "F", "Provider typo", "hotmail.com"),
    ("icloud.no", "F", "Provider typo", "icloud.com"),
    ("yahoo.no", "F", "Provider typo", "yahoo.com"),
    ("live.no", "F", "Provider typo", "live.com"),
]


class CRUDEmailDomainBlacklist(
    CRUDBase[EmailDomainBlacklist, EmailDomainBlacklistCreate, EmailDomainBlacklistCreate]
):
    resource_name = "Blacklisted domain"

    def get_by_domain(self, db: Session, *, domain: str) -> Optional[EmailDomainBlacklist]:
        return (
            db.query(self.model)
            .filter(self.model.domain == domain.strip().lower())
            .first()
        )

    def get_for_email(self, db: Session, *, email: str) -> Optional[EmailDomainBlacklist]:
        """Entry matching the domain part of `email`, if any."""
        _, _, domain = email.rpartition("@")
        if not domain:
            return None
        return self.get_by_domain(db, domain=domain)

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 500) -> List[EmailDomainBlacklist]:
        return (
            db.query(self.model)
            .order_by(self.model.category.asc(), self.model.domain.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def seed_defaults(self, db: Session) -> Tuple[int, int]:
        """
        Insert the built-in entries that are not present yet.

        Returns (inserted, skipped). Existing entries are left untouched, so
        running it again is harmless.
        """
        existing = {domain for (domain,) in db.query(self.model.domain).all()}
        inserted = 0
        for domain, category, description, suggested_fix in DEFAULT_ENTRIES:
            if domain in existing:
                continue
            db.add(
                self.model(
                    domain=domain,
                    category=category,
                    action="suggest" if suggested_fix else "block",
                    suggested_fix=suggested_fix,
                    description=description,
                )
            )
            inserted += 1
        db.commit()
        skipped = len(DEFAULT_ENTRIES) - inserted
        logger.info("Seeded email domain blacklist: %d inserted, %d already present", inserted, skipped)
        return inserted, skipped


email_domain_blacklist = CRUDEmailDomainBlacklist(EmailDomainBlacklist)
