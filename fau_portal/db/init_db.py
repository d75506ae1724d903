# fau_portal/db/init_db.py
"""
Create tables, seed the email domain blacklist and bootstrap the admin account.

Usage:
    ADMIN_USERNAME=... ADMIN_PASSWORD=... python -m fau_portal.db.init_db

Running it again rotates the admin password. Production schemas are managed
by Alembic; this is for local development and first deploys.
"""
import logging

from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.core.config import settings
from fau_portal.db.base_class import Base
from fau_portal.db.session import SessionLocal, engine
import fau_portal.models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)

MIN_ADMIN_PASSWORD_LENGTH = 8


def init_db(db: Session) -> None:
    Base.metadata.create_all(bind=db.get_bind())
    logger.info("Database tables checked and created if necessary.")
    crud.email_domain_blacklist.seed_defaults(db)

    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_USERNAME/ADMIN_PASSWORD not set, skipping admin bootstrap")
        return
    if len(settings.ADMIN_PASSWORD) < MIN_ADMIN_PASSWORD_LENGTH:
        raise ValueError(
            f"ADMIN_PASSWORD must be at least {MIN_ADMIN_PASSWORD_LENGTH} characters"
        )
    crud.user.upsert_admin(
        db,
        username=settings.ADMIN_USERNAME,
        password=settings.ADMIN_PASSWORD,
        name=settings.ADMIN_NAME,
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info("Initializing database at %s", engine.url.render_as_string(hide_password=True))
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
