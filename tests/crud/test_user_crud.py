# tests/crud/test_user_crud.py

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.core.exceptions import InvalidCredentials
from fau_portal.core.security import verify_password
from fau_portal.crud import crud_user
from tests.utils.auth import DEFAULT_PASSWORD, create_user


def test_authenticate_returns_user(db: Session):
    user = create_user(db, role="member", username="medlem@fau-erdal.no")

    authenticated = crud.user.authenticate(
        db, username="Medlem@fau-erdal.no", password=DEFAULT_PASSWORD
    )

    assert authenticated.id == user.id


def test_authenticate_rejects_wrong_password(db: Session):
    create_user(db, username="medlem@fau-erdal.no")

    with pytest.raises(InvalidCredentials):
        crud.user.authenticate(db, username="medlem@fau-erdal.no", password="wrong")


def test_unknown_user_still_costs_a_hash_check(db: Session, monkeypatch):
    burn = MagicMock()
    monkeypatch.setattr(crud_user, "burn_password_check", burn)

    with pytest.raises(InvalidCredentials) as exc_info:
        crud.user.authenticate(db, username="nobody@fau-erdal.no", password="secret")

    burn.assert_called_once_with("secret")
    assert exc_info.value.message == "Invalid username or password"


def test_upsert_admin_creates_then_rotates(db: Session):
    admin = crud.user.upsert_admin(
        db, username="Admin@FAU-erdal.no", password="first-password", name="Admin"
    )
    assert admin.role == "admin"
    assert admin.username == "admin@fau-erdal.no"

    rotated = crud.user.upsert_admin(
        db, username="admin@fau-erdal.no", password="second-password", name="Admin"
    )

    assert rotated.id == admin.id
    assert verify_password("second-password", rotated.password_hash)
    assert not verify_password("first-password", rotated.password_hash)


def test_usernames_are_unique_ignoring_case(db: Session):
    create_user(db, role="member", username="kari@fau-erdal.no")

    with pytest.raises(IntegrityError):
        create_user(db, role="member", username="Kari@FAU-erdal.no")
    db.rollback()

    assert len(crud.user.get_multi(db)) == 1
    assert crud.user.get_by_username(db, username="KARI@fau-erdal.no").username == "kari@fau-erdal.no"
