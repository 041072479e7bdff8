# Overview: Service-layer credential store; user lookups and inserts guarded by email uniqueness.

"""
Credential Store

Email comparison is case-insensitive everywhere: lookups compare the stored
email_normalized column against normalize_email(input), both folded by the same
Python function, and that column carries the unique constraint. The pre-flight
existence check gives a clean error in the common case; the constraint is what
actually serializes two concurrent registrations for the same address, so an
IntegrityError on commit is translated to the same DuplicateEmailError.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError

from ..errors import DuplicateEmailError
from ..extensions import db
from ..models import User
from ..models.auth import normalize_email
from .password_service import DEFAULT_ROUNDS, hash_password
from .storage import storage_errors


def parse_user_id(user_id) -> uuid.UUID | None:
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except (ValueError, TypeError, AttributeError):
        return None


def find_by_email(email: str) -> User | None:
    """Case-insensitive lookup."""
    with storage_errors():
        return db.session.query(User).filter(
            User.email_normalized == normalize_email(email)
        ).first()


def exists_by_email(email: str) -> bool:
    with storage_errors():
        return db.session.query(
            db.session.query(User).filter(
                User.email_normalized == normalize_email(email)
            ).exists()
        ).scalar()


def find_by_id(user_id) -> User | None:
    """Accepts a UUID or its string form; anything unparseable finds nothing."""
    key = parse_user_id(user_id)
    if key is None:
        return None
    with storage_errors():
        return db.session.get(User, key)


def insert_user(user: User) -> User:
    """
    Persist a new user.

    Raises DuplicateEmailError when the email is taken, whether that is seen
    by the pre-flight check or only by the unique index at commit time.
    """
    if exists_by_email(user.email):
        raise DuplicateEmailError()

    with storage_errors():
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise DuplicateEmailError() from exc
    return user


def create_user(
    name: str,
    email: str,
    password: str,
    rounds: int = DEFAULT_ROUNDS,
) -> User:
    """
    Create a user account without issuing a session (admin/CLI path).

    The address is stored as given; uniqueness is enforced case-insensitively.
    """
    if exists_by_email(email):
        raise DuplicateEmailError()

    user = User(
        id=uuid.uuid4(),
        name=name,
        email=email.strip(),
        password=hash_password(password, rounds=rounds),
    )
    return insert_user(user)


def list_users() -> list[User]:
    with storage_errors():
        return db.session.query(User).order_by(User.created_at.asc()).all()
