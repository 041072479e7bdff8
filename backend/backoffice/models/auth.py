from __future__ import annotations

import uuid

from sqlalchemy.orm import validates

from ..extensions import db
from .base import Timestamped
from backoffice.time_utils import to_utc_z


def normalize_email(email: str | None) -> str:
    """Comparison key for an address: trimmed and Unicode case-folded."""
    return (email or "").strip().casefold()


class User(Timestamped, db.Model):
    """
    User accounts for authentication and ownership.

    Every store, product, customer and sale row points back at a user. Email is
    kept as entered; email_normalized holds its case-folded form, computed in
    Python whenever email is assigned, and carries the unique constraint. SQL
    lower() only folds ASCII on SQLite, so no comparison is left to it.
    """
    __tablename__ = "users"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    email_normalized = db.Column(db.String(255), nullable=False, unique=True)

    # Bcrypt hashed password
    password = db.Column(db.String(255), nullable=False)

    avatar = db.Column(db.String(500), nullable=True)

    @validates("email")
    def _sync_email_normalized(self, key, value):
        self.email_normalized = normalize_email(value)
        return value

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
