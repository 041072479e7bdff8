from __future__ import annotations

import uuid

from ..extensions import db
from .base import Timestamped, restrict_fk
from backoffice.time_utils import to_utc_z


class Store(Timestamped, db.Model):
    """
    Store owned by exactly one user.

    The owning user cannot be deleted while the store exists (RESTRICT).
    """
    __tablename__ = "stores"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    user_id = restrict_fk("users.id")
    name = db.Column(db.String(500), nullable=False)

    user = db.relationship("User", backref=db.backref("stores", lazy=True, passive_deletes="all"))

    def __repr__(self) -> str:
        return f"<Store id={self.id} name={self.name!r} user_id={self.user_id}>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "name": self.name,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
