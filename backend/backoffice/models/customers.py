from __future__ import annotations

import uuid

from ..extensions import db
from .base import Timestamped, restrict_fk
from backoffice.time_utils import to_utc_z


class Customer(Timestamped, db.Model):
    """Customer master data, owned by a user and a store."""
    __tablename__ = "customers"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    user_id = restrict_fk("users.id")
    store_id = restrict_fk("stores.id")

    name = db.Column(db.String(255), nullable=False, index=True)
    address = db.Column(db.String(500), nullable=True)
    avatar = db.Column(db.String(500), nullable=True)

    user = db.relationship("User", backref=db.backref("customers", lazy=True, passive_deletes="all"))
    store = db.relationship("Store", backref=db.backref("customers", lazy=True, passive_deletes="all"))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "storeId": str(self.store_id),
            "name": self.name,
            "address": self.address,
            "avatar": self.avatar,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
