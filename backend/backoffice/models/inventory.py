from __future__ import annotations

import uuid

from ..extensions import db
from .base import Timestamped, restrict_fk, money_column
from backoffice.time_utils import to_utc_z


class ProductCategory(Timestamped, db.Model):
    """Independent lookup table classifying products."""
    __tablename__ = "product_categories"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Product(Timestamped, db.Model):
    """
    Product master, owned by a user and a store and classified by a category.

    quantity is the on-hand stock count. price is fixed-point (2 places);
    floats never reach this column.
    """
    __tablename__ = "products"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    image = db.Column(db.String(500), nullable=True)
    price = money_column()

    user_id = restrict_fk("users.id")
    store_id = restrict_fk("stores.id")
    category_id = restrict_fk("product_categories.id")

    user = db.relationship("User", backref=db.backref("products", lazy=True, passive_deletes="all"))
    store = db.relationship("Store", backref=db.backref("products", lazy=True, passive_deletes="all"))
    category = db.relationship("ProductCategory", backref=db.backref("products", lazy=True, passive_deletes="all"))

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "quantity": self.quantity,
            "image": self.image,
            "price": str(self.price),
            "userId": str(self.user_id),
            "storeId": str(self.store_id),
            "categoryId": str(self.category_id),
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
