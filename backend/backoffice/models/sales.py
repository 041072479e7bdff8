from __future__ import annotations

from ..extensions import db
from .base import Timestamped, restrict_fk, money_column
from backoffice.time_utils import to_utc_z


# SQLite only auto-increments INTEGER PRIMARY KEY, not BIGINT.
SEQUENTIAL_ID = db.BigInteger().with_variant(db.Integer(), "sqlite")

SALE_STATUS_PENDING = "pending"
SALE_STATUS_COMPLETED = "completed"
SALE_STATUS_CANCELLED = "cancelled"
SALE_STATUSES = (SALE_STATUS_PENDING, SALE_STATUS_COMPLETED, SALE_STATUS_CANCELLED)


class Sale(Timestamped, db.Model):
    """
    Single-line sale of a product to a customer, recorded by a user at a store.

    total_price is expected to equal unit_price * quantity. The schema does not
    enforce that; see money.line_total for the helper callers use.
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'completed', 'cancelled')",
            name="ck_sales_status",
        ),
        db.Index("ix_sales_created_at", "created_at"),
    )

    id = db.Column(SEQUENTIAL_ID, primary_key=True, autoincrement=True)

    customer_id = restrict_fk("customers.id")
    user_id = restrict_fk("users.id")
    store_id = restrict_fk("stores.id")
    product_id = restrict_fk("products.id")

    quantity = db.Column(db.Integer, nullable=False)
    unit_price = money_column()
    total_price = money_column()

    # pending, completed, cancelled
    status = db.Column(db.String(50), nullable=False, default=SALE_STATUS_PENDING, index=True)

    customer = db.relationship("Customer", backref=db.backref("sales", lazy=True, passive_deletes="all"))
    user = db.relationship("User", backref=db.backref("sales", lazy=True, passive_deletes="all"))
    store = db.relationship("Store", backref=db.backref("sales", lazy=True, passive_deletes="all"))
    product = db.relationship("Product", backref=db.backref("sales", lazy=True, passive_deletes="all"))

    def __repr__(self) -> str:
        return f"<Sale id={self.id} status={self.status!r} total={self.total_price}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customerId": str(self.customer_id),
            "userId": str(self.user_id),
            "storeId": str(self.store_id),
            "productId": str(self.product_id),
            "quantity": self.quantity,
            "unitPrice": str(self.unit_price),
            "totalPrice": str(self.total_price),
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Expense(Timestamped, db.Model):
    """Store expense tied to a customer and product. Same pricing shape as Sale, no status."""
    __tablename__ = "expenses"
    __table_args__ = (
        db.Index("ix_expenses_created_at", "created_at"),
    )

    id = db.Column(SEQUENTIAL_ID, primary_key=True, autoincrement=True)

    customer_id = restrict_fk("customers.id")
    store_id = restrict_fk("stores.id")
    product_id = restrict_fk("products.id")

    quantity = db.Column(db.Integer, nullable=False)
    unit_price = money_column()
    total_price = money_column()

    customer = db.relationship("Customer", backref=db.backref("expenses", lazy=True, passive_deletes="all"))
    store = db.relationship("Store", backref=db.backref("expenses", lazy=True, passive_deletes="all"))
    product = db.relationship("Product", backref=db.backref("expenses", lazy=True, passive_deletes="all"))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customerId": str(self.customer_id),
            "storeId": str(self.store_id),
            "productId": str(self.product_id),
            "quantity": self.quantity,
            "unitPrice": str(self.unit_price),
            "totalPrice": str(self.total_price),
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
