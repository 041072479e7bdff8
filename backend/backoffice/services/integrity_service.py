# Overview: Service-layer delete guard; refuses deletes that would orphan dependent rows.

"""
Restrict-on-delete enforcement.

The schema declares ON DELETE RESTRICT on every foreign key, and SQLite
connections turn FK enforcement on. This module adds the explicit pre-delete
check so callers get a ReferentialIntegrityError naming the blocking table
instead of a driver-specific IntegrityError. If a dependent row appears between
the check and the flush, the database constraint still refuses the delete and
the IntegrityError is mapped to the same domain error.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..errors import RecordNotFoundError, ReferentialIntegrityError
from ..extensions import db
from ..models import User, Store, ProductCategory, Product, Customer, Sale, Expense
from .storage import storage_errors


# parent model -> [(child model, child FK column name)]
DEPENDENTS = {
    User: [
        (Store, "user_id"),
        (Product, "user_id"),
        (Customer, "user_id"),
        (Sale, "user_id"),
    ],
    Store: [
        (Product, "store_id"),
        (Customer, "store_id"),
        (Sale, "store_id"),
        (Expense, "store_id"),
    ],
    ProductCategory: [
        (Product, "category_id"),
    ],
    Product: [
        (Sale, "product_id"),
        (Expense, "product_id"),
    ],
    Customer: [
        (Sale, "customer_id"),
        (Expense, "customer_id"),
    ],
    Sale: [],
    Expense: [],
}


def find_blocking_dependent(model, record_id) -> str | None:
    """Return the table name of the first child still referencing the row, if any."""
    for child, fk_name in DEPENDENTS[model]:
        fk_column = getattr(child, fk_name)
        referenced = db.session.query(
            db.session.query(child).filter(fk_column == record_id).exists()
        ).scalar()
        if referenced:
            return child.__tablename__
    return None


def delete_record(model, record_id) -> None:
    """
    Delete one row of any schema entity, refusing if dependents exist.

    Raises:
        RecordNotFoundError: no row with that id
        ReferentialIntegrityError: a dependent row still references it
    """
    if model not in DEPENDENTS:
        raise ValueError(f"Unsupported model: {model.__name__}")

    with storage_errors():
        record = db.session.get(model, record_id)
        if record is None:
            raise RecordNotFoundError(f"{model.__name__} not found")

        blocking = find_blocking_dependent(model, record_id)
        if blocking:
            raise ReferentialIntegrityError(
                f"Cannot delete {model.__name__} {record_id}: still referenced by {blocking}"
            )

        db.session.delete(record)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise ReferentialIntegrityError(
                f"Cannot delete {model.__name__} {record_id}: still referenced"
            ) from exc
