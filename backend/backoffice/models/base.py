from __future__ import annotations

from datetime import datetime

from sqlalchemy import event
from sqlalchemy.orm import Session

from ..extensions import db
from backoffice.time_utils import utcnow


class Timestamped:
    """
    Explicit timestamp contract for every persisted entity.

    created_at is written once on insert; updated_at on insert and on every
    flush that changes the row. The storage layer drives both through the
    before_flush hook below, so nothing else should assign them.
    """

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def set_created_at(self, now: datetime) -> None:
        self.created_at = now

    def set_updated_at(self, now: datetime) -> None:
        self.updated_at = now


@event.listens_for(Session, "before_flush")
def _stamp_timestamped_rows(session, flush_context, instances):
    now = utcnow()
    for obj in session.new:
        if isinstance(obj, Timestamped):
            obj.set_created_at(now)
            obj.set_updated_at(now)
    for obj in session.dirty:
        if isinstance(obj, Timestamped) and session.is_modified(obj, include_collections=False):
            obj.set_updated_at(now)


def restrict_fk(target: str, **kwargs):
    """Foreign key column that blocks deletion of the referenced row."""
    return db.Column(
        db.Uuid,
        db.ForeignKey(target, ondelete="RESTRICT"),
        nullable=False,
        index=True,
        **kwargs,
    )


def money_column():
    """Fixed-point currency: 18 digits, 2 after the point, Decimal in Python."""
    return db.Column(db.Numeric(18, 2, asdecimal=True), nullable=False)
