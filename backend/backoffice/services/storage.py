# Overview: Service-layer helpers for storage faults; maps transport errors to domain errors.

from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError

from ..errors import StorageUnavailableError
from ..extensions import db


logger = logging.getLogger(__name__)


@contextmanager
def storage_errors():
    """
    Surface database transport faults as StorageUnavailableError.

    The session is rolled back and the error propagates immediately. Nothing is
    retried here: the caller owns that decision. IntegrityError is left alone
    so constraint violations can be mapped to their own domain errors.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        db.session.rollback()
        logger.error("Storage call failed: %s", exc.__class__.__name__)
        raise StorageUnavailableError() from exc
