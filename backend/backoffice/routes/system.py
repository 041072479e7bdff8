# backend/backoffice/routes/system.py
"""
System health endpoint.

Reports database reachability and token issuer readiness for deployment
debugging.
"""

import time
from flask import Blueprint, current_app, jsonify
from ..extensions import db
from ..models import User, Store
from ..services.token_service import get_token_issuer
from backoffice.time_utils import utcnow, to_utc_z

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity with a couple of cheap counts.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        user_count = db.session.query(User).count()
        store_count = db.session.query(Store).count()

        elapsed_ms = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {
                "users": user_count,
                "stores": store_count,
            }
        }
    except Exception:
        db.session.rollback()
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


def check_token_issuer_health() -> dict:
    """Issuer is built at startup; report its non-secret settings."""
    settings = get_token_issuer().settings
    return {
        "status": "healthy",
        "details": {
            "issuer": settings.issuer,
            "audience": settings.audience,
            "expiration_days": settings.expiration_days,
        }
    }


@system_bp.get("/health")
def health():
    checks = {
        "database": check_database_health(),
        "tokens": check_token_issuer_health(),
    }
    healthy = all(check["status"] == "healthy" for check in checks.values())
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": to_utc_z(utcnow()),
        "checks": checks,
    }
    return jsonify(body), 200 if healthy else 503
