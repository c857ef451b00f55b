"""
Health controller - database connectivity check for monitoring.
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy import text

from fincontrol.core.api_utils import verify_health_token
from fincontrol.core.limiter_config import limiter
from fincontrol.db.session import get_engine

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


def check_database_connection() -> bool:
    """Run ``SELECT 1`` against the configured engine."""
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


@health_bp.route("/health", methods=["GET"])
@limiter.exempt
def health_check():
    """
    Report database connectivity.

    Status codes:
        200: database reachable
        503: database unreachable

    Callers presenting a valid ``X-Health-Token`` header also receive the
    dialect and connection pool status.
    """
    db_status = check_database_connection()
    payload = {
        "status": "healthy" if db_status else "unhealthy",
        "database": "connected" if db_status else "disconnected",
    }

    if verify_health_token():
        engine = get_engine()
        payload["dialect"] = engine.dialect.name
        payload["pool_status"] = engine.pool.status()

    return jsonify(payload), (200 if db_status else 503)
