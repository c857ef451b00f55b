"""
Centralized configuration module for application-wide settings.

Values are read from environment variables once at import time and exposed
as module-level constants. Each section has a ``log_*`` companion that is
called from ``create_app`` so the active configuration shows up in the logs.
"""

import logging
import os
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

# ===========================
# Route Configuration
# ===========================

INVOICES_PATH = "/dashboard/invoices"
CUSTOMERS_PATH = "/dashboard/customers"
LOGIN_PATH = "/login"


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Invoice dates are computed as "today" in this timezone.

    Environment Variables:
        TZ: Timezone identifier (e.g., 'America/New_York', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


def log_timezone_config():
    """Log the active timezone configuration."""
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Customer Defaults
# ===========================


def get_customer_placeholder_image_url() -> str:
    """
    Get the image URL assigned to every customer on create and update.

    Environment Variables:
        CUSTOMER_PLACEHOLDER_IMAGE_URL: Path or URL of the placeholder avatar
            Default: '/static/customers/placeholder.svg'
    """
    return os.getenv(
        "CUSTOMER_PLACEHOLDER_IMAGE_URL", "/static/customers/placeholder.svg"
    )


CUSTOMER_PLACEHOLDER_IMAGE_URL = get_customer_placeholder_image_url()


# ===========================
# Health Check Configuration
# ===========================


def get_health_check_token() -> str | None:
    """
    Get the health check token from environment variable.

    Environment Variables:
        HEALTH_CHECK_TOKEN: Token required for detailed health output
            Default: None
    """
    return os.getenv("HEALTH_CHECK_TOKEN", None)


HEALTH_CHECK_TOKEN = get_health_check_token()


# ===========================
# Secret Key Configuration
# ===========================

WEAK_SECRETS = ("dev-secret-change-me", "secret123", "changeme")


def get_secret_key() -> str:
    """Get the Flask secret key, rejecting weak values in production.

    Raises:
        ValueError: If FLASK_ENV=production and the key is a known default or
            shorter than 32 characters.
    """
    secret = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")
    if os.getenv("FLASK_ENV") == "production":
        if secret in WEAK_SECRETS or len(secret) < 32:
            raise ValueError(
                "Production deployment requires strong FLASK_SECRET_KEY (min 32 chars). "
                "Set FLASK_SECRET_KEY environment variable."
            )
    return secret


def is_test_mode() -> bool:
    """Check if we're running in test mode (pytest/CI)."""
    testing_val = os.getenv("TESTING", "").lower().strip()
    if testing_val in ("true", "1", "yes"):
        return True
    if os.getenv("PYTEST_CURRENT_TEST"):
        return True
    return False
