"""
Small request helpers shared by the JSON endpoints.
"""

from flask import current_app, request


def verify_health_token() -> bool:
    """
    Verify the health check token from request headers.

    Returns:
        bool: True if token is valid, False otherwise
    """
    token = request.headers.get("X-Health-Token")
    expected = current_app.config.get("HEALTH_CHECK_TOKEN")
    # If no token expected, deny access (more secure)
    if not expected:
        return False
    return bool(token and token == expected)
