"""
Custom exceptions for the application.
"""

from typing import Optional


class AuthError(Exception):
    """
    Raised by the sign-in flow when authentication cannot complete.

    ``type`` classifies the failure. ``CredentialsSignin`` means the email or
    password was wrong; every other type is an infrastructure problem.
    """

    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CALLBACK_ROUTE_ERROR = "CallbackRouteError"

    def __init__(self, type: str, message: Optional[str] = None):
        super().__init__(message or type)
        self.type = type


class CredentialsSignin(AuthError):
    """The supplied email/password pair did not match a stored user."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(AuthError.CREDENTIALS_SIGNIN, message)
