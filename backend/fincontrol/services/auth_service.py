"""
Credential verification for the sign-in form.

``CredentialsProvider.authorize`` answers "which user do these credentials
belong to, if any"; ``AuthService`` turns that answer into the two messages
the login page can show. Store failures are classified as
``CallbackRouteError`` so they read as "Something went wrong" rather than as
bad credentials.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from fincontrol.core.exceptions import AuthError, CredentialsSignin
from fincontrol.core.security import verify_password
from fincontrol.core.validation import validate_credentials
from fincontrol.domain.entities import User as DomainUser
from fincontrol.domain.interfaces import IUserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
GENERIC_AUTH_ERROR_MESSAGE = "Something went wrong"


class CredentialsProvider:
    """Email/password lookup against the users table."""

    def __init__(self, repo: IUserRepository) -> None:
        self.repo = repo

    def authorize(self, credentials: Mapping[str, Any]) -> Optional[DomainUser]:
        """Return the matching user, or None for anything that does not match.

        Malformed input and unknown emails return None without touching the
        password hash.
        """
        validation = validate_credentials(credentials)
        if not validation.is_valid:
            return None

        email = validation.cleaned_data["email"]
        password = validation.cleaned_data["password"]

        user = self.repo.get_by_email(email)
        if user is None:
            return None

        if verify_password(password, user.password_hash):
            return user
        return None


class AuthService:
    """Sign-in use-case on top of a credentials provider."""

    def __init__(self, repo: IUserRepository) -> None:
        self.provider = CredentialsProvider(repo)

    def sign_in(self, form: Mapping[str, Any]) -> DomainUser:
        """Authorize the submitted form or raise ``AuthError``."""
        try:
            user = self.provider.authorize(form)
        except SQLAlchemyError as e:
            raise AuthError(AuthError.CALLBACK_ROUTE_ERROR, str(e)) from e

        if user is None:
            raise CredentialsSignin()
        return user

    def authenticate(
        self, form: Mapping[str, Any]
    ) -> Tuple[Optional[DomainUser], Optional[str]]:
        """Return ``(user, None)`` on success, ``(None, message)`` otherwise.

        Exceptions that are not ``AuthError`` propagate unchanged.
        """
        try:
            user = self.sign_in(form)
        except AuthError as e:
            if e.type == AuthError.CREDENTIALS_SIGNIN:
                logger.info(
                    "Sign-in rejected",
                    extra={"context": {"email": str(form.get("email", ""))}},
                )
                return None, INVALID_CREDENTIALS_MESSAGE

            logger.error(
                "Sign-in failed",
                extra={"context": {"auth_error_type": e.type, "error": str(e)}},
                exc_info=True,
            )
            return None, GENERIC_AUTH_ERROR_MESSAGE

        logger.info("User signed in", extra={"context": {"user_id": user.id}})
        return user, None
