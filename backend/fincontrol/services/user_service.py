"""
User service for sign-up.

Business Rules:
- The email lookup runs before hashing so a duplicate never pays for bcrypt
- The unique index on users.email is authoritative; an IntegrityError from a
  concurrent sign-up is reported with the same duplicate message
- Passwords are hashed with passlib before they reach the repository
"""

import logging
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from fincontrol.core.config import INVOICES_PATH, LOGIN_PATH
from fincontrol.core.security import hash_password
from fincontrol.core.validation import validate_user
from fincontrol.domain.entities import User as DomainUser
from fincontrol.domain.interfaces import IUserRepository
from fincontrol.schemas.dtos import ActionResult
from fincontrol.services.context import ActionContext

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email is already in use."


class UserService:
    """Application service for user-related use-cases."""

    def __init__(self, repo: IUserRepository, ctx: ActionContext) -> None:
        self.repo = repo
        self.ctx = ctx

    def add_user(self, raw: Mapping[str, Any]) -> ActionResult:
        validation = validate_user(raw)
        if not validation.is_valid:
            return ActionResult.failure(
                "Missing Fields. Failed to Sign up", validation.field_errors
            )

        record = validation.to_record()

        try:
            if self.repo.get_by_email(record.email) is not None:
                logger.info(
                    "Sign-up rejected: email already registered",
                    extra={"context": {"email": record.email}},
                )
                return ActionResult.failure(DUPLICATE_EMAIL_MESSAGE)

            user = DomainUser(
                name=record.name,
                email=record.email,
                password_hash=hash_password(record.password),
            )
            created = self.repo.create(user)
        except IntegrityError:
            logger.warning(
                "Sign-up lost a race on the unique email index",
                extra={"context": {"email": record.email}},
            )
            return ActionResult.failure(DUPLICATE_EMAIL_MESSAGE)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to create user",
                extra={"context": {"email": record.email, "error": str(e)}},
                exc_info=True,
            )
            return ActionResult.failure("Database Error: Failed to Sign Up.")

        logger.info("User signed up", extra={"context": {"user_id": created.id}})
        self.ctx.revalidate(INVOICES_PATH)
        return ActionResult.redirect(LOGIN_PATH)
