"""
Data Transfer Objects (DTOs) passed between controllers and services.

Input DTOs are the normalized records produced by the validators in
``fincontrol.core.validation``. ``ActionResult`` is what every service
mutation hands back to the view layer.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional


@dataclass(frozen=True)
class InvoiceInput:
    """Validated invoice form data."""

    customer_id: str
    amount: Decimal
    status: str


@dataclass(frozen=True)
class CustomerInput:
    """Validated customer form data."""

    name: str
    email: str


@dataclass(frozen=True)
class UserInput:
    """Validated sign-up form data. ``password`` is still plain text here."""

    name: str
    email: str
    password: str

    def __repr__(self) -> str:
        return f"UserInput(name={self.name!r}, email={self.email!r}, password='***')"


@dataclass
class ActionResult:
    """Outcome of a create/update/delete call.

    Exactly one of two shapes is produced:
    - success with ``redirect_to`` set (create/update) or a confirmation
      ``message`` (delete)
    - failure with a ``message`` and, for validation failures, per-field
      ``errors``
    """

    message: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)
    redirect_to: Optional[str] = None
    success: bool = False

    @classmethod
    def redirect(cls, path: str) -> "ActionResult":
        return cls(redirect_to=path, success=True)

    @classmethod
    def confirmed(cls, message: str) -> "ActionResult":
        return cls(message=message, success=True)

    @classmethod
    def failure(
        cls, message: str, errors: Optional[Dict[str, List[str]]] = None
    ) -> "ActionResult":
        return cls(message=message, errors=dict(errors or {}))

    def to_state(self) -> Dict:
        """Form state payload rendered inline by the templates."""
        state: Dict = {"message": self.message}
        if self.errors:
            state["errors"] = self.errors
        return state
