"""
Domain entities - Pure business logic, no framework dependencies.

Amounts are integer minor units (cents) everywhere below this layer; the
conversion from the decimal form value happens once, in the invoice service.
"""

from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Optional

INVOICE_STATUSES = ("pending", "paid")


@dataclass
class Invoice:
    """Domain entity representing an Invoice."""

    customer_id: str = ""
    amount: int = 0
    status: str = "pending"
    date: Optional[date_type] = None
    id: Optional[str] = None

    def __post_init__(self):
        """Validate business rules."""
        if not self.customer_id:
            raise ValueError("customer_id is required")
        if self.amount <= 0:
            raise ValueError("Amount must be positive")
        if self.status not in INVOICE_STATUSES:
            raise ValueError(f"Invalid invoice status: {self.status}")

    @property
    def amount_major(self) -> float:
        """Amount in currency units, for display."""
        return self.amount / 100


@dataclass
class InvoiceSummary:
    """Invoice joined with the owning customer's display fields."""

    id: str
    amount: int
    status: str
    date: Optional[date_type]
    customer_id: str
    customer_name: str
    customer_email: str
    customer_image_url: Optional[str] = None

    @property
    def amount_major(self) -> float:
        return self.amount / 100


@dataclass
class Customer:
    """Domain entity representing a Customer."""

    name: str = ""
    email: str = ""
    image_url: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        """Validate business rules."""
        if not self.name:
            raise ValueError("Name is required")
        if self.email and "@" not in self.email:
            raise ValueError("Invalid email format")


@dataclass
class User:
    """Domain entity representing a staff account.

    ``password_hash`` is never the plain password; it is excluded from repr
    so it cannot leak into logs.
    """

    name: str = ""
    email: str = ""
    password_hash: str = field(default="", repr=False)
    id: Optional[str] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.name:
            raise ValueError("Name is required")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
