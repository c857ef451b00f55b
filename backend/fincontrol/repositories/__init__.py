# Repositories package: SQLAlchemy implementations of the domain interfaces.

from .customer_repo import CustomerRepository
from .invoice_repo import InvoiceRepository
from .user_repo import UserRepository

__all__ = [
    "CustomerRepository",
    "InvoiceRepository",
    "UserRepository",
]
