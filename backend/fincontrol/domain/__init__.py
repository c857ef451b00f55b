"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business rules
- interfaces.py: Repository contracts
"""

from .entities import Customer, Invoice, InvoiceSummary, User
from .interfaces import (
    ICustomerReader,
    ICustomerRepository,
    ICustomerWriter,
    IInvoiceReader,
    IInvoiceRepository,
    IInvoiceWriter,
    IUserReader,
    IUserRepository,
    IUserWriter,
)

__all__ = [
    # Domain entities
    "Customer",
    "Invoice",
    "InvoiceSummary",
    "User",
    # Repository interfaces
    "ICustomerRepository",
    "IInvoiceRepository",
    "IUserRepository",
    # Segregated interfaces
    "ICustomerReader",
    "ICustomerWriter",
    "IInvoiceReader",
    "IInvoiceWriter",
    "IUserReader",
    "IUserWriter",
]
