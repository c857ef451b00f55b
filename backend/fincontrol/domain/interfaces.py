"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details, so the
services can be unit tested against ``Mock(spec=...)`` doubles.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import Customer, Invoice, InvoiceSummary, User


class IInvoiceReader(ABC):
    """Interface for invoice read operations."""

    @abstractmethod
    def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def list_summaries(self) -> List[InvoiceSummary]:
        """Get all invoices with customer details, newest first."""
        pass


class IInvoiceWriter(ABC):
    """Interface for invoice write operations."""

    @abstractmethod
    def create(self, invoice: Invoice) -> Invoice:
        """Insert a new invoice and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, invoice: Invoice) -> None:
        """Overwrite customer, amount and status of the invoice with ``invoice.id``."""
        pass

    @abstractmethod
    def delete(self, invoice_id: str) -> bool:
        """Delete by ID. Returns whether a row was removed."""
        pass


class IInvoiceRepository(IInvoiceReader, IInvoiceWriter):
    """Complete invoice repository interface."""

    pass


class ICustomerReader(ABC):
    """Interface for customer read operations."""

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Customer]:
        """Get all customers ordered by name."""
        pass


class ICustomerWriter(ABC):
    """Interface for customer write operations."""

    @abstractmethod
    def create(self, customer: Customer) -> Customer:
        """Insert a new customer and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, customer: Customer) -> None:
        """Overwrite name, email and image of the customer with ``customer.id``."""
        pass

    @abstractmethod
    def delete(self, customer_id: str) -> bool:
        """Delete by ID. Returns whether a row was removed."""
        pass


class ICustomerRepository(ICustomerReader, ICustomerWriter):
    """Complete customer repository interface."""

    pass


class IUserReader(ABC):
    """Interface for user read operations."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass


class IUserWriter(ABC):
    """Interface for user write operations."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Insert a new user (``password_hash`` already computed)."""
        pass


class IUserRepository(IUserReader, IUserWriter):
    """Complete user repository interface combining read/write operations."""

    pass
