"""Financial control dashboard: customers, invoices and staff sign-in."""

__version__ = "0.1.0"
