"""
Schemas package - Data Transfer Objects.

This package contains the normalized input records and the action result
type shared by controllers and services.
"""

from .dtos import ActionResult, CustomerInput, InvoiceInput, UserInput

__all__ = [
    "ActionResult",
    "CustomerInput",
    "InvoiceInput",
    "UserInput",
]
