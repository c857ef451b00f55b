# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import auth_service, context, customer_service, invoice_service, user_service

__all__ = [
    "auth_service",
    "context",
    "customer_service",
    "invoice_service",
    "user_service",
]
