# Controllers package initialization
# This file makes the controllers directory a Python package
# and allows importing controller modules

from . import (
    auth_controller,
    customer_controller,
    health_controller,
    invoice_controller,
)

__all__ = [
    "auth_controller",
    "customer_controller",
    "health_controller",
    "invoice_controller",
]
