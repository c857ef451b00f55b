# Core package initialization
# Configuration, logging, security and validation helpers shared by the
# services and controllers.

from . import config, exceptions, revalidation, security, validation

__all__ = [
    "config",
    "exceptions",
    "revalidation",
    "security",
    "validation",
]
