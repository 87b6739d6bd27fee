"""
Utility modules for the LightBnB data access layer.
"""

from .exceptions import (
    DatabaseError,
    ConnectivityError,
    ConstraintViolationError,
    DuplicateKeyError,
    MalformedInputError,
    translate_database_error
)

__all__ = [
    "DatabaseError",
    "ConnectivityError",
    "ConstraintViolationError",
    "DuplicateKeyError",
    "MalformedInputError",
    "translate_database_error",
]
