"""
Pydantic schemas for repository inputs.
"""

# User schemas
from .user import UserCreate

# Property schemas
from .property import (
    PROPERTY_COLUMNS,
    PropertyCreate,
    PropertySearchFilters
)

__all__ = [
    "UserCreate",
    "PROPERTY_COLUMNS",
    "PropertyCreate",
    "PropertySearchFilters",
]
