"""
LightBnB data access layer.
Parameterized PostgreSQL queries for users, reservations and properties.
"""

from lightbnb.database import QueryGateway
from lightbnb.repositories import PropertyRepository, ReservationRepository, UserRepository

__version__ = "1.0.0"

__all__ = [
    "QueryGateway",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository",
]
