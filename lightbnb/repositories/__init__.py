"""
Repository layer for data access operations.
Each repository method issues exactly one parameterized statement through the query gateway.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.property import PropertyRepository, build_property_search_query
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository",
    "build_property_search_query"
]
