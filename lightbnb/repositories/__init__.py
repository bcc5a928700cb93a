"""
Repository layer for data access operations.
Each repository method runs exactly one statement against the session it was given.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.property import PropertyRepository, PropertySearchFilters
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "ReservationRepository",
    "UserRepository"
]
