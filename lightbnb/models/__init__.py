"""
Database models for LightBnB.
Describes the users, properties, reservations and property_reviews tables the data access layer queries.
"""

from lightbnb.models.user import User
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview

__all__ = [
    "User",
    "Property",
    "Reservation",
    "PropertyReview",
]
