"""
LightBnB data access layer.
Reads and writes users, properties and reservations for the LightBnB web application.
"""

from lightbnb.data_access import (
    get_user_with_email,
    get_user_with_id,
    add_user,
    get_all_reservations,
    get_all_properties,
    add_property,
)
from lightbnb.utils.exceptions import StoreError

__all__ = [
    "get_user_with_email",
    "get_user_with_id",
    "add_user",
    "get_all_reservations",
    "get_all_properties",
    "add_property",
    "StoreError",
]
