"""
Utility modules for the data access layer.
"""

from lightbnb.utils.exceptions import StoreError, InvalidBindValueError
from lightbnb.utils.validators import to_number, to_minor_units, to_limit

__all__ = [
    "StoreError",
    "InvalidBindValueError",
    "to_number",
    "to_minor_units",
    "to_limit",
]
