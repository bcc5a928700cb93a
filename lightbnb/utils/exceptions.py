"""
Error taxonomy for the data access layer.

Every failure raised while executing a statement (syntax errors, constraint
violations, lost connections, bind type mismatches) reaches callers as a
SQLAlchemy exception. Nothing here wraps or reclassifies those errors;
``StoreError`` names the common base so callers have one thing to catch.
"""

from sqlalchemy.exc import ArgumentError, SQLAlchemyError


StoreError = SQLAlchemyError


class InvalidBindValueError(ArgumentError, ValueError):
    """A caller-supplied value could not be bound to its column."""
