"""
Data access functions used by the LightBnB HTTP layer.

Each function runs one statement. When no session is passed in, one is
checked out of the shared pool for the duration of the call and returned
afterwards. Store failures propagate unchanged.
"""

from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb import database
from lightbnb.repositories.property import PropertyRepository, PropertySearchFilters
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Union


@asynccontextmanager
async def _session_scope(db: Optional[AsyncSession]) -> AsyncIterator[AsyncSession]:
    if db is not None:
        yield db
        return

    async with database.AsyncSessionLocal() as session:
        yield session


# Users

async def get_user_with_email(email: str, db: Optional[AsyncSession] = None) -> Optional[Dict[str, Any]]:
    """Get a single user given their email, or None."""
    async with _session_scope(db) as session:
        return await UserRepository(session).get_user_with_email(email)


async def get_user_with_id(user_id: Any, db: Optional[AsyncSession] = None) -> Optional[Dict[str, Any]]:
    """Get a single user given their id, or None."""
    async with _session_scope(db) as session:
        return await UserRepository(session).get_user_with_id(user_id)


async def add_user(user: Mapping[str, Any], db: Optional[AsyncSession] = None) -> Dict[str, Any]:
    """Add a new user and return the created record."""
    async with _session_scope(db) as session:
        return await UserRepository(session).add_user(user)


# Reservations

async def get_all_reservations(
    guest_id: Any,
    limit: Optional[int] = None,
    db: Optional[AsyncSession] = None
) -> List[Dict[str, Any]]:
    """Get a guest's reservations, earliest start date first."""
    async with _session_scope(db) as session:
        return await ReservationRepository(session).get_all_reservations(guest_id, limit)


# Properties

async def get_all_properties(
    options: Union[Mapping[str, Any], PropertySearchFilters, None] = None,
    limit: Optional[int] = None,
    db: Optional[AsyncSession] = None
) -> List[Dict[str, Any]]:
    """Search properties, cheapest first."""
    async with _session_scope(db) as session:
        return await PropertyRepository(session).get_all_properties(options, limit)


async def add_property(property_data: Mapping[str, Any], db: Optional[AsyncSession] = None) -> Dict[str, Any]:
    """Add a property listing and return the created record."""
    async with _session_scope(db) as session:
        return await PropertyRepository(session).add_property(property_data)
