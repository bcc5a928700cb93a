"""
Test configuration and fixtures for the LightBnB data access layer.
Provides database fixtures, test data factories, and common test utilities.
"""

import pytest
import uuid
from datetime import date, timedelta
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
import os

from lightbnb.database import Base
from lightbnb.models import Reservation, PropertyReview
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository


# Test database configuration; point at PostgreSQL to exercise the production dialect
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test engine with a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {}
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: str = None,
        password: str = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> dict:
        """Create a test user in the database."""
        return await user_repo.add_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        description: str = "A beautiful test property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        street: str = "123 Test Street",
        province: str = "British Columbia",
        post_code: str = "V6B 1A1",
        country: str = "Canada",
        parking_spaces: int = 1,
        number_of_bathrooms: int = 1,
        number_of_bedrooms: int = 2
    ) -> dict:
        """Create property data dictionary."""
        return {
            "owner_id": owner_id,
            "title": title,
            "description": description,
            "thumbnail_photo_url": "https://images.example.com/thumb.jpg",
            "cover_photo_url": "https://images.example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "street": street,
            "city": city,
            "province": province,
            "post_code": post_code,
            "country": country,
            "parking_spaces": parking_spaces,
            "number_of_bathrooms": number_of_bathrooms,
            "number_of_bedrooms": number_of_bedrooms,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> dict:
        """Create a test property in the database."""
        return await property_repo.add_property(PropertyFactory.create_property_data(owner_id, **kwargs))


class ReservationFactory:
    """
    Factory for reservations and reviews.
    The data access layer never writes these, so they go straight through the session.
    """

    @staticmethod
    async def create_reservation(
        db: AsyncSession,
        guest_id: int,
        property_id: int,
        start_date: date = date(2026, 6, 1),
        end_date: Optional[date] = None
    ) -> Reservation:
        reservation = Reservation(
            guest_id=guest_id,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date or start_date + timedelta(days=3),
        )
        db.add(reservation)
        await db.commit()
        await db.refresh(reservation)
        return reservation

    @staticmethod
    async def create_review(
        db: AsyncSession,
        reservation: Reservation,
        rating: int,
        message: str = "Lovely stay"
    ) -> PropertyReview:
        review = PropertyReview(
            guest_id=reservation.guest_id,
            property_id=reservation.property_id,
            reservation_id=reservation.id,
            rating=rating,
            message=message,
        )
        db.add(review)
        await db.commit()
        await db.refresh(review)
        return review


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> dict:
    """Create a property owner."""
    return await UserFactory.create_user(user_repository, name="Owner", email="owner@test.com")


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> dict:
    """Create a guest."""
    return await UserFactory.create_user(user_repository, name="Guest", email="guest@test.com")


@pytest.fixture
async def test_listings(property_repository: PropertyRepository, test_owner: dict) -> list:
    """Create a spread of listings across cities and price points."""
    listings = [
        ("Downtown loft", "Vancouver", 4500),
        ("Harbour view", "North Vancouver", 5000),
        ("Garden suite", "Vancouver", 7500),
        ("Penthouse", "West Vancouver", 10000),
        ("Mansion", "Vancouver", 25000),
        ("Lakeside cabin", "Kelowna", 8000),
        ("City condo", "Toronto", 9000),
    ]
    return [
        await PropertyFactory.create_property(
            property_repository,
            owner_id=test_owner["id"],
            title=title,
            city=city,
            cost_per_night=cost
        )
        for title, city, cost in listings
    ]


# Utility functions for tests
def assert_ordered_by(records: list, key: str):
    """Assert that records are in non-decreasing order of ``key``."""
    values = [record[key] for record in records]
    assert values == sorted(values)
