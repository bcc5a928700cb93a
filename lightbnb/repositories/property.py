"""
Property repository for listing search and listing creation.
Search statements are assembled from whichever optional filters the caller supplied.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, func, bindparam
from sqlalchemy.sql.expression import Select
from lightbnb.repositories.base import BaseRepository, Record
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.config import settings
from lightbnb.utils.validators import to_number, to_minor_units, to_limit
from typing import Optional, List, Mapping, Any, Tuple
import logging

logger = logging.getLogger(__name__)

# Columns a caller supplies when creating a listing; ``active`` is always set by us
PROPERTY_INSERT_FIELDS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)


class PropertySearchFilters:
    """
    Optional property search filters.

    Prices are given in dollars and compared against ``cost_per_night`` in
    cents. A filter left as None (or any other falsy value) adds no predicate.
    """

    OPTION_NAMES = (
        "city",
        "owner_id",
        "minimum_price_per_night",
        "maximum_price_per_night",
        "minimum_rating",
    )

    def __init__(
        self,
        city: Optional[str] = None,
        owner_id: Optional[Any] = None,
        minimum_price_per_night: Optional[Any] = None,
        maximum_price_per_night: Optional[Any] = None,
        minimum_rating: Optional[Any] = None
    ):
        self.city = city
        self.owner_id = owner_id
        self.minimum_price_per_night = minimum_price_per_night
        self.maximum_price_per_night = maximum_price_per_night
        self.minimum_rating = minimum_rating

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "PropertySearchFilters":
        """Build filters from a plain options mapping, ignoring unknown keys."""
        options = options or {}
        return cls(**{name: options.get(name) for name in cls.OPTION_NAMES})

    def build_predicates(self) -> List[Tuple[Any, Any]]:
        """
        Build ``(predicate, bound value)`` pairs for the filters that are set.

        Pairs come back in the order the predicates are applied, which is also
        the order their parameters are bound.
        """
        predicates = []

        # Location filter (case-insensitive partial match)
        if self.city:
            value = f"%{self.city}%"
            predicates.append((Property.city.ilike(bindparam("city", value)), value))

        if self.owner_id:
            value = to_number(self.owner_id)
            predicates.append((Property.owner_id == bindparam("owner_id", value), value))

        # Price range filters, dollars to cents
        if self.minimum_price_per_night:
            value = to_minor_units(self.minimum_price_per_night)
            predicates.append((Property.cost_per_night >= bindparam("minimum_cost_per_night", value), value))
        if self.maximum_price_per_night:
            value = to_minor_units(self.maximum_price_per_night)
            predicates.append((Property.cost_per_night <= bindparam("maximum_cost_per_night", value), value))

        # Compared per review row, before the average is taken
        if self.minimum_rating:
            value = to_number(self.minimum_rating)
            predicates.append((PropertyReview.rating >= bindparam("minimum_rating", value), value))

        return predicates

    def __repr__(self) -> str:
        applied = {name: getattr(self, name) for name in self.OPTION_NAMES if getattr(self, name)}
        return f"<PropertySearchFilters({applied})>"


class PropertyRepository(BaseRepository[Property]):
    """Repository for property search and creation."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    def build_search_query(self, filters: PropertySearchFilters, limit: Optional[int] = None) -> Select:
        """
        Build the property search statement.

        Properties are left joined to their reviews so listings without any
        review still appear, with a NULL average rating.

        Args:
            filters: PropertySearchFilters instance with search criteria
            limit: Maximum number of properties to return, defaults to
                   settings.default_result_limit

        Returns:
            Select statement ordered by nightly cost, cheapest first
        """
        average_rating = func.avg(PropertyReview.rating).label("average_rating")

        query = (
            select(*self.columns, average_rating)
            .select_from(Property)
            .outerjoin(PropertyReview, Property.id == PropertyReview.property_id)
        )

        for predicate, _ in filters.build_predicates():
            query = query.where(predicate)

        return (
            query
            .group_by(Property.id)
            .order_by(Property.cost_per_night)
            .limit(to_limit(settings.default_result_limit if limit is None else limit))
        )

    async def get_all_properties(
        self,
        options: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[Record]:
        """
        Search properties.

        Args:
            options: Mapping with any of city, owner_id, minimum_price_per_night,
                     maximum_price_per_night and minimum_rating
            limit: Maximum number of properties to return

        Returns:
            Property records with an ``average_rating`` key, cheapest first
        """
        filters = options if isinstance(options, PropertySearchFilters) else PropertySearchFilters.from_options(options)

        try:
            query = self.build_search_query(filters, limit)
            properties = await self.fetch_all(query)

            logger.debug(f"Property search {filters!r} returned {len(properties)} results")
            return properties
        except Exception as e:
            logger.error(f"Failed to search properties with {filters!r}: {e}")
            raise

    async def add_property(self, property_data: Mapping[str, Any]) -> Record:
        """
        Add a property listing.

        Missing fields are bound as NULL; a required column left out surfaces
        as the store's integrity error. The listing is always created active.

        Args:
            property_data: Mapping with the listing fields

        Returns:
            The created property record
        """
        try:
            values = {field: property_data.get(field) for field in PROPERTY_INSERT_FIELDS}
            stmt = (
                insert(Property)
                .values(**values, active=True)
                .returning(*self.columns)
            )

            created_property = await self.insert_returning(stmt)
            logger.info(f"Created property: {created_property['title']} (ID: {created_property['id']})")
            return created_property
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise
