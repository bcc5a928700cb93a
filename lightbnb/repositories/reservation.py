"""
Reservation repository for listing a guest's bookings together with property details.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from lightbnb.repositories.base import BaseRepository, Record
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.config import settings
from lightbnb.utils.validators import to_limit
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reading reservations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)

    async def get_all_reservations(self, guest_id: Any, limit: Optional[int] = None) -> List[Record]:
        """
        Get all reservations for a single guest.

        Each record merges the property columns, the reservation columns and
        the property's average rating. Where both tables share a column name
        (``id``) the reservation value wins. Reviews are inner joined, so
        reservations for properties without any review are left out.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return, defaults to
                   settings.default_result_limit

        Returns:
            Records ordered by reservation start date, earliest first
        """
        try:
            property_columns = list(Property.__table__.c)
            reservation_columns = self.columns
            average_rating = func.avg(PropertyReview.rating).label("average_rating")

            query = (
                select(*property_columns, *reservation_columns, average_rating)
                .select_from(Reservation)
                .join(Property, Reservation.property_id == Property.id)
                .join(PropertyReview, Property.id == PropertyReview.property_id)
                .where(Reservation.guest_id == guest_id)
                .group_by(Property.id, Reservation.id)
                .order_by(Reservation.start_date)
                .limit(to_limit(settings.default_result_limit if limit is None else limit))
            )

            result = await self.db.execute(query)
            reservations = []
            for row in result.all():
                mapping = row._mapping
                record = {column.name: mapping[column] for column in property_columns}
                record.update({column.name: mapping[column] for column in reservation_columns})
                record["average_rating"] = mapping["average_rating"]
                reservations.append(record)

            logger.debug(f"Retrieved {len(reservations)} reservations for guest {guest_id}")
            return reservations
        except Exception as e:
            logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
            raise
