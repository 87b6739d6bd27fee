"""
Reservation repository for listing a guest's stays.
"""

from typing import Any, Dict, List

from lightbnb.repositories.base import BaseRepository, coerce_int


# The property_reviews join drops reservations of unreviewed properties.
GET_ALL_RESERVATIONS = """
    SELECT reservations.*
    FROM reservations
    JOIN properties ON reservations.property_id = properties.id
    JOIN property_reviews ON properties.id = property_reviews.property_id
    WHERE reservations.guest_id = $1
    GROUP BY properties.id, reservations.id
    ORDER BY reservations.start_date
    LIMIT $2;
    """


class ReservationRepository(BaseRepository):
    """Read-only repository for the reservations table."""

    async def get_all_reservations(self, guest_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Get all reservations for a single guest, earliest start date first.

        Args:
            guest_id: ID of the guest user
            limit: Maximum number of reservations to return

        Returns:
            List of reservation rows
        """
        return await self.fetch_all(
            "get_all_reservations",
            GET_ALL_RESERVATIONS,
            [coerce_int(guest_id, "guest id"), coerce_int(limit, "limit")]
        )
