from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional

from innkeeper.models import Reservation, Room, RoomCategory
from innkeeper.services.catalog import RoomCatalog
from innkeeper.services.repository import normalize_key

logger = logging.getLogger(__name__)


def _blocks(reservation: Reservation, room_id: str, check_in: date, check_out: date) -> bool:
    """Only confirmed reservations on the same room occupy inventory."""
    return (
        reservation.is_confirmed
        and normalize_key(reservation.room_id) == normalize_key(room_id)
        and reservation.overlaps(check_in, check_out)
    )


class AvailabilityOracle:
    """
    Decides whether a room is free over [check_in, check_out) by scanning the
    confirmed reservations returned by ``reservations``. Pending reservations
    never block. Date ordering is validated by the ledger, not here.
    """

    def __init__(self, catalog: RoomCatalog, reservations: Callable[[], Iterable[Reservation]]):
        self.catalog = catalog
        self._reservations = reservations

    def is_available(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        exclude_reservation_id: Optional[str] = None,
    ) -> bool:
        room = self.catalog.find_room(room_id)
        return not self._has_conflict(room.room_id, check_in, check_out, self._reservations(), exclude_reservation_id)

    def search_available(
        self,
        check_in: date,
        check_out: date,
        category: Optional[RoomCategory] = None,
    ) -> List[Room]:
        """Catalog rooms (optionally of one category) free for the whole range."""
        snapshot = list(self._reservations())
        available = []
        for room in self.catalog.list_rooms():
            if category is not None and room.category != category:
                continue
            if not self._has_conflict(room.room_id, check_in, check_out, snapshot):
                available.append(room)
        logger.debug(f"{len(available)} rooms available from {check_in} to {check_out} (category={category})")
        return available

    @staticmethod
    def _has_conflict(
        room_id: str,
        check_in: date,
        check_out: date,
        reservations: Iterable[Reservation],
        exclude_reservation_id: Optional[str] = None,
    ) -> bool:
        excluded = normalize_key(exclude_reservation_id) if exclude_reservation_id else None
        for res in reservations:
            if excluded is not None and normalize_key(res.reservation_id) == excluded:
                continue
            if _blocks(res, room_id, check_in, check_out):
                return True
        return False
