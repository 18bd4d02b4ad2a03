from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable

from innkeeper.models import Reservation, Room


@runtime_checkable
class ReservationAdapter(Protocol):
    """Load-all / save-all persistence gateway for the catalog and the ledger.

    ``load_*`` skip malformed records (logging a warning) and return an empty
    list when no storage exists yet. Storage-level failures raise
    ``DatabaseError``.
    """

    # lifecycle
    def init(self) -> None: ...

    # rooms
    def load_rooms(self) -> List[Room]: ...
    def save_rooms(self, rooms: Sequence[Room]) -> None: ...

    # reservations
    def load_reservations(self) -> List[Reservation]: ...
    def save_reservations(self, reservations: Sequence[Reservation]) -> None: ...
