from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from innkeeper.exceptions import DatabaseError
from innkeeper.models import Reservation, Room


class MemoryReservationAdapter:
    """Keeps copies of the saved records in process memory.

    ``fail_saves`` makes every save raise ``DatabaseError``; tests use it to
    exercise the persistence-failure path.
    """

    def __init__(self, rooms: Sequence[Room] = (), reservations: Sequence[Reservation] = ()):
        self._rooms: List[Room] = [replace(r) for r in rooms]
        self._reservations: List[Reservation] = [replace(r) for r in reservations]
        self.fail_saves = False
        self.room_saves = 0
        self.reservation_saves = 0

    def init(self) -> None:
        return None

    def load_rooms(self) -> List[Room]:
        return [replace(r) for r in self._rooms]

    def save_rooms(self, rooms: Sequence[Room]) -> None:
        if self.fail_saves:
            raise DatabaseError("Simulated failure while saving rooms")
        self._rooms = [replace(r) for r in rooms]
        self.room_saves += 1

    def load_reservations(self) -> List[Reservation]:
        return [replace(r) for r in self._reservations]

    def save_reservations(self, reservations: Sequence[Reservation]) -> None:
        if self.fail_saves:
            raise DatabaseError("Simulated failure while saving reservations")
        self._reservations = [replace(r) for r in reservations]
        self.reservation_saves += 1
