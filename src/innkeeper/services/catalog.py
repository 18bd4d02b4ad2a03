from __future__ import annotations

import logging
import threading
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional, Sequence

from innkeeper.adapters.base import ReservationAdapter
from innkeeper.exceptions import DatabaseError, DuplicateRoomError, RoomNotFoundError
from innkeeper.models import Room, RoomCategory
from innkeeper.services.repository import Repository

logger = logging.getLogger(__name__)


def default_room_set() -> List[Room]:
    return [
        Room("101", RoomCategory.STANDARD, Decimal("100.00")),
        Room("102", RoomCategory.STANDARD, Decimal("100.00")),
        Room("201", RoomCategory.DELUXE, Decimal("150.00")),
        Room("202", RoomCategory.DELUXE, Decimal("150.00")),
        Room("301", RoomCategory.SUITE, Decimal("250.00")),
        Room("302", RoomCategory.SUITE, Decimal("250.00")),
    ]


class RoomCatalog:
    """
    The set of bookable rooms. Loaded once through the adapter; the only
    mutations afterwards are the advisory flag and adding rooms.
    """

    def __init__(
        self,
        adapter: ReservationAdapter,
        default_rooms: Optional[Sequence[Room]] = None,
        autosave: bool = True,
    ):
        self.adapter = adapter
        self.autosave = autosave
        self._default_rooms = list(default_rooms) if default_rooms is not None else default_room_set()
        self._rooms: Repository[Room] = Repository(key_of=lambda room: room.room_id)
        self._lock = threading.RLock()

    def load(self) -> None:
        """Loads rooms; seeds and saves the default set when storage has none."""
        try:
            loaded = self.adapter.load_rooms()
        except DatabaseError as e:
            logger.warning(f"Could not load rooms, starting with an empty catalog: {e}")
            loaded = []

        with self._lock:
            self._rooms.clear()
            for room in loaded:
                if room.room_id in self._rooms:
                    logger.warning(f"Skipping duplicate room {room.room_id}")
                    continue
                self._rooms.upsert(room)

            if len(self._rooms) == 0:
                logger.info("No rooms found. Initializing default rooms...")
                for room in self._default_rooms:
                    self._rooms.upsert(replace(room))
                try:
                    self._save()
                except DatabaseError:
                    logger.warning("Default rooms were not persisted; serving them from memory")
            logger.info(f"Room catalog ready with {len(self._rooms)} rooms")

    def _save(self) -> None:
        try:
            self.adapter.save_rooms(self._rooms.list())
        except DatabaseError as e:
            logger.error(f"Error saving rooms: {e}")
            raise

    def save(self) -> None:
        with self._lock:
            self._save()

    # ------------------------------------
    # Queries
    # ------------------------------------
    def list_rooms(self) -> List[Room]:
        with self._lock:
            return [replace(room) for room in self._rooms.list()]

    def find_room(self, room_id: str) -> Room:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                raise RoomNotFoundError(room_id)
            return replace(room)

    def has_room(self, room_id: str) -> bool:
        with self._lock:
            return room_id in self._rooms

    # ------------------------------------
    # Mutations
    # ------------------------------------
    def set_generally_available(self, room_id: str, flag: bool) -> Room:
        """Toggles the advisory flag. Booking never consults it."""
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                raise RoomNotFoundError(room_id)
            updated = replace(room, is_available=bool(flag))
            self._rooms.upsert(updated)
            logger.info(f"Room {updated.room_id} advisory flag set to {updated.is_available}")
            if self.autosave:
                self._save()
            return replace(updated)

    def add_room(self, room: Room) -> Room:
        with self._lock:
            if room.room_id in self._rooms:
                raise DuplicateRoomError(f"Room {room.room_id} already exists.")
            self._rooms.upsert(replace(room))
            logger.info(f"Room {room.room_id} added to the catalog")
            if self.autosave:
                self._save()
            return replace(room)
