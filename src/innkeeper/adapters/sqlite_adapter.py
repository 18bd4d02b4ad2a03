from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Sequence

from innkeeper.exceptions import DatabaseError
from innkeeper.models import Reservation, Room

logger = logging.getLogger(__name__)


class SQLiteReservationAdapter:
    """SQLite-backed gateway. Each save replaces the table contents in one transaction."""

    def __init__(self, db_url: str):
        # Expecting format sqlite:///path
        if db_url.startswith("sqlite:///"):
            self.db_path = db_url.replace("sqlite:///", "", 1)
        else:
            self.db_path = db_url
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"SQLiteReservationAdapter using database at {self.db_path}")

    def _conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            return conn
        except sqlite3.Error as e:
            logger.error(f"Could not connect to database: {e}")
            raise DatabaseError(f"Could not connect to database: {e}") from e

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """Commits on success, rolls back on error, always closes."""
        conn = self._conn()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def init(self) -> None:
        try:
            with self._session() as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS rooms (
                        room_id TEXT PRIMARY KEY,
                        category TEXT NOT NULL,
                        price_per_night TEXT NOT NULL,
                        is_available INTEGER NOT NULL DEFAULT 1,
                        position INTEGER NOT NULL
                    )
                    """
                )
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS reservations (
                        reservation_id TEXT PRIMARY KEY,
                        room_id TEXT NOT NULL,
                        guest_name TEXT NOT NULL,
                        check_in TEXT NOT NULL,
                        check_out TEXT NOT NULL,
                        total_price TEXT NOT NULL,
                        is_confirmed INTEGER NOT NULL DEFAULT 0,
                        created_at TEXT,
                        position INTEGER NOT NULL
                    )
                    """
                )
        except sqlite3.Error as e:
            logger.error(f"SQLite error while creating tables: {e}")
            raise DatabaseError(f"Could not create tables: {e}") from e

    # ------------------------------------
    # Helpers
    # ------------------------------------
    def _fetch_all(self, table_name: str) -> List[Dict[str, Any]]:
        try:
            with self._session() as conn:
                cur = conn.cursor()
                cur.execute(f"SELECT * FROM {table_name} ORDER BY position")
                return [dict(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"Error while reading {table_name}: {e}")
            raise DatabaseError(f"Could not read {table_name}: {e}") from e

    def _replace_all(self, table_name: str, rows: List[Dict[str, Any]]) -> None:
        try:
            with self._session() as conn:
                cur = conn.cursor()
                cur.execute(f"DELETE FROM {table_name}")
                for position, row in enumerate(rows):
                    row = dict(row, position=position)
                    fields = ", ".join(row.keys())
                    placeholders = ", ".join("?" * len(row))
                    cur.execute(
                        f"INSERT INTO {table_name} ({fields}) VALUES ({placeholders})",
                        tuple(row.values()),
                    )
        except sqlite3.Error as e:
            logger.error(f"Error while saving {table_name}: {e}")
            raise DatabaseError(f"Could not save {table_name}: {e}") from e

    # ------------------------------------
    # Rooms
    # ------------------------------------
    def load_rooms(self) -> List[Room]:
        rooms = []
        for row in self._fetch_all("rooms"):
            try:
                rooms.append(Room.from_dict(row))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed room row {row.get('room_id')!r}: {e}")
        return rooms

    def save_rooms(self, rooms: Sequence[Room]) -> None:
        rows = [
            {
                "room_id": room.room_id,
                "category": room.category.value,
                "price_per_night": str(room.price_per_night),
                "is_available": int(room.is_available),
            }
            for room in rooms
        ]
        self._replace_all("rooms", rows)
        logger.info(f"Saved {len(rows)} rooms to {self.db_path}")

    # ------------------------------------
    # Reservations
    # ------------------------------------
    def load_reservations(self) -> List[Reservation]:
        reservations = []
        for row in self._fetch_all("reservations"):
            try:
                reservations.append(Reservation.from_dict(row))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed reservation row {row.get('reservation_id')!r}: {e}")
        return reservations

    def save_reservations(self, reservations: Sequence[Reservation]) -> None:
        rows = []
        for res in reservations:
            data = res.to_dict()
            rows.append({
                "reservation_id": data["reservation_id"],
                "room_id": data["room_id"],
                "guest_name": data["guest_name"],
                "check_in": data["check_in"],
                "check_out": data["check_out"],
                "total_price": data["total_price"],
                "is_confirmed": int(res.is_confirmed),
                "created_at": data["created_at"],
            })
        self._replace_all("reservations", rows)
        logger.info(f"Saved {len(rows)} reservations to {self.db_path}")
