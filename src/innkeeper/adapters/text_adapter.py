from __future__ import annotations

import csv
import io
import logging
import os
from pathlib import Path
from typing import Callable, List, Sequence, TypeVar

from innkeeper.exceptions import DatabaseError
from innkeeper.models import Reservation, Room

logger = logging.getLogger(__name__)

ROOMS_FILE = "rooms.txt"
RESERVATIONS_FILE = "reservations.txt"

RESERVATION_FIELDS = ("reservation_id", "room_id", "guest_name", "check_in", "check_out", "total_price", "is_confirmed")

T = TypeVar("T")


def room_to_row(room: Room) -> List[str]:
    return [room.room_id, room.category.value, f"{room.price_per_night:.2f}", str(room.is_available).lower()]


def room_from_row(row: List[str]) -> Room:
    if len(row) != 4:
        raise ValueError(f"Invalid room line format: {','.join(row)}")
    room_id, category, price, flag = row
    return Room.from_dict({
        "room_id": room_id,
        "category": category,
        "price_per_night": price,
        "is_available": flag,
    })


def reservation_to_row(res: Reservation) -> List[str]:
    data = res.to_dict()
    return [
        data["reservation_id"],
        data["room_id"],
        data["guest_name"],
        data["check_in"],
        data["check_out"],
        f"{res.total_price:.2f}",
        "true" if res.is_confirmed else "false",
    ]


def reservation_from_row(row: List[str]) -> Reservation:
    if len(row) != len(RESERVATION_FIELDS):
        raise ValueError(f"Invalid reservation line format: {','.join(row)}")
    data = dict(zip(RESERVATION_FIELDS, row))
    data["created_at"] = None
    return Reservation.from_dict(data)


def format_rows(rows: Sequence[Sequence[str]]) -> str:
    """Comma-separated lines; values holding commas, quotes or newlines are quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def parse_rows(text: str) -> List[List[str]]:
    return [row for row in csv.reader(io.StringIO(text)) if any(field.strip() for field in row)]


class TextFileReservationAdapter:
    """Comma-separated text files, one record per line, inside a directory."""

    def __init__(self, directory: str):
        if directory.startswith("file://"):
            directory = directory.replace("file://", "", 1)
        self.directory = Path(directory)
        self.rooms_path = self.directory / ROOMS_FILE
        self.reservations_path = self.directory / RESERVATIONS_FILE

    def init(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DatabaseError(f"Could not create data directory {self.directory}: {e}") from e

    def _read(self, path: Path, parse: Callable[[List[str]], T], kind: str) -> List[T]:
        if not path.exists():
            logger.warning(f"{path.name} not found. A new one will be created.")
            return []
        try:
            with path.open(encoding="utf-8", newline="") as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Error loading {kind}: {e}")
            raise DatabaseError(f"Could not read {path}: {e}") from e

        try:
            rows = parse_rows(text)
        except csv.Error as e:
            logger.error(f"Error parsing {kind}: {e}")
            raise DatabaseError(f"Could not parse {path}: {e}") from e

        items = []
        for row in rows:
            try:
                items.append(parse(row))
            except ValueError as e:
                logger.warning(f"Skipping malformed {kind} data: {','.join(row)} ({e})")
        logger.info(f"Loaded {len(items)} {kind} from {path}")
        return items

    def _write(self, path: Path, rows: List[List[str]], kind: str) -> None:
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_text(format_rows(rows), encoding="utf-8", newline="")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Error saving {kind}: {e}")
            raise DatabaseError(f"Could not write {path}: {e}") from e
        logger.info(f"Saved {len(rows)} {kind} to {path}")

    # ---------- Rooms ----------
    def load_rooms(self) -> List[Room]:
        return self._read(self.rooms_path, room_from_row, "rooms")

    def save_rooms(self, rooms: Sequence[Room]) -> None:
        self._write(self.rooms_path, [room_to_row(r) for r in rooms], "rooms")

    # ---------- Reservations ----------
    def load_reservations(self) -> List[Reservation]:
        return self._read(self.reservations_path, reservation_from_row, "reservations")

    def save_reservations(self, reservations: Sequence[Reservation]) -> None:
        self._write(
            self.reservations_path,
            [reservation_to_row(r) for r in reservations],
            "reservations",
        )
