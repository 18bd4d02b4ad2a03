from .base import ReservationAdapter
from .memory_adapter import MemoryReservationAdapter
from .sqlite_adapter import SQLiteReservationAdapter
from .text_adapter import TextFileReservationAdapter

__all__ = [
    "ReservationAdapter",
    "MemoryReservationAdapter",
    "SQLiteReservationAdapter",
    "TextFileReservationAdapter",
]
