from .money import to_money, format_money
from .room import Room, RoomCategory
from .reservation import (
    ConfirmationResult,
    ConfirmationStatus,
    Reservation,
    generate_reservation_id,
    nights_between,
    parse_date,
    ranges_overlap,
)

__all__ = [
    "to_money",
    "format_money",
    "Room",
    "RoomCategory",
    "Reservation",
    "ConfirmationResult",
    "ConfirmationStatus",
    "generate_reservation_id",
    "nights_between",
    "parse_date",
    "ranges_overlap",
]
