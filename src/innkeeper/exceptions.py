"""Custom exceptions for Innkeeper."""
from __future__ import annotations


class InnkeeperError(Exception):
    """Base exception for all Innkeeper errors."""
    pass


class ConfigurationError(InnkeeperError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(InnkeeperError):
    """Raised when loading or saving rooms/reservations fails."""
    pass


class AdapterError(InnkeeperError):
    """Raised when an adapter cannot be built for the configured storage."""
    pass


class ChannelError(InnkeeperError):
    """Raised when channel (Telegram, CLI) operations fail."""
    pass


class ReservationError(InnkeeperError):
    """Raised when reservation-specific domain errors occur."""
    pass


class RoomNotFoundError(ReservationError):
    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} not found.")
        self.room_id = room_id


class ReservationNotFoundError(ReservationError):
    def __init__(self, reservation_id: str):
        super().__init__(f"Reservation with ID {reservation_id} not found.")
        self.reservation_id = reservation_id


class InvalidDateRangeError(ReservationError):
    """Raised when check-out is not after check-in."""
    pass


class RoomUnavailableError(ReservationError):
    """Raised when a confirmed reservation already occupies the requested dates."""

    def __init__(self, room_id: str, check_in, check_out):
        super().__init__(
            f"Room {room_id} is not available from {check_in} to {check_out}."
        )
        self.room_id = room_id
        self.check_in = check_in
        self.check_out = check_out


class DuplicateRoomError(ReservationError):
    """Raised when a room identifier is already in the catalog."""
    pass


class UnsavedChangeError(DatabaseError):
    """Raised when a mutation was applied in memory but saving it failed.

    ``result`` holds what the call would have returned.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
