"""Innkeeper - hotel room inventory and reservation engine"""

__version__ = "0.1.0"

# Core abstractions
from .base_config import InnkeeperConfig

# Exceptions
from .exceptions import (
    InnkeeperError,
    ConfigurationError,
    DatabaseError,
    UnsavedChangeError,
    AdapterError,
    ChannelError,
    ReservationError,
    RoomNotFoundError,
    ReservationNotFoundError,
    InvalidDateRangeError,
    RoomUnavailableError,
    DuplicateRoomError,
)

# Config management
from .config import get_config, set_config

# Models
from .models import Room, RoomCategory, Reservation, ConfirmationResult, ConfirmationStatus

# Adapters
from .adapters import (
    ReservationAdapter,
    SQLiteReservationAdapter,
    TextFileReservationAdapter,
    MemoryReservationAdapter,
)

# Engine
from .services import AvailabilityOracle, PersistencePolicy, ReservationLedger, RoomCatalog

# Tool Utilities
from .tools import get_ledger, set_ledger

__all__ = [
    # Version
    "__version__",

    # Core
    "InnkeeperConfig",

    # Exceptions
    "InnkeeperError",
    "ConfigurationError",
    "DatabaseError",
    "UnsavedChangeError",
    "AdapterError",
    "ChannelError",
    "ReservationError",
    "RoomNotFoundError",
    "ReservationNotFoundError",
    "InvalidDateRangeError",
    "RoomUnavailableError",
    "DuplicateRoomError",

    # Config
    "get_config",
    "set_config",

    # Models
    "Room",
    "RoomCategory",
    "Reservation",
    "ConfirmationResult",
    "ConfirmationStatus",

    # Adapters
    "ReservationAdapter",
    "SQLiteReservationAdapter",
    "TextFileReservationAdapter",
    "MemoryReservationAdapter",

    # Engine
    "AvailabilityOracle",
    "PersistencePolicy",
    "ReservationLedger",
    "RoomCatalog",

    # Tool Utilities
    "get_ledger",
    "set_ledger",
]
