from __future__ import annotations
from datetime import date
from typing import Callable, Dict, Optional

from innkeeper.config import get_config
from innkeeper.services import ReservationLedger

# Global ledger instance
_ledger: Optional[ReservationLedger] = None

# name -> tool function, filled by the @tool decorator
_registry: Dict[str, Callable] = {}


# ------------------------------------
# Utilities
# ------------------------------------
def tool(func: Callable) -> Callable:
    """Marks a function as a front-end operation and registers it."""
    func._is_tool = True
    func._tool_name = func.__name__
    func._tool_description = func.__doc__ or ""
    _registry[func.__name__] = func
    return func


def get_ledger() -> ReservationLedger:
    """
    Returns the global ledger, building it from the active config on first use.
    """
    global _ledger
    if _ledger is None:
        _ledger = get_config().create_ledger()
    return _ledger


def set_ledger(ledger: Optional[ReservationLedger]) -> None:
    """Sets a custom ledger instance (useful for tests)."""
    global _ledger
    _ledger = ledger


def get_tool_map() -> Dict[str, Callable]:
    return dict(_registry)


def past_check_in_error(check_in: date) -> Optional[str]:
    """Error message when check-in is before today, unless the config allows it."""
    if get_config().allow_past_check_in():
        return None
    if check_in < date.today():
        return "Check-in date cannot be in the past."
    return None


# ------------------------------------
# Tool functions
# ------------------------------------
from .room_tools import (
    list_rooms,
    search_available_rooms,
    set_room_flag,
)
from .reservation_tools import (
    book_room,
    pay_reservation,
    get_reservation,
    cancel_reservation,
    list_reservations,
    save_all,
)


__all__ = [
    # Utilities
    "tool",
    "get_ledger",
    "set_ledger",
    "get_tool_map",

    # Rooms
    "list_rooms",
    "search_available_rooms",
    "set_room_flag",

    # Reservations
    "book_room",
    "pay_reservation",
    "get_reservation",
    "cancel_reservation",
    "list_reservations",
    "save_all",
]
