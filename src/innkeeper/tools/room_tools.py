from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from pydantic import ValidationError

from innkeeper.exceptions import DatabaseError, ReservationError
from innkeeper.tools import tool, get_ledger, past_check_in_error
from innkeeper.tools.schemas import RoomFlagInput, SearchRoomsInput, validation_message

logger = logging.getLogger(__name__)


@tool
def list_rooms() -> Dict[str, Any]:
    """
    List every room in the catalog.

    Returns:
        {"rooms": [room dicts in catalog order]}
    """
    rooms = get_ledger().catalog.list_rooms()
    return {"rooms": [room.to_dict() for room in rooms]}


@tool
def search_available_rooms(
    check_in: str, check_out: str, category: Optional[str] = None
) -> Dict[str, Any]:
    """
    Search rooms free for the whole stay, optionally of one category.

    Args:
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
        category: Standard, Deluxe or Suite (optional)

    Returns:
        {"rooms": [...], "check_in", "check_out", "category"} or {"error": message}
    """
    try:
        params = SearchRoomsInput(check_in=check_in, check_out=check_out, category=category)
    except ValidationError as e:
        return {"error": validation_message(e)}

    if params.check_out <= params.check_in:
        return {"error": "Check-out date must be after check-in date."}
    past_error = past_check_in_error(params.check_in)
    if past_error:
        return {"error": past_error}

    rooms = get_ledger().oracle.search_available(params.check_in, params.check_out, params.category)
    return {
        "rooms": [room.to_dict() for room in rooms],
        "check_in": params.check_in.isoformat(),
        "check_out": params.check_out.isoformat(),
        "category": params.category.value if params.category else None,
    }


@tool
def set_room_flag(room_id: str, is_available: bool) -> Dict[str, Any]:
    """
    Set a room's advisory availability flag (does not affect booking).

    Returns:
        {"room": room dict} or {"error": message}
    """
    try:
        params = RoomFlagInput(room_id=room_id, is_available=is_available)
    except ValidationError as e:
        return {"error": validation_message(e)}

    try:
        room = get_ledger().catalog.set_generally_available(params.room_id, params.is_available)
    except ReservationError as e:
        return {"error": str(e)}
    except DatabaseError as e:
        return {"error": f"The flag was changed but could not be saved: {e}"}
    return {"room": room.to_dict()}
