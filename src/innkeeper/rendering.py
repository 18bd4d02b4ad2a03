"""
Plain-text rendering of tool results, shared by the CLI and the Telegram channel.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List

from innkeeper.models import Reservation, Room, format_money, to_money


def render_rooms(rooms: List[Dict[str, Any]], empty: str = "No rooms found.") -> str:
    if not rooms:
        return empty
    return "\n".join(Room.from_dict(room).describe() for room in rooms)


def render_reservation(reservation: Dict[str, Any]) -> str:
    return Reservation.from_dict(reservation).describe()


def render_reservations(reservations: List[Dict[str, Any]]) -> str:
    if not reservations:
        return "No reservations found."
    return "\n-----------------------\n".join(render_reservation(res) for res in reservations)


def render_search(result: Dict[str, Any]) -> str:
    category = result.get("category")
    header = f"Available rooms from {result['check_in']} to {result['check_out']}"
    if category:
        header += f" ({category.capitalize()})"
    return header + ":\n" + render_rooms(result["rooms"], empty="No rooms available for the selected criteria.")


def render_booking(result: Dict[str, Any]) -> str:
    reservation = result["reservation"]
    lines = [
        f"Reservation successful! Your Reservation ID is: {reservation['reservation_id']}",
        f"Total amount due: {format_money(to_money(reservation['total_price']))}",
        "Please proceed to payment to confirm your reservation.",
    ]
    return "\n".join(lines)


def render_payment(result: Dict[str, Any]) -> str:
    return result["payment"]["message"]


def render_result(result: Dict[str, Any], renderer: Callable[[Dict[str, Any]], str]) -> str:
    """Error text for failed results, otherwise the rendered result plus any warning."""
    if "error" in result:
        return f"Error: {result['error']}"
    body = renderer(result)
    if result.get("warning"):
        return f"{body}\nWarning: {result['warning']}"
    return body
