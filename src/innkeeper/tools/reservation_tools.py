from __future__ import annotations
from typing import Any, Dict
import logging

from pydantic import ValidationError

from innkeeper.exceptions import DatabaseError, ReservationError, UnsavedChangeError
from innkeeper.tools import tool, get_ledger, past_check_in_error
from innkeeper.tools.schemas import (
    BookRoomInput,
    PaymentInput,
    ReservationIdInput,
    validation_message,
)

logger = logging.getLogger(__name__)

NOT_SAVED_WARNING = "The change was applied but could not be saved"


@tool
def book_room(room_id: str, guest_name: str, check_in: str, check_out: str) -> Dict[str, Any]:
    """
    Book a room; the reservation stays pending until paid.

    Args:
        room_id: Room number
        guest_name: Guest full name
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)

    Returns:
        {"reservation": dict} (plus "warning" if saving failed) or {"error": message}
    """
    try:
        params = BookRoomInput(room_id=room_id, guest_name=guest_name, check_in=check_in, check_out=check_out)
    except ValidationError as e:
        return {"error": validation_message(e)}

    past_error = past_check_in_error(params.check_in)
    if past_error:
        return {"error": f"Booking failed: {past_error}"}

    try:
        reservation = get_ledger().book(params.room_id, params.guest_name, params.check_in, params.check_out)
    except ReservationError as e:
        return {"error": f"Booking failed: {e}"}
    except UnsavedChangeError as e:
        logger.error(f"Reservation created but not saved: {e}")
        return {"reservation": e.result.to_dict(), "warning": f"{NOT_SAVED_WARNING}: {e}"}

    return {"reservation": reservation.to_dict()}


@tool
def pay_reservation(reservation_id: str, amount_paid: Any) -> Dict[str, Any]:
    """
    Pay for a reservation. Enough money confirms it; too little leaves it pending.

    Args:
        reservation_id: Reservation ID
        amount_paid: Amount paid (number or text such as "200" or "$200.00")

    Returns:
        {"payment": result dict, "reservation": dict or None} or {"error": message}
    """
    try:
        params = PaymentInput(reservation_id=reservation_id, amount_paid=amount_paid)
    except ValidationError as e:
        return {"error": validation_message(e)}

    ledger = get_ledger()
    warning = None
    try:
        result = ledger.confirm(params.reservation_id, params.amount_paid)
    except ReservationError as e:
        return {"error": str(e)}
    except UnsavedChangeError as e:
        logger.error(f"Payment recorded but not saved: {e}")
        result = e.result
        warning = f"{NOT_SAVED_WARNING}: {e}"

    response: Dict[str, Any] = {"payment": result.to_dict(), "reservation": None}
    try:
        response["reservation"] = ledger.get_by_id(result.reservation_id).to_dict()
    except ReservationError as e:
        # cancelled between the payment and this lookup
        logger.warning(f"Reservation gone after payment: {e}")
    if warning:
        response["warning"] = warning
    return response


@tool
def get_reservation(reservation_id: str) -> Dict[str, Any]:
    """
    Get reservation details by ID.

    Returns:
        {"reservation": dict} or {"error": message}
    """
    try:
        params = ReservationIdInput(reservation_id=reservation_id)
    except ValidationError as e:
        return {"error": validation_message(e)}

    try:
        reservation = get_ledger().get_by_id(params.reservation_id)
    except ReservationError as e:
        return {"error": str(e)}
    return {"reservation": reservation.to_dict()}


@tool
def cancel_reservation(reservation_id: str) -> Dict[str, Any]:
    """
    Cancel a reservation by ID, whether pending or confirmed.

    Returns:
        {"success": True, "message": ...} or {"error": message}
    """
    try:
        params = ReservationIdInput(reservation_id=reservation_id)
    except ValidationError as e:
        return {"error": validation_message(e)}

    try:
        cancelled = get_ledger().cancel(params.reservation_id)
    except UnsavedChangeError as e:
        logger.error(f"Cancellation applied but not saved: {e}")
        return {
            "success": True,
            "message": f"Reservation {params.reservation_id} has been cancelled.",
            "warning": f"{NOT_SAVED_WARNING}: {e}",
        }

    if not cancelled:
        return {"error": f"Reservation with ID {params.reservation_id} not found."}
    return {"success": True, "message": f"Reservation {params.reservation_id} has been cancelled."}


@tool
def list_reservations() -> Dict[str, Any]:
    """
    List all reservations in creation order.

    Returns:
        {"reservations": [reservation dicts]}
    """
    return {"reservations": [res.to_dict() for res in get_ledger().list_all()]}


@tool
def save_all() -> Dict[str, Any]:
    """
    Save rooms and reservations now.

    Returns:
        {"success": True} or {"error": message}
    """
    ledger = get_ledger()
    try:
        ledger.catalog.save()
        ledger.flush()
    except DatabaseError as e:
        return {"error": f"Could not save data: {e}"}
    return {"success": True}
