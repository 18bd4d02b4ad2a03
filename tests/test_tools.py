"""
Tests for innkeeper tools module.

All tool functions are tested here in an organized manner.
"""
from datetime import date, timedelta

import pytest

from innkeeper.tools import (
    book_room,
    cancel_reservation,
    get_reservation,
    get_tool_map,
    list_reservations,
    list_rooms,
    pay_reservation,
    save_all,
    search_available_rooms,
    set_room_flag,
)


# ============================================================================
# Test Fixtures and Helpers
# ============================================================================

def future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def book_default(room_id: str = "101", guest: str = "Alice", start: int = 10, nights: int = 2) -> dict:
    result = book_room(room_id, guest, future(start), future(start + nights))
    assert "reservation" in result, result
    return result["reservation"]


def test_tool_registry():
    tool_map = get_tool_map()
    for name in ("list_rooms", "search_available_rooms", "book_room", "pay_reservation",
                 "get_reservation", "cancel_reservation", "list_reservations", "set_room_flag", "save_all"):
        assert name in tool_map
        assert tool_map[name]._is_tool is True


# ============================================================================
# Tests for list_rooms() and set_room_flag()
# ============================================================================

class TestRooms:

    def test_list_rooms(self, tool_env):
        result = list_rooms()
        assert [r["room_id"] for r in result["rooms"]] == ["101", "102", "201", "202", "301", "302"]
        assert result["rooms"][0]["price_per_night"] == "100.00"

    def test_set_room_flag(self, tool_env):
        config, _ = tool_env
        result = set_room_flag("201", False)
        assert result["room"]["is_available"] is False
        assert config.adapter.load_rooms()[2].is_available is False

    def test_set_room_flag_unknown_room(self, tool_env):
        result = set_room_flag("999", True)
        assert result == {"error": "Room 999 not found."}


# ============================================================================
# Tests for search_available_rooms()
# ============================================================================

class TestSearchAvailableRooms:

    def test_all_rooms_free(self, tool_env):
        result = search_available_rooms(future(1), future(3))
        assert len(result["rooms"]) == 6
        assert result["category"] is None

    def test_category_filter_is_case_insensitive(self, tool_env):
        result = search_available_rooms(future(1), future(3), "suite")
        assert [r["room_id"] for r in result["rooms"]] == ["301", "302"]
        assert result["category"] == "SUITE"

    def test_confirmed_booking_is_excluded(self, tool_env):
        res = book_default("101")
        pay_reservation(res["reservation_id"], "200")
        result = search_available_rooms(future(11), future(12), "Standard")
        assert [r["room_id"] for r in result["rooms"]] == ["102"]

    def test_unknown_category(self, tool_env):
        result = search_available_rooms(future(1), future(3), "Penthouse")
        assert "error" in result
        assert "Valid categories: Standard, Deluxe, Suite" in result["error"]

    def test_bad_date(self, tool_env):
        result = search_available_rooms("2024/01/10", future(3))
        assert "Please use YYYY-MM-DD" in result["error"]

    def test_reversed_dates(self, tool_env):
        result = search_available_rooms(future(3), future(1))
        assert result == {"error": "Check-out date must be after check-in date."}

    def test_past_check_in(self, tool_env):
        result = search_available_rooms(future(-1), future(2))
        assert result == {"error": "Check-in date cannot be in the past."}


# ============================================================================
# Tests for book_room()
# ============================================================================

class TestBookRoom:

    def test_book_room(self, tool_env):
        res = book_default("101", nights=3)
        assert res["total_price"] == "300.00"
        assert res["nights"] == 3
        assert res["status"] == "Pending Payment"

    def test_book_unknown_room(self, tool_env):
        result = book_room("999", "Alice", future(1), future(2))
        assert result == {"error": "Booking failed: Room 999 not found."}

    def test_book_past_date(self, tool_env):
        result = book_room("101", "Alice", future(-2), future(1))
        assert result == {"error": "Booking failed: Check-in date cannot be in the past."}

    def test_book_past_date_allowed_by_config(self, tool_env):
        config, _ = tool_env
        config._allow_past = True
        result = book_room("101", "Alice", "2024-01-10", "2024-01-12")
        assert result["reservation"]["total_price"] == "200.00"

    def test_book_empty_guest(self, tool_env):
        result = book_room("101", "   ", future(1), future(2))
        assert "guest_name" in result["error"]

    def test_book_same_day(self, tool_env):
        result = book_room("101", "Alice", future(1), future(1))
        assert result == {"error": "Booking failed: Check-out date must be after check-in date."}

    def test_book_conflicts_with_confirmed(self, tool_env):
        res = book_default("101")
        pay_reservation(res["reservation_id"], 200)
        result = book_room("101", "Bob", future(11), future(13))
        assert result["error"].startswith("Booking failed: Room 101 is not available")

    def test_book_save_failure_returns_warning(self, tool_env):
        config, ledger = tool_env
        config.adapter.fail_saves = True
        result = book_room("101", "Alice", future(1), future(2))
        assert "warning" in result
        rid = result["reservation"]["reservation_id"]
        assert ledger.get_by_id(rid).guest_name == "Alice"


# ============================================================================
# Tests for pay_reservation()
# ============================================================================

class TestPayReservation:

    def test_insufficient_payment(self, tool_env):
        res = book_default()
        result = pay_reservation(res["reservation_id"], "150")
        assert result["payment"]["success"] is False
        assert result["payment"]["status"] == "insufficient_payment"
        assert result["reservation"]["is_confirmed"] is False

    def test_payment_with_change(self, tool_env):
        res = book_default()
        result = pay_reservation(res["reservation_id"], "$250.00")
        assert result["payment"]["status"] == "confirmed"
        assert result["payment"]["change"] == "50.00"
        assert result["reservation"]["status"] == "Confirmed"

    def test_already_confirmed(self, tool_env):
        res = book_default()
        pay_reservation(res["reservation_id"], 200)
        result = pay_reservation(res["reservation_id"], 200)
        assert result["payment"]["status"] == "already_confirmed"
        assert "already confirmed" in result["payment"]["message"]

    @pytest.mark.parametrize("amount", ["abc", "-5"])
    def test_invalid_amount(self, tool_env, amount):
        res = book_default()
        result = pay_reservation(res["reservation_id"], amount)
        assert "amount_paid" in result["error"]

    def test_unknown_reservation(self, tool_env):
        result = pay_reservation("NOPE1234", 100)
        assert result == {"error": "Reservation with ID NOPE1234 not found."}

    def test_amount_too_large_for_cents(self, tool_env):
        res = book_default()
        result = pay_reservation(res["reservation_id"], "1" + "0" * 28)
        assert "amount_paid" in result["error"]

    def test_cancelled_right_after_payment(self, tool_env, monkeypatch):
        _, ledger = tool_env
        res = book_default()
        confirm = ledger.confirm

        def confirm_then_cancel(reservation_id, amount):
            result = confirm(reservation_id, amount)
            ledger.cancel(reservation_id)
            return result

        monkeypatch.setattr(ledger, "confirm", confirm_then_cancel)
        result = pay_reservation(res["reservation_id"], 200)
        assert result["payment"]["status"] == "confirmed"
        assert result["reservation"] is None


# ============================================================================
# Tests for get/cancel/list reservations
# ============================================================================

class TestReservationLookup:

    def test_get_reservation(self, tool_env):
        res = book_default()
        result = get_reservation(res["reservation_id"].lower())
        assert result["reservation"]["reservation_id"] == res["reservation_id"]

    def test_get_unknown(self, tool_env):
        assert "not found" in get_reservation("NOPE1234")["error"]

    def test_cancel_reservation(self, tool_env):
        res = book_default()
        result = cancel_reservation(res["reservation_id"])
        assert result["success"] is True
        assert "not found" in get_reservation(res["reservation_id"])["error"]

    def test_cancel_unknown(self, tool_env):
        result = cancel_reservation("NOPE1234")
        assert result == {"error": "Reservation with ID NOPE1234 not found."}

    def test_list_reservations(self, tool_env):
        first = book_default("101", "Alice")
        second = book_default("201", "Bob")
        ids = [r["reservation_id"] for r in list_reservations()["reservations"]]
        assert ids == [first["reservation_id"], second["reservation_id"]]


class TestSaveAll:

    def test_save_all(self, tool_env):
        config, ledger = tool_env
        config.adapter.fail_saves = True
        book_room("101", "Alice", future(1), future(2))
        assert ledger.is_dirty

        assert "error" in save_all()
        config.adapter.fail_saves = False
        assert save_all() == {"success": True}
        assert not ledger.is_dirty
        assert len(config.adapter.load_reservations()) == 1
