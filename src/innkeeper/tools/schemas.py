"""
Input schemas for the tool functions. Front-ends hand over raw text; these
models turn it into engine types (dates, categories, Decimal amounts).
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from innkeeper.models import RoomCategory, parse_date, to_money


def validation_message(exc: ValidationError) -> str:
    """Flattens a pydantic ValidationError into one readable line."""
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ()))
        message = str(error.get("msg", "")).removeprefix("Value error, ")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


class _ToolInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class DateRangeInput(_ToolInput):
    check_in: date = Field(description="Check-in date (YYYY-MM-DD)")
    check_out: date = Field(description="Check-out date (YYYY-MM-DD)")

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date:
        try:
            return parse_date(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid date '{value}'. Please use YYYY-MM-DD.") from exc


class SearchRoomsInput(DateRangeInput):
    category: Optional[RoomCategory] = Field(default=None, description="Standard, Deluxe or Suite; empty for all")

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Optional[RoomCategory]:
        return RoomCategory.parse_optional(value)


class BookRoomInput(DateRangeInput):
    room_id: str = Field(min_length=1, description="Room number, e.g. 101")
    guest_name: str = Field(min_length=1, description="Guest full name")


class PaymentInput(_ToolInput):
    reservation_id: str = Field(min_length=1, description="Reservation ID returned by booking")
    amount_paid: Decimal = Field(ge=0, description="Amount paid")

    @field_validator("amount_paid", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> Decimal:
        if isinstance(value, str):
            value = value.strip().lstrip("$")
        return to_money(value)


class ReservationIdInput(_ToolInput):
    reservation_id: str = Field(min_length=1, description="Reservation ID")


class RoomFlagInput(_ToolInput):
    room_id: str = Field(min_length=1, description="Room number")
    is_available: bool = Field(description="Advisory availability flag")
