from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from innkeeper.models.money import to_money


class RoomCategory(str, Enum):
    STANDARD = "STANDARD"
    DELUXE = "DELUXE"
    SUITE = "SUITE"

    @classmethod
    def from_string(cls, value: str) -> RoomCategory:
        """Case-insensitive lookup ('deluxe' -> DELUXE)."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError as exc:
            valid = ", ".join(c.label for c in cls)
            raise ValueError(f"Unknown room category '{value}'. Valid categories: {valid}") from exc

    @classmethod
    def parse_optional(cls, value: Optional[str]) -> Optional[RoomCategory]:
        if value is None or not str(value).strip():
            return None
        return cls.from_string(value)

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass
class Room:
    """A bookable room in the catalog."""

    # Required fields
    room_id: str
    category: RoomCategory
    price_per_night: Decimal

    # Advisory only; real availability comes from the reservation dates.
    is_available: bool = field(default=True)

    def __post_init__(self) -> None:
        self.room_id = str(self.room_id).strip()
        if not self.room_id:
            raise ValueError("Room ID cannot be empty")
        self.category = RoomCategory.from_string(self.category)
        self.price_per_night = to_money(self.price_per_night)
        if self.price_per_night < 0:
            raise ValueError(f"Room {self.room_id} has a negative price: {self.price_per_night}")

    # ------------------------------------
    # Methods
    # ------------------------------------

    def describe(self) -> str:
        """One-line rendering used by the CLI and Telegram channel."""
        return (
            f"Room No: {self.room_id:<5} | Category: {self.category.label:<8} | "
            f"Price: ${self.price_per_night:<7.2f}/night | "
            f"Available: {'Yes' if self.is_available else 'No'}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "room_id": self.room_id,
            "category": self.category.value,
            "price_per_night": str(self.price_per_night),
            "is_available": self.is_available,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Room:
        field_names = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        if "is_available" in filtered_data:
            filtered_data["is_available"] = _to_bool(filtered_data["is_available"])
        return cls(**filtered_data)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise ValueError(f"Invalid boolean value: {value!r}")
    return bool(value)
