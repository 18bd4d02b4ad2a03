from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from innkeeper.models.money import to_money

DATE_FORMAT = "%Y-%m-%d"


def generate_reservation_id() -> str:
    """Short opaque token: first 8 hex chars of a UUID4, upper-cased."""
    return uuid.uuid4().hex[:8].upper()


def parse_date(value: Any) -> date:
    """Parses a YYYY-MM-DD string; date objects pass through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip(), DATE_FORMAT).date()


def nights_between(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def ranges_overlap(a_in: date, a_out: date, b_in: date, b_out: date) -> bool:
    """Half-open [in, out) intervals overlap iff a_in < b_out and a_out > b_in."""
    return a_in < b_out and a_out > b_in


@dataclass
class Reservation:
    """A guest's claim on a room over [check_in, check_out)."""

    # Required fields
    reservation_id: str
    room_id: str
    guest_name: str
    check_in: date
    check_out: date
    total_price: Decimal

    # State
    is_confirmed: bool = field(default=False)
    created_at: Optional[datetime] = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.check_in = parse_date(self.check_in)
        self.check_out = parse_date(self.check_out)
        self.total_price = to_money(self.total_price)

    # ------------------------------------
    # Methods
    # ------------------------------------

    @property
    def nights(self) -> int:
        return nights_between(self.check_in, self.check_out)

    @property
    def status_label(self) -> str:
        return "Confirmed" if self.is_confirmed else "Pending Payment"

    def is_pending(self) -> bool:
        return not self.is_confirmed

    def overlaps(self, check_in: date, check_out: date) -> bool:
        return ranges_overlap(self.check_in, self.check_out, check_in, check_out)

    def describe(self) -> str:
        return (
            f"Reservation ID: {self.reservation_id}\n"
            f"  Room Number: {self.room_id}\n"
            f"  Guest Name: {self.guest_name}\n"
            f"  Check-in Date: {self.check_in.strftime(DATE_FORMAT)}\n"
            f"  Check-out Date: {self.check_out.strftime(DATE_FORMAT)}\n"
            f"  Total Price: ${self.total_price:.2f}\n"
            f"  Status: {self.status_label}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "reservation_id": self.reservation_id,
            "room_id": self.room_id,
            "guest_name": self.guest_name,
            "check_in": self.check_in.strftime(DATE_FORMAT),
            "check_out": self.check_out.strftime(DATE_FORMAT),
            "nights": self.nights,
            "total_price": str(self.total_price),
            "is_confirmed": self.is_confirmed,
            "status": self.status_label,
            "created_at": None,
        }
        if isinstance(self.created_at, datetime):
            data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Reservation:
        data = data.copy()
        created_at_str = data.get("created_at")
        if created_at_str and isinstance(created_at_str, str):
            try:
                data["created_at"] = datetime.fromisoformat(created_at_str)
            except ValueError:
                data["created_at"] = None
        if isinstance(data.get("is_confirmed"), str):
            data["is_confirmed"] = data["is_confirmed"].strip().lower() in ("true", "1", "yes")
        elif "is_confirmed" in data:
            data["is_confirmed"] = bool(data["is_confirmed"])

        field_names = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in field_names}

        return cls(**filtered_data)


class ConfirmationStatus(str, Enum):
    CONFIRMED = "confirmed"
    ALREADY_CONFIRMED = "already_confirmed"
    INSUFFICIENT_PAYMENT = "insufficient_payment"


@dataclass(frozen=True)
class ConfirmationResult:
    """Outcome of a payment attempt. Insufficient payment is a result, not an error."""

    reservation_id: str
    status: ConfirmationStatus
    amount_due: Decimal
    amount_paid: Optional[Decimal] = None
    change: Optional[Decimal] = None

    @property
    def success(self) -> bool:
        return self.status is not ConfirmationStatus.INSUFFICIENT_PAYMENT

    @property
    def shortfall(self) -> Decimal:
        if self.status is ConfirmationStatus.INSUFFICIENT_PAYMENT and self.amount_paid is not None:
            return self.amount_due - self.amount_paid
        return Decimal("0.00")

    def describe(self) -> str:
        if self.status is ConfirmationStatus.ALREADY_CONFIRMED:
            return f"Reservation {self.reservation_id} is already confirmed."
        if self.status is ConfirmationStatus.CONFIRMED:
            return (
                f"Payment successful for Reservation ID {self.reservation_id}. "
                f"Amount paid: ${self.amount_paid:.2f}. Change: ${self.change:.2f}"
            )
        return (
            f"Payment failed for Reservation ID {self.reservation_id}. Insufficient amount. "
            f"Required: ${self.amount_due:.2f}, Paid: ${self.amount_paid:.2f}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reservation_id": self.reservation_id,
            "status": self.status.value,
            "success": self.success,
            "amount_due": str(self.amount_due),
            "amount_paid": None if self.amount_paid is None else str(self.amount_paid),
            "change": None if self.change is None else str(self.change),
            "message": self.describe(),
        }
