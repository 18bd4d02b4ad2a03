from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Any, Callable, List, Set

from innkeeper.adapters.base import ReservationAdapter
from innkeeper.exceptions import (
    DatabaseError,
    InvalidDateRangeError,
    ReservationError,
    ReservationNotFoundError,
    RoomUnavailableError,
    UnsavedChangeError,
)
from innkeeper.models import (
    ConfirmationResult,
    ConfirmationStatus,
    Reservation,
    generate_reservation_id,
    nights_between,
    to_money,
)
from innkeeper.services.availability import AvailabilityOracle
from innkeeper.services.catalog import RoomCatalog
from innkeeper.services.repository import Repository, normalize_key

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 100


class PersistencePolicy(str, Enum):
    IMMEDIATE = "immediate"  # save after each committed mutation
    MANUAL = "manual"        # caller decides when to flush()


class ReservationLedger:
    """
    Creates, confirms and cancels reservations.

    Every mutation and every read runs under one re-entrant lock, so the
    availability check and the insert in ``book`` are a single critical
    section and readers always get whole records (copies).

    With ``PersistencePolicy.IMMEDIATE`` the full reservation set is saved
    before a mutating call returns. A failed save leaves the in-memory change
    in place, marks the ledger dirty and raises ``UnsavedChangeError`` carrying
    the call's result; the next successful save (any mutation or
    ``flush()``) writes everything.
    """

    def __init__(
        self,
        adapter: ReservationAdapter,
        catalog: RoomCatalog,
        policy: PersistencePolicy = PersistencePolicy.IMMEDIATE,
        id_factory: Callable[[], str] = generate_reservation_id,
    ):
        self.adapter = adapter
        self.catalog = catalog
        self.policy = PersistencePolicy(policy)
        self._id_factory = id_factory
        self._reservations: Repository[Reservation] = Repository(key_of=lambda res: res.reservation_id)
        self._issued_ids: Set[str] = set()
        self._dirty = False
        self._lock = threading.RLock()
        self.oracle = AvailabilityOracle(catalog, self.list_all)

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def load(self) -> None:
        try:
            loaded = self.adapter.load_reservations()
        except DatabaseError as e:
            logger.warning(f"Could not load reservations, starting with an empty ledger: {e}")
            loaded = []

        with self._lock:
            self._reservations.clear()
            for res in loaded:
                if res.reservation_id in self._reservations:
                    logger.warning(f"Skipping duplicate reservation {res.reservation_id}")
                    continue
                if not self.catalog.has_room(res.room_id):
                    logger.warning(f"Reservation {res.reservation_id} refers to unknown room {res.room_id}")
                self._reservations.upsert(res)
                self._issued_ids.add(normalize_key(res.reservation_id))
            self._dirty = False
            logger.info(f"Loaded {len(self._reservations)} reservations")

    def flush(self) -> None:
        """Saves the full reservation set now."""
        with self._lock:
            self._save()

    @property
    def is_dirty(self) -> bool:
        with self._lock:
            return self._dirty

    def _save(self) -> None:
        try:
            self.adapter.save_reservations(self._reservations.list())
        except DatabaseError as e:
            self._dirty = True
            logger.error(f"Error saving reservations: {e}")
            raise
        self._dirty = False

    def _commit(self, result: Any) -> None:
        if self.policy is PersistencePolicy.IMMEDIATE:
            try:
                self._save()
            except DatabaseError as e:
                raise UnsavedChangeError(f"Change applied but not saved: {e}", result=result) from e
        else:
            self._dirty = True

    def _new_reservation_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if normalize_key(candidate) not in self._issued_ids:
                self._issued_ids.add(normalize_key(candidate))
                return candidate
        raise ReservationError("Could not generate a unique reservation ID")

    # ------------------------------------
    # Mutations
    # ------------------------------------
    def book(self, room_id: str, guest_name: str, check_in: date, check_out: date) -> Reservation:
        """
        Creates a pending reservation priced at nights * nightly rate.

        Raises:
            RoomNotFoundError: unknown room.
            InvalidDateRangeError: check-out is not after check-in.
            RoomUnavailableError: a confirmed reservation overlaps the range.
            UnsavedChangeError: the reservation was created but could not be saved.
        """
        with self._lock:
            room = self.catalog.find_room(room_id)

            guest_name = (guest_name or "").strip()
            if not guest_name:
                raise ReservationError("Guest name cannot be empty.")

            if check_out <= check_in:
                raise InvalidDateRangeError("Check-out date must be after check-in date.")

            if not self.oracle.is_available(room.room_id, check_in, check_out):
                raise RoomUnavailableError(room.room_id, check_in, check_out)

            nights = nights_between(check_in, check_out)
            reservation = Reservation(
                reservation_id=self._new_reservation_id(),
                room_id=room.room_id,
                guest_name=guest_name,
                check_in=check_in,
                check_out=check_out,
                total_price=room.price_per_night * nights,
            )
            self._reservations.upsert(reservation)
            logger.info(
                f"Reservation {reservation.reservation_id} created for room {room.room_id} "
                f"({nights} nights, total {reservation.total_price})"
            )
            created = replace(reservation)
            self._commit(created)
            return created

    def confirm(self, reservation_id: str, amount_paid: Any) -> ConfirmationResult:
        """
        Simulated payment. Enough money confirms the reservation and reports
        the change; too little is reported in the result and leaves it pending.
        Confirming twice is a no-op that reports ALREADY_CONFIRMED.

        A pending reservation whose dates were taken by another confirmed
        reservation in the meantime cannot be confirmed (RoomUnavailableError).
        """
        amount = to_money(amount_paid)
        if amount < 0:
            raise ReservationError("Amount paid cannot be negative.")

        with self._lock:
            reservation = self._reservations.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)

            if reservation.is_confirmed:
                logger.info(f"Reservation {reservation.reservation_id} is already confirmed")
                return ConfirmationResult(
                    reservation_id=reservation.reservation_id,
                    status=ConfirmationStatus.ALREADY_CONFIRMED,
                    amount_due=reservation.total_price,
                )

            if amount < reservation.total_price:
                logger.warning(
                    f"Payment failed for reservation {reservation.reservation_id}: "
                    f"required {reservation.total_price}, paid {amount}"
                )
                return ConfirmationResult(
                    reservation_id=reservation.reservation_id,
                    status=ConfirmationStatus.INSUFFICIENT_PAYMENT,
                    amount_due=reservation.total_price,
                    amount_paid=amount,
                )

            if not self.oracle.is_available(
                reservation.room_id,
                reservation.check_in,
                reservation.check_out,
                exclude_reservation_id=reservation.reservation_id,
            ):
                raise RoomUnavailableError(reservation.room_id, reservation.check_in, reservation.check_out)

            confirmed = replace(reservation, is_confirmed=True)
            self._reservations.upsert(confirmed)
            logger.info(f"Reservation {confirmed.reservation_id} confirmed")
            result = ConfirmationResult(
                reservation_id=confirmed.reservation_id,
                status=ConfirmationStatus.CONFIRMED,
                amount_due=confirmed.total_price,
                amount_paid=amount,
                change=amount - confirmed.total_price,
            )
            self._commit(result)
            return result

    def cancel(self, reservation_id: str) -> bool:
        """Removes the reservation whatever its state. False if it does not exist."""
        with self._lock:
            removed = self._reservations.remove(reservation_id)
            if removed is None:
                logger.warning(f"Reservation with ID {reservation_id} not found")
                return False
            logger.info(f"Reservation {removed.reservation_id} has been cancelled")
            self._commit(True)
            return True

    # ------------------------------------
    # Queries
    # ------------------------------------
    def get_by_id(self, reservation_id: str) -> Reservation:
        with self._lock:
            reservation = self._reservations.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            return replace(reservation)

    def list_all(self) -> List[Reservation]:
        """All reservations in creation order."""
        with self._lock:
            return [replace(res) for res in self._reservations.list()]

    def list_for_room(self, room_id: str) -> List[Reservation]:
        key = normalize_key(room_id)
        return [res for res in self.list_all() if normalize_key(res.room_id) == key]
