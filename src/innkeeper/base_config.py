"""
Base configuration abstractions for Innkeeper.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from innkeeper.adapters.base import ReservationAdapter
from innkeeper.models import Room
from innkeeper.services import PersistencePolicy, ReservationLedger, RoomCatalog, default_room_set


class InnkeeperConfig(ABC):
    """Abstract configuration contract for the engine and its front-ends."""

    @abstractmethod
    def get_database_url(self) -> str: pass

    @abstractmethod
    def get_telegram_bot_token(self) -> Optional[str]: pass

    @abstractmethod
    def create_adapter(self) -> ReservationAdapter: pass

    def get_hotel_display_name(self) -> str: return "Innkeeper Hotel"
    def get_persistence_policy(self) -> PersistencePolicy: return PersistencePolicy.IMMEDIATE
    def allow_past_check_in(self) -> bool: return False
    def get_log_level(self) -> str: return "INFO"

    def get_default_rooms(self) -> List[Room]:
        """Rooms seeded on first run, when storage holds none."""
        return default_room_set()

    def create_ledger(self) -> ReservationLedger:
        """Builds the adapter, loads the catalog (seeding it if empty) and the ledger."""
        adapter = self.create_adapter()
        policy = self.get_persistence_policy()
        catalog = RoomCatalog(
            adapter,
            default_rooms=self.get_default_rooms(),
            autosave=policy is PersistencePolicy.IMMEDIATE,
        )
        catalog.load()
        ledger = ReservationLedger(adapter, catalog, policy=policy)
        ledger.load()
        return ledger
