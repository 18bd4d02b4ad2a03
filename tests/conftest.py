import os
import sys
from decimal import Decimal
from typing import Optional

import pytest

# Add the project src directory to PYTHONPATH for tests
CURRENT_DIR = os.path.dirname(__file__)
SRC_PATH = os.path.abspath(os.path.join(CURRENT_DIR, "..", "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from innkeeper.adapters import MemoryReservationAdapter  # noqa: E402
from innkeeper.base_config import InnkeeperConfig  # noqa: E402
from innkeeper.config import set_config  # noqa: E402
from innkeeper.models import Room, RoomCategory  # noqa: E402
from innkeeper.services import PersistencePolicy, ReservationLedger, RoomCatalog  # noqa: E402
from innkeeper.tools import set_ledger  # noqa: E402


class InMemoryConfig(InnkeeperConfig):
    """Test config backed by a MemoryReservationAdapter."""

    def __init__(self, allow_past: bool = False, policy: PersistencePolicy = PersistencePolicy.IMMEDIATE):
        self.adapter = MemoryReservationAdapter()
        self._allow_past = allow_past
        self._policy = policy

    def get_database_url(self) -> str:
        return "memory://"

    def get_telegram_bot_token(self) -> Optional[str]:
        return "test-token"

    def create_adapter(self) -> MemoryReservationAdapter:
        return self.adapter

    def get_hotel_display_name(self) -> str:
        return "Test Hotel"

    def get_persistence_policy(self) -> PersistencePolicy:
        return self._policy

    def allow_past_check_in(self) -> bool:
        return self._allow_past


def make_ledger(rooms=None, adapter: Optional[MemoryReservationAdapter] = None, **kwargs) -> ReservationLedger:
    """Catalog plus ledger over an in-memory adapter, both loaded."""
    adapter = adapter or MemoryReservationAdapter(rooms=rooms or [])
    catalog = RoomCatalog(adapter)
    catalog.load()
    ledger = ReservationLedger(adapter, catalog, **kwargs)
    ledger.load()
    return ledger


@pytest.fixture
def room_101() -> Room:
    return Room("101", RoomCategory.STANDARD, Decimal("100.00"))


@pytest.fixture
def tool_env():
    """Installs an in-memory config and ledger for the tool functions."""
    config = InMemoryConfig()
    set_config(config)
    ledger = config.create_ledger()
    set_ledger(ledger)
    try:
        yield config, ledger
    finally:
        set_ledger(None)
        set_config(None)
