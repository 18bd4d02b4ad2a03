from .repository import Repository
from .catalog import RoomCatalog, default_room_set
from .availability import AvailabilityOracle
from .ledger import PersistencePolicy, ReservationLedger

__all__ = [
    "Repository",
    "RoomCatalog",
    "default_room_set",
    "AvailabilityOracle",
    "PersistencePolicy",
    "ReservationLedger",
]
