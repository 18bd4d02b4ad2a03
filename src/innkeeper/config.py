from __future__ import annotations

import importlib
import logging
import os
from typing import Optional, Type

from dotenv import load_dotenv

from innkeeper.base_config import InnkeeperConfig
from innkeeper.adapters.base import ReservationAdapter
from innkeeper.adapters.memory_adapter import MemoryReservationAdapter
from innkeeper.adapters.sqlite_adapter import SQLiteReservationAdapter
from innkeeper.adapters.text_adapter import TextFileReservationAdapter
from innkeeper.exceptions import AdapterError, ConfigurationError
from innkeeper.services import PersistencePolicy

load_dotenv()

DEFAULT_CONFIG_CLASS = "innkeeper.config.EnvironmentInnkeeperConfig"
CONFIG_ENV_KEY = "INNKEEPER_CONFIG"

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off", "")

logger = logging.getLogger(__name__)


def _import_config_class(path: str) -> Type[InnkeeperConfig]:
    try:
        module_path, class_name = path.rsplit(".", 1)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid config path '{path}'") from exc

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import module '{module_path}'") from exc

    try:
        cls = getattr(module, class_name)
    except AttributeError as exc:
        raise ConfigurationError(f"Config class '{class_name}' not found in '{module_path}'") from exc

    if not isinstance(cls, type) or not issubclass(cls, InnkeeperConfig):
        raise ConfigurationError(f"{path} is not a subclass of InnkeeperConfig")

    return cls


class EnvironmentInnkeeperConfig(InnkeeperConfig):
    """Default configuration that reads from environment variables."""

    def __init__(self) -> None:
        self._env = os.environ

    def get_database_url(self) -> str:
        return self._env.get("DATABASE_URL", "sqlite:///innkeeper.db")

    def get_telegram_bot_token(self) -> Optional[str]:
        return self._env.get("TELEGRAM_BOT_TOKEN")

    def get_hotel_display_name(self) -> str:
        return self._env.get("HOTEL_NAME", super().get_hotel_display_name())

    def get_log_level(self) -> str:
        return self._env.get("LOG_LEVEL", "INFO").upper()

    def get_persistence_policy(self) -> PersistencePolicy:
        raw = self._env.get("INNKEEPER_PERSISTENCE", PersistencePolicy.IMMEDIATE.value).strip().lower()
        try:
            return PersistencePolicy(raw)
        except ValueError as exc:
            valid = ", ".join(p.value for p in PersistencePolicy)
            raise ConfigurationError(f"Invalid INNKEEPER_PERSISTENCE '{raw}'. Expected one of: {valid}") from exc

    def allow_past_check_in(self) -> bool:
        raw = self._env.get("INNKEEPER_ALLOW_PAST_CHECKIN", "").strip().lower()
        if raw in TRUE_VALUES:
            return True
        if raw in FALSE_VALUES:
            return False
        raise ConfigurationError(f"Invalid INNKEEPER_ALLOW_PAST_CHECKIN '{raw}'")

    def create_adapter(self) -> ReservationAdapter:
        """Picks the adapter from the DATABASE_URL scheme and initializes it."""
        db_url = self.get_database_url()
        try:
            if db_url.startswith("sqlite:///"):
                adapter: ReservationAdapter = SQLiteReservationAdapter(db_url)
            elif db_url.startswith("file://"):
                adapter = TextFileReservationAdapter(db_url)
            elif db_url.startswith("memory://"):
                adapter = MemoryReservationAdapter()
            else:
                raise ConfigurationError(
                    f"Unsupported DATABASE_URL '{db_url}'. Use sqlite:///, file:// or memory://"
                )
        except OSError as e:
            raise AdapterError(f"Could not prepare storage for {db_url}: {e}") from e
        adapter.init()
        logger.info(f"Using {type(adapter).__name__} for {db_url}")
        return adapter


_CONFIG: Optional[InnkeeperConfig] = None


def get_config() -> InnkeeperConfig:
    global _CONFIG
    if _CONFIG is None:
        class_path = os.getenv(CONFIG_ENV_KEY, DEFAULT_CONFIG_CLASS)
        cls = _import_config_class(class_path)
        _CONFIG = cls()
    return _CONFIG


def set_config(config: Optional[InnkeeperConfig]) -> None:
    global _CONFIG
    _CONFIG = config
