import pytest

from innkeeper.adapters import MemoryReservationAdapter, SQLiteReservationAdapter, TextFileReservationAdapter
from innkeeper.config import EnvironmentInnkeeperConfig, get_config, set_config
from innkeeper.exceptions import ConfigurationError
from innkeeper.services import PersistencePolicy


@pytest.fixture
def env(monkeypatch):
    for key in (
        "DATABASE_URL",
        "INNKEEPER_PERSISTENCE",
        "INNKEEPER_ALLOW_PAST_CHECKIN",
        "HOTEL_NAME",
        "LOG_LEVEL",
        "INNKEEPER_CONFIG",
    ):
        monkeypatch.delenv(key, raising=False)
    set_config(None)
    yield monkeypatch
    set_config(None)


class TestEnvironmentConfig:

    def test_defaults(self, env):
        config = EnvironmentInnkeeperConfig()
        assert config.get_database_url() == "sqlite:///innkeeper.db"
        assert config.get_persistence_policy() is PersistencePolicy.IMMEDIATE
        assert config.allow_past_check_in() is False
        assert config.get_log_level() == "INFO"
        assert config.get_hotel_display_name() == "Innkeeper Hotel"
        assert len(config.get_default_rooms()) == 6

    def test_reads_environment(self, env):
        env.setenv("INNKEEPER_PERSISTENCE", "Manual")
        env.setenv("INNKEEPER_ALLOW_PAST_CHECKIN", "yes")
        env.setenv("HOTEL_NAME", "Grand Budapest")
        env.setenv("LOG_LEVEL", "debug")
        config = EnvironmentInnkeeperConfig()
        assert config.get_persistence_policy() is PersistencePolicy.MANUAL
        assert config.allow_past_check_in() is True
        assert config.get_hotel_display_name() == "Grand Budapest"
        assert config.get_log_level() == "DEBUG"

    def test_invalid_values_raise(self, env):
        env.setenv("INNKEEPER_PERSISTENCE", "sometimes")
        env.setenv("INNKEEPER_ALLOW_PAST_CHECKIN", "maybe")
        config = EnvironmentInnkeeperConfig()
        with pytest.raises(ConfigurationError):
            config.get_persistence_policy()
        with pytest.raises(ConfigurationError):
            config.allow_past_check_in()


class TestCreateAdapter:

    def test_sqlite(self, env, tmp_path):
        env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'hotel.db'}")
        assert isinstance(EnvironmentInnkeeperConfig().create_adapter(), SQLiteReservationAdapter)

    def test_text_files(self, env, tmp_path):
        env.setenv("DATABASE_URL", f"file://{tmp_path / 'data'}")
        adapter = EnvironmentInnkeeperConfig().create_adapter()
        assert isinstance(adapter, TextFileReservationAdapter)
        assert (tmp_path / "data").is_dir()

    def test_memory(self, env):
        env.setenv("DATABASE_URL", "memory://")
        assert isinstance(EnvironmentInnkeeperConfig().create_adapter(), MemoryReservationAdapter)

    def test_unknown_scheme(self, env):
        env.setenv("DATABASE_URL", "postgres://localhost/hotel")
        with pytest.raises(ConfigurationError):
            EnvironmentInnkeeperConfig().create_adapter()

    def test_create_ledger_seeds_catalog(self, env, tmp_path):
        env.setenv("DATABASE_URL", f"file://{tmp_path}")
        ledger = EnvironmentInnkeeperConfig().create_ledger()
        assert len(ledger.catalog.list_rooms()) == 6
        assert (tmp_path / "rooms.txt").read_text(encoding="utf-8").startswith("101,STANDARD,100.00,true")


class TestGetConfig:

    def test_default_class(self, env):
        assert isinstance(get_config(), EnvironmentInnkeeperConfig)

    def test_bad_config_path(self, env):
        env.setenv("INNKEEPER_CONFIG", "innkeeper.config.DoesNotExist")
        with pytest.raises(ConfigurationError):
            get_config()

    def test_non_config_class(self, env):
        env.setenv("INNKEEPER_CONFIG", "innkeeper.models.Room")
        with pytest.raises(ConfigurationError):
            get_config()

    def test_set_config_overrides(self, env):
        config = EnvironmentInnkeeperConfig()
        set_config(config)
        assert get_config() is config
