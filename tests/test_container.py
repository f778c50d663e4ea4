"""Tests for configuration loading and container wiring."""

import json
import logging

import pytest

from bus_booking.adapters.clock import FixedClock, SystemClock
from bus_booking.api import BookingDispatcher
from bus_booking.config import AppConfig, get_config, reset_config
from bus_booking.container import Container
from bus_booking.domain.models import AdminPayload
from bus_booking.monitoring import JSONFormatter
from bus_booking.ports.clock import ClockPort
from bus_booking.services import BookingService, BookingState


class TestConfig:
    def test_defaults(self):
        config = get_config()
        assert config.store.snapshot_path is None
        assert config.store.autosave is False
        assert not config.store.persistent
        assert config.observability.level == "INFO"
        assert config.observability.structured is False

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BUS_STORE_SNAPSHOT_PATH", str(tmp_path / "state.json"))
        monkeypatch.setenv("BUS_STORE_AUTOSAVE", "true")
        monkeypatch.setenv("BUS_LOG_LEVEL", "debug")
        monkeypatch.setenv("BUS_LOG_STRUCTURED", "1")
        reset_config()

        config = get_config()
        assert config.store.snapshot_path == tmp_path / "state.json"
        assert config.store.autosave is True
        assert config.store.persistent
        assert config.observability.level == "DEBUG"
        assert config.observability.structured is True

    def test_cached_until_reset(self):
        assert get_config() is get_config()
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestContainer:
    def test_resolve_unregistered(self):
        container = Container(config=AppConfig())
        with pytest.raises(KeyError):
            container.resolve(ClockPort)

    def test_singleton_and_transient(self):
        container = Container(config=AppConfig())
        container.register(ClockPort, lambda: FixedClock())
        assert container.resolve(ClockPort) is container.resolve(ClockPort)

        container.register(ClockPort, lambda: FixedClock(), singleton=False)
        assert container.resolve(ClockPort) is not container.resolve(ClockPort)

    def test_default_bindings_in_memory(self):
        container = Container.create_default(AppConfig())

        service = container.resolve(BookingService)
        assert isinstance(service.clock, SystemClock)
        assert service.state is container.resolve(BookingState)
        assert service.on_commit is None
        assert container.resolve(BookingDispatcher).service is service

    def test_snapshot_restored_and_saved_on_shutdown(self, monkeypatch, tmp_path):
        path = tmp_path / "state.json"
        monkeypatch.setenv("BUS_STORE_SNAPSHOT_PATH", str(path))
        reset_config()

        first = Container.create_default()
        first.resolve(BookingService).create_admin(
            AdminPayload(name="Jane", email="jane@example.com")
        )
        assert not path.exists()
        first.shutdown()
        assert json.loads(path.read_text(encoding="utf-8"))["id_counter"] == 1

        second = Container.create_default()
        service = second.resolve(BookingService)
        assert service.get_admin(1).email == "jane@example.com"
        admin = service.create_admin(AdminPayload(name="Ann", email="ann@example.com"))
        assert admin.id == 2

    def test_autosave(self, monkeypatch, tmp_path):
        path = tmp_path / "state.json"
        monkeypatch.setenv("BUS_STORE_SNAPSHOT_PATH", str(path))
        monkeypatch.setenv("BUS_STORE_AUTOSAVE", "true")
        reset_config()

        container = Container.create_default()
        container.resolve(BookingService).create_admin(
            AdminPayload(name="Jane", email="jane@example.com")
        )

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [a["email"] for a in data["admins"]] == ["jane@example.com"]

    def test_shutdown_runs_hooks_once(self):
        container = Container(config=AppConfig())
        calls = []
        container.on_shutdown(lambda: calls.append("a"))
        container.on_shutdown(lambda: calls.append("b"))

        container.shutdown()
        container.shutdown()

        assert calls == ["b", "a"]

    def test_logging_configured_from_settings(self, monkeypatch):
        monkeypatch.setenv("BUS_LOG_LEVEL", "warning")
        monkeypatch.setenv("BUS_LOG_STRUCTURED", "true")
        reset_config()

        Container.create_default()

        root = logging.getLogger()
        (handler,) = [h for h in root.handlers if h.get_name() == "bus_booking"]
        assert isinstance(handler.formatter, JSONFormatter)
        assert root.level == logging.WARNING
