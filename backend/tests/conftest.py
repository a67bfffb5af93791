"""Shared fixtures for VaultForge tests."""

from datetime import UTC, datetime, timedelta

import pytest

from vaultforge.events import EventBus, EventRegistry
from vaultforge.hooks import CascadeHooks, HookRegistry
from vaultforge.persistence import DatabaseConfig, create_engine_from_config, create_schema
from vaultforge.services import UserContext
from vaultforge.vault import Vault, initialize


class FrozenClock:
    """Deterministic clock for timestamp assertions."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 60) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture(autouse=True)
def clear_registries():
    """Clear process-wide registries before and after each test."""
    HookRegistry.clear()
    EventRegistry.clear()
    CascadeHooks._active = None
    yield
    HookRegistry.clear()
    EventRegistry.clear()
    CascadeHooks._active = None


@pytest.fixture
def engine():
    """In-memory database with every table created."""
    engine = create_engine_from_config(DatabaseConfig(url="sqlite://"))
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def system_vault(engine, bus):
    """Registers built-in events and cascade hooks; returns the system vault."""
    return initialize(engine, bus)


@pytest.fixture
def alice(engine, bus, clock, system_vault):
    return Vault(engine, UserContext(user_id="alice"), event_bus=bus, clock=clock)


@pytest.fixture
def bob(engine, bus, clock, system_vault):
    return Vault(engine, UserContext(user_id="bob"), event_bus=bus, clock=clock)
