"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from nutrition_targets.config import Settings
from nutrition_targets.containers import AppContainer, build_container
from nutrition_targets.services.dates import Clock
from nutrition_targets.services.targets import CalorieTargetStore, TargetStorage


@dataclass
class FixedClock(Clock):
    """Clock pinned to a moment that tests can move."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 3, 15, 12, 0, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass
class InMemoryTargetStorage(TargetStorage):
    """In-memory snapshot storage for tests."""

    snapshots: dict[str, dict[str, object]] = field(default_factory=dict)
    saves: int = 0

    def load(self, key: str) -> dict[str, object] | None:
        return self.snapshots.get(key)

    def save(self, key: str, snapshot: dict[str, object]) -> None:
        self.saves += 1
        self.snapshots[key] = snapshot


@dataclass
class FailingTargetStorage(TargetStorage):
    """Storage whose writes always fail."""

    def load(self, key: str) -> dict[str, object] | None:
        return None

    def save(self, key: str, snapshot: dict[str, object]) -> None:
        raise OSError("disk full")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def storage() -> InMemoryTargetStorage:
    return InMemoryTargetStorage()


@pytest.fixture
def store(storage: InMemoryTargetStorage, clock: FixedClock) -> CalorieTargetStore:
    return CalorieTargetStore(storage=storage, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token="admin-token", initialize_default_target=False)


@pytest.fixture
def container(
    settings: Settings, storage: InMemoryTargetStorage, clock: FixedClock
) -> AppContainer:
    return build_container(settings, storage=storage, clock=clock)
