"""Versioned calorie target store."""

import logging
import threading
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfoNotFoundError

from nutrition_targets.domain.targets import (
    TargetSnapshot,
    TargetVersion,
    snapshot_from_dict,
    snapshot_to_dict,
)
from nutrition_targets.services.dates import (
    Clock,
    DateInput,
    local_date_string,
    normalize_date_string,
    validate_timezone,
)

STORAGE_KEY = "calorie-target-storage"

_logger = logging.getLogger(__name__)


class TargetStorage(Protocol):
    """Durable key-value persistence for store snapshots."""

    def load(self, key: str) -> dict[str, object] | None:
        """Return the stored snapshot for a key, if present."""

    def save(self, key: str, snapshot: dict[str, object]) -> None:
        """Replace the stored snapshot for a key."""


@dataclass
class CalorieTargetStore:
    """History of dated calorie targets with point-in-time lookup.

    Versions are kept sorted by ``effective_from`` with at most one version
    per date. Writes swap in a new tuple of versions; lists returned
    earlier are unaffected.
    """

    storage: TargetStorage
    clock: Clock
    timezone: str = "UTC"
    storage_key: str = STORAGE_KEY
    _versions: tuple[TargetVersion, ...] = field(default=(), init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    @classmethod
    def load(
        cls,
        storage: TargetStorage,
        clock: Clock,
        default_timezone: str = "UTC",
        storage_key: str = STORAGE_KEY,
    ) -> "CalorieTargetStore":
        """Create a store rehydrated from durable storage."""
        store = cls(
            storage=storage,
            clock=clock,
            timezone=default_timezone,
            storage_key=storage_key,
        )
        store.rehydrate()
        return store

    def rehydrate(self) -> None:
        """Replace in-memory state with the persisted snapshot, if any."""
        payload = self.storage.load(self.storage_key)
        if payload is None:
            return
        snapshot = snapshot_from_dict(payload, default_timezone=self.timezone)
        timezone_name = snapshot.timezone
        try:
            validate_timezone(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            _logger.warning(
                "Ignoring unknown stored timezone %s, using %s",
                timezone_name,
                self.timezone,
            )
            timezone_name = self.timezone
        with self._lock:
            self._versions = snapshot.versions
            self.timezone = timezone_name
        _logger.info(
            "Loaded calorie targets: versions=%s timezone=%s",
            len(snapshot.versions),
            self.timezone,
        )

    def today(self) -> str:
        """Return today's date in the configured timezone."""
        return local_date_string(self.clock.now(), self.timezone)

    def save_target(  # noqa: PLR0913
        self,
        calories: int,
        protein: float | None = None,
        carbs: float | None = None,
        fats: float | None = None,
        effective_date: DateInput | None = None,
    ) -> TargetVersion:
        """Store targets effective from a date, replacing that date's version."""
        with self._lock:
            effective_from = (
                normalize_date_string(effective_date, self.timezone)
                if effective_date is not None
                else self.today()
            )
            version = self._new_version(effective_from, calories, protein, carbs, fats)
            versions = list(self._versions)
            replaced = False
            for index, existing in enumerate(versions):
                if existing.effective_from == effective_from:
                    versions[index] = version
                    replaced = True
                    break
            if not replaced:
                versions.append(version)
            versions.sort(key=lambda item: item.effective_from)
            self._versions = tuple(versions)
            self._persist()
        _logger.info(
            "Saved calorie target: effective_from=%s calories=%s replaced=%s",
            effective_from,
            calories,
            replaced,
        )
        return version

    def get_target_for_date(self, day: DateInput) -> TargetVersion | None:
        """Return the version in force on ``day``, or None before any version."""
        day_str = normalize_date_string(day, self.timezone)
        versions = self._versions
        index = bisect_right(versions, day_str, key=lambda item: item.effective_from)
        if index == 0:
            return None
        return versions[index - 1]

    def get_all_versions(self) -> list[TargetVersion]:
        """Return every version, oldest first."""
        return list(self._versions)

    def snapshot(self) -> TargetSnapshot:
        """Return the current state as an immutable snapshot."""
        return TargetSnapshot(versions=self._versions, timezone=self.timezone)

    def set_timezone(self, timezone_name: str) -> None:
        """Change the timezone used for future "today" computations."""
        validate_timezone(timezone_name)
        with self._lock:
            self.timezone = timezone_name
            self._persist()

    def initialize_default(
        self,
        calories: int,
        protein: float | None = None,
        carbs: float | None = None,
        fats: float | None = None,
    ) -> bool:
        """Seed a version dated today when the store is empty.

        Returns True when the default was applied.
        """
        with self._lock:
            if self._versions:
                return False
            effective_from = self.today()
            self._versions = (
                self._new_version(effective_from, calories, protein, carbs, fats),
            )
            self._persist()
        _logger.info(
            "Initialized default calorie target: effective_from=%s calories=%s",
            effective_from,
            calories,
        )
        return True

    def _new_version(  # noqa: PLR0913
        self,
        effective_from: str,
        calories: int,
        protein: float | None,
        carbs: float | None,
        fats: float | None,
    ) -> TargetVersion:
        return TargetVersion(
            id=uuid4(),
            effective_from=effective_from,
            target_calories=calories,
            target_protein=protein,
            target_carbs=carbs,
            target_fats=fats,
            created_at=self.clock.now(),
        )

    def _persist(self) -> None:
        """Write the full snapshot; failures leave memory ahead of storage."""
        try:
            self.storage.save(self.storage_key, snapshot_to_dict(self.snapshot()))
        except Exception:
            _logger.exception(
                "Failed to persist calorie targets: key=%s", self.storage_key
            )
            raise
