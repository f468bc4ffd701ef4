"""Domain models for versioned calorie targets."""

from dataclasses import dataclass
from datetime import datetime
from uuid import NAMESPACE_URL, UUID, uuid5


@dataclass(frozen=True)
class TargetVersion:
    """Nutrition targets that apply from ``effective_from`` onwards."""

    id: UUID
    effective_from: str
    target_calories: int
    target_protein: float | None
    target_carbs: float | None
    target_fats: float | None
    created_at: datetime


@dataclass(frozen=True)
class TargetSnapshot:
    """Full persisted state of the target store."""

    versions: tuple[TargetVersion, ...]
    timezone: str


def version_to_dict(version: TargetVersion) -> dict[str, object]:
    """Serialize a version into a JSON-ready dict."""
    return {
        "id": str(version.id),
        "effective_from": version.effective_from,
        "target_calories": version.target_calories,
        "target_protein": version.target_protein,
        "target_carbs": version.target_carbs,
        "target_fats": version.target_fats,
        "created_at": version.created_at.isoformat(),
    }


def version_from_dict(row: dict[str, object]) -> TargetVersion:
    """Parse a stored version row."""
    calories = row.get("target_calories", row.get("target_kcal"))
    created_raw = row.get("created_at")
    return TargetVersion(
        id=_parse_id(row.get("id")),
        effective_from=str(row["effective_from"]),
        target_calories=_calories(calories),
        target_protein=_optional_float(row.get("target_protein")),
        target_carbs=_optional_float(row.get("target_carbs")),
        target_fats=_optional_float(row.get("target_fats")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else datetime.min
        ),
    )


def snapshot_to_dict(snapshot: TargetSnapshot) -> dict[str, object]:
    """Serialize the whole store state."""
    return {
        "versions": [version_to_dict(version) for version in snapshot.versions],
        "timezone": snapshot.timezone,
    }


def snapshot_from_dict(
    payload: dict[str, object], default_timezone: str
) -> TargetSnapshot:
    """Parse a persisted snapshot.

    Accepts both the plain ``{"versions": [...], "timezone": ...}`` form and
    the ``{"state": {...}, "version": n}`` envelope written by the mobile
    client's storage middleware.
    """
    state = payload.get("state")
    if isinstance(state, dict):
        payload = state
    rows = payload.get("versions") or []
    versions = sorted(
        (version_from_dict(row) for row in rows if isinstance(row, dict)),
        key=lambda version: version.effective_from,
    )
    timezone = payload.get("timezone")
    return TargetSnapshot(
        versions=tuple(versions),
        timezone=timezone if isinstance(timezone, str) and timezone else default_timezone,
    )


def _parse_id(raw: object) -> UUID:
    # Mobile-written ids look like "2024-01-01-1704067200000"; map them to a
    # stable UUID so they survive repeated loads.
    if isinstance(raw, UUID):
        return raw
    text = str(raw)
    try:
        return UUID(text)
    except ValueError:
        return uuid5(NAMESPACE_URL, f"calorie-target:{text}")


def _calories(raw: object) -> int:
    # Stored numbers are kept as written; only non-numeric values are coerced.
    if isinstance(raw, int | float) and not isinstance(raw, bool):
        return raw  # type: ignore[return-value]
    return int(raw or 0)


def _optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    return float(raw)
