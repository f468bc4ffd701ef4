"""Calendar date helpers and clock abstractions."""

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

DateInput = date | datetime | str


class Clock(Protocol):
    """Source of the current moment."""

    def now(self) -> datetime:
        """Return the current timezone-aware datetime."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the host's wall clock."""

    def now(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(tz=UTC)


def validate_timezone(timezone_name: str) -> str:
    """Return the name unchanged if it is a known IANA timezone.

    Raises ``zoneinfo.ZoneInfoNotFoundError`` otherwise.
    """
    ZoneInfo(timezone_name)
    return timezone_name


def local_date_string(moment: datetime, timezone_name: str | None = None) -> str:
    """Format a moment as ``YYYY-MM-DD`` using local calendar fields.

    Aware moments are converted to ``timezone_name`` first; naive moments are
    taken to already be local time.
    """
    if timezone_name is not None and moment.tzinfo is not None:
        moment = moment.astimezone(ZoneInfo(timezone_name))
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def normalize_date_string(value: DateInput, timezone_name: str | None = None) -> str:
    """Normalize a date-like value to ``YYYY-MM-DD``."""
    if isinstance(value, str):
        if _DATE_PATTERN.fullmatch(value):
            return value
        return local_date_string(datetime.fromisoformat(value), timezone_name)
    if isinstance(value, datetime):
        return local_date_string(value, timezone_name)
    return value.isoformat()
