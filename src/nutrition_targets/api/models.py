"""Pydantic models for target API payloads."""

from datetime import date
from zoneinfo import ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from nutrition_targets.services.dates import validate_timezone


class MacroTargetsRequest(BaseModel):
    """Calorie and macro targets submitted by a client."""

    calories: int = Field(gt=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)


class SaveTargetRequest(MacroTargetsRequest):
    """Targets effective from a date, today when omitted."""

    effective_date: date | None = None


class TimezoneRequest(BaseModel):
    """Timezone change payload."""

    timezone: str

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            return validate_timezone(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc


class DailyTotalsRequest(BaseModel):
    """Consumed totals for a day, today when omitted."""

    day: date | None = None
    calories: float = Field(default=0, ge=0)
    protein_g: float = Field(default=0, ge=0)
    fat_g: float = Field(default=0, ge=0)
    carbs_g: float = Field(default=0, ge=0)
