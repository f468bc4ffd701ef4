"""Domain models for daily progress against targets."""

from dataclasses import dataclass
from datetime import date

from nutrition_targets.domain.targets import TargetVersion


@dataclass(frozen=True)
class DailyTotals:
    """Consumed macros for a single day."""

    day: date
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class MacroTargets:
    """Fallback targets used when no version applies."""

    calories: int
    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class MacroProgress:
    """Consumption of one quantity against its target."""

    consumed: float
    target: float
    remaining: float
    percent: float


@dataclass(frozen=True)
class DailyProgress:
    """Progress for a day, resolved against the target in force that day."""

    day: date
    target: TargetVersion | None
    setup_required: bool
    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fats: MacroProgress
