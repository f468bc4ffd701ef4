"""Daily progress against the calorie target in force."""

from dataclasses import dataclass, field

from nutrition_targets.domain.progress import (
    DailyProgress,
    DailyTotals,
    MacroProgress,
    MacroTargets,
)
from nutrition_targets.services.targets import CalorieTargetStore

FALLBACK_TARGETS = MacroTargets(calories=2000, protein_g=150, carbs_g=200, fats_g=65)


@dataclass
class TargetProgressService:
    """Service combining consumed totals with resolved targets."""

    store: CalorieTargetStore
    fallback: MacroTargets = field(default=FALLBACK_TARGETS)

    def summarize(self, totals: DailyTotals) -> DailyProgress:
        """Return per-macro progress for the totals' day."""
        target = self.store.get_target_for_date(totals.day)
        if target is None:
            calories = self.fallback.calories
            protein = self.fallback.protein_g
            carbs = self.fallback.carbs_g
            fats = self.fallback.fats_g
        else:
            calories = target.target_calories or self.fallback.calories
            protein = _or_fallback(target.target_protein, self.fallback.protein_g)
            carbs = _or_fallback(target.target_carbs, self.fallback.carbs_g)
            fats = _or_fallback(target.target_fats, self.fallback.fats_g)
        return DailyProgress(
            day=totals.day,
            target=target,
            setup_required=target is None,
            calories=_progress(totals.calories, calories),
            protein=_progress(totals.protein_g, protein),
            carbs=_progress(totals.carbs_g, carbs),
            fats=_progress(totals.fat_g, fats),
        )


def _or_fallback(value: float | None, fallback: float) -> float:
    # Zero is treated as unset.
    return value if value else fallback


def _progress(consumed: float, target: float) -> MacroProgress:
    percent = min(consumed / target * 100, 100.0) if target > 0 else 0.0
    return MacroProgress(
        consumed=consumed,
        target=target,
        remaining=max(target - consumed, 0.0),
        percent=round(percent, 1),
    )
