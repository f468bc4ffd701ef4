"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Request

from nutrition_targets.api.admin import router as admin_router
from nutrition_targets.api.models import (
    DailyTotalsRequest,
    MacroTargetsRequest,
    SaveTargetRequest,
    TimezoneRequest,
)
from nutrition_targets.app_logging import configure_logging
from nutrition_targets.containers import AppContainer
from nutrition_targets.domain.progress import DailyProgress, DailyTotals, MacroProgress
from nutrition_targets.domain.targets import TargetVersion, version_to_dict


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        settings = state_container.settings
        if settings.initialize_default_target:
            applied = state_container.target_store.initialize_default(
                settings.default_target_calories,
                protein=settings.default_target_protein,
                carbs=settings.default_target_carbs,
                fats=settings.default_target_fats,
            )
            if applied:
                logger.info("Applied default calorie target on startup")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/targets")
    async def list_targets(request: Request) -> dict[str, object]:
        """Return the full target history, oldest first."""
        store = _container(request).target_store
        return {
            "timezone": store.timezone,
            "versions": [
                version_to_dict(version) for version in store.get_all_versions()
            ],
        }

    @app.get("/targets/current")
    async def current_target(
        request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return the target in force on a day, today by default."""
        store = _container(request).target_store
        resolved_day = day.isoformat() if day else store.today()
        target = store.get_target_for_date(resolved_day)
        return {
            "day": resolved_day,
            "target": _serialize_target(target),
            "setup_required": target is None,
        }

    @app.post("/targets")
    async def save_target(
        payload: SaveTargetRequest, request: Request
    ) -> dict[str, object]:
        """Save targets effective from a date."""
        version = _container(request).target_store.save_target(
            payload.calories,
            protein=payload.protein,
            carbs=payload.carbs,
            fats=payload.fats,
            effective_date=payload.effective_date,
        )
        return version_to_dict(version)

    @app.post("/targets/default")
    async def initialize_default(
        payload: MacroTargetsRequest, request: Request
    ) -> dict[str, object]:
        """Seed a default target when no history exists."""
        store = _container(request).target_store
        applied = store.initialize_default(
            payload.calories,
            protein=payload.protein,
            carbs=payload.carbs,
            fats=payload.fats,
        )
        return {
            "applied": applied,
            "target": _serialize_target(store.get_target_for_date(store.today())),
        }

    @app.put("/timezone")
    async def set_timezone(
        payload: TimezoneRequest, request: Request
    ) -> dict[str, str]:
        """Change the timezone used to compute today."""
        store = _container(request).target_store
        store.set_timezone(payload.timezone)
        logger.info("Timezone updated: %s", payload.timezone)
        return {"timezone": store.timezone}

    @app.post("/progress")
    async def daily_progress(
        payload: DailyTotalsRequest, request: Request
    ) -> dict[str, object]:
        """Compare consumed totals with the target in force that day."""
        state_container = _container(request)
        day = payload.day or date.fromisoformat(state_container.target_store.today())
        progress = state_container.progress_service.summarize(
            DailyTotals(
                day=day,
                calories=payload.calories,
                protein_g=payload.protein_g,
                fat_g=payload.fat_g,
                carbs_g=payload.carbs_g,
            )
        )
        return _serialize_progress(progress)

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _serialize_target(target: TargetVersion | None) -> dict[str, object] | None:
    if target is None:
        return None
    return version_to_dict(target)


def _serialize_macro(progress: MacroProgress) -> dict[str, float]:
    return {
        "consumed": progress.consumed,
        "target": progress.target,
        "remaining": progress.remaining,
        "percent": progress.percent,
    }


def _serialize_progress(progress: DailyProgress) -> dict[str, object]:
    """Format daily progress for JSON responses."""
    return {
        "day": progress.day.isoformat(),
        "target": _serialize_target(progress.target),
        "setup_required": progress.setup_required,
        "calories": _serialize_macro(progress.calories),
        "protein": _serialize_macro(progress.protein),
        "carbs": _serialize_macro(progress.carbs),
        "fats": _serialize_macro(progress.fats),
    }
