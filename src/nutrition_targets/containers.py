"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_targets.adapters.json_file_target_storage import JsonFileTargetStorage
from nutrition_targets.adapters.supabase_target_storage import SupabaseTargetStorage
from nutrition_targets.config import Settings
from nutrition_targets.services.dates import Clock, SystemClock
from nutrition_targets.services.progress import TargetProgressService
from nutrition_targets.services.targets import CalorieTargetStore, TargetStorage


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    target_store: CalorieTargetStore
    progress_service: TargetProgressService


def build_storage(settings: Settings) -> TargetStorage:
    """Create the configured snapshot storage."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseTargetStorage(client, table=settings.supabase_table)
    return JsonFileTargetStorage(settings.data_dir)


def build_container(
    settings: Settings | None = None,
    storage: TargetStorage | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    target_store = CalorieTargetStore.load(
        storage=storage or build_storage(resolved_settings),
        clock=clock or SystemClock(),
        default_timezone=resolved_settings.default_timezone,
        storage_key=resolved_settings.storage_key,
    )
    progress_service = TargetProgressService(target_store)
    return AppContainer(
        settings=resolved_settings,
        target_store=target_store,
        progress_service=progress_service,
    )
