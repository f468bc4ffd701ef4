"""Tests for container wiring."""

from pathlib import Path

import pytest

from nutrition_targets.adapters.json_file_target_storage import JsonFileTargetStorage
from nutrition_targets.config import Settings
from nutrition_targets.containers import build_container, build_storage


def test_build_container_uses_file_storage(tmp_path: Path) -> None:
    settings = Settings(
        admin_token="admin-token",
        data_dir=tmp_path,
        default_timezone="Europe/Paris",
    )

    container = build_container(settings)

    assert isinstance(container.target_store.storage, JsonFileTargetStorage)
    assert container.target_store.timezone == "Europe/Paris"
    assert container.progress_service.store is container.target_store


def test_supabase_backend_requires_credentials() -> None:
    settings = Settings(
        admin_token="admin-token",
        storage_backend="supabase",
        supabase_url=None,
        supabase_service_key=None,
    )

    with pytest.raises(ValueError, match="SUPABASE_URL"):
        build_storage(settings)
