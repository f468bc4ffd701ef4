"""Tests for target API endpoints."""

from fastapi.testclient import TestClient

from nutrition_targets.api.app import create_app
from nutrition_targets.containers import AppContainer, build_container
from tests.conftest import FixedClock, InMemoryTargetStorage


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_save_and_resolve_targets(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    client.post("/targets", json={"calories": 2000, "effective_date": "2024-01-01"})
    saved = client.post(
        "/targets",
        json={"calories": 2200, "protein": 160, "effective_date": "2024-03-01"},
    )

    assert saved.status_code == 200
    assert saved.json()["effective_from"] == "2024-03-01"

    response = client.get("/targets/current", params={"day": "2024-02-15"})
    assert response.json()["target"]["target_calories"] == 2000
    assert response.json()["setup_required"] is False

    history = client.get("/targets").json()
    assert [v["effective_from"] for v in history["versions"]] == [
        "2024-01-01",
        "2024-03-01",
    ]


def test_current_target_without_history_requires_setup(
    container: AppContainer,
) -> None:
    client = TestClient(create_app(container))

    response = client.get("/targets/current")

    assert response.status_code == 200
    assert response.json() == {
        "day": "2024-03-15",
        "target": None,
        "setup_required": True,
    }


def test_save_target_rejects_non_positive_calories(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/targets", json={"calories": 0})

    assert response.status_code == 422
    assert container.target_store.get_all_versions() == []


def test_initialize_default_reports_applied(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    first = client.post("/targets/default", json={"calories": 1800})
    second = client.post("/targets/default", json={"calories": 2500})

    assert first.json()["applied"] is True
    assert second.json()["applied"] is False
    assert second.json()["target"]["target_calories"] == 1800


def test_set_timezone(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    ok = client.put("/timezone", json={"timezone": "Asia/Tokyo"})
    bad = client.put("/timezone", json={"timezone": "Nowhere/Special"})

    assert ok.json() == {"timezone": "Asia/Tokyo"}
    assert bad.status_code == 422
    assert container.target_store.timezone == "Asia/Tokyo"


def test_progress_endpoint(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    container.target_store.save_target(2000, protein=100, effective_date="2024-03-01")

    response = client.post(
        "/progress", json={"calories": 500, "protein_g": 25, "fat_g": 10}
    )

    data = response.json()
    assert data["day"] == "2024-03-15"
    assert data["setup_required"] is False
    assert data["calories"]["percent"] == 25.0
    assert data["protein"]["remaining"] == 75.0


def test_startup_applies_default_target(settings, clock: FixedClock) -> None:
    settings.initialize_default_target = True
    storage = InMemoryTargetStorage()
    container = build_container(settings, storage=storage, clock=clock)

    with TestClient(create_app(container)) as client:
        response = client.get("/targets/current")

    assert response.json()["target"]["target_calories"] == 2000
    assert response.json()["target"]["target_fats"] == 65
    assert storage.saves == 1
