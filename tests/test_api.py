"""Tests for the HTTP API."""

from uuid import uuid4

from fastapi.testclient import TestClient

from menu_planner.api.app import create_app
from menu_planner.containers import AppContainer
from tests.conftest import InMemoryFoodLogRepository

PROFILE = {
    "age": "25",
    "gender": "male",
    "height": 180,
    "weight": "75",
    "activityLevel": "moderate",
    "goal": "maintain",
}

DOSA = {
    "id": "parsed-1",
    "name": "Masala Dosa",
    "calories": 200,
    "protein": 6,
    "carbs": 35,
    "fats": 5,
    "category": "Breakfast",
}


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_targets_endpoint(container: AppContainer) -> None:
    response = _client(container).post("/targets", json=PROFILE)

    assert response.status_code == 200
    body = response.json()
    assert body["bmr"] == 1755.0
    assert body["macros"] == {"protein": 204, "carbs": 272, "fats": 91}


def test_targets_rejects_invalid_profile(container: AppContainer) -> None:
    response = _client(container).post("/targets", json={**PROFILE, "age": "0"})

    assert response.status_code == 422


def test_menu_parse_endpoint_uses_local_parser(container: AppContainer) -> None:
    response = _client(container).post(
        "/menu/parse", json={"text": "1. Chicken Biryani\n2. Dal Tadka"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "local"
    assert [item["id"] for item in body["items"]] == ["parsed-0", "parsed-1"]
    assert body["items"][0]["category"] == "Main Course"
    assert body["preferences"] == {"parsed-0": "optional", "parsed-1": "optional"}


def test_plans_endpoint(container: AppContainer) -> None:
    response = _client(container).post(
        "/plans",
        json={
            "items": [DOSA],
            "preferences": {"parsed-1": "must-have"},
            "remaining": {"calories": 1000, "protein": 60, "carbs": 100, "fats": 30},
        },
    )

    assert response.status_code == 200
    plans = response.json()["plans"]
    assert [plan["name"] for plan in plans] == ["Option A", "Option B", "Option C"]
    breakfast = plans[0]["breakfast"]
    assert breakfast["name"] == "Breakfast"
    assert breakfast["items"][0]["id"] == "plan-0-breakfast-parsed-1"
    assert breakfast["calories"] == 200
    assert plans[0]["totalCalories"] == 200


def test_plans_endpoint_rejects_unknown_preference(container: AppContainer) -> None:
    response = _client(container).post(
        "/plans",
        json={
            "items": [DOSA],
            "preferences": {"parsed-1": "sometimes"},
            "remaining": {"calories": 1000, "protein": 60, "carbs": 100, "fats": 30},
        },
    )

    assert response.status_code == 422


def test_profile_roundtrip(container: AppContainer) -> None:
    client = _client(container)
    user_id = uuid4()

    saved = client.put(f"/users/{user_id}/profile", json=PROFILE)
    fetched = client.get(f"/users/{user_id}/profile")

    assert saved.status_code == 200
    assert fetched.status_code == 200
    assert fetched.json()["profile"]["height"] == "180"
    assert fetched.json()["targets"] == saved.json()["targets"]


def test_invalid_profile_is_not_saved(container: AppContainer) -> None:
    client = _client(container)
    user_id = uuid4()

    saved = client.put(f"/users/{user_id}/profile", json={**PROFILE, "weight": ""})
    fetched = client.get(f"/users/{user_id}/profile")

    assert saved.status_code == 422
    assert fetched.status_code == 404


def test_log_add_list_and_remove(
    container: AppContainer, food_log_repository: InMemoryFoodLogRepository
) -> None:
    client = _client(container)
    user_id = uuid4()

    logged = client.post(
        f"/users/{user_id}/log",
        json={"items": [DOSA], "timestamp": "2026-03-01T08:30:00+00:00"},
    )
    entry = logged.json()["entries"][0]
    history = client.get(f"/users/{user_id}/log")
    removed = client.post(f"/users/{user_id}/log/remove", json=entry)
    removed_again = client.post(f"/users/{user_id}/log/remove", json=entry)

    assert logged.status_code == 200
    assert history.json()["entries"] == [entry]
    assert removed.status_code == 200
    assert removed_again.status_code == 200
    assert food_log_repository.entries[user_id] == []


def test_log_rejects_unknown_timezone(container: AppContainer) -> None:
    response = _client(container).get(
        f"/users/{uuid4()}/log", params={"timezone": "Mars/Olympus"}
    )

    assert response.status_code == 422


def test_user_plans_require_stored_targets(container: AppContainer) -> None:
    response = _client(container).post(
        f"/users/{uuid4()}/plans", json={"items": [DOSA]}
    )

    assert response.status_code == 404


def test_user_plans_use_stored_targets(container: AppContainer) -> None:
    client = _client(container)
    user_id = uuid4()
    client.put(f"/users/{user_id}/profile", json=PROFILE)

    response = client.post(
        f"/users/{user_id}/plans",
        json={"items": [DOSA], "timezone": "Asia/Kolkata"},
    )

    assert response.status_code == 200
    plans = response.json()["plans"]
    assert len(plans) == 3
    assert plans[0]["breakfast"]["items"][0]["name"] == "Masala Dosa"


def test_log_selection_endpoint_logs_chosen_meals(
    container: AppContainer, food_log_repository: InMemoryFoodLogRepository
) -> None:
    client = _client(container)
    user_id = uuid4()
    plans = client.post(
        "/plans",
        json={
            "items": [DOSA],
            "remaining": {"calories": 1000, "protein": 60, "carbs": 100, "fats": 30},
        },
    ).json()["plans"]

    response = client.post(
        f"/users/{user_id}/log/selection",
        json={
            "plans": plans,
            "chosen": {"breakfast": "plan-2"},
            "timestamp": "2026-03-01T08:30:00+00:00",
        },
    )

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [entry["item"]["id"] for entry in entries] == ["plan-2-breakfast-parsed-1"]
    assert len(food_log_repository.entries[user_id]) == 1


def test_log_selection_rejects_unknown_slot(container: AppContainer) -> None:
    response = _client(container).post(
        f"/users/{uuid4()}/log/selection",
        json={"plans": [], "chosen": {"brunch": "plan-0"}},
    )

    assert response.status_code == 422
