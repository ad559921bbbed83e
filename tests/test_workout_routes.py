from datetime import datetime, timedelta, timezone

from fittrack.pagination import MAX_PAGE
from fittrack.validation import MAX_REPS

WORKOUT = {
    "date": "2026-03-10T07:30:00",
    "exercises": [
        {"name": "Bench Press", "sets": [{"reps": 10, "weight": 135}, {"reps": 8, "weight": 155}]},
        {"name": "Pull Up", "sets": [{"reps": 12, "weight": 0}]},
    ],
    "notes": "  push day ",
}


def _create(client, headers, **overrides):
    resp = client.post("/api/workouts", json={**WORKOUT, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["workout"]


def test_requires_token(client):
    resp = client.get("/api/workouts")
    assert resp.status_code == 401
    assert "message" in resp.get_json()


def test_rejects_garbage_token(client):
    resp = client.get("/api/workouts", headers={"Authorization": "Bearer not.a.token"})
    assert resp.status_code == 401


def test_create_and_fetch(client, auth_headers):
    workout = _create(client, auth_headers)
    assert workout["totalVolume"] == 10 * 135 + 8 * 155
    assert workout["notes"] == "push day"
    assert [e["name"] for e in workout["exercises"]] == ["Bench Press", "Pull Up"]
    assert workout["date"] == "2026-03-10T07:30:00"

    resp = client.get(f"/api/workouts/{workout['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["workout"]["exercises"][0]["sets"] == [
        {"reps": 10, "weight": 135.0},
        {"reps": 8, "weight": 155.0},
    ]


def test_create_with_zero_sets_persists_nothing(client, auth_headers):
    body = {"exercises": [{"name": "Squat", "sets": [{"reps": 5, "weight": 100}]}, {"name": "Lunge", "sets": []}]}
    resp = client.post("/api/workouts", json=body, headers=auth_headers)
    assert resp.status_code == 400
    assert "at least one set" in resp.get_json()["message"]

    listing = client.get("/api/workouts", headers=auth_headers).get_json()
    assert listing["workouts"] == []
    assert listing["pagination"]["totalWorkouts"] == 0


def test_create_without_exercises(client, auth_headers):
    resp = client.post("/api/workouts", json={"notes": "rest"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "At least one exercise is required"


def test_list_paginates_newest_first(client, auth_headers):
    base = datetime(2026, 1, 1, 8, 0)
    for i in range(23):
        _create(client, auth_headers, date=(base + timedelta(days=i)).isoformat())

    page3 = client.get("/api/workouts?page=3&limit=10", headers=auth_headers).get_json()
    assert len(page3["workouts"]) == 3
    assert page3["pagination"] == {
        "currentPage": 3,
        "totalPages": 3,
        "totalWorkouts": 23,
        "hasNext": False,
        "hasPrev": True,
    }

    page1 = client.get("/api/workouts?page=1&limit=10", headers=auth_headers).get_json()
    assert page1["pagination"]["hasPrev"] is False
    assert page1["pagination"]["hasNext"] is True
    assert page1["workouts"][0]["date"] == (base + timedelta(days=22)).isoformat()


def test_list_defaults_and_bad_page_args(client, auth_headers):
    for i in range(25):
        _create(client, auth_headers, date=f"2026-02-{i + 1:02d}")
    data = client.get("/api/workouts?page=abc&limit=zero", headers=auth_headers).get_json()
    assert len(data["workouts"]) == 20
    assert data["pagination"]["currentPage"] == 1
    assert data["pagination"]["totalPages"] == 2


def test_list_date_range_is_inclusive(client, auth_headers):
    for day in ("2026-01-05T09:00:00", "2026-01-10T18:00:00", "2026-01-20T06:00:00"):
        _create(client, auth_headers, date=day)

    data = client.get(
        "/api/workouts?startDate=2026-01-05&endDate=2026-01-10", headers=auth_headers
    ).get_json()
    assert data["pagination"]["totalWorkouts"] == 2

    data = client.get("/api/workouts?startDate=2026-01-06", headers=auth_headers).get_json()
    assert data["pagination"]["totalWorkouts"] == 2


def test_list_bad_date_filter(client, auth_headers):
    resp = client.get("/api/workouts?endDate=soon", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid endDate"


def test_update_replaces_exercises(client, auth_headers):
    workout = _create(client, auth_headers)
    resp = client.put(
        f"/api/workouts/{workout['id']}",
        json={"exercises": [{"name": "Dips", "sets": [{"reps": 10, "weight": 25}]}], "notes": "swapped"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.get_json()["workout"]
    assert updated["totalVolume"] == 250
    assert updated["notes"] == "swapped"
    assert updated["date"] == workout["date"]
    assert updated["updatedAt"] >= workout["updatedAt"]


def test_update_with_empty_exercises(client, auth_headers):
    workout = _create(client, auth_headers)
    resp = client.put(f"/api/workouts/{workout['id']}", json={"exercises": []}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "At least one exercise is required"


def test_update_reports_all_set_errors(client, auth_headers):
    workout = _create(client, auth_headers)
    resp = client.put(
        f"/api/workouts/{workout['id']}",
        json={"exercises": [{"name": "Row", "sets": [{"reps": 0, "weight": -5}]}]},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == "Validation error"
    assert body["errors"] == ["Reps must be at least 1", "Weight cannot be negative"]


def test_delete_twice_is_not_found(client, auth_headers):
    workout = _create(client, auth_headers)
    first = client.delete(f"/api/workouts/{workout['id']}", headers=auth_headers)
    assert first.status_code == 200
    second = client.delete(f"/api/workouts/{workout['id']}", headers=auth_headers)
    assert second.status_code == 404
    assert second.get_json() == {"message": "Workout not found"}


def test_other_owner_sees_not_found(client, auth_headers, other_headers):
    workout = _create(client, auth_headers)
    url = f"/api/workouts/{workout['id']}"

    assert client.get(url, headers=other_headers).status_code == 404
    assert client.put(url, json={"notes": "mine now"}, headers=other_headers).status_code == 404
    assert client.delete(url, headers=other_headers).status_code == 404

    still_there = client.get(url, headers=auth_headers).get_json()["workout"]
    assert still_there["notes"] == "push day"
    assert client.get("/api/workouts", headers=other_headers).get_json()["workouts"] == []


def test_stats_for_new_user(client, auth_headers):
    resp = client.get("/api/workouts/stats", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {
        "totalWorkouts": 0,
        "workoutsThisMonth": 0,
        "workoutsThisWeek": 0,
        "totalVolumeThisMonth": 0,
        "recentWorkouts": [],
    }


def test_stats_counts_recent_volume(client, auth_headers):
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    _create(client, auth_headers, date=(now - timedelta(days=3)).isoformat())
    _create(client, auth_headers, date=(now - timedelta(days=60)).isoformat())

    stats = client.get("/api/workouts/stats", headers=auth_headers).get_json()
    assert stats["totalWorkouts"] == 2
    assert stats["workoutsThisMonth"] == 1
    assert stats["workoutsThisWeek"] == 1
    assert stats["totalVolumeThisMonth"] == 10 * 135 + 8 * 155
    assert len(stats["recentWorkouts"]) == 2


def test_list_clamps_huge_page_args(client, auth_headers):
    _create(client, auth_headers)
    resp = client.get("/api/workouts?page=100000000000000000000&limit=100000", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["workouts"] == []
    assert data["pagination"]["currentPage"] == MAX_PAGE
    assert data["pagination"]["totalWorkouts"] == 1
    assert data["pagination"]["hasNext"] is False


def test_create_rejects_oversized_reps(client, auth_headers):
    body = {"exercises": [{"name": "Squat", "sets": [{"reps": 10**20, "weight": 100}]}]}
    resp = client.post("/api/workouts", json=body, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Validation error", "errors": [f"Reps cannot exceed {MAX_REPS}"]}


def test_create_rejects_fractional_reps(client, auth_headers):
    body = {"exercises": [{"name": "Squat", "sets": [{"reps": 1.5, "weight": 100}]}]}
    resp = client.post("/api/workouts", json=body, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Each set must have valid reps (>= 1) and weight (>= 0)"}
