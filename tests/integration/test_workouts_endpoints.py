"""
Integration tests for the /api/v1/workouts/* endpoints.

Scenarios:
- active session lifecycle: start, log/update/delete sets, complete, cancel
- precondition failures map to 400, double completion to 409, unknown ids to 404
- exercise catalog listing, filtering and deletion
- personal record / 1RM history / volume queries
"""

import pytest

from app.models.exercise import EquipmentEnum, MuscleGroupEnum
from tests.conftest import log_workout, make_exercise

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_exercises_filters_by_muscle_group(client, db_session, bench_press):
    db_session.add(make_exercise("Back Squat", MuscleGroupEnum.quads, EquipmentEnum.barbell))
    await db_session.commit()

    everything = await client.get("/api/v1/workouts/exercises")
    quads = await client.get("/api/v1/workouts/exercises", params={"muscle_group": "quads"})

    assert [e["name"] for e in everything.json()] == ["Back Squat", "Barbell Bench Press"]
    assert [e["name"] for e in quads.json()] == ["Back Squat"]


@pytest.mark.asyncio
async def test_delete_exercise_keeps_logged_sets(client, bench_press):
    await log_workout(client, bench_press.id, [(100, 5)])

    deleted = await client.delete(f"/api/v1/workouts/exercises/{bench_press.id}")

    assert deleted.status_code == 204
    assert (await client.get("/api/v1/workouts/exercises")).json() == []
    [workout] = (await client.get("/api/v1/workouts/recent")).json()
    assert [(s["exercise_id"], s["weight"], s["reps"]) for s in workout["sets"]] == [(None, 100, 5)]


@pytest.mark.asyncio
async def test_delete_unknown_exercise_returns_404(client):
    response = await client.delete("/api/v1/workouts/exercises/missing")
    assert response.status_code == 404


# ---------------------------------------------------------------------------
# Active session
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_no_active_workout(client):
    assert (await client.get("/api/v1/workouts/active")).status_code == 404
    assert (await client.post("/api/v1/workouts/active/complete")).status_code == 400
    cancelled = await client.post("/api/v1/workouts/active/cancel")
    assert cancelled.json() == {"cancelled": False}


@pytest.mark.asyncio
async def test_only_one_active_workout(client):
    assert (await client.post("/api/v1/workouts/start", json={})).status_code == 201
    assert (await client.post("/api/v1/workouts/start", json={})).status_code == 400


@pytest.mark.asyncio
async def test_log_sets_and_complete(client, bench_press):
    await client.post("/api/v1/workouts/start", json={"name": "Push"})

    first = await client.post("/api/v1/workouts/active/sets", json={
        "exercise_id": bench_press.id, "weight": 100, "reps": 5, "rpe": 8,
    })
    second = await client.post("/api/v1/workouts/active/sets", json={
        "exercise_id": bench_press.id, "weight": 100, "reps": 5,
    })

    assert first.status_code == 201
    assert first.json()["set_number"] == 1
    assert first.json()["estimated_1rm"] == pytest.approx(112.5)
    assert second.json()["set_number"] == 2

    active = await client.get("/api/v1/workouts/active")
    assert active.json()["name"] == "Push"
    assert len(active.json()["sets"]) == 2

    completed = await client.post("/api/v1/workouts/active/complete")
    assert completed.status_code == 200
    assert completed.json()["is_completed"] is True
    assert completed.json()["total_volume"] == pytest.approx(1000)
    assert completed.json()["average_rpe"] == pytest.approx(8)


@pytest.mark.asyncio
async def test_set_validation(client, bench_press):
    await client.post("/api/v1/workouts/start", json={})

    unknown = await client.post("/api/v1/workouts/active/sets", json={
        "exercise_id": "missing", "weight": 100, "reps": 5,
    })
    no_reps = await client.post("/api/v1/workouts/active/sets", json={
        "exercise_id": bench_press.id, "weight": 100, "reps": 0,
    })

    assert unknown.status_code == 400
    assert no_reps.status_code == 422
    assert (await client.get("/api/v1/workouts/active")).json()["sets"] == []


@pytest.mark.asyncio
async def test_update_and_delete_set(client, bench_press):
    await client.post("/api/v1/workouts/start", json={})
    logged = await client.post("/api/v1/workouts/active/sets", json={
        "exercise_id": bench_press.id, "weight": 80, "reps": 8,
    })
    set_id = logged.json()["id"]

    updated = await client.patch(f"/api/v1/workouts/active/sets/{set_id}", json={"weight": 85})
    assert updated.status_code == 200
    assert updated.json()["weight"] == 85
    assert updated.json()["reps"] == 8

    assert (await client.delete(f"/api/v1/workouts/active/sets/{set_id}")).status_code == 204
    assert (await client.delete(f"/api/v1/workouts/active/sets/{set_id}")).status_code == 404


@pytest.mark.asyncio
async def test_cancel_discards_the_session(client, bench_press):
    await client.post("/api/v1/workouts/start", json={})
    await client.post("/api/v1/workouts/active/sets", json={
        "exercise_id": bench_press.id, "weight": 60, "reps": 10,
    })

    cancelled = await client.post("/api/v1/workouts/active/cancel")

    assert cancelled.json() == {"cancelled": True}
    assert (await client.get("/api/v1/workouts/active")).status_code == 404
    assert (await client.get("/api/v1/workouts/recent")).json() == []


# ---------------------------------------------------------------------------
# By id
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_completing_twice_returns_409(client, bench_press):
    workout = await log_workout(client, bench_press.id, [(100, 5)])

    response = await client.post(f"/api/v1/workouts/{workout['id']}/complete")

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_unknown_workout_returns_404(client):
    assert (await client.post("/api/v1/workouts/missing/complete")).status_code == 404
    assert (await client.delete("/api/v1/workouts/missing")).status_code == 404


@pytest.mark.asyncio
async def test_delete_workout(client, bench_press):
    workout = await log_workout(client, bench_press.id, [(100, 5)])

    assert (await client.delete(f"/api/v1/workouts/{workout['id']}")).status_code == 204
    assert (await client.get("/api/v1/workouts/recent")).json() == []
    assert (await client.get("/api/v1/workouts/volume/weekly")).json() == {"total_volume": 0}


# ---------------------------------------------------------------------------
# History & volume
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_personal_record_and_history(client, bench_press):
    assert (await client.get(f"/api/v1/workouts/exercises/{bench_press.id}/personal-record")).status_code == 404

    await log_workout(client, bench_press.id, [(90, 5), (100, 3)])
    await log_workout(client, bench_press.id, [(95, 6)])

    record = await client.get(f"/api/v1/workouts/exercises/{bench_press.id}/personal-record")
    history = await client.get(
        f"/api/v1/workouts/exercises/{bench_press.id}/one-rm-history", params={"limit": 2}
    )

    assert record.json()["weight"] == 95
    assert len(history.json()) == 2


@pytest.mark.asyncio
async def test_volume_queries(client, bench_press):
    await log_workout(client, bench_press.id, [(100, 5), (50, 10)])

    weekly = await client.get("/api/v1/workouts/volume/weekly")
    by_group = await client.get("/api/v1/workouts/volume/muscle-groups")

    assert weekly.json() == {"total_volume": 1000}
    assert by_group.json()["volumes"] == {"chest": 1000}


@pytest.mark.asyncio
async def test_volume_range_must_be_ordered(client):
    response = await client.get(
        "/api/v1/workouts/volume/muscle-groups",
        params={"start": "2026-03-10", "end": "2026-03-01"},
    )
    assert response.status_code == 400
