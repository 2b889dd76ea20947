"""
Unit tests for WorkoutService against an in-memory store.

Covered:
- session lifecycle: start, log/update/delete sets, complete, cancel
- precondition errors leave the session untouched
- completing a workout rebuilds its day's summary
- 1RM history, personal record and volume queries ignore warm-ups and
  unfinished workouts
- deleting an exercise keeps its logged sets, detached from the exercise
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from app.core.errors import (
    InvalidPreconditionError,
    InvalidSetDataError,
    NoActiveWorkoutError,
    NotFoundError,
    WorkoutAlreadyCompletedError,
)
from app.models.exercise import Exercise, MuscleGroupEnum
from app.models.workout import WorkoutSet
from app.services.workout_service import WorkoutService, validate_set_data
from tests.conftest import make_exercise

pytestmark = pytest.mark.unit


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> Clock:
    return Clock(datetime(2026, 3, 10, 9, 0))


@pytest.fixture
def service(workouts, profiles, aggregation, clock) -> WorkoutService:
    return WorkoutService(workouts, profiles, aggregation, clock=clock)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("weight,reps,rpe", [(-1, 5, None), (60, 0, None), (60, 5, 11), (60, 5, 0)])
def test_invalid_set_data(weight, reps, rpe):
    with pytest.raises(InvalidSetDataError):
        validate_set_data(weight, reps, rpe)


def test_valid_set_data():
    validate_set_data(0, 1, 10)
    validate_set_data(None, None, None)


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_log_set_without_active_workout(service, bench_press, workouts):
    with pytest.raises(NoActiveWorkoutError):
        await service.log_set(bench_press.id, 60, 10)
    assert await workouts.active() is None


@pytest.mark.asyncio
async def test_only_one_active_workout(service):
    await service.start_workout("Push")
    with pytest.raises(InvalidPreconditionError):
        await service.start_workout("Pull")


@pytest.mark.asyncio
async def test_log_set_numbers_sets_per_exercise(service, bench_press):
    await service.start_workout("Push")

    first = await service.log_set(bench_press.id, 60, 10, rpe=7)
    second = await service.log_set(bench_press.id, 80, 5, rpe=8)

    assert (first.set_number, second.set_number) == (1, 2)
    active = await service.active_workout()
    assert active.total_volume == pytest.approx(60 * 10 + 80 * 5)
    assert active.average_rpe == pytest.approx(7.5)


@pytest.mark.asyncio
async def test_invalid_set_is_rejected_before_anything_changes(service, bench_press):
    await service.start_workout()
    with pytest.raises(InvalidSetDataError):
        await service.log_set(bench_press.id, 60, 0)
    with pytest.raises(InvalidSetDataError):
        await service.log_set("no-such-exercise", 60, 5)
    assert (await service.active_workout()).sets == []


@pytest.mark.asyncio
async def test_update_and_delete_set(service, bench_press):
    await service.start_workout()
    logged = await service.log_set(bench_press.id, 60, 10)

    updated = await service.update_set(logged.id, weight=65, rpe=9)
    assert (updated.weight, updated.reps, updated.rpe) == (65, 10, 9)

    await service.delete_set(logged.id)
    assert (await service.active_workout()).sets == []

    with pytest.raises(NotFoundError):
        await service.delete_set(logged.id)


@pytest.mark.asyncio
async def test_complete_workout_records_duration_and_summary(service, bench_press, summaries, clock):
    workout = await service.start_workout("Push")
    await service.log_set(bench_press.id, 100, 5)
    clock.advance(minutes=45)

    completed = await service.complete_workout()

    assert completed.id == workout.id
    assert completed.is_completed is True
    assert completed.duration_seconds == 45 * 60
    summary = await summaries.get_for_date(clock.now.date())
    assert summary.total_workout_volume == pytest.approx(500)
    assert summary.workout_count == 1
    assert summary.total_workout_duration == 45 * 60
    assert await service.active_workout() is None


@pytest.mark.asyncio
async def test_complete_twice_is_rejected(service, bench_press):
    workout = await service.start_workout()
    await service.complete_workout()

    with pytest.raises(WorkoutAlreadyCompletedError):
        await service.complete_workout(workout.id)
    with pytest.raises(NoActiveWorkoutError):
        await service.complete_workout()


@pytest.mark.asyncio
async def test_cancel_discards_the_active_workout(service, bench_press, workouts):
    workout = await service.start_workout()
    await service.log_set(bench_press.id, 60, 10)

    assert await service.cancel_workout() is True
    assert await workouts.get(workout.id) is None
    assert await service.cancel_workout() is False


@pytest.mark.asyncio
async def test_delete_completed_workout_rebuilds_summary(service, bench_press, summaries, clock):
    workout = await service.start_workout()
    await service.log_set(bench_press.id, 100, 5)
    await service.complete_workout()

    await service.delete_workout(workout.id)

    summary = await summaries.get_for_date(clock.now.date())
    assert summary.total_workout_volume == 0
    assert summary.workout_count == 0
    with pytest.raises(NotFoundError):
        await service.delete_workout(workout.id)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_personal_record_and_history_skip_warmups(service, bench_press, clock):
    await service.start_workout()
    await service.log_set(bench_press.id, 140, 1, is_warmup=True)
    await service.log_set(bench_press.id, 100, 5)
    clock.advance(minutes=1)
    await service.log_set(bench_press.id, 90, 8)
    await service.complete_workout()

    record = await service.personal_record(bench_press.id)
    history = await service.one_rm_history(bench_press.id)

    assert record.weight == 100
    assert [s.weight for s in history] == [90, 100]


@pytest.mark.asyncio
async def test_unfinished_workouts_do_not_count(service, bench_press):
    await service.start_workout()
    await service.log_set(bench_press.id, 100, 5)

    assert await service.personal_record(bench_press.id) is None
    assert await service.weekly_volume() == 0


@pytest.mark.asyncio
async def test_volume_by_muscle_group(service, bench_press, db_session, clock):
    squat = make_exercise("Back Squat", MuscleGroupEnum.quads)
    db_session.add(squat)
    await db_session.commit()

    await service.start_workout()
    await service.log_set(bench_press.id, 100, 5)
    await service.log_set(squat.id, 120, 5)
    await service.complete_workout()

    today = clock.now.date()
    volumes = await service.volume_by_muscle_group(today, today)

    assert volumes == {MuscleGroupEnum.chest: 500, MuscleGroupEnum.quads: 600}
    assert await service.weekly_volume() == pytest.approx(1100)
    assert len(await service.recent_workouts()) == 1


# ---------------------------------------------------------------------------
# Exercise catalog
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_exercise_detaches_logged_sets(service, bench_press, session_factory):
    await service.start_workout()
    await service.log_set(bench_press.id, 100, 5)
    await service.complete_workout()

    await service.delete_exercise(bench_press.id)

    async with session_factory() as session:
        sets = (await session.execute(select(WorkoutSet))).scalars().all()
        assert await session.get(Exercise, bench_press.id) is None
    assert [(s.exercise_id, s.weight, s.reps) for s in sets] == [(None, 100, 5)]
    assert await service.weekly_volume() == pytest.approx(500)


@pytest.mark.asyncio
async def test_delete_unknown_exercise(service):
    with pytest.raises(NotFoundError):
        await service.delete_exercise("missing")
