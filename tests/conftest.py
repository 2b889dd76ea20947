"""
Shared fixtures for the IronLog test suite.

Strategy:
- Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool),
  created through the same ``init_database`` the app uses on startup.
- The remote food catalog is always an AsyncMock; no test touches the network.
- HTTP tests run against a FastAPI app built without startup events; get_db
  hands out sessions bound to the test engine.
"""

from datetime import date, datetime, timedelta
from typing import AsyncGenerator, Iterable, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.errors import register_error_handlers
from app.api.router import api_router
from app.core.database import init_database
from app.core.db import get_db
from app.core.dependencies import get_food_catalog_client
from app.models.exercise import EquipmentEnum, Exercise, MuscleGroupEnum
from app.models.food import FoodItem, FoodSourceEnum
from app.models.workout import Workout, WorkoutSet
from app.repositories.biometric_repository import BiometricRepository
from app.repositories.food_repository import FoodRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.summary_repository import SummaryRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.aggregation_service import AggregationService
from app.services.biometric_source import RecordedBiometricSource
from app.services.nutrition_service import food_views
from app.services.openfoodfacts_service import FoodCatalogClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Test FastAPI app without startup events."""
    test_app = FastAPI(title="IronLog Test App")
    register_error_handlers(test_app)
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_exercise(
        name: str = "Barbell Bench Press",
        muscle_group: MuscleGroupEnum = MuscleGroupEnum.chest,
        equipment: EquipmentEnum = EquipmentEnum.barbell,
) -> Exercise:
    return Exercise(
        name=name,
        muscle_group=muscle_group,
        equipment=equipment,
        is_compound=True,
        default_reps=None,
        default_tempo=None,
        instructions=None,
    )


def make_food(
        name: str,
        calories: float,
        protein: float,
        carbs: float,
        fat: float,
        source: FoodSourceEnum = FoodSourceEnum.user_history,
        barcode: Optional[str] = None,
        use_count: int = 0,
        last_used: Optional[datetime] = None,
) -> FoodItem:
    """FoodItem per 100 g with every column set, so nothing loads lazily after a flush."""
    return FoodItem(
        name=name,
        barcode=barcode,
        brand=None,
        calories_per_100g=calories,
        protein_per_100g=protein,
        carbs_per_100g=carbs,
        fat_per_100g=fat,
        fiber_per_100g=None,
        sugar_per_100g=None,
        source=source,
        last_used=last_used,
        use_count=use_count,
        is_favorite=False,
    )


def make_workout(
        exercise: Optional[Exercise],
        sets: Iterable[Tuple[float, int]],
        day: Optional[date] = None,
        completed: bool = True,
        name: str = "Workout",
) -> Workout:
    """Transient workout with one WorkoutSet per (weight, reps) pair."""
    day = day or date.today()
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=9)
    workout = Workout(
        name=name,
        date=day,
        start_time=start,
        end_time=start + timedelta(hours=1) if completed else None,
        duration_seconds=3600 if completed else 0,
        is_completed=completed,
        notes=None,
        sets=[],
    )
    for number, (weight, reps) in enumerate(sets, start=1):
        workout.sets.append(WorkoutSet(
            exercise=exercise,
            exercise_id=exercise.id if exercise is not None else None,
            set_number=number,
            weight=weight,
            reps=reps,
            rpe=None,
            is_warmup=False,
            notes=None,
            timestamp=start + timedelta(minutes=number),
        ))
    return workout


async def log_workout(client, exercise_id: str, sets: Iterable[Tuple[float, int]], name: str = "Push") -> dict:
    """Start a workout over HTTP, log (weight, reps) sets and complete it."""
    started = await client.post("/api/v1/workouts/start", json={"name": name})
    assert started.status_code == 201
    for weight, reps in sets:
        logged = await client.post("/api/v1/workouts/active/sets", json={
            "exercise_id": exercise_id, "weight": weight, "reps": reps,
        })
        assert logged.status_code == 201
    completed = await client.post("/api/v1/workouts/active/complete")
    assert completed.status_code == 200
    return completed.json()


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_database(bind=test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def reset_food_views():
    """The recent/favorite views are process-wide; start every test empty."""
    food_views.invalidate()
    yield
    food_views.invalidate()


# ---------------------------------------------------------------------------
# Repositories and services
# ---------------------------------------------------------------------------

@pytest.fixture
def profiles(db_session) -> ProfileRepository:
    return ProfileRepository(db_session)


@pytest.fixture
def foods(db_session) -> FoodRepository:
    return FoodRepository(db_session)


@pytest.fixture
def workouts(db_session) -> WorkoutRepository:
    return WorkoutRepository(db_session)


@pytest.fixture
def summaries(db_session) -> SummaryRepository:
    return SummaryRepository(db_session)


@pytest.fixture
def biometrics(db_session) -> BiometricRepository:
    return BiometricRepository(db_session)


@pytest.fixture
def aggregation(summaries, workouts, profiles, biometrics) -> AggregationService:
    return AggregationService(summaries, workouts, profiles, RecordedBiometricSource(biometrics))


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """Remote catalog that knows nothing unless a test says otherwise."""
    catalog = AsyncMock(spec=FoodCatalogClient)
    catalog.search_by_name.return_value = []
    catalog.get_by_barcode.return_value = None
    return catalog


@pytest.fixture
async def bench_press(db_session) -> Exercise:
    exercise = make_exercise()
    db_session.add(exercise)
    await db_session.commit()
    return exercise


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(session_factory, mock_catalog) -> AsyncGenerator[AsyncClient, None]:
    """
    Client against the full router: get_db -> a session on the test engine,
    get_food_catalog_client -> mock_catalog.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app = create_test_app()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_food_catalog_client] = lambda: mock_catalog
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
