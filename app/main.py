import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.router import api_router
from app.core import init_database
from app.core.db import AsyncSessionLocal
from app.core.logging_config import configure_logging
from app.core.seed_exercises import seed_exercises
from app.services.openfoodfacts_service import food_catalog_client

logger = logging.getLogger(__name__)

app = FastAPI(title="IronLog - training and nutrition analytics")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    configure_logging()
    await init_database()

    async with AsyncSessionLocal() as session:
        added = await seed_exercises(session)
        if added:
            logger.info("Seeded %d exercises", added)

    logger.info("IronLog started")


@app.on_event("shutdown")
async def shutdown_event():
    await food_catalog_client.close()


@app.get("/")
async def root():
    base_url = "http://localhost:8000/api/v1"

    return {
        "app": "IronLog",
        "links": {
            "profile": f"{base_url}/profile",
            "foods": f"{base_url}/foods/search",
            "workouts": f"{base_url}/workouts/recent",
            "analytics": f"{base_url}/analytics/suggestions",
            "docs": "http://localhost:8000/docs",
        },
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
