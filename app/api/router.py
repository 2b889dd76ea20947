from fastapi import APIRouter
from app.api.v1.analytics import router as analytics_router
from app.api.v1.biometrics import router as biometrics_router
from app.api.v1.foods import router as foods_router
from app.api.v1.profile import router as profile_router
from app.api.v1.workouts import router as workouts_router

api_router = APIRouter()

api_router.include_router(profile_router)
api_router.include_router(foods_router)
api_router.include_router(workouts_router)
api_router.include_router(analytics_router)
api_router.include_router(biometrics_router)
