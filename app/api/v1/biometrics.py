from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_aggregation_service, get_biometric_repository
from app.repositories.biometric_repository import BiometricRepository
from app.schemas.biometric import BiometricEntryCreate, BiometricEntryRead
from app.services.aggregation_service import AggregationService

router = APIRouter(prefix="/biometrics", tags=["biometrics"])


@router.put("", response_model=BiometricEntryRead)
async def record_biometrics(
        entry: BiometricEntryCreate,
        biometrics: BiometricRepository = Depends(get_biometric_repository),
        aggregation: AggregationService = Depends(get_aggregation_service),
):
    """Merge the given readings into that day's entry and rebuild the day's summary."""
    saved = await biometrics.upsert(entry.date, **entry.model_dump(exclude={"date"}))
    await aggregation.compute_daily_summary(entry.date)
    return saved


@router.get("/{day}", response_model=BiometricEntryRead)
async def get_biometrics(day: date, biometrics: BiometricRepository = Depends(get_biometric_repository)):
    entry = await biometrics.get_for_date(day)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No biometrics recorded for {day}")
    return entry
