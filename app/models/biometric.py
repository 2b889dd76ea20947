from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from app.core.base import Base, new_id
from datetime import datetime

class BiometricEntry(Base):
    """Manually recorded biometrics, one row per calendar day."""
    __tablename__ = "biometric_entries"

    id = Column(String(36), primary_key=True, default=new_id)
    date = Column(Date, nullable=False, unique=True, index=True)
    sleep_hours = Column(Float, nullable=True)
    body_weight = Column(Float, nullable=True)  # kg
    active_calories = Column(Float, nullable=True)
    steps = Column(Integer, nullable=True)
    recorded_at = Column(DateTime, default=datetime.now)
