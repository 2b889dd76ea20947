import enum
from sqlalchemy import Column, Integer, String, Boolean, Enum
from app.core.base import Base, new_id

class MuscleGroupEnum(str, enum.Enum):
    chest = "chest"
    back = "back"
    shoulders = "shoulders"
    biceps = "biceps"
    triceps = "triceps"
    forearms = "forearms"
    quads = "quads"
    hamstrings = "hamstrings"
    glutes = "glutes"
    calves = "calves"
    abs = "abs"
    full_body = "full_body"

class EquipmentEnum(str, enum.Enum):
    barbell = "barbell"
    dumbbell = "dumbbell"
    kettlebell = "kettlebell"
    machine = "machine"
    cable = "cable"
    bodyweight = "bodyweight"
    band = "band"
    other = "other"

class Exercise(Base):
    """Reference exercise, imported once from the bundled library."""
    __tablename__ = "exercises"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    muscle_group = Column(Enum(MuscleGroupEnum), nullable=False, index=True)
    equipment = Column(Enum(EquipmentEnum), nullable=False, default=EquipmentEnum.bodyweight)
    is_compound = Column(Boolean, nullable=False, default=False)
    default_reps = Column(Integer, nullable=True)
    default_tempo = Column(String, nullable=True)  # e.g. "3-1-1-0"
    instructions = Column(String, nullable=True)
