"""Set-level lifting formulas shared by the models and the analytics services."""
from typing import Iterable, Optional

BRZYCKI_NUMERATOR = 36.0
BRZYCKI_DENOMINATOR = 37.0


def estimated_one_rep_max(weight: float, reps: int) -> float:
    """Brzycki estimate; outside 0 < reps < 37 the lifted weight itself is returned."""
    if reps <= 0 or reps >= BRZYCKI_DENOMINATOR:
        return weight
    return weight * (BRZYCKI_NUMERATOR / (BRZYCKI_DENOMINATOR - reps))


def set_volume(weight: float, reps: int) -> float:
    """Tonnage of a single set."""
    return weight * reps


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def mean_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)
