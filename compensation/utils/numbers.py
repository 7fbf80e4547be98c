import math
from typing import Iterable, Optional


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(value, high))


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty iterable"""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    # Python's round() goes to even on .5; percentages round up
    return int(math.floor(value + 0.5))
