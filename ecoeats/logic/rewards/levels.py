"""Level bands and progress towards the next band."""
from __future__ import annotations
from typing import Any, Dict, Optional

from ecoeats.domain.UserLevel import UserLevel, level_for_points
from ecoeats.utilities.constants import LEVEL_THRESHOLDS

__all__ = ["UserLevel", "level_for_points", "next_level_threshold", "level_progress"]


def next_level_threshold(points: int) -> Optional[int]:
    """Smallest band minimum above `points`, or None at the top level."""
    above = [minimum for minimum, _ in LEVEL_THRESHOLDS if minimum > points]
    return min(above) if above else None


def level_progress(points: int) -> Dict[str, Any]:
    """Progress within the current band, as shown on the rewards screen."""
    level = level_for_points(points)
    floor = max(minimum for minimum, _ in LEVEL_THRESHOLDS if minimum <= points) if points >= 0 else 0
    nxt = next_level_threshold(points)
    if nxt is None:
        progress = 100.0
    else:
        progress = round(max(points - floor, 0) / (nxt - floor) * 100, 1)
    return {
        'level': level.value,
        'progress_percent': progress,
        'next_level_points': nxt,
        'points_to_next_level': (nxt - points) if nxt is not None else 0,
    }
