"""Zone-based dispatch: matching, assignment, radius discovery and detection."""

from .detection import detect_zone, zones_for_restaurant_at
from .engine import AssignmentEngine, build_engine
from .matcher import ZoneMatcher
from .radius import zones_within

__all__ = [
    "AssignmentEngine",
    "ZoneMatcher",
    "build_engine",
    "detect_zone",
    "zones_for_restaurant_at",
    "zones_within",
]
