import math
from typing import Optional, Tuple

from .journeys import Journey
from .matcher import ROUND_TRIP, MatchResult, normalize_category

TRACKED_FIELDS = 8
MAX_CONFIDENCE = 95


def count_fields(journey: Optional[Journey]) -> Tuple[int, int]:
    """(filled, total) over the fields a usable ticket should give us."""
    if not journey:
        return 0, TRACKED_FIELDS
    checks = [
        journey["pnr"],
        journey["flight_number"],
        journey["departure_city"] or journey["departure_airport"],
        journey["arrival_city"] or journey["arrival_airport"],
        journey["departure_date"],
        journey["departure_time"],
        journey["arrival_time"],
        journey["seat_number"],
    ]
    return sum(1 for c in checks if c), TRACKED_FIELDS


def calculate_confidence(onward: MatchResult, ret: MatchResult, category: str) -> int:
    """
    Filled fields weigh 1.5 on a matched side and 0.5 otherwise, as a
    percentage of the tracked fields. Never above 95.
    """
    score = 0.0
    total = 0
    sides = [onward]
    if normalize_category(category) == ROUND_TRIP:
        sides.append(ret)
    for side in sides:
        if side["journey"]:
            filled, fields = count_fields(side["journey"])
            score += filled * (1.5 if side["matched"] else 0.5)
            total += fields
    if total == 0:
        return 0
    pct = math.floor(score / total * 100 + 0.5)
    return max(0, min(MAX_CONFIDENCE, pct))
