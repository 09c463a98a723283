import logging
from typing import List, NamedTuple, Optional, Sequence, Set, TypedDict

import regex as re

from .airports import AIRPORT_CODES, AIRPORT_NAME_TABLE
from .journeys import Journey
from .utils import edit_distance, normalize_text

logger = logging.getLogger(__name__)

ONE_WAY = "one_way"
ROUND_TRIP = "round_trip"
MULTI_CITY = "multi_city"

TRIP_CATEGORIES = (ONE_WAY, ROUND_TRIP, MULTI_CITY)
_CATEGORY_ALIASES = {"oneway": ONE_WAY, "roundtrip": ROUND_TRIP, "multicity": MULTI_CITY}


class RequestedLeg(TypedDict, total=False):
    departure_city: Optional[str]
    arrival_city: Optional[str]
    departure_date: Optional[str]


class Discrepancy(TypedDict):
    field: str
    requested: Optional[str]
    extracted: Optional[str]


class MatchResult(TypedDict):
    journey: Optional[Journey]
    matched: bool
    discrepancies: List[Discrepancy]


def no_match() -> MatchResult:
    return MatchResult(journey=None, matched=False, discrepancies=[])


def normalize_category(category: Optional[str]) -> str:
    c = (category or ONE_WAY).strip().lower().replace("-", "_")
    c = _CATEGORY_ALIASES.get(c, c)
    if c not in TRIP_CATEGORIES:
        logger.warning("Unknown ticket category %r, treating as %s", category, ONE_WAY)
        return ONE_WAY
    return c

# =========================
# City equivalence
# =========================

class _CityKey(NamedTuple):
    name: str
    codes: Set[str]


_EMBEDDED_CODE_RE = re.compile(r"\(([A-Za-z]{3})\)")


def _city_key(value: str, airport: Optional[str] = None) -> _CityKey:
    """'Mumbai (BOM)' -> name 'mumbai', codes {'bom'}"""
    codes: Set[str] = set()
    m = _EMBEDDED_CODE_RE.search(value)
    if m:
        codes.add(m.group(1).lower())
    if airport and airport.strip():
        codes.add(airport.strip().lower())
    name = normalize_text(_EMBEDDED_CODE_RE.sub(" ", value))
    # a bare code counts as the side's airport code
    if len(name) == 3 and name.upper() in AIRPORT_CODES:
        codes.add(name)
    return _CityKey(name, codes)


def _alias_hit(codes: Set[str], other: _CityKey) -> bool:
    if not other.name:
        return False
    for code in codes:
        for alias in AIRPORT_NAME_TABLE.get(code, []):
            if alias in other.name or other.name in alias:
                return True
    return False


def cities_match(a: Optional[str], b: Optional[str],
                 a_airport: Optional[str] = None, b_airport: Optional[str] = None) -> bool:
    """
    True when two city/airport references can be the same place: equal names,
    shared airport code, one name inside the other, edit distance <= 2 on names
    of six or more characters, or a known alias of either side's code. A
    missing side never contradicts the other.
    """
    if not a or not b:
        return True

    ka, kb = _city_key(a, a_airport), _city_key(b, b_airport)

    if ka.name and ka.name == kb.name:
        return True
    if ka.codes & kb.codes:
        return True
    if ka.name and kb.name and (ka.name in kb.name or kb.name in ka.name):
        return True
    if len(ka.name) >= 6 and len(kb.name) >= 6 and edit_distance(ka.name, kb.name) <= 2:
        return True
    return _alias_hit(ka.codes, kb) or _alias_hit(kb.codes, ka)

# =========================
# Journey vs request
# =========================

def match_journey_with_request(journey: Journey, leg: RequestedLeg) -> List[Discrepancy]:
    """Field-level differences, in From/To/Date order; absent values are skipped."""
    discrepancies: List[Discrepancy] = []

    for field, side in (("From", "departure"), ("To", "arrival")):
        requested = leg.get(f"{side}_city")
        extracted = journey[f"{side}_city"] or journey[f"{side}_airport"]
        if requested and extracted:
            if not cities_match(requested, extracted, None, journey[f"{side}_airport"]):
                discrepancies.append(Discrepancy(field=field, requested=requested, extracted=extracted))

    requested_date = leg.get("departure_date")
    if requested_date and journey["departure_date"]:
        if requested_date != journey["departure_date"]:
            discrepancies.append(Discrepancy(field="Date", requested=requested_date,
                                             extracted=journey["departure_date"]))
    return discrepancies


def _best_match(journeys: Sequence[Journey], leg: RequestedLeg, claimed: List[Journey]) -> MatchResult:
    best: Optional[Journey] = None
    best_disc: List[Discrepancy] = []
    for journey in journeys:
        if any(journey is c for c in claimed):
            continue
        disc = match_journey_with_request(journey, leg)
        if best is None or len(disc) < len(best_disc):
            best, best_disc = journey, disc
    if best is None:
        return no_match()
    # a single wrong date is tolerated, a wrong city never is
    if len(best_disc) <= 1 and all(d["field"] == "Date" for d in best_disc):
        return MatchResult(journey=best, matched=True, discrepancies=[])
    return MatchResult(journey=best, matched=False, discrepancies=best_disc)


def _match_one_way(journeys: Sequence[Journey], onward: Optional[RequestedLeg],
                   ret: Optional[RequestedLeg]):
    onward_match, return_match = no_match(), no_match()
    if not journeys:
        return onward_match, return_match
    journey = journeys[0]
    if onward:
        disc = match_journey_with_request(journey, onward)
        onward_match = MatchResult(journey=journey, matched=not disc, discrepancies=disc)
    elif ret:
        disc = match_journey_with_request(journey, ret)
        return_match = MatchResult(journey=journey, matched=not disc, discrepancies=disc)
    else:
        # nothing requested, nothing to contradict
        onward_match = MatchResult(journey=journey, matched=True, discrepancies=[])
    return onward_match, return_match


def _match_multi(journeys: Sequence[Journey], onward: Optional[RequestedLeg],
                 ret: Optional[RequestedLeg]):
    onward_match, return_match = no_match(), no_match()
    if not journeys:
        return onward_match, return_match

    # exact pass
    for journey in journeys:
        if onward and not onward_match["matched"]:
            if not match_journey_with_request(journey, onward):
                onward_match = MatchResult(journey=journey, matched=True, discrepancies=[])
                continue
        if ret and not return_match["matched"]:
            if not match_journey_with_request(journey, ret):
                return_match = MatchResult(journey=journey, matched=True, discrepancies=[])
                continue

    # best-match pass, onward and return searched independently
    claimed = [m["journey"] for m in (onward_match, return_match) if m["matched"] and m["journey"]]
    if onward and not onward_match["matched"]:
        onward_match = _best_match(journeys, onward, claimed)
        if onward_match["matched"]:
            claimed.append(onward_match["journey"])
    if ret and not return_match["matched"]:
        return_match = _best_match(journeys, ret, claimed)

    return onward_match, return_match


def match_itinerary(journeys: Sequence[Journey], category: str,
                    onward: Optional[RequestedLeg] = None,
                    ret: Optional[RequestedLeg] = None):
    """Returns (onward MatchResult, return MatchResult)."""
    category = normalize_category(category)
    if category == ONE_WAY:
        return _match_one_way(journeys, onward, ret)
    return _match_multi(journeys, onward, ret)
