import logging
from datetime import date
from typing import Callable, List, NamedTuple, Optional, Tuple

import regex as re

from .airports import AIRPORT_CODES, SEAT_SHAPED_CARRIERS
from .utils import edit_distance, to_24h

logger = logging.getLogger(__name__)

# =========================
# Match records
# =========================

class PnrMatch(NamedTuple):
    value: str
    offset: int

class SeatMatch(NamedTuple):
    value: str
    offset: int

class AirportTime(NamedTuple):
    airport: str
    time: str
    offset: int

class FlightMatch(NamedTuple):
    number: str
    offset: int

class RouteMatch(NamedTuple):
    city1: str
    city2: str
    date: Optional[str]
    dep_code: Optional[str]
    arr_code: Optional[str]
    offset: int

# =========================
# Constants & small helpers
# =========================

MONTH_NUMBERS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

CARRIER_PREFIXES = ("6E", "AI", "SG", "UK", "G8", "I5", "QP")

PASSENGER_TYPE_WORDS = {"ADULT", "CHILD", "INFANT"}

_PNR_RE = re.compile(r"PNR[:\s]*([A-Z0-9]{6})|PNR([A-Z0-9]{6})", re.I)
_PNR_SHAPED_RE = re.compile(r"[A-Z]{4}\d[A-F]", re.I)
_NAME_RE = re.compile(r"\b(?i:MRS|MR|MS|DR)\.\s*([A-Z][A-Za-z]+(?: [A-Z][A-Za-z]+){0,3})")

# Built once from the airport table: "CCU 10:50 hrs", "PAT\n12:00 hrs", "DEL 2:15 pm"
_AIRPORT_TIME_RE = re.compile(
    r"\b(%s)\s*\n?\s*(\d{1,2}):(\d{2})(?:\s*(hrs|am|pm)\b)?" % "|".join(AIRPORT_CODES),
    re.I,
)

# "New Delhi - Mumbai Fri, 30 Jan 2026" / "DEL - BOM\n15 Mar"
_ROUTE_RE = re.compile(
    r"([A-Za-z][A-Za-z ]*?)\s*-\s*([A-Za-z][A-Za-z ]*?)\s*\n?\s*"
    r"(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*[,\s]*)?"
    r"(\d{1,2})\s*(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s*(\d{4})?",
    re.I,
)

# Digits may run straight into a duration in dense layouts: "6E-3421h 10m"
_FLIGHT_RE = re.compile(
    r"\b(%s)[-\s]?(\d{2,5})(?!:)([hH]\s*\d+[mM])?" % "|".join(CARRIER_PREFIXES),
    re.I,
)


def iso_date(day: str, month: str, year: Optional[str], default_year: Optional[int] = None) -> Optional[str]:
    mon = MONTH_NUMBERS.get(month[:3].upper())
    if not mon:
        return None
    y = int(year) if year else (default_year or date.today().year)
    try:
        return date(y, mon, int(day)).isoformat()
    except ValueError:
        return None


def resolve_city_code(city: str) -> Optional[str]:
    """
    Map a route city to an airport code. The route capture can carry leading
    words of its line ("Booking details Delhi"), so the trailing one to three
    words are tried too, longest first.
    """
    words = city.split()
    if not words:
        return None
    for i in range(max(0, len(words) - 3), len(words)):
        cand = " ".join(words[i:])
        code = _lookup_city(cand)
        if code:
            return code
    return None


def _lookup_city(name: str) -> Optional[str]:
    low = name.lower()
    if len(low) == 3 and low.upper() in AIRPORT_CODES:
        return low.upper()
    for code, city in AIRPORT_CODES.items():
        if city.lower() == low:
            return code
    # short names collide too easily
    if len(low) < 5:
        return None
    best: Optional[Tuple[int, str]] = None
    for code, city in AIRPORT_CODES.items():
        d = edit_distance(city.lower(), low)
        if d <= 2 and (best is None or d < best[0]):
            best = (d, code)
    return best[1] if best else None

# =========================
# Scanners
# =========================

def scan_pnrs(text: str) -> List[PnrMatch]:
    """All distinct PNRs; round-trip tickets carry one per segment."""
    out: List[PnrMatch] = []
    seen = set()
    for m in _PNR_RE.finditer(text):
        pnr = (m.group(1) or m.group(2)).upper()
        if pnr not in seen:
            seen.add(pnr)
            out.append(PnrMatch(pnr, m.start()))
    logger.debug("PNRs found: %s", out)
    return out


def scan_passenger_name(text: str) -> Optional[str]:
    m = _NAME_RE.search(text)
    if not m:
        return None
    words = m.group(1).split()
    while words and words[-1].upper() in PASSENGER_TYPE_WORDS:
        words.pop()
    return " ".join(words) or None


def _seats_before_included(text: str) -> List[SeatMatch]:
    return [SeatMatch(m.group(1).upper(), m.start(1))
            for m in re.finditer(r"(\d{1,2}[A-F])\s*Included", text, flags=re.I)]

def _seats_after_adult(text: str) -> List[SeatMatch]:
    return [SeatMatch(m.group(1).upper(), m.start(1))
            for m in re.finditer(r"Adult\s*(\d{1,2}[A-F])", text, flags=re.I)]

def _seats_before_code(text: str) -> List[SeatMatch]:
    # "2D B7W3TJ", "2DB7W3TJ"
    return [SeatMatch(m.group(1), m.start(1))
            for m in re.finditer(r"(\d{1,2}[A-F])\s*[A-Z0-9]{6}\b", text)]

def _standalone_seats(text: str) -> List[SeatMatch]:
    # not preceded by a letter, so "IYYI6A" does not yield "6A"
    return [SeatMatch(m.group(1).upper(), m.start(1))
            for m in re.finditer(r"(?<![A-Za-z])(\d{1,2}[A-F])\b", text, flags=re.I)]


# Most to least specific; (matcher, keep repeated values)
SEAT_MATCHERS: List[Tuple[Callable[[str], List[SeatMatch]], bool]] = [
    (_seats_before_included, True),
    (_seats_after_adult, False),
    (_seats_before_code, False),
    (_standalone_seats, False),
]


def scan_seats(text: str) -> List[SeatMatch]:
    seats: List[SeatMatch] = []
    for matcher, keep_repeats in SEAT_MATCHERS:
        found = [s for s in matcher(text) if s.value not in SEAT_SHAPED_CARRIERS]
        if not keep_repeats:
            distinct: List[SeatMatch] = []
            for s in found:
                if all(s.value != d.value for d in distinct):
                    distinct.append(s)
            found = distinct
        if found:
            seats = found
            break

    pnr_suffixes = {m.group(0)[-2:].upper() for m in _PNR_SHAPED_RE.finditer(text)}
    seats = [s for s in seats if s.value not in pnr_suffixes]
    logger.debug("Seats found: %s", [s.value for s in seats])
    return seats


def scan_airport_times(text: str) -> List[AirportTime]:
    out = [AirportTime(m.group(1).upper(), to_24h(m.group(2), m.group(3), m.group(4)), m.start())
           for m in _AIRPORT_TIME_RE.finditer(text)]
    logger.debug("Airport times found: %s", ["%s %s @%d" % at for at in out])
    return out


def scan_routes(text: str, default_year: Optional[int] = None) -> List[RouteMatch]:
    out: List[RouteMatch] = []
    for m in _ROUTE_RE.finditer(text):
        city1, city2 = m.group(1).strip(), m.group(2).strip()
        out.append(RouteMatch(
            city1=city1,
            city2=city2,
            date=iso_date(m.group(3), m.group(4), m.group(5), default_year),
            dep_code=resolve_city_code(city1),
            arr_code=resolve_city_code(city2),
            offset=m.start(),
        ))
    logger.debug("Routes found: %s", ["%s-%s @%d" % (r.city1, r.city2, r.offset) for r in out])
    return out


def scan_flight_numbers(text: str) -> List[FlightMatch]:
    out: List[FlightMatch] = []
    for m in _FLIGHT_RE.finditer(text):
        digits = m.group(2)
        if m.group(3) and len(digits) >= 4:
            # last digit is the hour count of the duration
            digits = digits[:-1]
        out.append(FlightMatch(f"{m.group(1).upper()}-{digits}", m.start()))
    return out
