from typing import Dict, List, Optional, Tuple
import regex as re
from dateutil import parser as dateparser

from .airports import AIRPORT_CODES, AIRLINE_CODE_MAP, SEAT_SHAPED_CARRIERS
from .scanners import CARRIER_PREFIXES
from .utils import edit_distance, to_24h

# =========================
# Constants & small helpers
# =========================

# Airline by name or by flight-number shape
AIRLINE_PATTERNS = [
    ("IndiGo", r"(?i)indigo|6e[-\s]?\d{3,4}"),
    ("Air India", r"(?i)air\s*india|ai[-\s]?\d{3,4}"),
    ("SpiceJet", r"(?i)spicejet|sg[-\s]?\d{3,4}"),
    ("Vistara", r"(?i)vistara|uk[-\s]?\d{3,4}"),
    ("Go First", r"(?i)go\s*first|g8[-\s]?\d{3,4}"),
    ("AirAsia", r"(?i)airasia|i5[-\s]?\d{3,4}"),
    ("Akasa Air", r"(?i)akasa|qp[-\s]?\d{3,4}"),
]

_CARRIERS = "|".join(CARRIER_PREFIXES)
_WEEKDAYS = r"(?:MON|TUE|WED|THU|FRI|SAT|SUN)"
_MONTHS = r"(?:JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)"


def try_parse_date(s: str) -> Optional[str]:
    try:
        dt = dateparser.parse(s, dayfirst=True, yearfirst=False, fuzzy=True)
        if dt:
            return dt.strftime("%Y-%m-%d")
    except (ValueError, OverflowError):
        return None
    return None

def _is_mixed(token: str) -> bool:
    return bool(re.search(r"[A-Z]", token)) and bool(re.search(r"\d", token))

def _city_code(city: str) -> Optional[str]:
    c = city.lower()
    for code, name in AIRPORT_CODES.items():
        n = name.lower()
        if n == c or n in c or (len(c) >= 5 and edit_distance(n, c) <= 2):
            return code
    return None

# ============================
# Single-pass ticket fields
# ============================

def _extract_pnr(upper: str) -> Optional[str]:
    m = re.search(r"PNR[:\s]*([A-Z0-9]{6})", upper) or re.search(r"PNR([A-Z0-9]{6})", upper)
    if m:
        return m.group(1)
    # looser patterns only count when the token mixes letters and digits
    loose = [
        r"BOOKING\s*(?:REF|REFERENCE|ID)?[:\s]*([A-Z0-9]{6})",
        r"CONFIRMATION[:\s]*([A-Z0-9]{6})",
        r"(?:^|\s)([A-Z0-9]{6})(?=\s|$)",
    ]
    for pat in loose:
        for m in re.finditer(pat, upper):
            if _is_mixed(m.group(1)):
                return m.group(1)
    return None

def _extract_airline(text: str) -> Optional[str]:
    for airline, pat in AIRLINE_PATTERNS:
        if re.search(pat, text):
            return airline
    return None

def _extract_flight_number(upper: str) -> Optional[str]:
    patterns = [
        # 6E-6348 / 6E 6348
        rf"\b({_CARRIERS})[-\s](\d{{3,4}})\b",
        # glued to a duration: 6E63481h 10m
        rf"\b({_CARRIERS})[-\s]?(\d{{3,4}})\d*[H]\s*\d+[M]",
        rf"\b({_CARRIERS})[-\s]?(\d{{3,4}})",
    ]
    for pat in patterns:
        m = re.search(pat, upper)
        if m:
            return f"{m.group(1)}-{m.group(2)}"
    return None

def _extract_route(text: str) -> Tuple[Optional[str], Optional[str]]:
    patterns = [
        r"(?i)BOOKING\s*DETAILS\s*\n?\s*([A-Za-z]+)\s*-\s*([A-Za-z]+)",
        rf"(?i)([A-Za-z]+)\s*-\s*([A-Za-z]+)\s*{_WEEKDAYS}",
        r"(?i)journey\s+on\s+([A-Za-z]+)\s*-\s*([A-Za-z]+)",
    ]
    for pat in patterns:
        m = re.search(pat, text)
        if m:
            dep, arr = _city_code(m.group(1)), _city_code(m.group(2))
            if dep and arr:
                return dep, arr

    # first two distinct known codes in document order ("CCU21:35" counts)
    positions: List[Tuple[int, str]] = []
    for code in AIRPORT_CODES:
        m = re.search(rf"\b{code}(?:\b|\d)", text)
        if m:
            positions.append((m.start(), code))
    positions.sort()
    codes = [code for _, code in positions]
    return (codes[0] if codes else None), (codes[1] if len(codes) > 1 else None)

def _extract_times(text: str) -> Tuple[Optional[str], Optional[str]]:
    found = [to_24h(h, mm, p)
             for h, mm, p in re.findall(r"(?i)(\d{1,2}):(\d{2})\s*(AM|PM|HRS|H)?", text)]
    dep = found[0] if found else None
    arr = found[1] if len(found) > 1 else None
    return dep, arr

def _extract_departure_date(text: str) -> Optional[str]:
    # travel dates carry a weekday; a bare date may be the booking date
    patterns = [
        rf"(?i){_WEEKDAYS}[A-Z]*[,\s]+\d{{1,2}}\s+{_MONTHS}[A-Z]*(?:\s+\d{{4}})?",
        rf"(?i)\d{{1,2}}\s+{_MONTHS}[A-Z]*\s+\d{{4}}",
        r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}",
    ]
    for pat in patterns:
        m = re.search(pat, text)
        if m:
            return try_parse_date(m.group(0))
    return None

def _extract_seat(upper: str) -> Optional[str]:
    patterns = [
        r"SEAT[:\s]*([0-9]{1,2}[A-F])\b",
        r"TRAVELLER.*?\b([0-9]{1,2}[A-F])\b.*?(?:INCLUDED|MEAL)",
        r"\b([0-9]{1,2}[A-F])\s*INCLUDED",
        r"\b([0-9]{1,2}[A-F])(?=[A-Z]{6})",
    ]
    for pat in patterns:
        m = re.search(pat, upper)
        if m and m.group(1) not in SEAT_SHAPED_CARRIERS:
            return m.group(1)
    return None

def _extract_passenger_name(text: str) -> Optional[str]:
    patterns = [
        r"(?i)(?:MR\.|MRS\.|MS\.|DR\.)\s*([A-Z][A-Z\s]{2,30}?)(?:\s+Adult|\s+Child|\s*$)",
        r"(?i)TRAVELLERS?.*?(?:MR\.|MRS\.|MS\.|DR\.)?\s*([A-Z][A-Z\s]{2,30}?)(?:\s+Adult|\s+Child)",
        r"(?i)PASSENGER[:\s]+([A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z]+){0,3})",
    ]
    for pat in patterns:
        m = re.search(pat, text)
        if m and len(m.group(1).strip()) > 3:
            return m.group(1).strip()
    return None

def extract_flight_details(text: str) -> Dict[str, Optional[str]]:
    """
    One journey from the whole document, for tickets whose route line the
    segment scanner cannot find.
    """
    flat = re.sub(r"\s+", " ", text or "").strip()
    upper = flat.upper()

    out: Dict[str, Optional[str]] = {
        "pnr": None, "airline": None, "flight_number": None,
        "departure_city": None, "departure_airport": None, "departure_date": None, "departure_time": None,
        "arrival_city": None, "arrival_airport": None, "arrival_time": None,
        "seat_number": None, "passenger_name": None,
    }

    out["pnr"] = _extract_pnr(upper)
    out["airline"] = _extract_airline(flat)

    fn = _extract_flight_number(upper)
    if fn:
        out["flight_number"] = fn
        if not out["airline"]:
            out["airline"] = AIRLINE_CODE_MAP.get(fn.split("-")[0])

    dep, arr = _extract_route(flat)
    out["departure_airport"], out["arrival_airport"] = dep, arr
    out["departure_city"] = AIRPORT_CODES.get(dep) if dep else None
    out["arrival_city"] = AIRPORT_CODES.get(arr) if arr else None

    out["departure_time"], out["arrival_time"] = _extract_times(flat)
    out["departure_date"] = _extract_departure_date(flat)
    out["seat_number"] = _extract_seat(upper)
    out["passenger_name"] = _extract_passenger_name(flat)

    return out
