import re
import unicodedata
from typing import Optional

from rapidfuzz.distance import Levenshtein

UNICODE_SPACES = "\u00a0\u2000-\u200b\u202f\u205f\u3000"
_UNICODE_SPACE_RE = re.compile(f"[{UNICODE_SPACES}]")
_DASH_RE = re.compile("[\u2013\u2014]")
_WS_RUN_RE = re.compile(r"\s+")


def normalize_ticket_text(text: str) -> str:
    """
    Canonical form used by every scanner: LF line endings, ASCII spaces and
    hyphens, inline whitespace runs collapsed to one space, line breaks kept.
    Offsets reported by the scanners refer to this string.
    """
    if not text:
        return ""
    s = text.replace("\r\n", "\n")
    s = _UNICODE_SPACE_RE.sub(" ", s)
    s = _DASH_RE.sub("-", s)
    return _WS_RUN_RE.sub(lambda m: "\n" if "\n" in m.group(0) else " ", s)


def normalize_text(s: str) -> str:
    """Lowercase, strip accents, collapse whitespace."""
    if not s:
        return ""
    s = _UNICODE_SPACE_RE.sub(" ", s)
    s = unicodedata.normalize("NFKD", s)
    s = "".join([c for c in s if not unicodedata.combining(c)])
    s = s.lower()
    s = re.sub(r'\s+', ' ', s).strip()
    return s


def to_24h(hh: str, mm: str, period: Optional[str] = None) -> str:
    """12:00 am -> 00:00, 2:15 pm -> 14:15; 'hrs' and no period pass through."""
    h = int(hh)
    if period:
        p = period.upper()
        if p == "PM" and h < 12:
            h += 12
        if p == "AM" and h == 12:
            h = 0
    return f"{h:02d}:{int(mm):02d}"


def minutes_since_midnight(hhmm: str) -> int:
    hh, mm = hhmm.split(":")[:2]
    return int(hh) * 60 + int(mm)


def edit_distance(a: str, b: str) -> int:
    return Levenshtein.distance(a, b)
