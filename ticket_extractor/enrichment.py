"""Flight lookups used to fill in and correct journeys read off a ticket."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TypedDict

import httpx
import regex as re

from .airports import AIRLINE_CODE_MAP, AIRPORT_CODES
from .flight_data import DEFAULT_DURATION_MINS, FLIGHT_SCHEDULES, ROUTE_DURATIONS
from .journeys import Journey, check_time_sanity
from .scanners import CARRIER_PREFIXES
from .utils import minutes_since_midnight

logger = logging.getLogger(__name__)

AVIATIONSTACK_URL = "http://api.aviationstack.com/v1"

_FLIGHT_NUMBER_RE = re.compile(r"^(%s)[-\s]?(\d{2,4})$" % "|".join(CARRIER_PREFIXES))


class FlightInfo(TypedDict):
    flight_number: str
    airline: str
    departure_airport: str
    departure_city: str
    departure_time: str
    arrival_airport: str
    arrival_city: str
    arrival_time: str
    duration_mins: int
    status: Optional[str]


def normalize_flight_number(flight_number: str) -> Optional[str]:
    """6E342 / 6E 342 / 6e-342 -> 6E-342"""
    m = _FLIGHT_NUMBER_RE.match(flight_number.strip().upper())
    if not m:
        return None
    return f"{m.group(1)}-{m.group(2)}"


def typical_duration(origin: str, destination: str) -> int:
    return ROUTE_DURATIONS.get(f"{origin}-{destination}", DEFAULT_DURATION_MINS)


def calculate_arrival_time(departure_time: str, duration_mins: int) -> str:
    total = minutes_since_midnight(departure_time) + duration_mins
    return f"{(total // 60) % 24:02d}:{total % 60:02d}"


class FlightEnrichmentClient:
    """
    Looks flights up on AviationStack when an API key is configured, and in the
    bundled schedule table otherwise (or when the live lookup fails).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = AVIATIONSTACK_URL,
        timeout: float = 6.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, headers={"Accept": "application/json"})
        return self._client

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FlightEnrichmentClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def lookup_flight(self, flight_number: str, date: Optional[str] = None) -> Optional[FlightInfo]:
        normalized = normalize_flight_number(flight_number)
        if not normalized:
            return None
        if self.api_key:
            info = self._lookup_live(normalized, date)
            if info:
                return info
        return self._lookup_local(normalized)

    def _lookup_live(self, flight_number: str, date: Optional[str] = None) -> Optional[FlightInfo]:
        code, number = flight_number.split("-")
        params = {"access_key": self.api_key, "flight_iata": f"{code}{number}", "limit": 1}
        if date:
            params["flight_date"] = date
        try:
            response = self.client.get(f"{self.base_url}/flights", params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("AviationStack lookup failed for %s: %s", flight_number, exc)
            return None

        data = payload.get("data") or []
        if not data:
            return None
        flight = data[0]
        dep = flight.get("departure") or {}
        arr = flight.get("arrival") or {}
        return FlightInfo(
            flight_number=flight_number,
            airline=(flight.get("airline") or {}).get("name") or AIRLINE_CODE_MAP.get(code, code),
            departure_airport=dep.get("iata") or "",
            departure_city=dep.get("airport") or "",
            # scheduled is ISO 8601: 2026-03-15T06:00:00+00:00
            departure_time=(dep.get("scheduled") or "")[11:16],
            arrival_airport=arr.get("iata") or "",
            arrival_city=arr.get("airport") or "",
            arrival_time=(arr.get("scheduled") or "")[11:16],
            duration_mins=0,
            status=flight.get("flight_status"),
        )

    @staticmethod
    def _lookup_local(flight_number: str) -> Optional[FlightInfo]:
        entry = FLIGHT_SCHEDULES.get(flight_number)
        if not entry:
            return None
        return FlightInfo(
            flight_number=flight_number,
            airline=entry["airline"],
            departure_airport=entry["origin"],
            departure_city=AIRPORT_CODES.get(entry["origin"], entry["origin"]),
            departure_time=entry["departure"],
            arrival_airport=entry["destination"],
            arrival_city=AIRPORT_CODES.get(entry["destination"], entry["destination"]),
            arrival_time=entry["arrival"],
            duration_mins=entry["duration_mins"],
            status=None,
        )

    def enhance_flight_data(self, extracted: Dict[str, Optional[str]]) -> Dict[str, Any]:
        """
        Input keys: flight_number, departure_airport, arrival_airport,
        departure_time, arrival_time, and optionally departure_date (passed to
        the live lookup). Output always has ``enhanced``; the other
        keys are present only when a value was found.
        """
        result: Dict[str, Any] = {"enhanced": False}

        flight_number = extracted.get("flight_number")
        if flight_number:
            info = self.lookup_flight(flight_number, extracted.get("departure_date"))
            if info:
                result["flight_number"] = info["flight_number"]
                result["airline"] = info["airline"]
                for side in ("departure", "arrival"):
                    for key in ("airport", "city", "time"):
                        value = info[f"{side}_{key}"]
                        if value:
                            result[f"{side}_{key}"] = value
                result["enhanced"] = True

        dep_time = extracted.get("departure_time")
        origin, destination = extracted.get("departure_airport"), extracted.get("arrival_airport")
        if dep_time and not extracted.get("arrival_time") and origin and destination and "arrival_time" not in result:
            result["arrival_time"] = calculate_arrival_time(dep_time, typical_duration(origin, destination))
            result["enhanced"] = True

        return result


def apply_enhancement(journey: Journey, enhanced: Dict[str, Any]) -> None:
    """Schedule times always win over OCR'd times; everything else only fills gaps."""
    if not enhanced.get("enhanced"):
        return
    for key in ("airline", "departure_city", "arrival_city"):
        if not journey[key] and enhanced.get(key):
            journey[key] = enhanced[key]
    for key in ("departure_time", "arrival_time"):
        if enhanced.get(key):
            journey[key] = enhanced[key]


def enrich_journeys(journeys: List[Journey], client: FlightEnrichmentClient) -> List[Journey]:
    # one lookup at a time, in ticket order
    for journey in journeys:
        if journey["flight_number"]:
            try:
                enhanced = client.enhance_flight_data({
                    "flight_number": journey["flight_number"],
                    "departure_date": journey["departure_date"],
                    "departure_airport": journey["departure_airport"],
                    "arrival_airport": journey["arrival_airport"],
                    "departure_time": journey["departure_time"],
                    "arrival_time": journey["arrival_time"],
                })
            except Exception:
                logger.exception("Failed to enhance journey %s", journey["flight_number"])
            else:
                apply_enhancement(journey, enhanced)
                if enhanced.get("enhanced"):
                    logger.info("Enhanced journey %s: dep=%s arr=%s", journey["flight_number"],
                                journey["departure_time"], journey["arrival_time"])
        check_time_sanity(journey)
    return journeys
