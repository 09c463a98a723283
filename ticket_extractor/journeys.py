import logging
from typing import List, Optional, Sequence, TypedDict

from .airports import AIRPORT_CODES, airline_from_code
from .extractors import extract_flight_details
from .scanners import (
    AirportTime, PnrMatch, RouteMatch,
    scan_airport_times, scan_flight_numbers, scan_passenger_name, scan_pnrs,
    scan_routes, scan_seats,
)
from .utils import minutes_since_midnight, normalize_ticket_text

logger = logging.getLogger(__name__)


class Journey(TypedDict):
    pnr: Optional[str]
    airline: Optional[str]
    flight_number: Optional[str]
    departure_city: Optional[str]
    departure_airport: Optional[str]
    departure_date: Optional[str]
    departure_time: Optional[str]
    arrival_city: Optional[str]
    arrival_airport: Optional[str]
    arrival_time: Optional[str]
    seat_number: Optional[str]
    passenger_name: Optional[str]


JOURNEY_FIELDS = tuple(Journey.__annotations__)


def empty_journey() -> Journey:
    return Journey(**{f: None for f in JOURNEY_FIELDS})


def check_time_sanity(journey: Journey) -> bool:
    """
    Clear both times when arrival is earlier in the day than departure; the
    ticket carries no date rollover we could trust. Returns False if cleared.
    """
    dep, arr = journey["departure_time"], journey["arrival_time"]
    if not (dep and arr):
        return True
    if minutes_since_midnight(arr) < minutes_since_midnight(dep):
        logger.warning("Invalid times for %s: dep %s, arr %s",
                       journey["flight_number"], dep, arr)
        journey["departure_time"] = None
        journey["arrival_time"] = None
        return False
    return True


def _segment_pnr(i: int, start: int, end: int, pnrs: Sequence[PnrMatch]) -> Optional[str]:
    inside = [p for p in pnrs if start <= p.offset < end]
    if inside:
        return inside[0].value
    return _positional_pnr(i, pnrs)


def _positional_pnr(i: int, pnrs: Sequence[PnrMatch]) -> Optional[str]:
    # i-th segment gets the i-th PNR, else the document's first
    if len(pnrs) > i:
        return pnrs[i].value
    if pnrs:
        return pnrs[0].value
    return None


def _time_for(code: Optional[str], primary: Sequence[AirportTime], secondary: Sequence[AirportTime]) -> Optional[str]:
    if not code:
        return None
    for pool in (primary, secondary):
        for at in pool:
            if at.airport == code:
                return at.time
    return None


def _journeys_from_routes(text: str, routes: List[RouteMatch]) -> List[Journey]:
    pnrs = scan_pnrs(text)
    seats = scan_seats(text)
    flights = scan_flight_numbers(text)
    times = scan_airport_times(text)
    name = scan_passenger_name(text)

    journeys: List[Journey] = []
    for i, route in enumerate(routes):
        start = route.offset
        end = routes[i + 1].offset if i + 1 < len(routes) else len(text)
        prev_start = routes[i - 1].offset if i > 0 else 0

        flight = next((f for f in flights if start <= f.offset < end), None)
        pnr = _segment_pnr(i, start, end, pnrs)

        # some layouts print both legs' times ahead of the second route line
        after = [at for at in times if start <= at.offset < end]
        before = [at for at in times if prev_start <= at.offset < start]
        dep_time = _time_for(route.dep_code, after, before)
        arr_time = _time_for(route.arr_code, after, before)

        logger.debug("Route %s-%s: pnr=%s, dep=%s, arr=%s",
                     route.city1, route.city2, pnr, dep_time, arr_time)

        journeys.append(Journey(
            pnr=pnr,
            airline=airline_from_code(flight.number.split("-")[0]) if flight else None,
            flight_number=flight.number if flight else None,
            departure_city=AIRPORT_CODES.get(route.dep_code) if route.dep_code else route.city1,
            departure_airport=route.dep_code,
            departure_date=route.date,
            departure_time=dep_time,
            arrival_city=AIRPORT_CODES.get(route.arr_code) if route.arr_code else route.city2,
            arrival_airport=route.arr_code,
            arrival_time=arr_time,
            seat_number=seats[i].value if i < len(seats) else None,
            passenger_name=name,
        ))
    return journeys


def assemble_journeys(raw_text: str, default_year: Optional[int] = None) -> List[Journey]:
    """
    Rebuild every journey on the ticket. Each "City - City <date>" line opens a
    segment that runs to the next one; entities are assigned to the segment
    their offset falls in. With no route line at all, a single journey is built
    from the whole document.
    """
    text = normalize_ticket_text(raw_text)
    routes = scan_routes(text, default_year=default_year)

    if routes:
        journeys = _journeys_from_routes(text, routes)
    else:
        logger.debug("No route lines found, using single-pass extraction")
        details = extract_flight_details(text)
        journey = empty_journey()
        journey.update({k: details.get(k) for k in JOURNEY_FIELDS})
        journeys = [journey]

    for journey in journeys:
        check_time_sanity(journey)
    logger.info("Found journeys: %d", len(journeys))
    return journeys
