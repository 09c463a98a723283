import httpx

from ticket_extractor.enrichment import (
    FlightEnrichmentClient, calculate_arrival_time, enrich_journeys, normalize_flight_number,
)
from ticket_extractor.journeys import empty_journey

LIVE_PAYLOAD = {
    "data": [{
        "flight_status": "scheduled",
        "airline": {"name": "Air India"},
        "departure": {"iata": "BOM", "airport": "Chhatrapati Shivaji International",
                      "scheduled": "2026-03-15T18:40:00+00:00"},
        "arrival": {"iata": "DEL", "airport": "Indira Gandhi International",
                    "scheduled": "2026-03-15T20:50:00+00:00"},
    }]
}

def _journey(**fields):
    j = empty_journey()
    j.update(fields)
    return j

def _mock_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))

def test_normalize_flight_number():
    assert normalize_flight_number("6e342") == "6E-342"
    assert normalize_flight_number("AI 505") == "AI-505"
    assert normalize_flight_number("XX123") is None

def test_calculate_arrival_time_wraps_midnight():
    assert calculate_arrival_time("06:00", 130) == "08:10"
    assert calculate_arrival_time("23:30", 90) == "01:00"

def test_local_schedule_lookup():
    info = FlightEnrichmentClient().lookup_flight("6E 343")
    assert info["departure_airport"] == "CCU"
    assert info["departure_time"] == "10:50"
    assert info["arrival_city"] == "Patna"
    assert FlightEnrichmentClient().lookup_flight("6E-9999") is None

def test_live_lookup():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=LIVE_PAYLOAD)

    with FlightEnrichmentClient(api_key="k", http_client=_mock_client(handler)) as client:
        info = client.lookup_flight("AI505", "2026-03-15")
    assert seen["flight_iata"] == "AI505"
    assert seen["access_key"] == "k"
    assert seen["flight_date"] == "2026-03-15"
    assert info["departure_time"] == "18:40"
    assert info["arrival_airport"] == "DEL"
    assert info["status"] == "scheduled"

def test_live_failure_falls_back_to_local_table():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    client = FlightEnrichmentClient(api_key="k", http_client=_mock_client(handler))
    info = client.lookup_flight("AI-505")
    assert info["departure_time"] == "18:30"
    assert info["departure_city"] == "Mumbai"

def test_enhance_flight_data_from_schedule():
    out = FlightEnrichmentClient().enhance_flight_data({"flight_number": "6E-343"})
    assert out["enhanced"] is True
    assert out["airline"] == "IndiGo"
    assert (out["departure_time"], out["arrival_time"]) == ("10:50", "12:00")

def test_enhance_flight_data_computes_arrival():
    out = FlightEnrichmentClient().enhance_flight_data({
        "flight_number": None, "departure_airport": "DEL", "arrival_airport": "BOM",
        "departure_time": "06:00", "arrival_time": None,
    })
    assert out == {"enhanced": True, "arrival_time": "08:10"}

def test_enhance_flight_data_nothing_found():
    assert FlightEnrichmentClient().enhance_flight_data({"flight_number": "6E-9999"}) == {"enhanced": False}

def test_schedule_times_overwrite_but_names_only_fill_gaps():
    j = _journey(flight_number="6E-343", departure_city="Calcutta", departure_airport="CCU",
                 arrival_airport="PAT", departure_time="09:00", arrival_time="09:30")
    enrich_journeys([j], FlightEnrichmentClient())
    assert (j["departure_time"], j["arrival_time"]) == ("10:50", "12:00")
    assert j["airline"] == "IndiGo"
    assert j["departure_city"] == "Calcutta"
    assert j["arrival_city"] == "Patna"

def test_enriched_departure_after_ticket_arrival_clears_times():
    payload = {"data": [{
        "airline": {"name": "Air India"},
        "departure": {"iata": "BOM", "scheduled": "2026-03-15T21:00:00+00:00"},
        "arrival": {"iata": "DEL"},
    }]}
    client = FlightEnrichmentClient(
        api_key="k", http_client=_mock_client(lambda request: httpx.Response(200, json=payload)))
    j = _journey(pnr="AB12C3", flight_number="AI-505", departure_city="Mumbai", departure_airport="BOM",
                 arrival_city="Delhi", arrival_airport="DEL", departure_date="2026-03-15",
                 departure_time="18:00", arrival_time="20:00", seat_number="12A")
    enrich_journeys([j], client)
    assert j["departure_time"] is None
    assert j["arrival_time"] is None
    assert (j["pnr"], j["flight_number"], j["seat_number"]) == ("AB12C3", "AI-505", "12A")
    assert (j["departure_airport"], j["arrival_airport"]) == ("BOM", "DEL")
    assert j["departure_date"] == "2026-03-15"
    assert j["airline"] == "Air India"

def test_enrichment_failure_leaves_journey_unchanged():
    class Broken(FlightEnrichmentClient):
        def enhance_flight_data(self, extracted):
            raise RuntimeError("lookup exploded")

    j = _journey(flight_number="6E-343", departure_time="09:00", arrival_time="09:30")
    enrich_journeys([j], Broken())
    assert (j["departure_time"], j["arrival_time"]) == ("09:00", "09:30")

def test_journeys_without_flight_number_are_skipped():
    j = _journey(departure_airport="DEL", arrival_airport="BOM", departure_time="06:00")
    enrich_journeys([j], FlightEnrichmentClient())
    assert j["arrival_time"] is None
