from ticket_extractor.extractors import extract_flight_details, try_parse_date

def test_extract_flight_details_without_route_line():
    text = """IndiGo Boarding Pass
PNR: K9L8M7
Flight 6E 6348
CCU 10:10 hrs to PAT 11:20 hrs
Seat: 14C
Travel date 30/01/2026
"""
    ex = extract_flight_details(text)
    assert ex["pnr"] == "K9L8M7"
    assert ex["airline"] == "IndiGo"
    assert ex["flight_number"] == "6E-6348"
    assert ex["departure_airport"] == "CCU"
    assert ex["departure_city"] == "Kolkata"
    assert ex["arrival_airport"] == "PAT"
    assert ex["arrival_city"] == "Patna"
    assert ex["departure_time"] == "10:10"
    assert ex["arrival_time"] == "11:20"
    assert ex["departure_date"] == "2026-01-30"
    assert ex["seat_number"] == "14C"
    assert ex["passenger_name"] is None

def test_extract_flight_details_empty_text():
    ex = extract_flight_details("")
    assert len(ex) == 12
    assert all(v is None for v in ex.values())

def test_loose_pnr_needs_letters_and_digits():
    assert extract_flight_details("Booking ID ABCDEF confirmed")["pnr"] is None
    assert extract_flight_details("Booking ID AB12CD confirmed")["pnr"] == "AB12CD"

def test_airline_from_flight_number_shape():
    assert extract_flight_details("Flight AI 505 BOM to DEL")["airline"] == "Air India"

def test_try_parse_date():
    assert try_parse_date("05/03/2026") == "2026-03-05"
    assert try_parse_date("no date here") is None
