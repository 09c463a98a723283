import json

from ticket_extractor import extract_ticket, pipeline, process_ticket_text
from ticket_extractor.enrichment import FlightEnrichmentClient
from ticket_extractor.pipeline import parse_requested_leg

def _text(value):
    return lambda data, filename: {"text": value}

def test_one_way_pdf(one_way_text, offline_settings):
    res = extract_ticket(b"%PDF-", "ticket.pdf", settings=offline_settings, text_extractor=_text(one_way_text))
    assert res["success"] is True
    assert res["ticket_category"] == "one_way"
    assert res["journeys_found"] == 1
    assert res["onward"]["flight_number"] == "6E-2341"
    assert res["onward"]["matched"] is True
    assert res["onward"]["discrepancies"] == []
    assert res["return"] is None
    assert res["confidence"] == 95
    assert res["raw_text_sample"] == one_way_text[:500]

def test_round_trip_request_matches(round_trip_text, offline_settings):
    res = extract_ticket(
        b"%PDF-", "ticket.pdf", "application/pdf",
        trip_category="round_trip",
        requested_onward={"departure_city": "Delhi", "arrival_city": "Mumbai", "departure_date": "2026-03-15"},
        requested_return=json.dumps({"departure_city": "Mumbai", "arrival_city": "Delhi",
                                     "departure_date": "2026-03-20"}),
        settings=offline_settings,
        text_extractor=_text(round_trip_text),
    )
    assert res["journeys_found"] == 2
    assert res["onward"]["pnr"] == "QW12ER" and res["onward"]["matched"]
    assert res["return"]["pnr"] == "ZX34CV" and res["return"]["matched"]
    assert res["confidence"] == 95

def test_round_trip_without_requests_scores_zero(round_trip_text):
    res = process_ticket_text(round_trip_text, "round_trip")
    assert res["journeys_found"] == 2
    assert res["onward"] is None
    assert res["return"] is None
    assert res["confidence"] == 0

def test_partial_settings_are_completed(one_way_text):
    settings = {"ocr": {"enabled": False}, "enrichment": {"enabled": False}}
    res = extract_ticket(b"%PDF-", "ticket.pdf", settings=settings, text_extractor=_text(one_way_text))
    assert res["success"] is True
    assert res["journeys_found"] == 1
    assert settings == {"ocr": {"enabled": False}, "enrichment": {"enabled": False}}

def test_same_input_same_output(round_trip_text, offline_settings):
    kwargs = dict(trip_category="round_trip", settings=offline_settings, text_extractor=_text(round_trip_text))
    assert extract_ticket(b"%PDF-", "t.pdf", **kwargs) == extract_ticket(b"%PDF-", "t.pdf", **kwargs)

def test_insufficient_text(offline_settings):
    res = extract_ticket(b"%PDF-", "ticket.pdf", settings=offline_settings, text_extractor=_text("PNR"))
    assert res == {
        "success": False,
        "error": "Could not extract text from the ticket. Please ensure the image is clear and readable.",
        "error_code": "insufficient_text",
    }

def test_insufficient_text_after_ocr(offline_settings):
    offline_settings["ocr"]["enabled"] = True
    calls = []

    def ocr(data, filename):
        calls.append(filename)
        return {"success": True, "text": "6E 342\n"}

    res = extract_ticket(b"%PDF-", "scan.pdf", settings=offline_settings,
                         text_extractor=_text(""), ocr_extractor=ocr)
    assert calls == ["scan.pdf"]
    assert res["success"] is False
    assert res["error"].startswith("Could not extract text")
    assert "journeys_found" not in res

def test_unsupported_file(offline_settings):
    res = extract_ticket(b"PK", "ticket.docx", settings=offline_settings)
    assert res["success"] is False
    assert res["error_code"] == "unsupported_file_type"

def test_image_with_ocr_disabled(offline_settings):
    ocr = lambda data, filename: {"success": True, "text": "never used"}
    res = extract_ticket(b"\x89PNG", "ticket.png", settings=offline_settings, ocr_extractor=ocr)
    assert res["error_code"] == "image_ocr_unavailable"

def test_image_with_ocr(one_way_text, offline_settings):
    offline_settings["ocr"]["enabled"] = True
    ocr = lambda data, filename: {"success": True, "text": one_way_text}
    res = extract_ticket(b"\x89PNG", "ticket.png", settings=offline_settings, ocr_extractor=ocr)
    assert res["success"] is True
    assert res["onward"]["seat_number"] == "2D"

def test_unexpected_error_is_reported(one_way_text, offline_settings, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("scanner crashed")
    monkeypatch.setattr(pipeline, "assemble_journeys", boom)
    res = extract_ticket(b"%PDF-", "ticket.pdf", settings=offline_settings, text_extractor=_text(one_way_text))
    assert res == {"success": False, "error": "Failed to extract ticket details", "error_code": "internal_error"}

def test_enrichment_corrects_times():
    text = "Kolkata - Patna Sun, 15 Mar 2026\n6E-343\nPNR: AB12C3\nCCU 10:45 hrs PAT 11:55 hrs\n"
    res = process_ticket_text(text, enricher=FlightEnrichmentClient())
    onward = res["onward"]
    assert (onward["departure_time"], onward["arrival_time"]) == ("10:50", "12:00")
    assert onward["airline"] == "IndiGo"

def test_requests_that_are_not_json_are_ignored(one_way_text):
    res = process_ticket_text(one_way_text, "oneway", requested_onward="{not json")
    assert res["ticket_category"] == "one_way"
    assert res["onward"]["matched"] is True

def test_mismatched_request_lowers_confidence(one_way_text):
    res = process_ticket_text(one_way_text, "one_way", {"departure_city": "Chennai"})
    assert res["onward"]["matched"] is False
    assert res["onward"]["discrepancies"][0]["field"] == "From"
    assert res["confidence"] == 50

def test_parse_requested_leg():
    assert parse_requested_leg('{"departure_city": "Delhi", "extra": 1}') == {
        "departure_city": "Delhi", "arrival_city": None, "departure_date": None}
    assert parse_requested_leg("[1, 2]") is None
    assert parse_requested_leg("") is None
