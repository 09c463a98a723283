import csv
import json

from click.testing import CliRunner

from ticket_extractor import loader
from ticket_extractor.cli import main

def test_parse_text_round_trip(tmp_path, round_trip_text):
    p = tmp_path / "ticket.txt"
    p.write_text(round_trip_text, encoding="utf-8")
    result = CliRunner().invoke(main, [
        "parse-text", str(p), "--category", "round_trip",
        "--return", '{"departure_city": "Bombay", "arrival_city": "Delhi"}',
    ])
    assert result.exit_code == 0, result.output
    res = json.loads(result.stdout)
    assert res["journeys_found"] == 2
    assert res["return"]["pnr"] == "ZX34CV"
    assert res["return"]["matched"] is True

def test_bad_json_option(tmp_path, one_way_text):
    p = tmp_path / "ticket.txt"
    p.write_text(one_way_text, encoding="utf-8")
    result = CliRunner().invoke(main, ["parse-text", str(p), "--onward", "{oops"])
    assert result.exit_code != 0
    assert "not valid JSON" in result.output

def test_extract_writes_report(tmp_path, one_way_text, monkeypatch):
    monkeypatch.delenv("AVIATIONSTACK_API_KEY", raising=False)
    monkeypatch.setattr(loader, "extract_pdf_text", lambda data, filename="": {"text": one_way_text})
    (tmp_path / "ticket.pdf").write_bytes(b"%PDF-1.4")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    report = tmp_path / "out" / "report.csv"

    result = CliRunner().invoke(main, [
        "extract", str(tmp_path), "--no-ocr", "--no-enrich", "--report", str(report),
        "--onward", '{"departure_city": "New Delhi", "arrival_city": "Mumbai"}',
    ])
    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 1
    res = json.loads(lines[0])
    assert res["path_in"].endswith("ticket.pdf")
    assert res["onward"]["matched"] is True

    with open(report, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["leg"] == "onward"
    assert rows[0]["flight_number"] == "6E-2341"
    assert rows[0]["matched"] == "True"
