import pytest

from ticket_extractor.config import load_settings


ONE_WAY_TEXT = """IndiGo e-Ticket
PNR: AB12C3
DEL - BOM
Sun, 15 Mar 2026
6E-2341
DEL 06:00 hrs
BOM 08:15 hrs
Mr. Rahul Sharma Adult
2D Included
"""

ROUND_TRIP_TEXT = """Delhi - Mumbai Sun, 15 Mar 2026
6E-2135 PNR: QW12ER
DEL 13:30 hrs BOM 15:45 hrs
Adult 12A
Mumbai - Delhi Fri, 20 Mar 2026
6E-2136 PNR: ZX34CV
BOM 16:30 hrs DEL 18:45 hrs
Adult 14C
"""


@pytest.fixture()
def one_way_text() -> str:
    return ONE_WAY_TEXT


@pytest.fixture()
def round_trip_text() -> str:
    return ROUND_TRIP_TEXT


@pytest.fixture()
def offline_settings(monkeypatch):
    """Defaults with OCR and schedule lookups switched off."""
    monkeypatch.delenv("AVIATIONSTACK_API_KEY", raising=False)
    settings = load_settings()
    settings["ocr"]["enabled"] = False
    settings["enrichment"]["enabled"] = False
    return settings
