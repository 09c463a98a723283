"""Typical schedules for common Indian domestic flights, used when no live lookup is available."""
from typing import Dict, TypedDict


class ScheduleEntry(TypedDict):
    airline: str
    origin: str
    destination: str
    departure: str
    arrival: str
    duration_mins: int


def _entry(airline: str, origin: str, destination: str, departure: str, arrival: str, duration: int) -> ScheduleEntry:
    return ScheduleEntry(airline=airline, origin=origin, destination=destination,
                         departure=departure, arrival=arrival, duration_mins=duration)


FLIGHT_SCHEDULES: Dict[str, ScheduleEntry] = {
    # CCU - PAT
    "6E-342": _entry("IndiGo", "PAT", "CCU", "20:25", "21:35", 70),
    "6E-343": _entry("IndiGo", "CCU", "PAT", "10:50", "12:00", 70),
    "6E-6348": _entry("IndiGo", "CCU", "PAT", "10:10", "11:20", 70),
    "6E-6349": _entry("IndiGo", "PAT", "CCU", "12:50", "14:00", 70),
    "6E-527": _entry("IndiGo", "CCU", "PAT", "17:30", "18:40", 70),
    "6E-528": _entry("IndiGo", "PAT", "CCU", "07:00", "08:10", 70),
    "AI-433": _entry("Air India", "CCU", "PAT", "14:30", "15:40", 70),
    "AI-434": _entry("Air India", "PAT", "CCU", "16:15", "17:25", 70),
    # DEL - PAT
    "6E-175": _entry("IndiGo", "DEL", "PAT", "06:15", "07:55", 100),
    "6E-176": _entry("IndiGo", "PAT", "DEL", "08:25", "10:15", 110),
    "6E-2175": _entry("IndiGo", "DEL", "PAT", "14:00", "15:40", 100),
    "6E-2176": _entry("IndiGo", "PAT", "DEL", "16:15", "18:05", 110),
    "6E-5765": _entry("IndiGo", "DEL", "PAT", "21:00", "22:40", 100),
    "AI-435": _entry("Air India", "DEL", "PAT", "10:30", "12:10", 100),
    "AI-436": _entry("Air India", "PAT", "DEL", "12:45", "14:35", 110),
    "SG-8169": _entry("SpiceJet", "DEL", "PAT", "15:25", "17:05", 100),
    "SG-8170": _entry("SpiceJet", "PAT", "DEL", "17:35", "19:25", 110),
    # DEL - CCU
    "AI-401": _entry("Air India", "DEL", "CCU", "09:00", "11:15", 135),
    "AI-402": _entry("Air India", "CCU", "DEL", "12:00", "14:20", 140),
    "6E-2031": _entry("IndiGo", "DEL", "CCU", "06:30", "08:45", 135),
    "6E-2032": _entry("IndiGo", "CCU", "DEL", "09:30", "11:50", 140),
    "6E-286": _entry("IndiGo", "DEL", "CCU", "14:15", "16:30", 135),
    "6E-287": _entry("IndiGo", "CCU", "DEL", "17:15", "19:35", 140),
    "UK-725": _entry("Vistara", "DEL", "CCU", "07:10", "09:25", 135),
    "UK-726": _entry("Vistara", "CCU", "DEL", "10:05", "12:30", 145),
    "UK-773": _entry("Vistara", "DEL", "CCU", "19:00", "21:15", 135),
    "UK-774": _entry("Vistara", "CCU", "DEL", "22:00", "00:20", 140),
    # DEL - BOM
    "AI-505": _entry("Air India", "BOM", "DEL", "18:30", "20:35", 125),
    "AI-506": _entry("Air India", "DEL", "BOM", "07:00", "09:10", 130),
    "6E-6701": _entry("IndiGo", "DEL", "BOM", "06:00", "08:15", 135),
    "6E-6702": _entry("IndiGo", "BOM", "DEL", "09:00", "11:15", 135),
    "6E-2135": _entry("IndiGo", "DEL", "BOM", "13:30", "15:45", 135),
    "6E-2136": _entry("IndiGo", "BOM", "DEL", "16:30", "18:45", 135),
    "UK-955": _entry("Vistara", "DEL", "BOM", "08:00", "10:15", 135),
    "UK-956": _entry("Vistara", "BOM", "DEL", "11:00", "13:15", 135),
}

# Minutes, "FROM-TO"
ROUTE_DURATIONS: Dict[str, int] = {
    "DEL-BOM": 130, "BOM-DEL": 130,
    "DEL-BLR": 165, "BLR-DEL": 165,
    "DEL-CCU": 135, "CCU-DEL": 140,
    "DEL-MAA": 165, "MAA-DEL": 165,
    "DEL-HYD": 135, "HYD-DEL": 135,
    "BOM-BLR": 90, "BLR-BOM": 90,
    "BOM-MAA": 120, "MAA-BOM": 120,
    "BOM-CCU": 150, "CCU-BOM": 150,
    "BOM-HYD": 90, "HYD-BOM": 90,
    "BLR-CCU": 155, "CCU-BLR": 160,
    "BLR-MAA": 55, "MAA-BLR": 55,
    "BLR-HYD": 75, "HYD-BLR": 75,
    "MAA-CCU": 135, "CCU-MAA": 135,
    "MAA-HYD": 75, "HYD-MAA": 75,
    "DEL-PAT": 100, "PAT-DEL": 110,
    "CCU-PAT": 70, "PAT-CCU": 70,
    "BLR-PAT": 160, "PAT-BLR": 160,
    "MAA-PAT": 150, "PAT-MAA": 150,
    "BOM-PAT": 150, "PAT-BOM": 150,
    "HYD-PAT": 135, "PAT-HYD": 135,
    "CJB-DEL": 165, "DEL-CJB": 165,
    "CJB-BOM": 90, "BOM-CJB": 90,
    "CJB-BLR": 50, "BLR-CJB": 50,
    "CJB-MAA": 55, "MAA-CJB": 55,
    "COK-DEL": 180, "DEL-COK": 180,
    "COK-BOM": 105, "BOM-COK": 105,
    "COK-BLR": 60, "BLR-COK": 60,
    "TRV-DEL": 195, "DEL-TRV": 195,
    "GAU-DEL": 150, "DEL-GAU": 150,
    "GAU-CCU": 75, "CCU-GAU": 75,
    "IXB-DEL": 130, "DEL-IXB": 130,
    "IXB-CCU": 55, "CCU-IXB": 55,
    "AMD-DEL": 90, "DEL-AMD": 90,
    "AMD-BOM": 70, "BOM-AMD": 70,
    "PNQ-DEL": 120, "DEL-PNQ": 120,
    "JAI-DEL": 60, "DEL-JAI": 60,
    "LKO-DEL": 75, "DEL-LKO": 75,
    "VNS-DEL": 90, "DEL-VNS": 90,
    "BBI-DEL": 135, "DEL-BBI": 135,
    "BBI-CCU": 60, "CCU-BBI": 60,
    "IXR-DEL": 115, "DEL-IXR": 115,
    "GOI-DEL": 150, "DEL-GOI": 150,
    "GOI-BOM": 75, "BOM-GOI": 75,
    "GOI-BLR": 65, "BLR-GOI": 65,
}

DEFAULT_DURATION_MINS = 120
