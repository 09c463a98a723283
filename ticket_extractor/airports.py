from typing import Dict, List

# Indian airport codes, kept in step with the city selector options
AIRPORT_CODES: Dict[str, str] = {
    # Metro cities
    "DEL": "Delhi", "BOM": "Mumbai", "BLR": "Bangalore", "MAA": "Chennai",
    "CCU": "Kolkata", "HYD": "Hyderabad",
    # South
    "CJB": "Coimbatore", "TRZ": "Tiruchirappalli", "IXM": "Madurai",
    "COK": "Kochi", "TRV": "Trivandrum", "CCJ": "Kozhikode",
    "IXE": "Mangalore", "MYQ": "Mysore", "HBX": "Hubli",
    "VTZ": "Visakhapatnam", "VGA": "Vijayawada", "TIR": "Tirupati", "RJA": "Rajahmundry",
    # West
    "PNQ": "Pune", "NAG": "Nagpur", "AMD": "Ahmedabad", "STV": "Surat",
    "BDQ": "Vadodara", "RAJ": "Rajkot", "JGA": "Jamnagar", "BHJ": "Bhuj",
    "GOI": "Goa", "GOX": "Mopa",
    "KLH": "Kolhapur", "NDC": "Nanded",
    # North
    "JAI": "Jaipur", "UDR": "Udaipur", "JDH": "Jodhpur", "BKB": "Bikaner", "KTU": "Kota",
    "LKO": "Lucknow", "VNS": "Varanasi", "AGR": "Agra", "KNU": "Kanpur", "GOP": "Gorakhpur",
    "AYJ": "Ayodhya",
    "IDR": "Indore", "BHO": "Bhopal", "JLR": "Jabalpur", "GWL": "Gwalior",
    "PAT": "Patna", "GAY": "Gaya", "DBR": "Darbhanga",
    "IXR": "Ranchi", "IXW": "Jamshedpur", "DEO": "Deoghar",
    "BBI": "Bhubaneswar", "JRG": "Jharsuguda",
    "RPR": "Raipur",
    "IXB": "Bagdogra",
    "ATQ": "Amritsar", "LUH": "Ludhiana", "IXC": "Chandigarh",
    "SXR": "Srinagar", "IXJ": "Jammu", "IXL": "Leh",
    "DED": "Dehradun", "IXD": "Prayagraj",
    # North East
    "GAU": "Guwahati", "DIB": "Dibrugarh", "JRH": "Jorhat", "IXS": "Silchar",
    "IMF": "Imphal", "DMU": "Dimapur", "AJL": "Aizawl", "IXA": "Agartala",
    # Islands
    "IXZ": "Port Blair",
}

# Historical names and common spelling variants, keyed by lowercase code
CITY_ALIASES: Dict[str, List[str]] = {
    "del": ["new delhi"],
    "bom": ["bombay"],
    "blr": ["bengaluru", "bangaluru"],
    "maa": ["madras"],
    "ccu": ["calcutta"],
    "amd": ["ahemdabad"],
    "cok": ["cochin"],
    "pnq": ["poona"],
    "gau": ["gauhati"],
    "trv": ["thiruvananthapuram"],
    "vns": ["banaras", "benares"],
    "bbi": ["bhubaneshwar", "bhubanesar"],
    "vtz": ["vizag"],
    "ixe": ["mangaluru"],
    "myq": ["mysuru"],
    "trz": ["trichy"],
    "ccj": ["calicut"],
    "bdq": ["baroda"],
    "ded": ["dehra dun"],
    "goi": ["panaji"],
    "atq": ["amritsar"],
    "ixd": ["allahabad", "prayagraj"],
    "hbx": ["hubballi"],
    "ixm": ["madura"],
    "ixz": ["portblair"],
}

AIRLINE_CODE_MAP: Dict[str, str] = {
    "6E": "IndiGo", "AI": "Air India", "SG": "SpiceJet",
    "UK": "Vistara", "G8": "Go First", "I5": "AirAsia", "QP": "Akasa Air",
}

# Carrier codes shaped like a seat (digit + A-F letter)
SEAT_SHAPED_CARRIERS = {"6E", "G8", "I5"}


def _build_alias_table() -> Dict[str, List[str]]:
    table = {code.lower(): [city.lower()] for code, city in AIRPORT_CODES.items()}
    for code, names in CITY_ALIASES.items():
        if code in table:
            table[code].extend(names)
    return table


# lowercase code -> every lowercase name the code is known by
AIRPORT_NAME_TABLE: Dict[str, List[str]] = _build_alias_table()


def airline_from_code(code: str) -> str:
    return AIRLINE_CODE_MAP.get(code.upper(), code)
