"""Known airport codes with the city and ISO country they serve.

Used to infer city and country for locations that carry an airport code
but no address. Codes absent from the table infer nothing.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

# code -> (city, ISO 3166-1 alpha-2 country)
AIRPORTS: Dict[str, Tuple[str, str]] = {
    # United States
    "JFK": ("New York", "US"),
    "LGA": ("New York", "US"),
    "EWR": ("New York", "US"),
    "LAX": ("Los Angeles", "US"),
    "BUR": ("Los Angeles", "US"),
    "SFO": ("San Francisco", "US"),
    "ORD": ("Chicago", "US"),
    "ATL": ("Atlanta", "US"),
    "DFW": ("Dallas", "US"),
    "PHL": ("Philadelphia", "US"),
    "BOS": ("Boston", "US"),
    "SEA": ("Seattle", "US"),
    "MIA": ("Miami", "US"),
    "DEN": ("Denver", "US"),
    "IAD": ("Washington", "US"),
    "DCA": ("Washington", "US"),
    "HNL": ("Honolulu", "US"),
    # Canada and Mexico
    "YYZ": ("Toronto", "CA"),
    "YVR": ("Vancouver", "CA"),
    "YUL": ("Montreal", "CA"),
    "MEX": ("Mexico City", "MX"),
    "CUN": ("Cancun", "MX"),
    # Italy
    "MXP": ("Milan", "IT"),
    "LIN": ("Milan", "IT"),
    "FCO": ("Rome", "IT"),
    "CIA": ("Rome", "IT"),
    "VCE": ("Venice", "IT"),
    "NAP": ("Naples", "IT"),
    "FLR": ("Florence", "IT"),
    # United Kingdom and Ireland
    "LHR": ("London", "GB"),
    "LGW": ("London", "GB"),
    "STN": ("London", "GB"),
    "EDI": ("Edinburgh", "GB"),
    "DUB": ("Dublin", "IE"),
    # France
    "CDG": ("Paris", "FR"),
    "ORY": ("Paris", "FR"),
    "NCE": ("Nice", "FR"),
    "LYS": ("Lyon", "FR"),
    # Rest of Europe
    "MAD": ("Madrid", "ES"),
    "BCN": ("Barcelona", "ES"),
    "LIS": ("Lisbon", "PT"),
    "AMS": ("Amsterdam", "NL"),
    "FRA": ("Frankfurt", "DE"),
    "MUC": ("Munich", "DE"),
    "BER": ("Berlin", "DE"),
    "ZRH": ("Zurich", "CH"),
    "GVA": ("Geneva", "CH"),
    "VIE": ("Vienna", "AT"),
    "ATH": ("Athens", "GR"),
    "IST": ("Istanbul", "TR"),
    "CPH": ("Copenhagen", "DK"),
    # Asia-Pacific and Middle East
    "NRT": ("Tokyo", "JP"),
    "HND": ("Tokyo", "JP"),
    "KIX": ("Osaka", "JP"),
    "SIN": ("Singapore", "SG"),
    "HKG": ("Hong Kong", "HK"),
    "ICN": ("Seoul", "KR"),
    "BKK": ("Bangkok", "TH"),
    "SYD": ("Sydney", "AU"),
    "MEL": ("Melbourne", "AU"),
    "AKL": ("Auckland", "NZ"),
    "DXB": ("Dubai", "AE"),
    "TLV": ("Tel Aviv", "IL"),
}


def _lookup(code: Optional[str]) -> Optional[Tuple[str, str]]:
    if not code or len(code.strip()) != 3:
        return None
    return AIRPORTS.get(code.strip().upper())


def city_for_code(code: Optional[str]) -> Optional[str]:
    """Return the city served by an airport code, if known."""
    entry = _lookup(code)
    return entry[0] if entry else None


def country_for_code(code: Optional[str]) -> Optional[str]:
    """Return the ISO country of an airport code, if known."""
    entry = _lookup(code)
    return entry[1] if entry else None
