# ivisit/services/station_classifier.py
"""
Station category resolution: Gate (entry/exit point) or Building (destination).

An explicit stationType always wins. Legacy rows without a usable type fall
back to the name: anything containing "gate" is a gate, everything else a
building. Every place that shows or filters by category goes through
classify() so the station list, the detail header and the log-book icons
always agree.
"""

from typing import Optional

from ivisit.schemas.station import Station, StationCategory

GATE_KEYWORD = "gate"
GATE_PREFIX = "Gate "


def classify(station_type: Optional[str], name: Optional[str]) -> StationCategory:
    raw_type = (station_type or "").strip().lower()
    if raw_type == StationCategory.GATE.value:
        return StationCategory.GATE
    if raw_type == StationCategory.BUILDING.value:
        return StationCategory.BUILDING
    return StationCategory.GATE if GATE_KEYWORD in (name or "").lower() else StationCategory.BUILDING


def classify_station(station: Station) -> StationCategory:
    return classify(station.station_type, station.name)


def has_explicit_type(station: Station) -> bool:
    """True when stationType is one of the known categories (not missing or legacy)."""
    return (station.station_type or "").strip().lower() in {c.value for c in StationCategory}


def normalize_station_name(name: str, category: StationCategory) -> str:
    """Prefix gate names with "Gate " unless they already mention a gate."""
    if category == StationCategory.GATE and GATE_KEYWORD not in name.lower():
        return f"{GATE_PREFIX}{name}"
    return name


def classify_location(location: Optional[str], stations: list[Station]) -> Optional[StationCategory]:
    """
    Category for a free-text log location, used for the log-book row icon.
    Matches the station whose trimmed name equals the location (case-insensitive);
    unmatched locations are classified by their own text. Blank → None.
    """
    location_name = (location or "").strip()
    if not location_name:
        return None
    key = location_name.lower()
    matched = next((s for s in stations if (s.name or "").strip().lower() == key), None)
    if matched is not None:
        return classify_station(matched)
    return classify(None, location_name)
