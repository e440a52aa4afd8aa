# ivisit/services/location_options.py
"""
Location options for the Log Book location filter, built from station names.
Gates are listed first, then buildings; numbers inside names sort numerically
so "Gate 2" comes before "Gate 10".
"""

import re
from typing import Iterable

from ivisit.schemas.station import Station
from ivisit.services.station_classifier import GATE_KEYWORD

PLACEHOLDER_NAME = "N/A"
_DIGITS = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    # re.split with a capture group alternates text/digits, so position types always line up
    parts = _DIGITS.split(text.lower())
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


def gate_aware_key(name: str) -> tuple:
    is_gate = GATE_KEYWORD in name.lower()
    return (0 if is_gate else 1, natural_key(name), name)


def sort_gate_aware(names: Iterable[str]) -> list[str]:
    return sorted(names, key=gate_aware_key)


def build_options(stations: Iterable[Station]) -> list[str]:
    names = [(s.name or "").strip() for s in stations]
    unique = dict.fromkeys(n for n in names if n and n != PLACEHOLDER_NAME)
    return sort_gate_aware(unique)
