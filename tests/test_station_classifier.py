"""Unit tests for station classification (gate vs building)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ivisit.schemas.station import Station, StationCategory
from ivisit.services.station_classifier import (
    classify,
    classify_location,
    classify_station,
    normalize_station_name,
)


class TestClassify:
    def test_explicit_gate_type_wins(self):
        assert classify("GATE", "anything") == StationCategory.GATE

    def test_explicit_building_type_beats_gate_name(self):
        assert classify("building", "Gate 5") == StationCategory.BUILDING

    def test_untyped_gate_name(self):
        assert classify(None, "West Gate") == StationCategory.GATE

    def test_untyped_other_name(self):
        assert classify(None, "Library") == StationCategory.BUILDING

    def test_unknown_type_falls_back_to_name(self):
        assert classify("kiosk", "North gate") == StationCategory.GATE

    def test_blank_untyped_is_building(self):
        assert classify(None, "") == StationCategory.BUILDING
        assert classify(None, None) == StationCategory.BUILDING

    def test_station_wrapper(self):
        station = Station(id=1, name="Main Gate", stationType=None)
        assert classify_station(station) == StationCategory.GATE


class TestNormalizeStationName:
    def test_gate_prefix_added(self):
        assert normalize_station_name("3", StationCategory.GATE) == "Gate 3"

    def test_gate_prefix_not_duplicated(self):
        assert normalize_station_name("east gate", StationCategory.GATE) == "east gate"

    def test_building_untouched(self):
        assert normalize_station_name("Library", StationCategory.BUILDING) == "Library"


class TestClassifyLocation:
    def test_matched_station_type_used(self):
        stations = [Station(id=1, name="Gatehouse Cafe", stationType="building")]
        assert classify_location(" gatehouse cafe ", stations) == StationCategory.BUILDING

    def test_unmatched_location_uses_name(self):
        assert classify_location("Gate 9", []) == StationCategory.GATE
        assert classify_location("Lobby", []) == StationCategory.BUILDING

    def test_blank_location_has_no_category(self):
        assert classify_location("  ", []) is None
        assert classify_location(None, []) is None
