"""Unit tests for the Log Book location filter options."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ivisit.schemas.station import Station
from ivisit.services.location_options import build_options, sort_gate_aware


def stations(*names):
    return [Station(id=i, name=n) for i, n in enumerate(names, start=1)]


class TestBuildOptions:
    def test_gate_numbers_sort_naturally(self):
        assert build_options(stations("Gate 10", "Gate 2")) == ["Gate 2", "Gate 10"]

    def test_blank_placeholder_and_duplicates_removed(self):
        result = build_options(stations("Library", "", None, "N/A", "  Library  ", "Gate 1"))
        assert result == ["Gate 1", "Library"]

    def test_gates_listed_before_buildings(self):
        result = build_options(stations("Admin Building", "Gate 3", "Canteen", "Gate 1"))
        assert result == ["Gate 1", "Gate 3", "Admin Building", "Canteen"]


class TestSortGateAware:
    def test_numeric_runs_anywhere(self):
        names = ["Building 12B", "Building 2A", "Building 2B", "building 1"]
        assert sort_gate_aware(names) == ["building 1", "Building 2A", "Building 2B", "Building 12B"]

    def test_deterministic_for_case_variants(self):
        names = ["gate 1", "Gate 1"]
        assert sort_gate_aware(names) == sort_gate_aware(list(reversed(names))) == ["Gate 1", "gate 1"]
