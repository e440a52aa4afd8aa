"""Unit tests for station listing, lifecycle and create/rename validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from ivisit.exceptions import DuplicateNameError, EmptyNameError
from ivisit.schemas.station import Station, StationCategory, UserAccount
from ivisit.services.station_registry import (
    compute_assignment_diff,
    default_rename_category,
    guards_from_users,
    list_for,
    next_active_value,
    should_clear_selection,
    to_view,
    toggle_guard_selection,
    validate_new_station,
    validate_rename,
)

STATIONS = [
    Station(id=1, name="Gate 1", stationType="gate"),
    Station(id=2, name="Library", stationType="building"),
    Station(id=3, name="West Gate", stationType=None),
    Station(id=4, name="", stationType=None),                       # legacy
    Station(id=5, name="Gate 9", stationType="gate", active=False),
    Station(id=6, name="Old Gym", active=False),
    Station(id=7, name="Gate 5", stationType="building"),
]


class TestListFor:
    def test_gate_tab(self):
        result = list_for(STATIONS, StationCategory.GATE, include_inactive=False)
        assert [s.id for s in result] == [1, 3, 4]

    def test_building_tab(self):
        result = list_for(STATIONS, StationCategory.BUILDING, include_inactive=False)
        assert [s.id for s in result] == [2, 4, 7]

    def test_include_inactive(self):
        assert [s.id for s in list_for(STATIONS, StationCategory.GATE, True)] == [1, 3, 4, 5]
        assert [s.id for s in list_for(STATIONS, StationCategory.BUILDING, True)] == [2, 4, 6, 7]

    def test_missing_active_is_active(self):
        station = Station.model_validate({"id": 8, "name": "Gate 8", "active": None})
        assert station.active is True
        assert list_for([station], StationCategory.GATE, False) == [station]

    def test_blank_named_typed_station_is_not_legacy(self):
        station = Station(id=9, name=" ", stationType="gate")
        assert list_for([station], StationCategory.BUILDING, True) == []


class TestActivation:
    def test_flip(self):
        assert next_active_value(Station(id=1, name="x", active=True)) is False
        assert next_active_value(Station(id=1, name="x", active=False)) is True
        assert next_active_value(Station.model_validate({"id": 1})) is False

    def test_clear_selection_only_when_hidden(self):
        assert should_clear_selection(1, False, 1, include_inactive=False) is True
        assert should_clear_selection(1, False, 1, include_inactive=True) is False
        assert should_clear_selection(1, False, 2, include_inactive=False) is False
        assert should_clear_selection(1, True, 1, include_inactive=False) is False


class TestCreateValidation:
    def test_gate_prefix(self):
        assert validate_new_station("3", StationCategory.GATE, STATIONS) == "Gate 3"

    def test_duplicate_after_prefixing(self):
        stations = [*STATIONS, Station(id=10, name="Gate 3", stationType="gate")]
        with pytest.raises(DuplicateNameError):
            validate_new_station("Gate 3", StationCategory.GATE, stations)

    def test_duplicate_is_case_insensitive(self):
        with pytest.raises(DuplicateNameError):
            validate_new_station("  library ", StationCategory.BUILDING, STATIONS)

    def test_empty_name(self):
        with pytest.raises(EmptyNameError):
            validate_new_station("   ", StationCategory.GATE, STATIONS)

    def test_building_name_kept(self):
        assert validate_new_station(" Canteen ", StationCategory.BUILDING, STATIONS) == "Canteen"


class TestRenameValidation:
    def test_rename_allows_existing_name(self):
        assert validate_rename(STATIONS[1], "Gate 1", StationCategory.GATE) == "Gate 1"

    def test_rename_applies_gate_prefix(self):
        assert validate_rename(STATIONS[1], "North", StationCategory.GATE) == "Gate North"

    def test_rename_empty(self):
        with pytest.raises(EmptyNameError):
            validate_rename(STATIONS[1], "", StationCategory.BUILDING)

    def test_default_category(self):
        assert default_rename_category(STATIONS[6], StationCategory.GATE) == StationCategory.BUILDING
        assert default_rename_category(STATIONS[2], StationCategory.BUILDING) == StationCategory.BUILDING


class TestGuardAssignment:
    def test_guards_from_users(self):
        users = [
            UserAccount(account_id=1, username="g1", account_type="guard"),
            UserAccount(account_id=2, username="admin", account_type="ADMIN"),
            UserAccount(account_id=3, username="noone", account_type=None),
        ]
        guards = guards_from_users(users)
        assert [(g.id, g.username) for g in guards] == [(1, "g1")]

    def test_toggle(self):
        assert toggle_guard_selection([1, 2], 2) == [1]
        assert toggle_guard_selection([1], 3) == [1, 3]

    def test_full_replacement_set(self):
        assert compute_assignment_diff([1, 2, 3], [3, 4, 4]) == [3, 4]
        assert compute_assignment_diff([1, 2], []) == []


class TestView:
    def test_unnamed_display_name(self):
        view = to_view(STATIONS[3])
        assert view.display_name == "Unnamed station #4"
        assert view.category == StationCategory.BUILDING
        assert view.model_dump(by_alias=True)["displayName"] == "Unnamed station #4"
