# ivisit/services/station_registry.py
"""
Station list derivations and the validation rules for station changes.

- list_for: which stations show up under the Gates / Buildings tab
- next_active_value / should_clear_selection: activate / deactivate lifecycle
- validate_new_station / validate_rename: name checks + "Gate " prefixing
- guard assignment: local selection editing and the full-set replacement sent on Save

Stations are never deleted, only deactivated.
"""

from typing import Iterable, Optional

from ivisit.exceptions import DuplicateNameError, EmptyNameError
from ivisit.schemas.station import AssignedUser, Station, StationCategory, StationView, UserAccount
from ivisit.services.station_classifier import classify_station, has_explicit_type, normalize_station_name

GUARD_ACCOUNT_TYPE = "GUARD"


def is_legacy(station: Station) -> bool:
    """Untyped, unnamed rows: shown under every tab so an operator can fix them."""
    return not (station.name or "").strip() and not has_explicit_type(station)


def list_for(stations: Iterable[Station], category: StationCategory, include_inactive: bool) -> list[Station]:
    visible = []
    for station in stations:
        if not (is_legacy(station) or classify_station(station) == category):
            continue
        if not include_inactive and station.active is False:
            continue
        visible.append(station)
    return visible


def display_name(station: Station) -> str:
    return station.name or f"Unnamed station #{station.id}"


def to_view(station: Station) -> StationView:
    return StationView(
        **station.model_dump(),
        category=classify_station(station),
        display_name=display_name(station),
    )


def find_station(stations: Iterable[Station], station_id: int) -> Optional[Station]:
    return next((s for s in stations if s.id == station_id), None)


# ── Activation lifecycle ─────────────────────────────────────────────────────
def next_active_value(station: Station) -> bool:
    return station.active is False


def should_clear_selection(
    station_id: int, new_active: bool, selected_station_id: Optional[int], include_inactive: bool
) -> bool:
    return not new_active and not include_inactive and selected_station_id == station_id


# ── Create / rename validation ───────────────────────────────────────────────
def validate_new_station(name: str, category: StationCategory, stations: Iterable[Station]) -> str:
    raw_name = name.strip()
    if not raw_name:
        raise EmptyNameError()

    key = raw_name.lower()
    if any((s.name or "").strip().lower() == key for s in stations):
        raise DuplicateNameError()

    return normalize_station_name(raw_name, category)


def validate_rename(station: Station, new_name: str, new_category: StationCategory) -> str:
    # No uniqueness check here: renaming onto an existing (e.g. deactivated) name is allowed
    raw_name = new_name.strip()
    if not raw_name:
        raise EmptyNameError()
    return normalize_station_name(raw_name, new_category)


def default_rename_category(station: Station, current_category: StationCategory) -> StationCategory:
    """Pre-fill for the edit form: the stored type if it is a known one, else the open tab."""
    if has_explicit_type(station):
        return StationCategory(station.station_type.strip().lower())
    return current_category


# ── Guard assignment ─────────────────────────────────────────────────────────
def guards_from_users(users: Iterable[UserAccount]) -> list[AssignedUser]:
    return [
        AssignedUser(id=u.account_id, username=u.username, account_type=u.account_type)
        for u in users
        if (u.account_type or "").upper() == GUARD_ACCOUNT_TYPE
    ]


def toggle_guard_selection(selected_ids: list[int], guard_id: int) -> list[int]:
    if guard_id in selected_ids:
        return [i for i in selected_ids if i != guard_id]
    return [*selected_ids, guard_id]


def compute_assignment_diff(previous_ids: Iterable[int], selected_ids: Iterable[int]) -> list[int]:
    """
    The set sent to updateStationGuards. Always the complete selection:
    guards in previous_ids but not selected are dropped simply by omission.
    """
    return list(dict.fromkeys(selected_ids))
