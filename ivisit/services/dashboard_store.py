# ivisit/services/dashboard_store.py
"""
Mutable dashboard state: loaded records, Log Book criteria + pagination,
station tab settings, the selected station and its guard selection.

The store only holds snapshots. Every view (log page, stats, station list,
location options) is recomputed from them through the pure functions in
log_filter / station_registry / location_options on each read.

Loads are all-or-nothing: collections are fetched concurrently and nothing is
replaced unless every fetch succeeds. Station / guard updates are applied
locally only after the backend accepted them.
"""

import asyncio
import dataclasses
from datetime import datetime
from typing import Optional

from ivisit.config import settings
from ivisit.exceptions import (
    AssignmentUpdateFailure,
    BackendError,
    FetchFailure,
    StationNotFound,
    StationUpdateFailure,
)
from ivisit.schemas.station import AssignedUser, SelectionOut, Station, StationCategory, StationView
from ivisit.schemas.visitor_log import LogPage, LogStats, StatusFilter, VisitorLogEntry
from ivisit.services.backend_client import BackendClient
from ivisit.services.location_options import build_options
from ivisit.services.log_filter import FilterCriteria, build_log_page, compute_stats
from ivisit.services.station_registry import (
    compute_assignment_diff,
    default_rename_category,
    find_station,
    guards_from_users,
    list_for,
    next_active_value,
    should_clear_selection,
    to_view,
    toggle_guard_selection,
    validate_new_station,
    validate_rename,
)
from ivisit.utils.logger import get_logger

logger = get_logger(__name__)


class DashboardStore:
    def __init__(self, client: BackendClient):
        self.client = client

        # Source records
        self.logs: list[VisitorLogEntry] = []
        self.active_ids: frozenset[int] = frozenset()
        self.stations: list[Station] = []
        self.guards: list[AssignedUser] = []

        # Log Book
        self.criteria = FilterCriteria()
        self.page = 0
        self.page_size = settings.DEFAULT_PAGE_SIZE

        # Stations page
        self.category = StationCategory.GATE
        self.include_inactive = False
        self.selected_station_id: Optional[int] = None
        self.assigned_users: list[AssignedUser] = []
        self.selected_guard_ids: list[int] = []
        self._selection_token = 0

        self.error: Optional[str] = None

    # ── Loading ──────────────────────────────────────────────────────────
    async def load_logbook(self):
        try:
            logs, active_logs, stations = await asyncio.gather(
                self.client.fetch_all_logs(),
                self.client.fetch_active_logs(),
                self.client.fetch_all_stations(),
            )
        except BackendError as e:
            self.error = "Failed to load visitor logs."
            logger.error(f"[LOGBOOK] Load failed: {e}")
            raise FetchFailure(self.error) from e

        self.logs = logs
        self.active_ids = frozenset(log.log_id for log in active_logs)
        self.stations = stations
        self.error = None
        logger.info(f"[LOGBOOK] Loaded {len(logs)} logs ({len(self.active_ids)} active), {len(stations)} stations")

    async def load_stations(self):
        try:
            stations, users = await asyncio.gather(
                self.client.fetch_all_stations(),
                self.client.fetch_all_users(),
            )
        except BackendError as e:
            self.error = "Failed to load stations or guards"
            logger.error(f"[STATIONS] Load failed: {e}")
            raise FetchFailure(self.error) from e

        self.stations = stations
        self.guards = guards_from_users(users)
        self.error = None
        logger.info(f"[STATIONS] Loaded {len(stations)} stations, {len(self.guards)} guards")

    # ── Log Book ─────────────────────────────────────────────────────────
    def update_criteria(self, search: Optional[str] = None, status_filter: Optional[StatusFilter] = None,
                        location_filter: Optional[str] = None):
        """Any criteria change invalidates the current page index."""
        changes = {k: v for k, v in {"search": search, "status_filter": status_filter,
                                     "location_filter": location_filter}.items() if v is not None}
        self.criteria = dataclasses.replace(self.criteria, **changes)
        self.page = 0

    def set_page_size(self, page_size: int):
        if page_size <= 0 or page_size > settings.MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {settings.MAX_PAGE_SIZE}")
        self.page_size = page_size
        self.page = 0

    def set_page(self, page: int):
        # Clamped when the page is built, so a shrinking result set never leaves it dangling
        self.page = max(0, page)

    def log_page(self) -> LogPage:
        return build_log_page(self.logs, self.active_ids, self.stations,
                              self.criteria, self.page, self.page_size)

    def stats(self, today: Optional[str] = None) -> Optional[LogStats]:
        if not self.logs:
            return None
        return compute_stats(self.logs, self.active_ids, today or datetime.utcnow().date().isoformat())

    def location_options(self) -> list[str]:
        return build_options(self.stations)

    # ── Stations list ────────────────────────────────────────────────────
    def set_station_view(self, category: Optional[StationCategory] = None,
                         include_inactive: Optional[bool] = None):
        if category is not None:
            self.category = category
        if include_inactive is not None:
            self.include_inactive = include_inactive

    def visible_stations(self) -> list[StationView]:
        return [to_view(s) for s in list_for(self.stations, self.category, self.include_inactive)]

    def _require_station(self, station_id: int) -> Station:
        station = find_station(self.stations, station_id)
        if station is None:
            raise StationNotFound(f"Station {station_id} not found")
        return station

    def _replace_station(self, station: Station):
        self.stations = [station if s.id == station.id else s for s in self.stations]

    async def toggle_station_active(self, station_id: int) -> Station:
        station = self._require_station(station_id)
        new_active = next_active_value(station)
        action = "reactivate" if new_active else "deactivate"

        try:
            updated = await self.client.set_station_active(station_id, new_active)
        except BackendError as e:
            self.error = "Failed to update station status"
            logger.error(f"[STATIONS] Could not {action} station {station_id}: {e}")
            raise StationUpdateFailure(self.error) from e

        fields = updated.model_dump(exclude_unset=True)
        fields.setdefault("active", new_active)
        merged = station.model_copy(update=fields)
        self._replace_station(merged)
        logger.info(f"[STATIONS] {action}d '{to_view(merged).display_name}'")

        if should_clear_selection(station_id, merged.active, self.selected_station_id, self.include_inactive):
            self._clear_selection()
        return merged

    async def create_station(self, name: str, category: StationCategory) -> Station:
        final_name = validate_new_station(name, category, self.stations)

        try:
            created = await self.client.create_station(final_name, category.value, active=True)
        except BackendError as e:
            self.error = "Failed to create station."
            logger.error(f"[STATIONS] Create '{final_name}' failed: {e}")
            raise StationUpdateFailure(self.error) from e

        if not created.station_type:
            created = created.model_copy(update={"station_type": category.value})
        self.stations = [*self.stations, created]
        logger.info(f"[STATIONS] Created {category.value} '{final_name}' (id={created.id})")
        return created

    async def rename_station(self, station_id: int, new_name: str, new_category: StationCategory) -> Station:
        station = self._require_station(station_id)
        final_name = validate_rename(station, new_name, new_category)

        try:
            updated = await self.client.update_station(station.id, final_name, station.active, new_category.value)
        except BackendError as e:
            self.error = "Failed to rename station."
            logger.error(f"[STATIONS] Rename of station {station_id} failed: {e}")
            raise StationUpdateFailure(self.error) from e

        fields = updated.model_dump(exclude_unset=True)
        merged = station.model_copy(update=fields)
        if not fields.get("station_type"):
            merged = merged.model_copy(update={"station_type": new_category.value})
        self._replace_station(merged)
        logger.info(f"[STATIONS] Station {station_id} is now {new_category.value} '{final_name}'")
        return merged

    # ── Selection + guard assignment ─────────────────────────────────────
    def _clear_selection(self):
        self._selection_token += 1
        self.selected_station_id = None
        self.assigned_users = []
        self.selected_guard_ids = []

    async def select_station(self, station_id: Optional[int]) -> SelectionOut:
        """
        Select a station and load its assigned guards.
        A response for a station that is no longer selected is dropped, so a slow
        fetch for an earlier selection can never overwrite a newer one.
        """
        if station_id is None:
            self._clear_selection()
            return self.selection()

        self._require_station(station_id)
        self._selection_token += 1
        token = self._selection_token
        self.selected_station_id = station_id

        try:
            guards = await self.client.fetch_station_guards(station_id)
        except BackendError as e:
            if token != self._selection_token:
                return self.selection()
            self.error = "Failed to load guards for station"
            logger.error(f"[GUARDS] Load for station {station_id} failed: {e}")
            raise FetchFailure(self.error) from e

        if token != self._selection_token:
            logger.debug(f"[GUARDS] Dropped stale guard list for station {station_id}")
            return self.selection()

        self.assigned_users = guards
        self.selected_guard_ids = [g.id for g in guards]
        return self.selection()

    def selection(self) -> SelectionOut:
        station = None
        if self.selected_station_id is not None:
            station = find_station(self.stations, self.selected_station_id)
        return SelectionOut(
            station=to_view(station) if station else None,
            rename_category=default_rename_category(station, self.category) if station else None,
            assigned_users=self.assigned_users,
            selected_guard_ids=self.selected_guard_ids,
        )

    def toggle_guard(self, guard_id: int) -> list[int]:
        self.selected_guard_ids = toggle_guard_selection(self.selected_guard_ids, guard_id)
        return self.selected_guard_ids

    async def save_assignments(self, guard_ids: Optional[list[int]] = None) -> list[AssignedUser]:
        station_id = self.selected_station_id
        if station_id is None:
            raise StationNotFound("No station selected")
        if guard_ids is not None:
            self.selected_guard_ids = list(guard_ids)

        full_set = compute_assignment_diff([u.id for u in self.assigned_users], self.selected_guard_ids)
        try:
            await self.client.update_station_guards(station_id, full_set)
            updated = await self.client.fetch_station_guards(station_id)
        except BackendError as e:
            self.error = "Failed to update station guards"
            logger.error(f"[GUARDS] Save for station {station_id} failed: {e}")
            raise AssignmentUpdateFailure(self.error) from e

        if station_id == self.selected_station_id:
            self.assigned_users = updated
        logger.info(f"[GUARDS] Station {station_id} now has {len(full_set)} guard(s)")
        return updated
