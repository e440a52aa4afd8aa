# ivisit/services/log_filter.py
"""
Log Book derivations: search/status/location filtering, client-side pagination
and the "On this day..." statistics.

All functions are pure. They never reorder or mutate the input logs; callers
recompute on every change of logs, active ids, criteria or pagination.
"""

import math
from collections import Counter
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional

from ivisit.schemas.station import Station
from ivisit.schemas.visitor_log import LogPage, LogRow, LogStats, StatusFilter, VisitorLogEntry
from ivisit.services.station_classifier import GATE_KEYWORD, classify_location

ALL_LOCATIONS = "all"
NOT_AVAILABLE = "N/A"
UNKNOWN_LOCATION = "Unknown"


@dataclass(frozen=True)
class FilterCriteria:
    search: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    location_filter: str = ALL_LOCATIONS


def _searchable_fields(log: VisitorLogEntry) -> tuple:
    return (
        log.full_name or "",
        log.id_type or "",
        log.pass_no or "",
        log.location or "",
        log.purpose or "",
        log.logged_by or "",
        log.date or "",
        log.time or "",
    )


def matches(log: VisitorLogEntry, active_ids: AbstractSet[int], criteria: FilterCriteria) -> bool:
    is_active = log.log_id in active_ids

    # 1) Status
    if criteria.status_filter == StatusFilter.ACTIVE and not is_active:
        return False
    if criteria.status_filter == StatusFilter.INACTIVE and is_active:
        return False

    # 2) Location
    if criteria.location_filter != ALL_LOCATIONS:
        location = (log.location or "").strip().lower()
        if not location or location != criteria.location_filter.strip().lower():
            return False

    # 3) Free-text search, any single field is enough
    term = criteria.search.lower()
    if not term:
        return True
    return any(term in field.lower() for field in _searchable_fields(log))


def filter_logs(
    logs: Iterable[VisitorLogEntry], active_ids: AbstractSet[int], criteria: FilterCriteria
) -> list[VisitorLogEntry]:
    return [log for log in logs if matches(log, active_ids, criteria)]


def paginate(filtered: list, page: int, page_size: int) -> tuple[list, int, int, int]:
    """
    Slice one page out of the filtered logs.
    Returns (items, current_page, total_pages, total_elements). A stale page
    index past the end is clamped to the last page, never left dangling.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total_elements = len(filtered)
    total_pages = 0 if total_elements == 0 else math.ceil(total_elements / page_size)
    current_page = 0 if total_pages == 0 else max(0, min(page, total_pages - 1))
    start = current_page * page_size
    return filtered[start:start + page_size], current_page, total_pages, total_elements


def build_log_rows(
    logs: Iterable[VisitorLogEntry], active_ids: AbstractSet[int], stations: list[Station]
) -> list[LogRow]:
    """Attach Active/Inactive status and the location's station category to each row."""
    return [
        LogRow(
            **log.model_dump(),
            status="Active" if log.log_id in active_ids else "Inactive",
            location_category=classify_location(log.location, stations),
        )
        for log in logs
    ]


def build_log_page(
    logs: list[VisitorLogEntry],
    active_ids: AbstractSet[int],
    stations: list[Station],
    criteria: FilterCriteria,
    page: int,
    page_size: int,
) -> LogPage:
    filtered = filter_logs(logs, active_ids, criteria)
    items, current_page, total_pages, total_elements = paginate(filtered, page, page_size)
    return LogPage(
        items=build_log_rows(items, active_ids, stations),
        current_page=current_page,
        total_pages=total_pages,
        total_elements=total_elements,
        page_size=page_size,
    )


def _most_common(values: list[str]) -> Optional[str]:
    # Counter.most_common keeps insertion order among equal counts → first seen wins ties
    ranked = Counter(values).most_common(1)
    return ranked[0][0] if ranked else None


def compute_stats(logs: list[VisitorLogEntry], active_ids: AbstractSet[int], today: str) -> LogStats:
    """
    Statistics for the Log Book modal.
    Visitors are identified by full name, so two people sharing a name count once.
    uniqueWeek and uniqueMonth count distinct names over every loaded log.
    """
    today_logs = [log for log in logs if log.date == today]

    locations = [log.location or UNKNOWN_LOCATION for log in today_logs]
    gates = [log.location for log in today_logs if GATE_KEYWORD in (log.location or "").lower()]
    all_names = {log.full_name for log in logs}

    return LogStats(
        active=sum(1 for log in today_logs if log.log_id in active_ids),
        unique_today=len({log.full_name for log in today_logs}),
        frequent_building=_most_common(locations) or NOT_AVAILABLE,
        highest_gate=_most_common(gates) or NOT_AVAILABLE,
        unique_week=len(all_names),
        unique_month=len(all_names),
    )
