# ivisit/routers/logbook.py
"""Log Book endpoints: filtered + paginated visitor logs, statistics, location options."""

from fastapi import APIRouter, Depends, HTTPException, Path
from typing import Optional

from ivisit.dependencies import get_store
from ivisit.schemas.visitor_log import FilterUpdate, LogPage, LogStats
from ivisit.services.dashboard_store import DashboardStore

router = APIRouter()


@router.get("/logbook", response_model=LogPage, summary="Current page of the Log Book")
def get_log_page(store: DashboardStore = Depends(get_store)):
    """Visitor logs after the stored search/status/location filters, current page only."""
    return store.log_page()


@router.patch("/logbook/filters", response_model=LogPage, summary="Change Log Book filters")
def update_filters(body: FilterUpdate, store: DashboardStore = Depends(get_store)):
    """Update any of search, status, location or page size. Always jumps back to page 0."""
    if body.page_size is not None:
        try:
            store.set_page_size(body.page_size)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
    store.update_criteria(
        search=body.search,
        status_filter=body.status_filter,
        location_filter=body.location_filter,
    )
    return store.log_page()


@router.put("/logbook/page/{page}", response_model=LogPage, summary="Go to a page")
def set_page(page: int = Path(ge=0), store: DashboardStore = Depends(get_store)):
    store.set_page(page)
    return store.log_page()


@router.get("/logbook/stats", response_model=Optional[LogStats], summary="On this day statistics")
def get_stats(store: DashboardStore = Depends(get_store)):
    """Returns null when no logs are loaded."""
    return store.stats()


@router.get("/logbook/locations", response_model=list[str], summary="Location filter options")
def get_locations(store: DashboardStore = Depends(get_store)):
    return store.location_options()


@router.post("/logbook/refresh", response_model=LogPage, summary="Reload logs, active logs and stations")
async def refresh_logbook(store: DashboardStore = Depends(get_store)):
    await store.load_logbook()
    return store.log_page()
