# ivisit/routers/stations.py
"""Stations endpoints: Gates / Buildings tabs, create / edit / (de)activate, guard assignment."""

from fastapi import APIRouter, Depends

from ivisit.dependencies import get_store
from ivisit.schemas.station import (
    AssignedUser,
    GuardSelectionSave,
    SelectionOut,
    StationCreate,
    StationRename,
    StationView,
    StationViewUpdate,
)
from ivisit.services.dashboard_store import DashboardStore
from ivisit.services.station_registry import to_view

router = APIRouter()


@router.get("/stations", response_model=list[StationView], summary="Stations in the current tab")
def list_stations(store: DashboardStore = Depends(get_store)):
    return store.visible_stations()


@router.patch("/stations/view", response_model=list[StationView], summary="Switch tab / show deactivated")
def update_station_view(body: StationViewUpdate, store: DashboardStore = Depends(get_store)):
    store.set_station_view(category=body.category, include_inactive=body.include_inactive)
    return store.visible_stations()


@router.post("/stations/refresh", response_model=list[StationView], summary="Reload stations and guards")
async def refresh_stations(store: DashboardStore = Depends(get_store)):
    await store.load_stations()
    return store.visible_stations()


@router.post("/stations", response_model=StationView, status_code=201, summary="Add a station")
async def create_station(body: StationCreate, store: DashboardStore = Depends(get_store)):
    """Gate names without "gate" in them are saved as "Gate <name>"."""
    created = await store.create_station(body.name, body.category)
    return to_view(created)


@router.put("/stations/{station_id}", response_model=StationView, summary="Rename / re-type a station")
async def rename_station(station_id: int, body: StationRename, store: DashboardStore = Depends(get_store)):
    updated = await store.rename_station(station_id, body.name, body.category)
    return to_view(updated)


@router.post("/stations/{station_id}/toggle-active", response_model=StationView,
             summary="Deactivate or reactivate a station")
async def toggle_station_active(station_id: int, store: DashboardStore = Depends(get_store)):
    updated = await store.toggle_station_active(station_id)
    return to_view(updated)


@router.get("/guards", response_model=list[AssignedUser], summary="All guard accounts")
def list_guards(store: DashboardStore = Depends(get_store)):
    return store.guards


@router.get("/selection", response_model=SelectionOut, summary="Selected station and its guards")
def get_selection(store: DashboardStore = Depends(get_store)):
    return store.selection()


@router.delete("/selection", response_model=SelectionOut, summary="Close the station details")
async def clear_selection(store: DashboardStore = Depends(get_store)):
    return await store.select_station(None)


@router.post("/selection/guards/{guard_id}/toggle", response_model=list[int],
             summary="Tick / untick a guard in the Assign dialog")
def toggle_guard(guard_id: int, store: DashboardStore = Depends(get_store)):
    return store.toggle_guard(guard_id)


@router.put("/selection/guards", response_model=list[AssignedUser], summary="Save guard assignment")
async def save_guards(body: GuardSelectionSave, store: DashboardStore = Depends(get_store)):
    """Sends the complete selected set; guards left out are unassigned."""
    return await store.save_assignments(body.guard_ids)


# Registered after /selection/guards so "guards" is never parsed as a station id
@router.put("/selection/{station_id}", response_model=SelectionOut, summary="Select a station")
async def select_station(station_id: int, store: DashboardStore = Depends(get_store)):
    return await store.select_station(station_id)
