# ivisit/schemas/visitor_log.py
from enum import Enum
from pydantic import AliasChoices, BaseModel, Field
from typing import Optional

from ivisit.schemas.station import StationCategory


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class VisitorLogEntry(BaseModel):
    """One visitor log row as recorded by the guard. Read-only to the dashboard."""

    log_id: int = Field(
        validation_alias=AliasChoices("logId", "visitorLogID"),
        serialization_alias="logId",
    )
    full_name: Optional[str] = Field(None, alias="fullName")
    id_type: Optional[str] = Field(None, alias="idType")
    pass_no: Optional[str] = Field(None, alias="passNo")
    location: Optional[str] = None
    purpose: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("purpose", "purposeOfVisit"),
        serialization_alias="purpose",
    )
    logged_by: Optional[str] = Field(None, alias="loggedBy")
    date: Optional[str] = None     # ISO calendar date, e.g. 2024-01-01
    time: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True


class LogRow(VisitorLogEntry):
    status: str                                        # Active | Inactive
    location_category: Optional[StationCategory] = Field(None, alias="locationCategory")


class LogPage(BaseModel):
    items: list[LogRow]
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_elements: int = Field(alias="totalElements")
    page_size: int = Field(alias="pageSize")

    class Config:
        populate_by_name = True


class LogStats(BaseModel):
    active: int
    unique_today: int = Field(alias="uniqueToday")
    frequent_building: str = Field(alias="frequentBuilding")
    highest_gate: str = Field(alias="highestGate")
    unique_week: int = Field(alias="uniqueWeek")
    unique_month: int = Field(alias="uniqueMonth")

    class Config:
        populate_by_name = True


class FilterUpdate(BaseModel):
    """Body of PATCH /logbook/filters. Omitted fields keep their current value."""

    search: Optional[str] = None
    status_filter: Optional[StatusFilter] = Field(None, alias="statusFilter")
    location_filter: Optional[str] = Field(None, alias="locationFilter")
    page_size: Optional[int] = Field(None, alias="pageSize", gt=0)

    class Config:
        populate_by_name = True
