# ivisit/schemas/station.py
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class StationCategory(str, Enum):
    GATE = "gate"
    BUILDING = "building"


class Station(BaseModel):
    id: int
    name: Optional[str] = None
    station_type: Optional[str] = Field(None, alias="stationType")   # gate | building | missing on legacy rows
    active: bool = True

    class Config:
        populate_by_name = True

    @field_validator("active", mode="before")
    @classmethod
    def missing_active_means_active(cls, value):
        return True if value is None else value


class StationView(Station):
    category: StationCategory
    display_name: str = Field(alias="displayName")


class StationCreate(BaseModel):
    name: str
    category: StationCategory


class StationRename(BaseModel):
    name: str
    category: StationCategory


class StationViewUpdate(BaseModel):
    category: Optional[StationCategory] = None
    include_inactive: Optional[bool] = Field(None, alias="includeInactive")

    class Config:
        populate_by_name = True


class UserAccount(BaseModel):
    account_id: int = Field(alias="accountID")
    username: str
    account_type: Optional[str] = Field(None, alias="accountType")

    class Config:
        populate_by_name = True


class AssignedUser(BaseModel):
    id: int
    username: str
    account_type: Optional[str] = Field(None, alias="accountType")

    class Config:
        populate_by_name = True


class GuardSelectionSave(BaseModel):
    """Optional full replacement of the local selection before saving."""

    guard_ids: Optional[list[int]] = Field(None, alias="guardIds")

    class Config:
        populate_by_name = True


class SelectionOut(BaseModel):
    station: Optional[StationView] = None
    rename_category: Optional[StationCategory] = Field(None, alias="renameCategory")   # pre-fill for the edit form
    assigned_users: list[AssignedUser] = Field(default_factory=list, alias="assignedUsers")
    selected_guard_ids: list[int] = Field(default_factory=list, alias="selectedGuardIds")

    class Config:
        populate_by_name = True
