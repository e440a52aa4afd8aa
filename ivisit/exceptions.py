# ivisit/exceptions.py
"""
Error kinds raised by the dashboard.
Validation errors are shown inline next to the form input; the others are
kept on the store as the last error message and mapped to HTTP codes in main.py.
"""

from typing import Optional


class DashboardError(Exception):
    """Base class for every error the dashboard raises on purpose."""

    message = "Dashboard error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


# ── Validation (create / rename station) ─────────────────────────────────────
class ValidationError(DashboardError):
    message = "Invalid input"


class EmptyNameError(ValidationError):
    message = "Please enter a station name."


class DuplicateNameError(ValidationError):
    message = "A station with that name already exists."


# ── Backend interaction ──────────────────────────────────────────────────────
class BackendError(DashboardError):
    """Transport failure or non-2xx answer from the iVisit backend."""

    message = "iVisit backend request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FetchFailure(DashboardError):
    message = "Failed to load dashboard data."


class StationUpdateFailure(DashboardError):
    message = "Failed to update station."


class AssignmentUpdateFailure(DashboardError):
    message = "Failed to update station guards."


class StationNotFound(DashboardError):
    message = "Station not found"
