# ivisit/dependencies.py
"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from ivisit.services.dashboard_store import DashboardStore


def get_store(request: Request) -> DashboardStore:
    """The single dashboard store created at startup (see main.py)."""
    return request.app.state.store
