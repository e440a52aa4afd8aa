# ivisit/routers/health.py
"""
System health check endpoint.
Returns status of the dashboard + iVisit backend reachability + loaded data sizes.
"""

import requests
from fastapi import APIRouter, Depends
from datetime import datetime

from ivisit.config import settings
from ivisit.dependencies import get_store
from ivisit.services.dashboard_store import DashboardStore

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(store: DashboardStore = Depends(get_store)):
    """
    Returns:
    - Dashboard status
    - iVisit backend reachability
    - Sizes of the loaded collections and the last retained error
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "dashboard": "ok",
        "backend": "unknown",
        "loaded": {
            "logs": len(store.logs),
            "active_logs": len(store.active_ids),
            "stations": len(store.stations),
            "guards": len(store.guards),
        },
        "last_error": store.error,
    }

    try:
        resp = requests.get(f"{settings.IVISIT_API_URL}/api/stations", timeout=3)
        result["backend"] = "ok" if resp.status_code < 400 else f"http_{resp.status_code}"
        if resp.status_code >= 500:
            result["status"] = "degraded"
    except requests.exceptions.ConnectionError:
        result["backend"] = "unreachable"
        result["status"] = "degraded"
    except Exception as e:
        result["backend"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
