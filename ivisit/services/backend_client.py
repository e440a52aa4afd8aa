# ivisit/services/backend_client.py
"""
Async client for the iVisit backend REST API.

The dashboard never owns visitor logs, stations or accounts; it reads them
from here and sends station / guard changes back. Any transport error,
non-2xx response or payload that does not parse into the expected records is
raised as BackendError.
"""

from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from ivisit.config import settings
from ivisit.exceptions import BackendError
from ivisit.schemas.station import AssignedUser, Station, UserAccount
from ivisit.schemas.visitor_log import VisitorLogEntry
from ivisit.utils.logger import get_logger

logger = get_logger(__name__)


class BackendClient:
    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {"Accept": "application/json"}
        token = token if token is not None else settings.IVISIT_API_TOKEN
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.IVISIT_API_URL,
            headers=headers,
            timeout=timeout or settings.IVISIT_API_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"[BACKEND] {method} {path} failed: {e}")
            raise BackendError(f"iVisit backend unreachable: {e}") from e

        if response.status_code >= 400:
            logger.warning(f"[BACKEND] {method} {path} → HTTP {response.status_code}")
            raise BackendError(
                f"iVisit backend returned HTTP {response.status_code} for {path}",
                status_code=response.status_code,
            )

        logger.debug(f"[BACKEND] {method} {path} → {response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[BACKEND] {method} {path} returned a non-JSON body")
            raise BackendError(f"iVisit backend sent invalid JSON for {path}") from e

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, path: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"[BACKEND] {path} returned an invalid {model.__name__} ({e.error_count()} error(s))")
            raise BackendError(f"iVisit backend sent an invalid {model.__name__} for {path}") from e

    def _parse_list(self, model: type[BaseModel], data: Any, path: str) -> list:
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error(f"[BACKEND] {path} returned {type(data).__name__}, expected a list")
            raise BackendError(f"iVisit backend sent a malformed list for {path}")
        return [self._parse(model, row, path) for row in data]

    # ── Visitor logs ─────────────────────────────────────────────────────
    async def fetch_all_logs(self) -> list[VisitorLogEntry]:
        path = "/api/visitor-logs"
        return self._parse_list(VisitorLogEntry, await self._request("GET", path), path)

    async def fetch_active_logs(self) -> list[VisitorLogEntry]:
        path = "/api/visitor-logs/active"
        return self._parse_list(VisitorLogEntry, await self._request("GET", path), path)

    # ── Stations ─────────────────────────────────────────────────────────
    async def fetch_all_stations(self) -> list[Station]:
        path = "/api/stations"
        return self._parse_list(Station, await self._request("GET", path), path)

    async def create_station(self, name: str, station_type: str, active: bool = True) -> Station:
        path = "/api/stations"
        data = await self._request("POST", path,
                                   json={"name": name, "stationType": station_type, "active": active})
        return self._parse(Station, data, path)

    async def update_station(self, station_id: int, name: str, active: bool, station_type: str) -> Station:
        path = f"/api/stations/{station_id}"
        data = await self._request("PUT", path,
                                   json={"id": station_id, "name": name, "active": active,
                                         "stationType": station_type})
        return self._parse(Station, data, path)

    async def set_station_active(self, station_id: int, active: bool) -> Station:
        path = f"/api/stations/{station_id}/active"
        data = await self._request("PATCH", path, params={"active": str(active).lower()})
        if isinstance(data, dict) and data.get("active") is None:
            data = {**data, "active": active}
        return self._parse(Station, data, path)

    # ── Accounts / guard assignment ──────────────────────────────────────
    async def fetch_all_users(self) -> list[UserAccount]:
        path = "/api/accounts"
        return self._parse_list(UserAccount, await self._request("GET", path), path)

    async def fetch_station_guards(self, station_id: int) -> list[AssignedUser]:
        path = f"/api/stations/{station_id}/guards"
        return self._parse_list(AssignedUser, await self._request("GET", path), path)

    async def update_station_guards(self, station_id: int, guard_ids: list[int]) -> None:
        await self._request("PUT", f"/api/stations/{station_id}/guards", json=list(guard_ids))
