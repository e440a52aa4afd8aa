# ivisit/main.py
"""
FastAPI application entry point.
Includes security middleware, global + domain error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from ivisit.routers import logbook, stations, health
from ivisit.config import settings
from ivisit.exceptions import (
    AssignmentUpdateFailure,
    DuplicateNameError,
    FetchFailure,
    StationNotFound,
    StationUpdateFailure,
    ValidationError,
)
from ivisit.services.backend_client import BackendClient
from ivisit.services.dashboard_store import DashboardStore
from ivisit.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="iVisit Dashboard API",
    description="Log Book and Stations views for the iVisit access-control dashboard.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (allow the dashboard front-end to call the API) ────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to the dashboard origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth.
    Health check and docs stay open. Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}
        if request.url.path in open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Domain Exception Handlers ────────────────────────────────────────────────
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    code = status.HTTP_409_CONFLICT if isinstance(exc, DuplicateNameError) else status.HTTP_422_UNPROCESSABLE_ENTITY
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=code, content={"detail": exc.message, "field": "name"})


@app.exception_handler(StationNotFound)
async def not_found_handler(request: Request, exc: StationNotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(FetchFailure)
async def fetch_failure_handler(request: Request, exc: FetchFailure):
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": exc.message})


@app.exception_handler(StationUpdateFailure)
@app.exception_handler(AssignmentUpdateFailure)
async def update_failure_handler(request: Request, exc):
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": exc.message})


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(logbook.router,  prefix="/api/v1", tags=["📒 Log Book"])
app.include_router(stations.router, prefix="/api/v1", tags=["🏢 Stations"])
app.include_router(health.router,   prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 iVisit Dashboard starting up...")
    app.state.store = DashboardStore(BackendClient())
    logger.info(f"🔗 iVisit backend: {settings.IVISIT_API_URL}")

    # Initial load; a failure leaves the store empty until POST .../refresh succeeds
    for load in (app.state.store.load_logbook, app.state.store.load_stations):
        try:
            await load()
        except FetchFailure as e:
            logger.warning(f"⚠️  Initial load incomplete: {e.message}")

    logger.info(f"🌐 Listening on http://{settings.DASHBOARD_IP}:{settings.DASHBOARD_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 iVisit Dashboard shutting down...")
    await app.state.store.client.close()
