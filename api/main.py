"""
api/main.py -- FastAPI application entry point for the vendor login service.

Run with:  python main.py
           uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. log_requests      -- one log line per request with status and latency
  2. SlowAPIMiddleware -- enforces per-route rate limits from api.limiter

Lifespan builds the one privileged SPARQL client the process uses and closes
it on shutdown. Routes reach it through app.state.vendor_login only.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.errors import error_response
from api.limiter import limiter
from api.models import HealthResponse
from api.routes.sessions import router as sessions_router
from auth.login import VendorLogin
from core.config import get_settings
from core.errors import RateLimited, ServiceError
from store.client import SudoSparqlClient

VERSION = "0.3.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("vendorlogin.api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the sudo SPARQL client on startup, close it on shutdown."""
    settings = get_settings()
    logger.info("Vendor login service starting up (store: %s)", settings.mu_sparql_endpoint)
    app.state.sparql = SudoSparqlClient.from_settings(settings)
    app.state.vendor_login = VendorLogin(app.state.sparql)

    yield

    app.state.sparql.close()
    logger.info("Vendor login service shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Vendor Login Service",
    description="API key login and logout for vendors acting on behalf of an organization.",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(sessions_router, tags=["Sessions"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# Every failure leaves as the same JSON-LD error document (uuid +
# errorMessage), with the status the error carries.
# ---------------------------------------------------------------------------


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with the error document; Retry-After from slowapi when known."""
    response = error_response(RateLimited())
    response.headers["Retry-After"] = str(int(getattr(exc, "retry_after", 60)))
    return response


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected failures.

    The traceback is logged by error_response(); the client only gets the
    generic message.
    """
    return error_response(exc)


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return liveness and current version. Does not query the store."""
    return HealthResponse(version=VERSION)
