# finsight/main.py
"""
FastAPI application entry point.

This file:
- Configures application-wide logging
- Creates the FastAPI application and its lifespan (catalog seeding,
  background price updater)
- Registers global exception handlers
- Registers all routers
- Defines global endpoints (health checks)
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from finsight.config import settings
from finsight.database import SessionLocal, check_database_health, engine, get_db
from finsight.dependencies import (
    get_price_provider,
    get_price_update_service,
    get_price_updater_job,
)
from finsight.middleware import (
    CorrelationIdMiddleware,
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_HEALTH,
)
from finsight.models import Base
from finsight.routers import (
    users_router,
    portfolios_router,
    transactions_router,
    valuation_router,
    stocks_router,
    prices_router,
    alerts_router,
)
from finsight.schemas.errors import ErrorDetail, ValidationErrorDetail
from finsight.services.exceptions import (
    ServiceError,
    ValidationError,
    OversellError,
    NotFoundError,
    MarketDataError,
    format_quantity,
)
from finsight.utils import setup_logging

logger = logging.getLogger(__name__)

# =============================================================================
# LOGGING SETUP (must be before app creation)
# =============================================================================

setup_logging()


# =============================================================================
# LIFESPAN
# =============================================================================

def _seed_catalog() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        get_price_update_service().seed_stocks(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_stocks_on_startup:
        _seed_catalog()

    stop_event = asyncio.Event()
    updater_task = None
    if settings.price_updater_enabled:
        job = get_price_updater_job()
        updater_task = asyncio.create_task(job.run_forever(stop_event))
        logger.info(f"Background price updater scheduled every {job.interval}s")

    yield

    if updater_task is not None:
        stop_event.set()
        await updater_task


# =============================================================================
# APPLICATION SETUP
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Portfolio tracking over simulated market prices",
    version="0.1.0",
    lifespan=lifespan,
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================
# Origins are configured via CORS_ORIGINS environment variable

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


# =============================================================================
# MIDDLEWARE (order matters: last added = first executed)
# =============================================================================

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================
# Service exceptions carry no HTTP knowledge; the status codes live here.
# Starlette picks the handler for the closest class in the MRO, so the
# subclasses are covered by their base handler.
# =============================================================================

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(ValidationError)
async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle business rule violations, including oversells (400)."""
    logger.warning(f"Validation error: {exc}")
    details = {"field": exc.field} if exc.field else {}
    if isinstance(exc, OversellError):
        details.update(
            symbol=exc.symbol,
            requested=format_quantity(exc.requested),
            held=format_quantity(exc.held),
        )
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error=type(exc).__name__,
            message=str(exc),
            details=details or None,
        ).model_dump(),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle missing resources (404)."""
    logger.warning(f"{exc.resource_type or 'Resource'} not found: {exc.resource_id}")
    return JSONResponse(
        status_code=404,
        content=ErrorDetail(
            error=type(exc).__name__,
            message=str(exc),
            details={
                "resource_type": exc.resource_type,
                "resource_id": exc.resource_id,
            },
        ).model_dump(),
    )


@app.exception_handler(MarketDataError)
async def market_data_error_handler(request: Request, exc: MarketDataError) -> JSONResponse:
    """Handle price provider failures (503)."""
    logger.error(f"Market data error: {exc}")
    return JSONResponse(
        status_code=503,
        content=ErrorDetail(
            error=type(exc).__name__,
            message=str(exc),
            details={"provider": exc.provider} if exc.provider else None,
        ).model_dump(),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle generic service errors (500)."""
    logger.error(f"Service error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorDetail(
            error="ServiceError",
            message=str(exc),
            details=None,
        ).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle all HTTPExceptions with consistent error format.

    Registered on Starlette's base class so routing 404/405 errors are
    covered along with FastAPI's subclass. Converts the default
    {"detail": "..."} format to ErrorDetail.
    """
    error_types = {
        400: "BadRequestError",
        404: "NotFoundError",
        405: "MethodNotAllowedError",
        409: "ConflictError",
        422: "ValidationError",
        429: "RateLimitError",
        500: "InternalServerError",
        503: "ServiceUnavailableError",
    }
    error_type = error_types.get(exc.status_code, "HTTPError")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorDetail(
            error=error_type,
            message=str(exc.detail) if exc.detail else "An error occurred",
            details=None,
        ).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert the default 422 body to ValidationErrorDetail."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=422,
        content=ValidationErrorDetail(details=errors).model_dump(),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(users_router)  # /users/*
app.include_router(portfolios_router)  # /portfolios/*
app.include_router(valuation_router)  # /portfolios/{id}/summary, /holdings
app.include_router(transactions_router)  # /transactions/*
app.include_router(stocks_router)  # /stocks/*
app.include_router(prices_router)  # /prices/*
app.include_router(alerts_router)  # /alerts/*


# =============================================================================
# GLOBAL ENDPOINTS
# =============================================================================

@app.get("/", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def root(request: Request):
    """API root - returns basic application info."""
    return {
        "message": f"Welcome to {settings.app_name}!",
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Health check with per-dependency status.

    **Response Status Codes:**
    - 200: Database reachable
    - 503: Database unhealthy - do not route traffic here
    """
    database = check_database_health(db)
    provider = get_price_provider()
    healthy = database["status"] == "healthy"
    response_data = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": {
            "database": database,
            "price_provider": {
                "name": provider.name,
                "status": "healthy" if provider.is_available() else "unavailable",
                "critical": False,
            },
            "price_updater": {
                "status": "enabled" if settings.price_updater_enabled else "disabled",
                "interval_seconds": settings.price_update_interval_seconds,
            },
        },
    }

    if not healthy:
        return JSONResponse(status_code=503, content=response_data)
    return response_data


@app.get("/health/live", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def liveness_check(request: Request):
    """
    Liveness probe. Succeeds whenever the process is serving requests;
    dependencies are checked by /health/ready.
    """
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def readiness_check(request: Request, db: Session = Depends(get_db)):
    """Readiness probe: 503 while the database is unreachable."""
    if check_database_health(db)["status"] != "healthy":
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": "Database unavailable",
            },
        )
    return {"status": "ready"}
