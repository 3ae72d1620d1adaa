import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from prometheus_fastapi_instrumentator import Instrumentator

from app.core.config import settings
from app.core.version import APP_VERSION, get_full_version
from app.api.v1 import api_router
from app.db.session import check_db_connection
from app.core.logging_config import setup_logging, RequestLoggingMiddleware
from app.core.shutdown import lifespan_manager, RequestTrackingMiddleware

# Configure structured logging (JSON in production, colored in development)
setup_logging()
logger = logging.getLogger("employees")


class ErrorResponse(BaseModel):
    """Standardized error response format."""
    error: str
    detail: str | None = None
    timestamp: str
    path: str | None = None


class HealthResponse(BaseModel):
    """Health check response format."""
    status: str
    service: str
    version: str
    environment: str
    checks: dict[str, bool]


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="CRUD API for employee records",
    version=APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan_manager,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for anything the routers did not turn into an HTTP error.
    In production the exception text is replaced by a reference id.
    """
    now = datetime.now(timezone.utc)
    error_id = now.strftime("%Y%m%d%H%M%S%f")

    logger.error(
        f"Unhandled exception [{error_id}] on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )

    if settings.ENVIRONMENT.lower() == "production":
        content = ErrorResponse(
            error="Internal server error",
            detail=f"An unexpected error occurred. Reference ID: {error_id}",
            timestamp=now.isoformat(),
            path=request.url.path,
        )
    else:
        content = ErrorResponse(
            error=exc.__class__.__name__,
            detail=str(exc),
            timestamp=now.isoformat(),
            path=request.url.path,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content.model_dump(),
    )


# CORS Middleware (env-driven)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request tracking middleware for graceful shutdown
app.add_middleware(RequestTrackingMiddleware)

# Request logging middleware with timing and request IDs
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix=settings.API_V1_STR)

# Exposes /metrics for Prometheus; only active when ENABLE_METRICS=true
instrumentator = Instrumentator(
    should_group_status_codes=False,
    should_ignore_untemplated=True,
    should_respect_env_var=True,
    excluded_handlers=["/health", "/metrics"],
)
instrumentator.instrument(app).expose(app, include_in_schema=False)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Report database connectivity. Returns 503 when the database is unreachable.
    """
    db_healthy = await check_db_connection()
    checks = {"database": db_healthy}

    response = HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        service="employee-directory",
        version=get_full_version(),
        environment=settings.ENVIRONMENT,
        checks=checks,
    )

    if not db_healthy:
        logger.warning(f"Health check failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )

    return response


@app.get("/")
async def root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME}"}
