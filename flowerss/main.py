import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    DatabaseError,
    DBAPIError,
    IntegrityError,
    OperationalError,
)
from sqlalchemy.exc import (
    TimeoutError as SQLAlchemyTimeoutError,
)

from flowerss.core import SubscriptionError, SubscriptionErrorKind
from flowerss.db.connection import (
    dispose_engine,
    get_database_type,
    get_database_url,
    get_engine,
    init_models,
)
from flowerss.settings import get_settings
from flowerss.storage import RecordNotFoundError

from .api import subscriptions
from .schemas.error import ErrorType, ValidationErrorDetail
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
)
from .utils.request_context import get_request_id, set_request_id

# Configure logging
logging.basicConfig(
    level=get_settings().log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_SUBSCRIPTION_ERROR_STATUS: dict[SubscriptionErrorKind, tuple[int, ErrorType, str]] = {
    SubscriptionErrorKind.EXISTS: (
        status.HTTP_409_CONFLICT,
        ErrorType.SUBSCRIPTION_EXISTS,
        "Subscription already exists",
    ),
    SubscriptionErrorKind.NOT_EXISTS: (
        status.HTTP_404_NOT_FOUND,
        ErrorType.SUBSCRIPTION_NOT_EXISTS,
        "Subscription does not exist",
    ),
}


def validate_environment() -> None:
    """Log warnings for optional configuration left unset."""

    warnings = get_settings().optional_config_warnings()
    if warnings:
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")


def _sanitize_database_url(url: str) -> str:
    """Sanitize database URL to hide password in logs."""
    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)

    if "@" in rest:
        auth, host_db = rest.split("@", 1)
        if ":" in auth:
            user, _ = auth.split(":", 1)
            return f"{scheme}://{user}:***@{host_db}"
        return f"{scheme}://{auth}@{host_db}"

    return url


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    validate_environment()

    logger.info("flowerss API - Database Preflight Check")
    logger.info(f"Database Type: {get_database_type().upper()}")
    logger.info(f"Database URL: {_sanitize_database_url(get_database_url())}")

    await init_models(get_engine())

    yield

    logger.info("Shutting down flowerss API")
    await dispose_engine()


app = FastAPI(
    title="flowerss API",
    version="0.1.0",
    description="Manage the feed sources users subscribe to.",
    lifespan=lifespan,
    redirect_slashes=False,
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(SubscriptionError)
async def subscription_exception_handler(request: Request, exc: SubscriptionError):
    """Translate business conditions from the core into 404/409 payloads."""
    status_code, error_type, message = _SUBSCRIPTION_ERROR_STATUS[exc.kind]
    logger.info(
        "Subscription condition %s for request %s to %s",
        exc.kind.value,
        get_request_id(),
        request.url.path,
    )

    error_response = build_error_response(
        error_type=error_type,
        message=message,
        detail=f"user_id={exc.user_id} source_id={exc.source_id}",
        status_code=status_code,
        path=str(request.url.path),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RecordNotFoundError)
async def record_not_found_exception_handler(
    request: Request, exc: RecordNotFoundError
):
    error_response = build_error_response(
        error_type=ErrorType.NOT_FOUND,
        message="Resource not found",
        detail=str(exc),
        status_code=status.HTTP_404_NOT_FOUND,
        path=str(request.url.path),
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(OperationalError)
@app.exception_handler(DBAPIError)
async def database_connection_exception_handler(request: Request, exc: Exception):
    """Handle database connection errors."""
    logger.error(
        "Database connection error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.DATABASE_ERROR,
        message="Database connection failed",
        detail="Unable to connect to the database. Please try again later.",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        path=str(request.url.path),
        retry_after=5,
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(SQLAlchemyTimeoutError)
async def database_timeout_exception_handler(
    request: Request, exc: SQLAlchemyTimeoutError
):
    """Handle database pool timeout errors."""
    logger.error(
        "Database timeout error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.TIMEOUT_ERROR,
        message="Database query timeout",
        detail="The database query took too long to complete. Please try again.",
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        path=str(request.url.path),
        retry_after=3,
    )

    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(IntegrityError)
async def database_integrity_exception_handler(request: Request, exc: IntegrityError):
    """Handle constraint violations, e.g. a concurrent duplicate subscription."""
    logger.error(
        "Database integrity error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.DATABASE_ERROR,
        message="Data integrity constraint violation",
        detail="The operation would violate a database constraint.",
        status_code=status.HTTP_409_CONFLICT,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(DatabaseError)
async def database_generic_exception_handler(request: Request, exc: DatabaseError):
    """Handle generic database errors."""
    logger.error(
        "Database error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.DATABASE_ERROR,
        message="Database operation failed",
        detail="An error occurred while accessing the database. Please try again.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
        retry_after=3,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        detail=f"An unexpected error occurred: {type(exc).__name__}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(subscriptions.router, prefix="/users", tags=["subscriptions"])
