import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import (
    DatabaseError,
    DBAPIError,
    IntegrityError,
    OperationalError,
)
from sqlalchemy.exc import (
    TimeoutError as SQLAlchemyTimeoutError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

from pokedex.cache import CacheClient, close_redis, connect_redis
from pokedex.db.connection import (
    create_tables,
    dispose_engine,
    get_engine,
    sanitize_database_url,
)
from pokedex.services.caching import ResponseCache
from pokedex.services.catalog_client import PokeApiClient
from pokedex.services.favorites import KeyedLocks
from pokedex.settings import AppSettings, get_settings

from .api import favorites, pokemon
from .schemas.error import ErrorType, ValidationErrorDetail
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    error_json_response,
)
from .utils.request_context import get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment(config: AppSettings | None = None) -> list[str]:
    """Log (and return) warnings for optional settings left unset."""

    warnings = (config or get_settings()).optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
        logger.warning("=" * 60)
    return warnings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared collaborators on startup and release them on shutdown."""
    config = get_settings()
    validate_environment(config)

    logger.info("=" * 60)
    logger.info("Pokedex API - Startup")
    logger.info("Database Type: %s", config.database_type.upper())
    logger.info("Database URL: %s", sanitize_database_url(config.resolved_database_url))
    logger.info("PokeAPI base URL: %s", config.pokeapi_base_url)
    logger.info("Catalog cache TTL: %ss", config.catalog_cache_ttl_seconds)
    logger.info("=" * 60)

    await create_tables(get_engine())

    redis = await connect_redis(config.redis_url)
    catalog_client = PokeApiClient(
        base_url=config.pokeapi_base_url,
        timeout_seconds=config.pokeapi_timeout_seconds,
    )
    app.state.catalog_client = catalog_client
    app.state.response_cache = ResponseCache(CacheClient(redis))
    app.state.favorite_locks = KeyedLocks()

    yield

    logger.info("Shutting down Pokedex API")
    await catalog_client.aclose()
    await close_redis(redis)
    await dispose_engine()


app = FastAPI(
    title="Pokedex Favorites API",
    version="0.1.0",
    description="Cached PokeAPI catalog with a locally persisted favorites list.",
    lifespan=lifespan,
    redirect_slashes=False,
)


def _default_origins() -> list[str]:
    ports = list(range(3000, 3004)) + [5173, 8080]
    origins = []
    for host in ("localhost", "127.0.0.1"):
        origins.extend([f"http://{host}:{port}" for port in ports])
    return origins


def _combine_origins(*origin_groups: list[str]) -> list[str]:
    """Merge origins preserving order and removing duplicates."""
    seen: set[str] = set()
    combined: list[str] = []
    for group in origin_groups:
        for origin in group:
            normalized = origin.rstrip("/")
            if normalized and normalized not in seen:
                seen.add(normalized)
                combined.append(normalized)
    return combined


allow_origins = _combine_origins(_default_origins(), settings.cors_allow_origins)
logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


_HTTP_ERROR_TYPES: dict[int, ErrorType] = {
    status.HTTP_404_NOT_FOUND: ErrorType.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorType.CONFLICT,
    status.HTTP_503_SERVICE_UNAVAILABLE: ErrorType.UPSTREAM_UNAVAILABLE,
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render ``HTTPException`` raised by routers in the shared error shape."""
    error_type = _HTTP_ERROR_TYPES.get(exc.status_code)
    if error_type is None:
        error_type = (
            ErrorType.CLIENT_ERROR if exc.status_code < 500 else ErrorType.INTERNAL_ERROR
        )
    retry_after = 30 if error_type is ErrorType.UPSTREAM_UNAVAILABLE else None

    logger.info(
        "HTTP %s for request %s to %s: %s",
        exc.status_code,
        get_request_id(),
        request.url.path,
        exc.detail,
    )

    return error_json_response(
        build_error_response(
            error_type=error_type,
            message=str(exc.detail),
            detail=str(exc.detail),
            status_code=exc.status_code,
            path=str(request.url.path),
            retry_after=retry_after,
        )
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

    return error_json_response(
        build_validation_error_response(
            message="Validation failed",
            detail=f"{len(errors)} validation error(s)",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            path=str(request.url.path),
            errors=errors,
        )
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

    return error_json_response(
        build_error_response(
            error_type=ErrorType.DATABASE_ERROR,
            message="Database connection failed",
            detail="Unable to connect to the database. Please try again later.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            path=str(request.url.path),
            retry_after=5,
        )
    )


@app.exception_handler(SQLAlchemyTimeoutError)
async def database_timeout_exception_handler(
    request: Request, exc: SQLAlchemyTimeoutError
):
    """Handle connection-pool timeouts."""
    logger.error(
        "Database timeout error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    return error_json_response(
        build_error_response(
            error_type=ErrorType.TIMEOUT_ERROR,
            message="Database query timeout",
            detail="The database did not respond in time. Please try again.",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            path=str(request.url.path),
            retry_after=3,
        )
    )


@app.exception_handler(IntegrityError)
async def database_integrity_exception_handler(request: Request, exc: IntegrityError):
    """A concurrent toggle from another process won the unique ``pokeapi_id`` race."""
    logger.error(
        "Database integrity error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    return error_json_response(
        build_error_response(
            error_type=ErrorType.CONFLICT,
            message="Data integrity constraint violation",
            detail="The favorite was modified concurrently; retry the request.",
            status_code=status.HTTP_409_CONFLICT,
            path=str(request.url.path),
        )
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

    return error_json_response(
        build_error_response(
            error_type=ErrorType.DATABASE_ERROR,
            message="Database operation failed",
            detail="An error occurred while accessing the database.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            path=str(request.url.path),
        )
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

    return error_json_response(
        build_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message="Internal server error",
            detail=f"An unexpected error occurred: {type(exc).__name__}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            path=str(request.url.path),
        )
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(pokemon.router, prefix="/api/pokemon", tags=["pokemon"])
app.include_router(favorites.router, prefix="/api/favorites", tags=["favorites"])
