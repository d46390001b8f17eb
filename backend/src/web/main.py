"""
Main Application - FastAPI app factory and lifespan management
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from ..services.events import MESSAGE_CREATED, NotificationHub
from ..services.records import NotFound, RecordStore
from .config import AppConfig, config as default_config
from .limiter import configure_limiter
from .routers import authors, health, messages, stream


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info("Starting Message Board API server...")
    yield
    logger.info(
        "Shutting down (messages: %d, authors: %d, subscribers: %d)",
        app.state.store.count_messages(),
        app.state.store.count_authors(),
        app.state.hub.subscriber_count(MESSAGE_CREATED),
    )


def create_app(app_config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    cfg = app_config or default_config

    app = FastAPI(
        title="Message Board API",
        version="1.0.0",
        debug=cfg.debug,
        lifespan=lifespan,
    )

    # In-memory state, one store and hub per app instance
    app.state.config = cfg
    app.state.hub = NotificationHub(queue_maxsize=cfg.event_queue_maxsize)
    app.state.store = RecordStore(publisher=app.state.hub, id_bytes=cfg.id_bytes)

    # Rate limiting (the limiter is shared; the latest app's settings apply)
    limiter = configure_limiter(cfg)
    app.state.limiter = limiter
    if limiter.enabled:
        app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Handle rate limit exceeded with JSON response."""
        return JSONResponse(
            status_code=429,
            content={"detail": "Rate limit exceeded", "retry_after": exc.detail},
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with client address, status and duration."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "unknown"
        logger.info(
            "[%s] %s %s -> %d (%.1f ms)",
            client,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    # Global exception handlers
    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        """Map record lookups that found nothing to 404."""
        logger.info("Not found: %s", exc.detail)
        return JSONResponse(
            status_code=404,
            content={"detail": exc.detail, "kind": exc.kind.value, "key": exc.key},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors with clean response."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            errors.append({"field": loc, "message": error["msg"]})
        logger.warning("Validation error: %s", errors)
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with logging."""
        logger.exception("Unexpected error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Include routers
    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(authors.router)
    app.include_router(stream.router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_config.host, port=default_config.port)
