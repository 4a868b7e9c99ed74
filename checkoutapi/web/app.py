"""FastAPI application for the checkout API.

`create_app()` builds the pricing catalog, session store and checkout
service, wires the routers and error handlers, and runs the pricing watcher
for the lifetime of the app.

Run with:
    uvicorn --factory checkoutapi.web.app:create_app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from checkoutapi import __version__
from checkoutapi.checkout import CheckoutService, InMemorySessionRepository, SessionRepository
from checkoutapi.config import AppConfig, get_config
from checkoutapi.core.logging import configure_logging
from checkoutapi.errors import SessionNotFoundError, StorageWriteError, UnknownSKUError
from checkoutapi.pricing import FilePricingSource, PricingCatalog, PricingWatcher
from checkoutapi.web.routes import checkouts, health

logger = structlog.get_logger()


# Request Logging Middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()

        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            logger.info(
                "request_completed",
                status_code=response.status_code,
            )
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            logger.error("request_failed", error=str(exc))
            raise


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# Exception Handlers
async def unknown_sku_handler(request: Request, exc: UnknownSKUError):
    logger.warning("invalid_sku_scan", path=request.url.path, sku=exc.sku)
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    logger.info("session_not_found", checkout_id=exc.checkout_id)
    return _error(status.HTTP_404_NOT_FOUND, "session not found")


async def storage_write_handler(request: Request, exc: StorageWriteError):
    logger.error("session_save_failed", error=str(exc))
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "could not save session")


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("invalid_request_body", path=request.url.path, errors=exc.errors())
    return _error(status.HTTP_400_BAD_REQUEST, "invalid request body")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    config: AppConfig | None = None,
    catalog: PricingCatalog | None = None,
    repository: SessionRepository | None = None,
) -> FastAPI:
    """Build the checkout API.

    Args:
        config: Application settings (default: from environment)
        catalog: Pre-built catalog; when omitted one is loaded from
            `config.pricing.file`
        repository: Session store (default: in-memory)

    Raises:
        CatalogLoadError: If the pricing file cannot be loaded
    """
    config = config or get_config()
    configure_logging(config)

    if catalog is None:
        catalog = PricingCatalog(FilePricingSource(config.pricing.file))
    if repository is None:
        repository = InMemorySessionRepository()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        watcher = None
        if config.pricing.watch_enabled:
            watcher = PricingWatcher(catalog, interval=config.pricing.refresh_seconds)
            watcher.start()
        app.state.watcher = watcher
        logger.info("startup_complete", pricing_version=catalog.version)
        try:
            yield
        finally:
            if watcher is not None:
                await watcher.stop()

    app = FastAPI(
        title="Checkout API",
        description="Checkout sessions priced with per-SKU multi-buy offers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.catalog = catalog
    app.state.repository = repository
    app.state.service = CheckoutService(repository, catalog)
    app.state.watcher = None

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(UnknownSKUError, unknown_sku_handler)
    app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
    app.add_exception_handler(StorageWriteError, storage_write_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Include Routers
    app.include_router(checkouts.router)
    app.include_router(health.router)

    # Prometheus Metrics (Conditional)
    if config.enable_metrics:
        from prometheus_fastapi_instrumentator import Instrumentator

        Instrumentator().instrument(app).expose(app)

    return app
