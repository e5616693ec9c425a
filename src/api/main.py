"""FastAPI application for the Skate Order Tracker API.

Provides the main application instance with routers, middleware,
and exception handlers configured. Serves the tracking-page frontend
build when available.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

# Configure logging to stdout for uvicorn to capture
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
# Ensure our application loggers are captured
logging.getLogger("src").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from src.api.middleware.headers import apply_response_headers
from src.api.routes import records, tracking
from src.api.schemas import ErrorResponse, HealthResponse
from src.config import load_config, parse_allowed_origins, validate_config
from src.errors import InvalidRequestError, TrackerError, UpstreamError
from src.external_sources.clients.notion import NotionClient
from src.external_sources.clients.shopify import ShopifyClient

PROJECT_ROOT = Path(__file__).parent.parent.parent
logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "Skate Order Tracker API is running!"


def _resolve_static_dir() -> Path:
    """Resolve the frontend build directory from STATIC_DIR (default 'public')."""
    configured = Path(os.environ.get("STATIC_DIR", "public"))
    return configured if configured.is_absolute() else PROJECT_ROOT / configured


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async lifespan: load config and open external clients, then close them."""
    # --- Startup ---
    config = load_config()
    validate_config(config)

    app.state.config = config
    app.state.shopify_client = ShopifyClient(
        store_domain=config.shopify_domain,
        access_token=config.shopify_access_token,
        api_version=config.shopify_api_version,
        timeout=config.upstream_timeout_seconds,
    )
    app.state.notion_client = NotionClient(
        api_key=config.notion_api_key,
        database_id=config.notion_database_id,
        notion_version=config.notion_version,
        timeout=config.upstream_timeout_seconds,
    )
    logger.info(
        "Tracker ready (shop=%s, token ttl=%d days, upstream timeout=%.1fs)",
        config.shopify_domain,
        config.token_ttl_days,
        config.upstream_timeout_seconds,
    )

    yield

    # --- Shutdown ---
    await app.state.shopify_client.aclose()
    await app.state.notion_client.aclose()


app = FastAPI(
    title="Skate Order Tracker API",
    description="Magic-link order tracking for custom boots and blades",
    version="0.1.0",
    lifespan=lifespan,
)

app.middleware("http")(apply_response_headers)

# CORS allowlist is env-driven. Unset means any origin, as the tracking
# page has always been embeddable from the shop's storefront.
app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_allowed_origins(os.environ.get("ALLOWED_ORIGINS")),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error_response(exc: TrackerError) -> JSONResponse:
    body = ErrorResponse(error=exc.public_message, error_code=exc.code)
    return JSONResponse(status_code=exc.http_status, content=body.model_dump(by_alias=True))


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    """Render domain errors with their registry message and status.

    Upstream failures are logged with the failing system; the response
    never names it.
    """
    if isinstance(exc, UpstreamError):
        logger.error(
            "Upstream failure on %s from %s: %s",
            request.url.path,
            exc.source,
            exc.message,
        )
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed request bodies with 400 instead of FastAPI's 422."""
    logger.info("Malformed request on %s: %d errors", request.url.path, len(exc.errors()))
    return _error_response(InvalidRequestError.from_code("E-1003"))


# Include routers
app.include_router(records.router, prefix="/api")
app.include_router(tracking.router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint.

    Returns:
        Fixed liveness message.
    """
    return HealthResponse(message=HEALTH_MESSAGE)


FRONTEND_DIR = _resolve_static_dir()

# Static file serving and SPA fallback (must be AFTER API routes)
if FRONTEND_DIR.exists():
    assets_dir = FRONTEND_DIR / "assets"
    if assets_dir.exists():
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    @app.get("/{full_path:path}", response_model=None)
    async def serve_spa(full_path: str) -> FileResponse | JSONResponse:
        """Serve the tracking page for all non-API routes.

        Returns index.html for client-side routes such as /track, or the
        requested file when it exists in the build directory.
        """
        if full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"error": "Not found"})

        requested_file = (FRONTEND_DIR / full_path).resolve()
        if (
            requested_file.is_file()
            and requested_file.is_relative_to(FRONTEND_DIR.resolve())
        ):
            return FileResponse(requested_file)

        return FileResponse(FRONTEND_DIR / "index.html")
else:
    # No frontend build - serve API-only root
    @app.get("/")
    def root() -> dict:
        """API root when the frontend is not built."""
        return {
            "name": "Skate Order Tracker API",
            "version": "0.1.0",
            "docs": "/docs",
            "note": "Frontend not built. Place the tracking page build in STATIC_DIR.",
        }
