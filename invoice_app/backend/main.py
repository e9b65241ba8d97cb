"""
FastAPI application for the invoice manager.

Provides endpoints for:
- Uploading, streaming and deleting PDF invoices
- Searching and editing invoice records
- AI extraction of invoice fields
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import Database
from .models import HealthResponse, utc_now_iso
from .routers import files, invoices
from .services.blob_store import BlobStore
from .services.extraction import ExtractionGateway, build_extraction_gateway
from .services.invoice_store import InvoiceStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    blob_store: BlobStore | None = None,
    invoice_store: InvoiceStore | None = None,
    extraction_gateway: ExtractionGateway | None = None,
) -> FastAPI:
    """
    Build the API application.

    Stores and gateway passed in are used as-is. Missing stores are backed
    by a MongoDB connection opened at startup and closed at shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        logger.info("Starting Invoice Manager API...")
        database = None
        if app.state.blob_store is None or app.state.invoice_store is None:
            database = Database(settings.mongodb_uri, settings.mongodb_db)
            await database.connect()
            if app.state.blob_store is None:
                app.state.blob_store = database.blob_store()
            if app.state.invoice_store is None:
                app.state.invoice_store = database.invoice_store()
        if app.state.extraction_gateway is None:
            app.state.extraction_gateway = build_extraction_gateway(settings)
        logger.info("Services initialized successfully")
        yield
        logger.info("Shutting down Invoice Manager API...")
        if database is not None:
            await database.close()

    app = FastAPI(
        title="Invoice Manager API",
        description="Upload PDF invoices, extract their fields with AI and edit them",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.blob_store = blob_store
    app.state.invoice_store = invoice_store
    app.state.extraction_gateway = extraction_gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health Endpoints
    # =========================================================================

    @app.get("/", response_model=HealthResponse)
    async def root() -> HealthResponse:
        """Root endpoint - health check."""
        return HealthResponse(timestamp=utc_now_iso())

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(timestamp=utc_now_iso())

    # =========================================================================
    # Include Routers
    # =========================================================================

    app.include_router(files.router)
    app.include_router(invoices.router)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors in the API's response envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle malformed request bodies and query parameters."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": f"Invalid request: {location} {first.get('msg', '')}".strip(),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Last-resort handler for errors no endpoint caught."""
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    run()
