"""
Spooler Print Submission API - Main Application Entry Point.

FastAPI application for storing uploaded 3D print files and previewing
STL and 3MF uploads.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from spooler import __version__
from spooler.api.v1.router import api_router
from spooler.config import get_settings
from spooler.core.exceptions import SpoolerAPIException
from spooler.core.responses import error_response, internal_error_response
from spooler.storage import get_storage_facade

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Storage provider: {settings.STORAGE_PROVIDER}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Build the storage backend once, before the first request
    get_storage_facade()

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## Spooler Print Submission API

Storage and preview service for 3D print job submissions.

### Features
- **Print File Storage**: Upload, download and delete print files on local disk or S3-compatible storage
- **Previews**: Extract model data or slicer thumbnails from uploads

### Supported Formats
- STL (.stl)
- 3MF (.3mf)
- Sliced 3MF (.gcode.3mf)
    """,
    version=__version__,
    openapi_tags=[
        {"name": "files", "description": "Print file storage and previews"},
        {"name": "health", "description": "Service health checks"},
    ],
    lifespan=lifespan,
)

# CORS middleware for cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SpoolerAPIException)
async def spooler_exception_handler(request: Request, exc: SpoolerAPIException) -> JSONResponse:
    """
    Global exception handler for Spooler API exceptions.
    Returns standardized error responses.
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.error}: {exc.message}")
    return error_response(exc)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error but returns a sanitized response.
    """
    logger.exception(f"Unexpected error: {exc}")
    return internal_error_response()


# Include API routers
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with service information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
        "api": settings.API_V1_PREFIX,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "spooler.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
