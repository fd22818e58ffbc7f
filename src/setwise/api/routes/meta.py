"""Meta endpoints for setwise API."""

import logging

from fastapi import APIRouter

from .. import __version__
from ..models import HealthResponse, VersionResponse

router = APIRouter(tags=["meta"])

logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    logger.info("Health check invoked")
    return HealthResponse(status="healthy", version=__version__)


@router.get("/version", response_model=VersionResponse)
def version_info() -> VersionResponse:
    """Version information endpoint."""
    logger.info("Version endpoint invoked")
    return VersionResponse(version=__version__, api_version="v1")


@router.get("/", include_in_schema=False)
def root() -> dict:
    """Root endpoint providing basic API metadata."""
    logger.debug("Root endpoint served")
    return {
        "name": "setwise API",
        "version": __version__,
        "description": "Set-based comparison of line lists",
        "endpoints": {
            "compare": "POST /compare - Compare two line lists",
            "health": "GET /health - Health check",
            "version": "GET /version - Version information",
            "docs": "GET /docs - API documentation",
        },
    }
