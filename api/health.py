"""
Health Check and Utility Endpoints
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from cache import cache_manager
from sources import source_manager
from config import config

health_router = APIRouter()

VERSION = "1.0.0"


@health_router.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return JSONResponse({
        "status": "healthy",
        "version": VERSION,
    })


@health_router.get("/api/status")
async def api_status():
    """Detailed status: configuration, sources and cache."""
    return JSONResponse({
        "status": "healthy",
        "version": VERSION,
        "config": {
            "opencovid_api_url": config.opencovid_api_url,
            "timeline_data_url": config.timeline_data_url,
            "rolling_window": config.rolling_window,
            "preserve_annotation": config.preserve_annotation,
        },
        "data_sources": source_manager.available_sources(),
        "cache": cache_manager.stats(),
    })


@health_router.get("/api/cache/clear")
async def clear_cache():
    """Clear all caches (admin endpoint)."""
    cache_manager.clear_all()
    return JSONResponse({
        "status": "success",
        "message": "All caches cleared"
    })
