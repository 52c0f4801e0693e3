"""API module - FastAPI routers and endpoints."""

from .chart import chart_router
from .health import health_router

__all__ = ['chart_router', 'health_router']
