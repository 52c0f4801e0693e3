"""
CovidStats - Canadian COVID-19 Time-Series Dashboard

Serves a single page with a metric/region/mode picker and a JSON API that
turns OpenCovid time series into renderer-agnostic chart payloads.

Data:
- Time series: api.opencovid.ca
- Metric catalog and completeness: CovidTimelineCanada (GitHub)
"""

import logging
import traceback
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from config import config
from processing import AggregationMode
from registry import registry
from api import chart_router, health_router
from sources.clients import close_clients

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title="CovidStats",
    description="Canadian COVID-19 time-series dashboard",
    version="1.0.0"
)

TEMPLATES_PATH = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_PATH))
app.state.templates = templates

app.include_router(chart_router)
app.include_router(health_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}:\n"
        + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


# =============================================================================
# STARTUP / SHUTDOWN
# =============================================================================

@app.on_event("startup")
async def startup():
    logger.info("=" * 60)
    logger.info("CovidStats Starting Up")
    logger.info("-" * 60)
    logger.info(f"  OpenCovid API: {config.opencovid_api_url}")
    logger.info(f"  Timeline data: {config.timeline_data_url}")
    logger.info(f"  Rolling window: {config.rolling_window} days")
    logger.info(f"  Preserve annotation: {'ON' if config.preserve_annotation else 'OFF'}")
    logger.info(f"  Metrics with labels: {len(registry.metric_ids())}")
    logger.info("=" * 60)


@app.on_event("shutdown")
async def shutdown():
    await close_clients()


# =============================================================================
# PAGE
# =============================================================================

@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Dashboard page. Metrics are loaded by the page from /api/metrics."""
    return templates.TemplateResponse(request, "index.html", {
        "regions": registry.regions(),
        "modes": list(AggregationMode),
        "preserve_annotation": config.preserve_annotation,
    })


# =============================================================================
# RUN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
