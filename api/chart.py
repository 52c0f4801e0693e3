"""
Chart API Endpoints

JSON endpoints feeding the dashboard page: metric picker, region picker
and the chart payload itself.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import config
from processing import (
    AggregationMode,
    EmptySeries,
    NoCompleteDate,
    TransformError,
    UnknownMetric,
    UnknownRegion,
    format_chart_data,
    format_chart_title,
)
from registry import registry
from sources import source_manager

logger = logging.getLogger(__name__)

chart_router = APIRouter()


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class MetricResponse(BaseModel):
    """Metric picker entry."""
    id: str
    name: str
    unit: str


class RegionResponse(BaseModel):
    """Region picker entry."""
    code: str
    name: str


class SeriesResponse(BaseModel):
    label: str
    kind: str
    style: str
    values: List[float]


class AnnotationResponse(BaseModel):
    date: str
    label: str


class ChartResponse(BaseModel):
    """Chart data for the page."""
    title: str
    metric: str
    region: str
    mode: str
    dates: List[str]
    series: List[SeriesResponse]
    y_axis_min: Optional[int]
    annotation: Optional[AnnotationResponse]
    note: str


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "type": type(exc).__name__},
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@chart_router.get("/api/metrics", response_model=List[MetricResponse])
async def list_metrics():
    """Metrics available for charting, in catalog order."""
    result = await source_manager.fetch_catalog()
    if not result.is_valid:
        return JSONResponse(
            status_code=502,
            content={"detail": result.error or "Metric catalog is empty", "type": "SourceError"},
        )
    return [MetricResponse(id=m.id, name=m.display_name, unit=m.value_unit) for m in result.metrics]


@chart_router.get("/api/regions", response_model=List[RegionResponse])
async def list_regions():
    return [RegionResponse(code=r.code, name=r.name) for r in registry.regions()]


@chart_router.get("/api/chart", response_model=ChartResponse)
async def get_chart(metric: str, region: str = 'CAN', mode: AggregationMode = AggregationMode.CUMULATIVE):
    """
    Build the chart payload for a metric, region and aggregation mode.

    Errors come back as JSON so the page can show a fallback state:
    unknown metric/region -> 404, source failure -> 502, empty series -> 422.
    """
    region = region.upper()

    # Validate before touching the network
    try:
        format_chart_title(metric, region, mode)
    except (UnknownMetric, UnknownRegion) as e:
        return _error_response(404, e)

    with_completeness = registry.tracks_completeness(metric, region)
    series, completeness = await source_manager.fetch_chart_inputs(metric, region, with_completeness)

    if not series.is_valid:
        return JSONResponse(
            status_code=502,
            content={"detail": series.error or f"No data for {metric} in {region}", "type": "SourceError"},
        )

    records = None
    if completeness is not None:
        if completeness.is_valid:
            records = completeness.records
        else:
            logger.warning(f"[Chart] Completeness unavailable for {metric}: {completeness.error}")

    try:
        try:
            chart = format_chart_data(series.points, metric, region, mode,
                                      completeness=records, window=config.rolling_window)
        except NoCompleteDate as e:
            logger.warning(f"[Chart] {metric}/{region}: {e}; drawing without completeness marker")
            chart = format_chart_data(series.points, metric, region, mode, window=config.rolling_window)
    except EmptySeries as e:
        return _error_response(422, e)
    except TransformError as e:
        return _error_response(400, e)

    return chart
