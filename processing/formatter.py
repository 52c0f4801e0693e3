"""
Chart Data Formatter - Prepare derived series for display.

Produces renderer-agnostic structures: the page hands them to whatever
charting library it uses, this module never emits library-specific options.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from config import COMPLETENESS_METRICS, TESTING_NOTE
from registry import registry
from .completeness import resolve_completeness_date, build_completeness_marker
from .errors import EmptySeries
from .labels import format_metric_label, format_region_label, format_chart_title, require_metric
from .models import (
    AggregationMode,
    AnnotationMarker,
    DerivedSeries,
    RawPoint,
    SeriesBundle,
    SeriesKind,
)
from .transforms import DEFAULT_WINDOW, rolling_average, round_smoothed

logger = logging.getLogger(__name__)


# Bars for raw daily values, lines for everything continuous
SERIES_STYLES = {
    SeriesKind.CUMULATIVE: 'line',
    SeriesKind.DAILY_RAW: 'bar',
    SeriesKind.DAILY_SMOOTHED: 'line',
}


def y_axis_floor(metric_id: str) -> Optional[int]:
    """
    Lower bound for the value axis.

    Cases and deaths cannot meaningfully go negative, so their axis is
    clamped at zero. Other metrics are left unclamped because corrections
    and occupancy changes legitimately produce negative deltas.
    """
    return 0 if require_metric(metric_id).clamp_at_zero else None


def build_series(
    raw_points: Sequence[RawPoint],
    metric_id: str,
    mode: AggregationMode,
    window: int = DEFAULT_WINDOW,
) -> SeriesBundle:
    """
    Turn raw daily records into the series a chart plots.

    Cumulative mode yields a single series of running totals. Daily mode
    yields the raw daily values plus a rolling average of them.

    Args:
        raw_points: Ordered RawPoint sequence for one (metric, region)
        metric_id: Metric identifier
        mode: Cumulative or Daily
        window: Rolling average window in days

    Returns:
        SeriesBundle with primary/secondary series and the y-axis floor

    Raises:
        UnknownMetric: if the metric is not in the registry
        EmptySeries: if raw_points is empty
    """
    mode = AggregationMode(mode)
    label = format_metric_label(metric_id, mode)
    floor = y_axis_floor(metric_id)

    if not raw_points:
        raise EmptySeries(f"No data points for {metric_id}")

    dates = [p.date for p in raw_points]

    if mode == AggregationMode.CUMULATIVE:
        primary = DerivedSeries(
            label=label,
            kind=SeriesKind.CUMULATIVE,
            points=tuple(zip(dates, [p.cumulative_value for p in raw_points])),
        )
        return SeriesBundle(primary=primary, y_axis_min=floor)

    daily = [p.daily_value for p in raw_points]
    smoothed = round_smoothed(rolling_average(daily, window), metric_id)

    primary = DerivedSeries(label=label, kind=SeriesKind.DAILY_RAW, points=tuple(zip(dates, daily)))
    secondary = DerivedSeries(
        label=f"{window}-day average",
        kind=SeriesKind.DAILY_SMOOTHED,
        points=tuple(zip(dates, smoothed)),
    )
    return SeriesBundle(primary=primary, secondary=secondary, y_axis_min=floor)


def _iso(value) -> str:
    return value.isoformat() if hasattr(value, 'isoformat') else str(value)


def build_data_note(
    metric_id: str,
    region_code: str,
    last_date=None,
    completeness_date=None,
) -> str:
    """
    Caveats shown under the chart.

    Args:
        metric_id: Metric identifier
        region_code: Region code
        last_date: Date of the last point in the series (None if empty)
        completeness_date: Resolved completeness date, when available

    Returns:
        One or more sentences joined by spaces (may be empty)
    """
    region_name = format_region_label(region_code)
    notes: List[str] = []

    if metric_id in COMPLETENESS_METRICS:
        notes.append(TESTING_NOTE)

    if registry.tracks_completeness(metric_id, region_code):
        if completeness_date is not None:
            notes.append(
                'Canadian data may be incomplete in recent weeks. '
                f'All provinces last reported on {_iso(completeness_date)}.'
            )
        else:
            notes.append('Canadian data may be incomplete in recent weeks.')
    elif last_date is not None:
        notes.append(f"{region_name} last reported on {_iso(last_date)}.")

    return ' '.join(notes)


def format_annotation(marker: Optional[AnnotationMarker]) -> Optional[Dict[str, str]]:
    if marker is None:
        return None
    return {'date': _iso(marker.date), 'label': marker.label}


def format_series(series: DerivedSeries) -> Dict[str, Any]:
    return {
        'label': series.label,
        'kind': series.kind.value,
        'style': SERIES_STYLES[series.kind],
        'values': series.values,
    }


def format_chart_data(
    raw_points: Sequence[RawPoint],
    metric_id: str,
    region_code: str,
    mode: AggregationMode,
    completeness: Optional[Mapping] = None,
    window: int = DEFAULT_WINDOW,
) -> Dict[str, Any]:
    """
    Format one chart for display.

    Completeness records are only consulted for the metrics and region
    where national totals lag (see MetricRegistry.tracks_completeness).

    Args:
        raw_points: Ordered RawPoint sequence
        metric_id: Metric identifier
        region_code: Region code
        mode: Cumulative or Daily
        completeness: Optional date -> reported regions mapping
        window: Rolling average window in days

    Returns:
        Dict with all data needed to render the chart

    Raises:
        UnknownMetric, UnknownRegion, EmptySeries, NoCompleteDate
    """
    mode = AggregationMode(mode)
    title = format_chart_title(metric_id, region_code, mode)
    bundle = build_series(raw_points, metric_id, mode, window)

    marker = None
    completeness_date = None
    if completeness is not None and registry.tracks_completeness(metric_id, region_code):
        completeness_date = resolve_completeness_date(completeness)
        marker = build_completeness_marker(completeness_date)

    dates = bundle.primary.dates
    logger.debug(f"[Chart] {title}: {len(dates)} points, annotation={completeness_date}")

    return {
        'title': title,
        'metric': metric_id,
        'region': region_code,
        'mode': mode.value,
        'dates': [_iso(d) for d in dates],
        'series': [format_series(s) for s in bundle.series],
        'y_axis_min': bundle.y_axis_min,
        'annotation': format_annotation(marker),
        'note': build_data_note(metric_id, region_code, dates[-1], completeness_date),
    }
