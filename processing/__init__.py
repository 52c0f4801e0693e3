"""Processing module - Time-series transforms, labels and chart formatting."""

from .errors import TransformError, UnknownMetric, UnknownRegion, NoCompleteDate, EmptySeries
from .models import (
    AggregationMode,
    AnnotationMarker,
    DerivedSeries,
    MetricDescriptor,
    RawPoint,
    SeriesBundle,
    SeriesKind,
)
from .labels import format_metric_label, format_region_label, format_chart_title
from .transforms import rolling_average, round_smoothed
from .completeness import resolve_completeness_date, build_completeness_marker
from .formatter import build_series, build_data_note, format_chart_data, y_axis_floor
from .session import ChartSession, RenderTarget, MemoryRenderTarget, JSONFileRenderTarget

__all__ = [
    'TransformError',
    'UnknownMetric',
    'UnknownRegion',
    'NoCompleteDate',
    'EmptySeries',
    'AggregationMode',
    'AnnotationMarker',
    'DerivedSeries',
    'MetricDescriptor',
    'RawPoint',
    'SeriesBundle',
    'SeriesKind',
    'format_metric_label',
    'format_region_label',
    'format_chart_title',
    'rolling_average',
    'round_smoothed',
    'resolve_completeness_date',
    'build_completeness_marker',
    'build_series',
    'build_data_note',
    'format_chart_data',
    'y_axis_floor',
    'ChartSession',
    'RenderTarget',
    'MemoryRenderTarget',
    'JSONFileRenderTarget',
]
