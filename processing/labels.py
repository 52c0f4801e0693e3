"""
Label Formatting - Metric and region names for chart titles and legends.

Handles the naming rules:
- Hospital and ICU counts are occupancy, so they are "Active", never "Cumulative"
- Vaccine coverage is already a cumulative percentage, so its delta is a "Change"
- Everything else is "Cumulative" or "Daily"
"""

from registry import registry, MetricInfo
from .errors import UnknownMetric, UnknownRegion
from .models import AggregationMode


def require_metric(metric_id: str) -> MetricInfo:
    """Look up a metric, raising UnknownMetric on a miss."""
    info = registry.get_metric(metric_id)
    if info is None:
        raise UnknownMetric(metric_id)
    return info


def format_metric_label(metric_id: str, mode: AggregationMode) -> str:
    """
    Build the display label for a metric in the given aggregation mode.

    Args:
        metric_id: Metric identifier (e.g. 'cases', 'icu')
        mode: Cumulative or Daily

    Returns:
        Label such as 'Cumulative cases' or 'Change in active ICU'

    Raises:
        UnknownMetric: if the metric is not in the registry
    """
    info = require_metric(metric_id)
    mode = AggregationMode(mode)

    if mode == AggregationMode.CUMULATIVE:
        if info.is_active:
            return f"Active {info.name}"
        return f"Cumulative {info.name}"

    if info.is_active:
        return f"Change in active {info.name}"
    if info.is_percentage:
        return f"Change in {info.name}"
    return f"Daily {info.name}"


def format_region_label(region_code: str) -> str:
    """Full region name for a code, raising UnknownRegion on a miss."""
    name = registry.get_region_name(region_code)
    if name is None:
        raise UnknownRegion(region_code)
    return name


def format_chart_title(metric_id: str, region_code: str, mode: AggregationMode) -> str:
    return f"{format_metric_label(metric_id, mode)} in {format_region_label(region_code)}"
