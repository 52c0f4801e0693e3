"""Registry module - Metric and region reference tables."""

from .metric_registry import MetricRegistry, MetricInfo, RegionDescriptor, METRIC_DB, registry

__all__ = ['MetricRegistry', 'MetricInfo', 'RegionDescriptor', 'METRIC_DB', 'registry']
