"""Data sources module - Unified interface for all data providers."""

from .base import DataSource, TimeseriesData, CatalogData, CompletenessData
from .opencovid import OpenCovidSource, parse_timeseries
from .timeline import TimelineSource, parse_catalog, parse_completeness
from .manager import DataSourceManager, source_manager

__all__ = [
    'DataSource',
    'TimeseriesData',
    'CatalogData',
    'CompletenessData',
    'OpenCovidSource',
    'TimelineSource',
    'parse_timeseries',
    'parse_catalog',
    'parse_completeness',
    'DataSourceManager',
    'source_manager',
]
