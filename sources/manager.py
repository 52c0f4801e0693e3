"""
Data Source Manager - Routes requests to the right source, with caching.

Provides a unified interface for the catalog, time series and
completeness data a chart needs.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from cache import CacheManager, cache_manager as default_cache
from .base import CatalogData, CompletenessData, DataSource, TimeseriesData
from .opencovid import OpenCovidSource
from .timeline import TimelineSource

logger = logging.getLogger(__name__)


class DataSourceManager:
    """
    Routes metric requests to data sources.

    Handles caching, parallel fetching and the "no source" case.
    """

    def __init__(self, sources: Optional[List[DataSource]] = None,
                 timeline: Optional[TimelineSource] = None,
                 cache: Optional[CacheManager] = None):
        self._sources: List[DataSource] = sources if sources is not None else [OpenCovidSource()]
        self._timeline = timeline or TimelineSource()
        self._cache = cache or default_cache
        for source in self._sources:
            logger.info(f"[Sources] {source.name}: registered")

    def get_source(self, metric: str) -> Optional[DataSource]:
        """Find the data source that serves a metric."""
        for source in self._sources:
            if source.supports(metric):
                return source
        return None

    # =========================================================================
    # Time series
    # =========================================================================

    async def fetch(self, metric: str, region: str) -> TimeseriesData:
        """
        Fetch a series, using the cache if available.

        Args:
            metric: Metric identifier
            region: Region code

        Returns:
            TimeseriesData with points or an error
        """
        cached = self._cache.get_timeseries(metric, region)
        if cached:
            return TimeseriesData(metric=metric, region=region, points=cached)

        source = self.get_source(metric)
        if not source:
            return TimeseriesData(metric=metric, region=region, error=f"No data source found for {metric}")

        result = await source.fetch(metric, region)
        if result.is_valid:
            self._cache.set_timeseries(metric, region, result.points)
        return result

    def fetch_sync(self, metric: str, region: str) -> TimeseriesData:
        """Synchronous fetch - uses cache and sync source methods."""
        cached = self._cache.get_timeseries(metric, region)
        if cached:
            return TimeseriesData(metric=metric, region=region, points=cached)

        source = self.get_source(metric)
        if not source:
            return TimeseriesData(metric=metric, region=region, error=f"No data source found for {metric}")

        result = source.fetch_sync(metric, region)
        if result.is_valid:
            self._cache.set_timeseries(metric, region, result.points)
        return result

    # =========================================================================
    # Catalog and completeness
    # =========================================================================

    async def fetch_catalog(self) -> CatalogData:
        cached = self._cache.get_catalog()
        if cached:
            return CatalogData(metrics=cached)

        result = await self._timeline.fetch_catalog()
        if result.is_valid:
            self._cache.set_catalog(result.metrics)
        return result

    def fetch_catalog_sync(self) -> CatalogData:
        cached = self._cache.get_catalog()
        if cached:
            return CatalogData(metrics=cached)

        result = self._timeline.fetch_catalog_sync()
        if result.is_valid:
            self._cache.set_catalog(result.metrics)
        return result

    async def fetch_completeness(self, metric: str) -> CompletenessData:
        cached = self._cache.get_completeness(metric)
        if cached:
            return CompletenessData(metric=metric, records=cached)

        result = await self._timeline.fetch_completeness(metric)
        if result.is_valid:
            self._cache.set_completeness(metric, result.records)
        return result

    def fetch_completeness_sync(self, metric: str) -> CompletenessData:
        cached = self._cache.get_completeness(metric)
        if cached:
            return CompletenessData(metric=metric, records=cached)

        result = self._timeline.fetch_completeness_sync(metric)
        if result.is_valid:
            self._cache.set_completeness(metric, result.records)
        return result

    async def fetch_chart_inputs(
        self, metric: str, region: str, with_completeness: bool
    ) -> Tuple[TimeseriesData, Optional[CompletenessData]]:
        """Fetch a series and, when needed, its completeness records in parallel."""
        if not with_completeness:
            return await self.fetch(metric, region), None
        series, completeness = await asyncio.gather(
            self.fetch(metric, region), self.fetch_completeness(metric)
        )
        return series, completeness

    def available_sources(self) -> dict:
        """Names of all registered sources."""
        status = {source.name: True for source in self._sources}
        status[self._timeline.name] = True
        return status


# Global instance
source_manager = DataSourceManager()
