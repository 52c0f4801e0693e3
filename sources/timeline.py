"""
CovidTimelineCanada Static Files - metric catalog and completeness records.

Both are plain JSON files served from the GitHub repository.
"""

import logging
from datetime import date, datetime
from typing import Dict, FrozenSet, List, Optional

import httpx

from config import config, UNSUPPORTED_METRICS
from processing.models import MetricDescriptor
from registry import registry
from .base import CatalogData, CompletenessData
from .clients import get_async_client, get_sync_client, status_error

logger = logging.getLogger(__name__)


def parse_catalog(payload: dict) -> List[MetricDescriptor]:
    """
    Convert values.json into metric descriptors, in catalog order.

    Entries the dashboard cannot chart (admissions, or ids without a label
    in the registry) are left out.
    """
    if not isinstance(payload, dict):
        raise ValueError("Catalog is not a JSON object")

    metrics = []
    for metric_id, entry in payload.items():
        if metric_id in UNSUPPORTED_METRICS:
            continue
        info = registry.get_metric(metric_id)
        if info is None:
            logger.warning(f"[Timeline] Skipping catalog metric without a label: {metric_id}")
            continue
        name = entry.get('name_long') if isinstance(entry, dict) else None
        metrics.append(MetricDescriptor(id=metric_id, display_name=name or metric_id, value_unit=info.unit))
    return metrics


def parse_completeness(payload: dict) -> Dict[date, FrozenSet[str]]:
    """
    Convert a completeness file into {date: regions reported by that date}.

    Expected shape: {"2024-01-01": {"pt": ["AB", "BC", ...]}, ...}
    Entries without a region list map to an empty set.
    """
    if not isinstance(payload, dict):
        raise ValueError("Completeness file is not a JSON object")

    records = {}
    for key, entry in payload.items():
        day = datetime.strptime(key, '%Y-%m-%d').date()
        regions = entry.get('pt') if isinstance(entry, dict) else None
        records[day] = frozenset(regions) if isinstance(regions, list) else frozenset()
    return dict(sorted(records.items()))


class TimelineSource:
    """Static JSON files from the CovidTimelineCanada repository."""

    def __init__(self, base_url: Optional[str] = None,
                 client: Optional[httpx.Client] = None,
                 async_client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or config.timeline_data_url).rstrip('/')
        self._client = client
        self._async_client = async_client

    @property
    def name(self) -> str:
        return "CovidTimelineCanada"

    @property
    def catalog_url(self) -> str:
        return f"{self.base_url}/docs/values/values.json"

    def completeness_url(self, metric: str) -> str:
        return f"{self.base_url}/data/can/{metric}_can_completeness.json"

    # =========================================================================
    # Catalog
    # =========================================================================

    def _catalog_result(self, response: httpx.Response) -> CatalogData:
        error = status_error(response, "metric catalog")
        if error:
            return CatalogData(error=error)
        return CatalogData(metrics=parse_catalog(response.json()))

    async def fetch_catalog(self) -> CatalogData:
        try:
            client = self._async_client or get_async_client()
            return self._catalog_result(await client.get(self.catalog_url))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[Timeline] Catalog fetch failed: {e}")
            return CatalogData(error=f"Error fetching metric catalog: {e}")

    def fetch_catalog_sync(self) -> CatalogData:
        try:
            client = self._client or get_sync_client()
            return self._catalog_result(client.get(self.catalog_url))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[Timeline] Catalog fetch failed: {e}")
            return CatalogData(error=f"Error fetching metric catalog: {e}")

    # =========================================================================
    # Completeness
    # =========================================================================

    def _completeness_result(self, response: httpx.Response, metric: str) -> CompletenessData:
        error = status_error(response, f"completeness for {metric}")
        if error:
            return CompletenessData(metric=metric, error=error)
        return CompletenessData(metric=metric, records=parse_completeness(response.json()))

    async def fetch_completeness(self, metric: str) -> CompletenessData:
        try:
            client = self._async_client or get_async_client()
            return self._completeness_result(await client.get(self.completeness_url(metric)), metric)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[Timeline] Completeness fetch failed for {metric}: {e}")
            return CompletenessData(metric=metric, error=f"Error fetching completeness for {metric}: {e}")

    def fetch_completeness_sync(self, metric: str) -> CompletenessData:
        try:
            client = self._client or get_sync_client()
            return self._completeness_result(client.get(self.completeness_url(metric)), metric)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[Timeline] Completeness fetch failed for {metric}: {e}")
            return CompletenessData(metric=metric, error=f"Error fetching completeness for {metric}: {e}")
