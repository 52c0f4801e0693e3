"""
OpenCovid Data Source - api.opencovid.ca time series.

Serves daily cumulative and delta values for Canada and each
province/territory.
"""

import logging
import math
from datetime import datetime
from typing import List, Optional

import httpx

from config import config, COUNTRY_CODE
from processing.models import RawPoint
from registry import registry
from .base import DataSource, TimeseriesData
from .clients import get_async_client, get_sync_client, status_error

logger = logging.getLogger(__name__)


def parse_timeseries(payload: dict, metric: str) -> List[RawPoint]:
    """
    Convert an OpenCovid timeseries response into RawPoints.

    Expected shape: {"data": {metric: [{"date", "value", "value_daily"}, ...]}}

    Raises:
        ValueError: if the payload is missing fields or has bad values
    """
    try:
        rows = payload['data'][metric]
    except (KeyError, TypeError):
        raise ValueError(f"Response has no data for {metric}")

    if not isinstance(rows, list):
        raise ValueError(f"Data for {metric} is not a list")

    points = []
    for row in rows:
        try:
            point = RawPoint(
                date=datetime.strptime(row['date'], '%Y-%m-%d').date(),
                cumulative_value=float(row['value']),
                daily_value=float(row['value_daily']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed row for {metric}: {row!r} ({e})")

        if not (math.isfinite(point.cumulative_value) and math.isfinite(point.daily_value)):
            raise ValueError(f"Non-finite value for {metric}: {row!r}")
        points.append(point)

    points.sort(key=lambda p: p.date)
    return points


class OpenCovidSource(DataSource):
    """Data source for the OpenCovid REST API."""

    def __init__(self, base_url: Optional[str] = None,
                 client: Optional[httpx.Client] = None,
                 async_client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or config.opencovid_api_url).rstrip('/')
        self._client = client
        self._async_client = async_client

    @property
    def name(self) -> str:
        return "OpenCovid"

    def supports(self, metric: str) -> bool:
        return registry.get_metric(metric) is not None

    def build_params(self, metric: str, region: str) -> dict:
        region = region.upper()
        if region == COUNTRY_CODE:
            return {'geo': 'can', 'stat': metric}
        return {'geo': 'pt', 'stat': metric, 'loc': region}

    @property
    def url(self) -> str:
        return f"{self.base_url}/timeseries"

    def _to_result(self, response: httpx.Response, metric: str, region: str) -> TimeseriesData:
        what = f"{metric} for {region}"
        error = status_error(response, what)
        if error:
            return TimeseriesData(metric=metric, region=region, error=error)

        points = parse_timeseries(response.json(), metric)
        if not points:
            return TimeseriesData(metric=metric, region=region, error=f"No data for {what}")
        return TimeseriesData(metric=metric, region=region, points=points)

    async def fetch(self, metric: str, region: str) -> TimeseriesData:
        """Fetch a time series from the OpenCovid API."""
        try:
            client = self._async_client or get_async_client()
            response = await client.get(self.url, params=self.build_params(metric, region))
            return self._to_result(response, metric, region)

        except httpx.TimeoutException:
            return TimeseriesData(metric=metric, region=region,
                                  error=f"Timeout fetching {metric} for {region} from OpenCovid")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[OpenCovid] {metric}/{region}: {e}")
            return TimeseriesData(metric=metric, region=region,
                                  error=f"Error fetching {metric} for {region}: {e}")

    def fetch_sync(self, metric: str, region: str) -> TimeseriesData:
        """Synchronous version using the shared sync client."""
        try:
            client = self._client or get_sync_client()
            response = client.get(self.url, params=self.build_params(metric, region))
            return self._to_result(response, metric, region)

        except httpx.TimeoutException:
            return TimeseriesData(metric=metric, region=region,
                                  error=f"Timeout fetching {metric} for {region} from OpenCovid")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[OpenCovid] {metric}/{region}: {e}")
            return TimeseriesData(metric=metric, region=region,
                                  error=f"Error fetching {metric} for {region}: {e}")
