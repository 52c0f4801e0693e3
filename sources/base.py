"""
Abstract interface for time-series data sources.

A source never raises for transport problems: failures come back as a
result object with `error` set, and the caller decides what to show.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, List, Optional

from processing.models import MetricDescriptor, RawPoint


@dataclass
class TimeseriesData:
    """Result from fetching one (metric, region) series."""

    metric: str
    region: str
    points: List[RawPoint] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """Check if data was fetched successfully."""
        return self.error is None and len(self.points) > 0

    @property
    def latest_date(self) -> Optional[date]:
        return self.points[-1].date if self.points else None


@dataclass
class CatalogData:
    """Result from fetching the metric catalog."""

    metrics: List[MetricDescriptor] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None and len(self.metrics) > 0


@dataclass
class CompletenessData:
    """Result from fetching a metric's completeness records."""

    metric: str
    records: Dict[date, FrozenSet[str]] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None and len(self.records) > 0


class DataSource(ABC):
    """Abstract base class for time-series sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this data source."""
        pass

    @abstractmethod
    async def fetch(self, metric: str, region: str) -> TimeseriesData:
        """
        Fetch the daily series for a metric in a region.

        Args:
            metric: Metric identifier (e.g. 'cases')
            region: Region code (e.g. 'CAN', 'ON')

        Returns:
            TimeseriesData with points ordered by date
        """
        pass

    @abstractmethod
    def fetch_sync(self, metric: str, region: str) -> TimeseriesData:
        """Blocking version of fetch, for scripts."""
        pass

    @abstractmethod
    def supports(self, metric: str) -> bool:
        """Check if this source can serve the given metric."""
        pass
