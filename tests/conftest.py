from datetime import date, timedelta

import pytest

from cache import CacheManager
from processing.models import MetricDescriptor, RawPoint
from sources import CatalogData, CompletenessData, DataSource, DataSourceManager, TimeseriesData


PROVINCES = ['AB', 'BC', 'MB', 'NB', 'NL', 'NS', 'ON', 'PE', 'QC', 'SK']


def build_points(daily, start=date(2024, 1, 1)):
    points = []
    total = 0.0
    for offset, value in enumerate(daily):
        total += value
        points.append(RawPoint(date=start + timedelta(days=offset), cumulative_value=total, daily_value=value))
    return points


class FakeSource(DataSource):
    def __init__(self, points=None, error=None):
        self.points = points or []
        self.error = error
        self.calls = []

    @property
    def name(self):
        return "Fake"

    def supports(self, metric):
        return True

    def _result(self, metric, region):
        self.calls.append((metric, region))
        if self.error:
            return TimeseriesData(metric=metric, region=region, error=self.error)
        return TimeseriesData(metric=metric, region=region, points=list(self.points))

    async def fetch(self, metric, region):
        return self._result(metric, region)

    def fetch_sync(self, metric, region):
        return self._result(metric, region)


class FakeTimeline:
    name = "FakeTimeline"

    def __init__(self, metrics=None, records=None, error=None):
        self.metrics = metrics or []
        self.records = records or {}
        self.error = error
        self.completeness_calls = []

    async def fetch_catalog(self):
        return self.fetch_catalog_sync()

    def fetch_catalog_sync(self):
        if self.error:
            return CatalogData(error=self.error)
        return CatalogData(metrics=list(self.metrics))

    async def fetch_completeness(self, metric):
        return self.fetch_completeness_sync(metric)

    def fetch_completeness_sync(self, metric):
        self.completeness_calls.append(metric)
        if self.error:
            return CompletenessData(metric=metric, error=self.error)
        return CompletenessData(metric=metric, records=dict(self.records))


@pytest.fixture
def points_factory():
    return build_points


@pytest.fixture
def complete_records():
    return {
        date(2024, 1, 1): frozenset(['AB', 'BC']),
        date(2024, 1, 2): frozenset(PROVINCES),
        date(2024, 1, 3): frozenset(PROVINCES[:-1]),
    }


@pytest.fixture
def make_manager(complete_records):
    def _make(points=None, error=None, records=None, timeline_error=None):
        source = FakeSource(points=points if points is not None else build_points([1, 2, 3, 4]), error=error)
        timeline = FakeTimeline(
            metrics=[
                MetricDescriptor(id='cases', display_name='Cases'),
                MetricDescriptor(id='icu', display_name='ICU occupancy'),
            ],
            records=complete_records if records is None else records,
            error=timeline_error,
        )
        manager = DataSourceManager(sources=[source], timeline=timeline, cache=CacheManager())
        return manager, source, timeline
    return _make
