import asyncio
import time

from cache import CacheManager, LRUCache
from sources import DataSourceManager


def test_fetch_is_cached(make_manager):
    manager, source, _ = make_manager()

    first = manager.fetch_sync('cases', 'CAN')
    second = manager.fetch_sync('cases', 'CAN')

    assert first.is_valid and second.is_valid
    assert second.points == first.points
    assert source.calls == [('cases', 'CAN')]


def test_errors_are_not_cached(make_manager):
    manager, source, _ = make_manager(error="boom")

    assert manager.fetch_sync('cases', 'ON').error == "boom"
    assert manager.fetch_sync('cases', 'ON').error == "boom"
    assert len(source.calls) == 2


def test_no_source_for_metric(make_manager):
    manager = DataSourceManager(sources=[], timeline=make_manager()[2], cache=CacheManager())
    result = manager.fetch_sync('cases', 'CAN')
    assert "No data source" in result.error


def test_chart_inputs_with_completeness(make_manager, complete_records):
    manager, _, timeline = make_manager()

    series, completeness = asyncio.run(manager.fetch_chart_inputs('cases', 'CAN', True))

    assert series.is_valid
    assert completeness.records == complete_records
    assert timeline.completeness_calls == ['cases']


def test_chart_inputs_without_completeness(make_manager):
    manager, _, timeline = make_manager()

    series, completeness = asyncio.run(manager.fetch_chart_inputs('icu', 'ON', False))

    assert series.is_valid
    assert completeness is None
    assert timeline.completeness_calls == []


def test_catalog_cached(make_manager):
    manager, _, timeline = make_manager()

    assert [m.id for m in asyncio.run(manager.fetch_catalog()).metrics] == ['cases', 'icu']
    timeline.metrics = []
    assert [m.id for m in manager.fetch_catalog_sync().metrics] == ['cases', 'icu']


def test_lru_cache_expiry(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(time, 'time', lambda: now[0])
    cache = LRUCache(max_size=2)

    cache.set('a', 1, ttl=10)
    assert cache.get('a') == 1
    now[0] += 11
    assert cache.get('a') is None


def test_lru_cache_evicts_oldest():
    cache = LRUCache(max_size=2)
    cache.set('a', 1, ttl=60)
    cache.set('b', 2, ttl=60)
    cache.get('a')
    cache.set('c', 3, ttl=60)

    assert cache.get('b') is None
    assert cache.get('a') == 1
    assert cache.stats()['total_entries'] == 2
