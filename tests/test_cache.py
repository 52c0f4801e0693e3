from datetime import date

from cache import CacheManager, LRUCache


def test_lru_evicts_least_recently_used():
    cache = LRUCache(max_size=2)
    cache.set('a', 1, ttl=60)
    cache.set('b', 2, ttl=60)
    cache.get('a')
    cache.set('c', 3, ttl=60)

    assert cache.get('a') == 1
    assert cache.get('b') is None
    assert cache.get('c') == 3


def test_lru_expired_entries_are_dropped():
    cache = LRUCache()
    cache.set('a', 1, ttl=-1)

    assert cache.get('a') is None
    assert cache.stats()['total_entries'] == 0


def test_manager_tiers_and_clear():
    manager = CacheManager()
    manager.set_timeseries('cases', 'on', [1, 2])
    manager.set_completeness('cases', {date(2024, 1, 1): frozenset({'AB'})})
    manager.set_catalog(['cases'])

    assert manager.get_timeseries('cases', 'ON') == [1, 2]
    assert manager.get_catalog() == ['cases']
    assert manager.stats()['completeness']['valid_entries'] == 1

    manager.clear_all()

    assert manager.get_timeseries('cases', 'ON') is None
    assert manager.get_completeness('cases') is None
