"""Tests for TTL response cache expiry and keying."""

from effort_report.adapters import ResponseCache, RestCallParameters


class _ManualClock:
    """Monotonic clock double advanced explicitly by tests."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_adapters_cache_returns_entry_before_ttl_and_evicts_at_ttl() -> None:
    """Serve an entry inside its lifetime and drop it lazily once expired.

    Returns:
        None: Assertions validate lazy expiry.

    Raises:
        AssertionError: Raised when expiry boundaries are wrong.
    """

    clock = _ManualClock()
    cache = ResponseCache(ttl_seconds=300, clock=clock)
    key = ResponseCache.cache_build_key("user.get", RestCallParameters())
    cache.cache_put(key, [{"ID": "1"}])

    clock.now += 299.9
    entry = cache.cache_get(key)
    assert entry is not None
    assert entry.payload == [{"ID": "1"}]

    clock.now += 0.1
    assert cache.cache_get(key) is None
    assert cache.cache_size() == 0


def test_adapters_cache_keys_separate_methods_and_parameters() -> None:
    """Keep distinct entries for different methods and different parameters."""

    cache = ResponseCache(ttl_seconds=300, clock=_ManualClock())
    page_zero = RestCallParameters.params_build(scalar_fields={"start": 0})
    page_one = page_zero.params_with_scalar("start", 50)

    cache.cache_put(ResponseCache.cache_build_key("tasks.task.list", page_zero), "first")
    cache.cache_put(ResponseCache.cache_build_key("tasks.task.list", page_one), "second")
    cache.cache_put(ResponseCache.cache_build_key("user.get", page_zero), "users")

    assert cache.cache_size() == 3
    assert cache.cache_get(ResponseCache.cache_build_key("tasks.task.list", page_one)).payload == "second"

    cache.cache_clear()
    assert cache.cache_size() == 0
