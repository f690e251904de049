from concurrent.futures import ThreadPoolExecutor

import pytest

from core.cache import CacheKeys, InMemoryCache
from core.cache.memory_cache import SWEEP_JOB_ID, compile_pattern


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    cache = InMemoryCache(clock=clock)
    yield cache
    cache.stop_sweeper()


def test_get_returns_value_before_expiry(cache, clock):
    cache.set("game:detail:1", {"game": {"id": 1}}, ttl=60)
    clock.advance(59.9)

    assert cache.get("game:detail:1") == {"game": {"id": 1}}


def test_get_evicts_entry_at_expiry(cache, clock):
    cache.set("k", "v", ttl=60)
    clock.advance(60)

    assert cache.get("k") is None
    assert "k" not in cache.keys()


def test_get_missing_key_returns_default(cache):
    assert cache.get("missing") is None
    assert cache.get("missing", default="fallback") == "fallback"


def test_set_overwrites_value_and_restarts_ttl(cache, clock):
    cache.set("k", "old", ttl=10)
    clock.advance(8)
    cache.set("k", "new", ttl=10)
    clock.advance(8)

    assert cache.get("k") == "new"


def test_zero_ttl_is_never_readable(cache):
    cache.set("k", "v", ttl=0)

    assert cache.get("k") is None


def test_falsy_values_are_cached(cache):
    cache.set("empty", [], ttl=60)
    cache.set("zero", 0, ttl=60)

    assert cache.get("empty") == []
    assert cache.get("zero") == 0


def test_delete_is_idempotent(cache):
    cache.set("k", "v", ttl=60)

    cache.delete("k")
    cache.delete("k")

    assert cache.get("k") is None


def test_delete_pattern_removes_prefix_matches_only(cache):
    cache.set(CacheKeys.game_search("zelda"), [], ttl=60)
    cache.set(CacheKeys.game_detail(1), {}, ttl=60)
    cache.set(CacheKeys.game_similar(1), [], ttl=60)
    cache.set("user:1", {}, ttl=60)
    cache.set("xgame:1", {}, ttl=60)

    removed = cache.delete_pattern(CacheKeys.game_pattern())

    assert removed == 3
    assert sorted(cache.keys()) == ["user:1", "xgame:1"]


def test_delete_pattern_with_middle_wildcard(cache):
    cache.set("game:detail:1", {}, ttl=60)
    cache.set("game:detail:2", {}, ttl=60)
    cache.set("game:search:detail", [], ttl=60)

    assert cache.delete_pattern("game:*:1") == 1
    assert cache.delete_pattern("game:detail:*") == 1
    assert cache.keys() == ["game:search:detail"]


def test_compile_pattern_treats_regex_characters_literally():
    regex = compile_pattern("game:search:a.b*")

    assert regex.fullmatch("game:search:a.bc")
    assert not regex.fullmatch("game:search:axbc")


def test_sweep_evicts_only_expired_entries(cache, clock):
    cache.set("short", 1, ttl=10)
    cache.set("long", 2, ttl=100)
    clock.advance(50)

    assert cache.sweep() == 1
    assert cache.keys() == ["long"]
    assert len(cache) == 1


def test_expired_entries_linger_until_swept(cache, clock):
    cache.set("k", "v", ttl=1)
    clock.advance(5)

    assert cache.keys() == ["k"]
    cache.sweep()
    assert cache.keys() == []


def test_get_or_compute_calls_function_once(cache):
    calls = []

    def compute():
        calls.append(1)
        return {"value": 42}

    assert cache.get_or_compute("k", compute, ttl=60) == {"value": 42}
    assert cache.get_or_compute("k", compute, ttl=60) == {"value": 42}
    assert len(calls) == 1


def test_get_or_compute_does_not_store_none(cache):
    assert cache.get_or_compute("k", lambda: None, ttl=60) is None
    assert "k" not in cache.keys()


def test_clear_removes_everything(cache):
    cache.set("a", 1, ttl=60)
    cache.set("b", 2, ttl=60)

    cache.clear()

    assert len(cache) == 0


def test_start_sweeper_schedules_one_job(cache):
    cache.start_sweeper(interval_seconds=30)
    cache.start_sweeper(interval_seconds=30)

    assert cache.sweeper_running
    jobs = cache._scheduler.get_jobs()
    assert [job.id for job in jobs] == [SWEEP_JOB_ID]

    cache.stop_sweeper()
    assert not cache.sweeper_running


def test_stop_sweeper_without_start_is_noop(cache):
    cache.stop_sweeper()

    assert not cache.sweeper_running


def test_health_check_reports_entries(cache):
    cache.set("a", 1, ttl=60)

    health = cache.health_check()

    assert health["backend"] == "memory"
    assert health["entries"] == 1
    assert health["sweeper_running"] is False


def test_concurrent_writes_and_sweeps(cache):
    def work(i: int) -> None:
        cache.set(f"game:detail:{i}", {"id": i}, ttl=60)
        cache.get(f"game:detail:{i}")
        cache.sweep()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(work, range(200)))

    assert len(cache) == 200
