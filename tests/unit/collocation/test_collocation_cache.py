from unittest.mock import MagicMock

import pytest

from core.errors import ConfigurationError
from domain.analysis.frequency import build_frequency_tables
from domain.collocation.cache import CollocationCache, CollocationQueryKey
from domain.collocation.schema import CollocationOptions, CollocationResult, CollocationTerm
from domain.collocation.windows import WindowIndex

KTB = CollocationTerm(kind="root", value="كتب")


def _result(label="علم"):
    return CollocationResult(label=label, group_by="root", count=2, window_count=2, pmi=0.5)


def test_query_key_equality():
    a = CollocationQueryKey(target_kind="root", target_value="كتب", options=CollocationOptions())
    b = CollocationQueryKey(target_kind="root", target_value="كتب", options=CollocationOptions())
    c = CollocationQueryKey(
        target_kind="root", target_value="كتب", options=CollocationOptions(min_frequency=1)
    )

    assert a == b
    assert hash(a) == hash(b)
    assert a != c


def test_cache_hit_skips_compute():
    # Setup
    compute = MagicMock(return_value=[_result()])
    cache = CollocationCache(max_size=4, compute=compute)
    tokens = object()

    # Execute
    first = cache.get_or_compute(KTB, tokens, None)
    second = cache.get_or_compute(KTB, tokens, None, CollocationOptions())

    # Assertions
    assert compute.call_count == 1
    assert first == second
    assert cache.hits == 1
    assert cache.misses == 1
    assert len(cache) == 1


def test_returned_lists_are_copies():
    compute = MagicMock(return_value=[_result()])
    cache = CollocationCache(compute=compute)
    tokens = object()

    cache.get_or_compute(KTB, tokens, None).clear()

    assert len(cache.get_or_compute(KTB, tokens, None)) == 1


def test_new_snapshot_invalidates_entries():
    compute = MagicMock(return_value=[_result()])
    cache = CollocationCache(compute=compute)

    cache.get_or_compute(KTB, object(), None)
    cache.get_or_compute(KTB, object(), None)

    assert compute.call_count == 2
    assert len(cache) == 1


def test_lru_eviction():
    compute = MagicMock(return_value=[])
    cache = CollocationCache(max_size=2, compute=compute)
    tokens = object()

    for value in ("كتب", "علم", "قرا"):
        cache.get_or_compute(CollocationTerm(value=value), tokens, None)
    assert len(cache) == 2

    # oldest entry was evicted and is recomputed
    cache.get_or_compute(CollocationTerm(value="كتب"), tokens, None)
    assert compute.call_count == 4


def test_invalid_options_are_not_cached():
    compute = MagicMock(return_value=[])
    cache = CollocationCache(compute=compute)

    with pytest.raises(ConfigurationError):
        cache.get_or_compute(KTB, object(), None, CollocationOptions(window_type="verse"))
    compute.assert_not_called()
    assert len(cache) == 0


def test_clear_and_size_validation():
    cache = CollocationCache(compute=MagicMock(return_value=[]))
    cache.get_or_compute(KTB, object(), None)
    cache.clear()
    assert len(cache) == 0

    with pytest.raises(ValueError):
        CollocationCache(max_size=0)


def test_cache_with_real_engine(corpus_tokens):
    index = WindowIndex(corpus_tokens)
    freq = build_frequency_tables(corpus_tokens)
    cache = CollocationCache()

    results = cache.get_or_compute(KTB, index, freq)

    assert [r.label for r in results] == ["علم", "قرا"]
    assert cache.get_or_compute(KTB, index, freq) == results
    assert cache.hits == 1
