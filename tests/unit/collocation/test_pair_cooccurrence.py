from domain.collocation.engine import get_pair_cooccurrence
from domain.collocation.schema import CollocationOptions, CollocationTerm

KTB = CollocationTerm(kind="root", value="كتب")
ILM = CollocationTerm(kind="root", value="علم")
NZL = CollocationTerm(kind="root", value="نزل")


def test_pair_cooccurrence_ayah_windows(corpus_tokens):
    pair = get_pair_cooccurrence(KTB, ILM, corpus_tokens)

    assert pair.windows_a == ["1:1", "1:2", "2:1"]
    assert pair.windows_b == ["1:1", "1:2", "2:1", "2:2"]
    assert pair.shared_windows == ["1:1", "1:2", "2:1"]
    assert pair.count_a == 3
    assert pair.count_b == 4
    assert pair.cooccurrence_count == 3


def test_pair_without_overlap(corpus_tokens):
    pair = get_pair_cooccurrence(KTB, NZL, corpus_tokens)

    assert pair.cooccurrence_count == 0
    assert pair.shared_windows == []
    assert pair.count_b == 2


def test_pair_ayah_distance_windows(corpus_tokens):
    options = CollocationOptions(window_type="distance", distance=1, distance_unit="ayah")

    pair = get_pair_cooccurrence(KTB, NZL, corpus_tokens, options)

    assert pair.shared_windows == ["1:2", "2:1"]
    assert pair.cooccurrence_count == 2


def test_pair_with_unknown_term(corpus_tokens):
    pair = get_pair_cooccurrence(KTB, CollocationTerm(value="زرق"), corpus_tokens)

    assert pair.count_a == 3
    assert pair.count_b == 0
    assert pair.cooccurrence_count == 0
