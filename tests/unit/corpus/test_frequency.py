from domain.analysis.frequency import build_frequency_tables
from domain.corpus.schema import Token


def _token(address, root, lemma="", pos="N"):
    sura, ayah, position = (int(p) for p in address.split(":"))
    return Token(id=address, sura=sura, ayah=ayah, position=position, text=lemma or root, root=root, lemma=lemma, pos=pos)


def test_build_frequency_tables_counts(corpus_tokens):
    # Execute
    freq = build_frequency_tables(corpus_tokens)

    # Assertions
    assert freq.total_tokens == 13
    assert freq.total_ayahs == 5
    assert freq.total_surahs == 2
    assert freq.root_counts == {"كتب": 3, "علم": 4, "قرا": 3, "نزل": 2}
    assert freq.root_ayahs["نزل"] == frozenset({"1:3", "2:2"})
    assert freq.root_surahs["كتب"] == frozenset({1, 2})
    assert freq.lemma_counts["عِلْم"] == 3
    assert len(freq.lemma_counts) == 7
    # tokens without a root do not get a root entry
    assert "" not in freq.root_counts


def test_marginal_follows_window_granularity():
    # Setup: one root used twice in the same ayah
    tokens = [
        _token("1:1:1", "رحم", "رَحْمَٰن"),
        _token("1:1:2", "رحم", "رَحِيم"),
        _token("1:2:1", "حمد", "حَمْد"),
        _token("2:1:1", "رحم", "رَحْمَة"),
    ]

    # Execute
    freq = build_frequency_tables(tokens)

    # Assertions
    assert freq.marginal("root", "رحم", "ayah", "token") == 2
    assert freq.marginal("root", "رحم", "surah", "token") == 2
    assert freq.marginal("root", "رحم", "distance", "token") == 3
    assert freq.marginal("root", "رحم", "distance", "ayah") == 2
    assert freq.marginal("lemma", "رَحِيم", "ayah", "token") == 1
    assert freq.marginal("root", "missing", "ayah", "token") == 0


def test_total_windows():
    tokens = [_token("1:1:1", "رحم"), _token("1:1:2", "حمد"), _token("2:4:1", "رحم")]
    freq = build_frequency_tables(tokens)

    assert freq.total_windows("ayah", "token") == 2
    assert freq.total_windows("surah", "token") == 2
    assert freq.total_windows("distance", "token") == 3
    assert freq.total_windows("distance", "ayah") == 2


def test_empty_corpus():
    freq = build_frequency_tables([])
    assert freq.total_tokens == 0
    assert freq.root_counts == {}
    assert freq.total_windows("ayah", "token") == 0
