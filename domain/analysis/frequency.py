from collections import defaultdict
from typing import Dict, FrozenSet, Iterable

from pydantic import BaseModel, ConfigDict, Field

from common.constants import KIND_LEMMA, UNIT_AYAH, WINDOW_AYAH, WINDOW_SURAH
from domain.corpus.schema import Token


class FrequencyTables(BaseModel):
    """
    Corpus-wide marginals for roots and lemmas. Read-only once built;
    safe to share across concurrent queries.
    """

    model_config = ConfigDict(frozen=True)

    total_tokens: int = 0
    total_ayahs: int = 0
    total_surahs: int = 0

    root_counts: Dict[str, int] = Field(default_factory=dict)
    root_ayahs: Dict[str, FrozenSet[str]] = Field(default_factory=dict)
    root_surahs: Dict[str, FrozenSet[int]] = Field(default_factory=dict)

    lemma_counts: Dict[str, int] = Field(default_factory=dict)
    lemma_ayahs: Dict[str, FrozenSet[str]] = Field(default_factory=dict)
    lemma_surahs: Dict[str, FrozenSet[int]] = Field(default_factory=dict)

    def total_windows(self, window_type: str, distance_unit: str) -> int:
        if window_type == WINDOW_AYAH:
            return self.total_ayahs
        if window_type == WINDOW_SURAH:
            return self.total_surahs
        return self.total_ayahs if distance_unit == UNIT_AYAH else self.total_tokens

    def marginal(self, kind: str, value: str, window_type: str, distance_unit: str) -> int:
        """Number of windows of the given granularity containing `value`."""
        if kind == KIND_LEMMA:
            counts, ayahs, surahs = self.lemma_counts, self.lemma_ayahs, self.lemma_surahs
        else:
            counts, ayahs, surahs = self.root_counts, self.root_ayahs, self.root_surahs

        if window_type == WINDOW_SURAH:
            return len(surahs.get(value, ()))
        if window_type == WINDOW_AYAH or distance_unit == UNIT_AYAH:
            return len(ayahs.get(value, ()))
        return counts.get(value, 0)


def build_frequency_tables(tokens: Iterable[Token]) -> FrequencyTables:
    """Single pass over the token stream."""
    total_tokens = 0
    ayah_ids = set()
    surah_ids = set()

    root_counts: Dict[str, int] = defaultdict(int)
    root_ayahs = defaultdict(set)
    root_surahs = defaultdict(set)
    lemma_counts: Dict[str, int] = defaultdict(int)
    lemma_ayahs = defaultdict(set)
    lemma_surahs = defaultdict(set)

    for token in tokens:
        total_tokens += 1
        ayah_id = token.ayah_id
        ayah_ids.add(ayah_id)
        surah_ids.add(token.sura)

        if token.root:
            root_counts[token.root] += 1
            root_ayahs[token.root].add(ayah_id)
            root_surahs[token.root].add(token.sura)

        if token.lemma:
            lemma_counts[token.lemma] += 1
            lemma_ayahs[token.lemma].add(ayah_id)
            lemma_surahs[token.lemma].add(token.sura)

    return FrequencyTables(
        total_tokens=total_tokens,
        total_ayahs=len(ayah_ids),
        total_surahs=len(surah_ids),
        root_counts=dict(root_counts),
        root_ayahs={k: frozenset(v) for k, v in root_ayahs.items()},
        root_surahs={k: frozenset(v) for k, v in root_surahs.items()},
        lemma_counts=dict(lemma_counts),
        lemma_ayahs={k: frozenset(v) for k, v in lemma_ayahs.items()},
        lemma_surahs={k: frozenset(v) for k, v in lemma_surahs.items()},
    )
