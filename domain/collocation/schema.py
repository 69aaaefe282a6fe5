from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from common.constants import (
    DEFAULT_DISTANCE,
    DEFAULT_MIN_FREQUENCY,
    KIND_ROOT,
    UNIT_TOKEN,
    WINDOW_AYAH,
)


class CollocationTerm(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str = KIND_ROOT  # "root" | "lemma"
    value: str


class CollocateFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    pos: Tuple[str, ...] = ()  # allowed parts of speech, empty = any
    lemma: Optional[str] = None
    root: Optional[str] = None


class CollocationOptions(BaseModel):
    # Loose on purpose: semantic checks live in validate_options so bad
    # values surface as ConfigurationError, not as pydantic errors.
    model_config = ConfigDict(frozen=True)

    window_type: str = WINDOW_AYAH  # "ayah" | "surah" | "distance"
    distance: int = DEFAULT_DISTANCE
    distance_unit: str = UNIT_TOKEN  # "token" | "ayah", distance windows only
    min_frequency: int = DEFAULT_MIN_FREQUENCY
    group_by: str = KIND_ROOT
    filter: CollocateFilter = Field(default_factory=CollocateFilter)
    pair_term: Optional[CollocationTerm] = None


class CollocationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    group_by: str
    count: int  # raw co-occurrence count, (target, collocate) token pairs
    window_count: int = 0  # distinct windows shared, the PMI joint frequency
    pmi: float
    sample_lemmas: List[str] = Field(default_factory=list)
    sample_windows: List[str] = Field(default_factory=list)  # e.g. "2:255" or "2:255:7"


class PairCooccurrence(BaseModel):
    term_a: CollocationTerm
    term_b: CollocationTerm
    windows_a: List[str] = Field(default_factory=list)
    windows_b: List[str] = Field(default_factory=list)
    shared_windows: List[str] = Field(default_factory=list)
    count_a: int = 0
    count_b: int = 0
    cooccurrence_count: int = 0
