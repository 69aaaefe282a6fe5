import math
from typing import Dict, List, Optional, Sequence, Set, Union

from common.constants import SAMPLE_CAP
from domain.analysis.frequency import FrequencyTables
from domain.collocation.options import validate_options, validate_term
from domain.collocation.schema import (
    CollocationOptions,
    CollocationResult,
    CollocationTerm,
    PairCooccurrence,
)
from domain.collocation.terms import filter_matcher, group_value, term_matcher
from domain.collocation.windows import WindowIndex
from domain.corpus.arabic import arabic_sort_key
from domain.corpus.schema import Token

TokenSource = Union[Sequence[Token], WindowIndex]


def _as_index(tokens: TokenSource) -> WindowIndex:
    return tokens if isinstance(tokens, WindowIndex) else WindowIndex(tokens)


def _result_sort_key(result: CollocationResult):
    return (-result.pmi, -result.count, arabic_sort_key(result.label))


def _add_sample(samples: List[str], value: str) -> None:
    if value and len(samples) < SAMPLE_CAP and value not in samples:
        samples.append(value)


def get_collocations(
    target: CollocationTerm,
    tokens: TokenSource,
    freq: FrequencyTables,
    options: Optional[CollocationOptions] = None,
) -> List[CollocationResult]:
    """
    Terms co-occurring with `target`, scored by PMI.

    `count` is the number of (target occurrence, collocate occurrence)
    token pairs sharing a window, which keeps it symmetric between two
    terms and monotone when windows widen. PMI uses the number of distinct
    windows shared (see Window) against corpus-wide window frequencies and
    is returned unclamped, negative values included.

    Sorted by pmi desc, count desc, label asc; not truncated.
    Raises ConfigurationError before touching the corpus when options are
    invalid. An unknown target yields [].
    """
    options = validate_options(options)
    validate_term(target)

    index = _as_index(tokens)
    is_target = term_matcher(target)
    anchors = index.find(is_target)
    if not anchors:
        return []

    windows = index.windows_for(anchors, options)
    # every window holds at least one target occurrence
    target_freq = len(windows)
    target_indices = set(anchors)

    pair_indices: Set[int] = set()
    if options.pair_term is not None:
        pair_indices = set(index.find(term_matcher(options.pair_term)))
        windows = [w for w in windows if any(j in pair_indices for j in w.indices())]

    accept = filter_matcher(options.filter)
    group_by = options.group_by

    pairs: Dict[str, int] = {}
    units: Dict[str, Set[str]] = {}
    lemmas: Dict[str, List[str]] = {}
    window_labels: Dict[str, List[str]] = {}

    for window in windows:
        for unit_key, members in window.units:
            for j in members:
                if j in target_indices or j in pair_indices:
                    continue
                token = index.tokens[j]
                label = group_value(token, group_by)
                if not label or not accept(token):
                    continue
                pairs[label] = pairs.get(label, 0) + window.weight
                units.setdefault(label, set()).add(unit_key)
                _add_sample(lemmas.setdefault(label, []), token.lemma)
                _add_sample(window_labels.setdefault(label, []), window.label)

    total = freq.total_windows(options.window_type, options.distance_unit)
    results: List[CollocationResult] = []

    for label, count in pairs.items():
        if count < options.min_frequency:
            continue
        joint = len(units[label])

        label_freq = freq.marginal(group_by, label, options.window_type, options.distance_unit)
        if total == 0 or label_freq == 0:
            continue

        # PMI = log2( P(x,y) / (P(x) P(y)) ) = log2( joint * N / (f(x) f(y)) )
        pmi = math.log2((joint * total) / (target_freq * label_freq))
        results.append(
            CollocationResult(
                label=label,
                group_by=group_by,
                count=count,
                window_count=joint,
                pmi=pmi,
                sample_lemmas=lemmas[label],
                sample_windows=window_labels[label],
            )
        )

    results.sort(key=_result_sort_key)
    return results


def count_target_windows(
    target: CollocationTerm,
    tokens: TokenSource,
    options: Optional[CollocationOptions] = None,
) -> int:
    """Windows holding the target, matched the same way get_collocations matches it."""
    options = validate_options(options)
    validate_term(target)

    index = _as_index(tokens)
    anchors = index.find(term_matcher(target))
    return len(index.windows_for(anchors, options)) if anchors else 0


def get_pair_cooccurrence(
    term_a: CollocationTerm,
    term_b: CollocationTerm,
    tokens: TokenSource,
    options: Optional[CollocationOptions] = None,
) -> PairCooccurrence:
    """
    Raw window overlap of two terms, no PMI.
    For distance windows the shared windows are A-centred windows that
    contain B.
    """
    options = validate_options(options)
    validate_term(term_a, "term_a")
    validate_term(term_b, "term_b")

    index = _as_index(tokens)
    a_indices = index.find(term_matcher(term_a))
    b_indices = index.find(term_matcher(term_b))
    b_set = set(b_indices)

    windows_a = index.windows_for(a_indices, options)
    windows_b = index.windows_for(b_indices, options)
    shared = [w.label for w in windows_a if any(j in b_set for j in w.indices())]

    return PairCooccurrence(
        term_a=term_a,
        term_b=term_b,
        windows_a=[w.label for w in windows_a],
        windows_b=[w.label for w in windows_b],
        shared_windows=shared,
        count_a=len(windows_a),
        count_b=len(windows_b),
        cooccurrence_count=len(shared),
    )
