from typing import Callable

from common.constants import KIND_LEMMA, KIND_ROOT
from domain.collocation.schema import CollocateFilter, CollocationTerm
from domain.corpus.arabic import lemma_candidates, normalize_arabic, root_family
from domain.corpus.schema import Token

TokenPredicate = Callable[[Token], bool]


def group_value(token: Token, group_by: str) -> str:
    return token.lemma if group_by == KIND_LEMMA else token.root


def _root_matcher(value: str) -> TokenPredicate:
    wanted = normalize_arabic(value)
    wanted_family = root_family(value)

    def matches(token: Token) -> bool:
        if not token.root or not wanted:
            return False
        root = normalize_arabic(token.root)
        return root == wanted or root_family(root) == wanted_family

    return matches


def _lemma_matcher(value: str) -> TokenPredicate:
    candidates = lemma_candidates(value)

    def matches(token: Token) -> bool:
        if not candidates:
            return False
        return (
            normalize_arabic(token.lemma) in candidates
            or normalize_arabic(token.text) in candidates
        )

    return matches


def term_matcher(term: CollocationTerm) -> TokenPredicate:
    """
    Diacritic-insensitive predicate for a root or lemma term.
    Roots also match across weak final radicals, lemmas across one
    attached pronoun suffix.
    """
    if term.kind == KIND_ROOT:
        return _root_matcher(term.value)
    return _lemma_matcher(term.value)


def filter_matcher(collocate_filter: CollocateFilter) -> TokenPredicate:
    allowed_pos = frozenset(collocate_filter.pos)
    lemma_ok = _lemma_matcher(collocate_filter.lemma) if collocate_filter.lemma else None
    root_ok = _root_matcher(collocate_filter.root) if collocate_filter.root else None

    def matches(token: Token) -> bool:
        if allowed_pos and token.pos not in allowed_pos:
            return False
        if lemma_ok is not None and not lemma_ok(token):
            return False
        if root_ok is not None and not root_ok(token):
            return False
        return True

    return matches
