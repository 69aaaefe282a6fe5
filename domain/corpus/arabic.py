import unicodedata
from typing import Set, Tuple

import regex as re

###########################################################
# Arabic normalization helpers.
#
# Two strengths are used across the code base:
# 1. normalize_arabic: match strength. NFKC, tatweel and
#    diacritics stripped. Used by the collocation engine.
# 2. normalize_for_search: search strength. Additionally
#    folds alef/hamza carriers, alef maqsura, ta marbuta.
###########################################################

ARABIC_DIACRITICS_RE = re.compile(r"[\u064B-\u065F\u0670\u06D6-\u06ED]")
TATWEEL_RE = re.compile(r"\u0640")
WHITESPACE_RE = re.compile(r"\s+")

WEAK_FINAL_ROOT_CHARS = frozenset({"ا", "ى", "ي", "و"})
COMMON_SUFFIXES = ("كما", "كم", "كن", "هما", "هم", "هن", "نا", "ها", "ه", "ك", "ي")

_SEARCH_FOLDS = (
    (re.compile(r"[\u0671\u0623\u0625\u0622]"), "\u0627"),
    (re.compile(r"\u0649"), "\u064A"),
    (re.compile(r"\u0624"), "\u0648"),
    (re.compile(r"\u0626"), "\u064A"),
    (re.compile(r"\u0629"), "\u0647"),
)


def normalize_arabic(value: str) -> str:
    if not value:
        return ""
    value = unicodedata.normalize("NFKC", value)
    value = TATWEEL_RE.sub("", value)
    value = ARABIC_DIACRITICS_RE.sub("", value)
    return value.strip()


def normalize_for_search(value: str) -> str:
    if not value:
        return ""
    value = unicodedata.normalize("NFKD", value.strip())
    value = ARABIC_DIACRITICS_RE.sub("", value)
    value = TATWEEL_RE.sub("", value)
    for pattern, replacement in _SEARCH_FOLDS:
        value = pattern.sub(replacement, value)
    return WHITESPACE_RE.sub(" ", value)


def _fold_final(value: str, final: str) -> str:
    if value and value[-1] in WEAK_FINAL_ROOT_CHARS:
        return value[:-1] + final
    return value


def root_family(value: str) -> str:
    """Root key that treats weak final radicals (ا ى ي و) as one letter."""
    return _fold_final(normalize_arabic(value), "ى")


def search_root_family(value: str) -> str:
    return _fold_final(normalize_for_search(value), "ي")


def _strip_suffixes(base: str, out: Set[str]) -> None:
    for suffix in COMMON_SUFFIXES:
        if len(base) > len(suffix) + 1 and base.endswith(suffix):
            out.add(base[: -len(suffix)])


def lemma_candidates(value: str) -> Set[str]:
    """
    Conservative lemma keys for a user supplied word: the normalized
    value plus the value with one attached pronoun suffix removed.
    """
    base = normalize_arabic(value)
    candidates: Set[str] = set()
    if not base:
        return candidates
    candidates.add(base)
    _strip_suffixes(base, candidates)
    return candidates


def search_lemma_candidates(value: str) -> Set[str]:
    base = normalize_for_search(value)
    candidates: Set[str] = set()
    if not base:
        return candidates
    candidates.add(base)
    if base.startswith("ال") and len(base) > 3:
        candidates.add(base[2:])
    _strip_suffixes(base, candidates)
    return candidates


def arabic_sort_key(value: str) -> Tuple[str, str]:
    """
    Collation key: compare on the undiacritized form first (Arabic letters
    are in alphabetical order in Unicode), raw string as tie-break.
    """
    return normalize_arabic(value), value
