from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from domain.corpus.arabic import normalize_for_search, search_lemma_candidates, search_root_family
from domain.corpus.schema import Token

Bucket = Dict[str, List[str]]


class TokenIndexes(BaseModel):
    """Inverted indexes from search keys to token ids, in corpus order."""

    root: Bucket = Field(default_factory=dict)
    root_normalized: Bucket = Field(default_factory=dict)
    root_family: Bucket = Field(default_factory=dict)
    lemma: Bucket = Field(default_factory=dict)
    lemma_normalized: Bucket = Field(default_factory=dict)
    lemma_loose: Bucket = Field(default_factory=dict)
    text_normalized: Bucket = Field(default_factory=dict)
    pos: Bucket = Field(default_factory=dict)
    ayah: Bucket = Field(default_factory=dict)


def _push(bucket: Bucket, key: str, token_id: str) -> None:
    if key:
        bucket.setdefault(key, []).append(token_id)


def build_token_indexes(tokens: Iterable[Token]) -> TokenIndexes:
    index = TokenIndexes()
    for token in tokens:
        tid = token.id
        _push(index.root, token.root, tid)
        _push(index.root_normalized, normalize_for_search(token.root), tid)
        _push(index.root_family, search_root_family(token.root), tid)

        _push(index.lemma, token.lemma, tid)
        _push(index.lemma_normalized, normalize_for_search(token.lemma), tid)
        for candidate in sorted(search_lemma_candidates(token.lemma)):
            _push(index.lemma_loose, candidate, tid)

        _push(index.text_normalized, normalize_for_search(token.text), tid)
        _push(index.pos, token.pos, tid)
        _push(index.ayah, token.ayah_id, tid)
    return index


def _union(*buckets: Sequence[str]) -> List[str]:
    # dict keeps first-seen order
    out: Dict[str, None] = {}
    for bucket in buckets:
        for tid in bucket:
            out[tid] = None
    return list(out)


def query_tokens(
    index: TokenIndexes,
    root: Optional[str] = None,
    lemma: Optional[str] = None,
    pos: Optional[str] = None,
    ayah: Optional[str] = None,
) -> List[str]:
    """
    Token ids matching every given field. A root query also accepts a
    whole word (lemma or surface form) so users can type either.
    No fields given -> [].
    """
    buckets: List[List[str]] = []

    if root:
        key = normalize_for_search(root)
        buckets.append(
            _union(
                index.root.get(root, []),
                index.root_normalized.get(key, []),
                index.root_family.get(search_root_family(root), []),
                index.lemma_normalized.get(key, []),
                index.lemma_loose.get(key, []),
                index.text_normalized.get(key, []),
            )
        )

    if lemma:
        key = normalize_for_search(lemma)
        loose = [index.lemma_loose.get(c, []) for c in sorted(search_lemma_candidates(lemma))]
        buckets.append(
            _union(
                index.lemma.get(lemma, []),
                index.lemma_normalized.get(key, []),
                *loose,
                index.text_normalized.get(key, []),
            )
        )

    if pos:
        buckets.append(index.pos.get(pos, []))
    if ayah:
        buckets.append(index.ayah.get(ayah, []))

    if not buckets:
        return []

    first, *rest = buckets
    keep = set(first)
    for bucket in rest:
        keep &= set(bucket)
    return [tid for tid in first if tid in keep]
