from typing import Optional

import regex as re
from pydantic import BaseModel

from domain.corpus.schema import PartOfSpeech

POS_ALIASES = {
    "n": "N",
    "noun": "N",
    "v": "V",
    "verb": "V",
    "p": "P",
    "particle": "P",
    "adj": "ADJ",
    "adjective": "ADJ",
    "pron": "PRON",
    "pronoun": "PRON",
}

FIELD_ALIASES = {
    "root": "root",
    "r": "root",
    "lemma": "lemma",
    "l": "lemma",
    "pos": "pos",
    "p": "pos",
    "ayah": "ayah",
    "a": "ayah",
    "text": "text",
    "t": "text",
    "gloss": "gloss",
    "g": "gloss",
}

_EDGE_OPERATORS_RE = re.compile(r"^[+~|]+|[+~|]+$")


class ParsedSearchQuery(BaseModel):
    raw: str
    free_text: str = ""
    root: Optional[str] = None
    lemma: Optional[str] = None
    pos: Optional[PartOfSpeech] = None
    ayah: Optional[str] = None
    text: Optional[str] = None
    gloss: Optional[str] = None


def parse_search_query(raw_input: str) -> ParsedSearchQuery:
    """
    Splits "root:كتب pos:verb free words" into fielded terms and free
    text. Unknown fields stay in the free text; unknown POS values are
    dropped.
    """
    raw = (raw_input or "").strip()
    out = ParsedSearchQuery(raw=raw)
    if not raw:
        return out

    leftover = []
    for part in raw.split():
        chunk = _EDGE_OPERATORS_RE.sub("", part)
        if not chunk:
            continue

        field_raw, sep, value = chunk.partition(":")
        if not sep or not field_raw:
            leftover.append(chunk)
            continue

        value = value.strip()
        if not value:
            continue

        field = FIELD_ALIASES.get(field_raw.lower())
        if field is None:
            leftover.append(chunk)
            continue

        if field == "pos":
            mapped = POS_ALIASES.get(value.lower())
            if mapped:
                out.pos = mapped
            continue

        setattr(out, field, value)

    out.free_text = " ".join(leftover).strip()
    return out
