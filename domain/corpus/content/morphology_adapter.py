import logging
from typing import Any, Dict, List, Optional

import regex as re

from core.errors import CorpusFormatError
from domain.corpus.content.corpus_adapter import CorpusAdapter
from domain.corpus.schema import Morphology, PartOfSpeech, Token

logger = logging.getLogger(__name__)

BUCKWALTER_TO_ARABIC = {
    "'": "ء",
    "|": "آ",
    ">": "أ",
    "<": "إ",
    "&": "ؤ",
    "}": "ئ",
    "A": "ا",
    "b": "ب",
    "p": "ة",
    "t": "ت",
    "v": "ث",
    "j": "ج",
    "H": "ح",
    "x": "خ",
    "d": "د",
    "*": "ذ",
    "r": "ر",
    "z": "ز",
    "s": "س",
    "$": "ش",
    "S": "ص",
    "D": "ض",
    "T": "ط",
    "Z": "ظ",
    "E": "ع",
    "g": "غ",
    "f": "ف",
    "q": "ق",
    "k": "ك",
    "l": "ل",
    "m": "م",
    "n": "ن",
    "h": "ه",
    "w": "و",
    "Y": "ى",
    "y": "ي",
    "F": "\u064B",
    "N": "\u064C",
    "K": "\u064D",
    "a": "\u064E",
    "u": "\u064F",
    "i": "\u0650",
    "~": "\u0651",
    "o": "\u0652",
    "`": "\u0670",
    "{": "\u0671",
}
BUCKWALTER_STRIP = frozenset("^@_.,2[]")

_PARTICLE_TAGS = frozenset(
    {"P", "CONJ", "DET", "REM", "INL", "VOC", "NEG", "INTG", "COND", "SUB", "RSLT", "T"}
)
_PRONOUN_TAGS = frozenset({"PRON", "REL", "DEM"})


def buckwalter_to_arabic(value: str) -> str:
    return "".join(
        BUCKWALTER_TO_ARABIC.get(ch, ch) for ch in value if ch not in BUCKWALTER_STRIP
    )


def normalize_pos(raw_pos: str) -> PartOfSpeech:
    pos = raw_pos.upper()
    if pos.startswith("V"):
        return "V"
    if pos == "ADJ":
        return "ADJ"
    if pos in _PRONOUN_TAGS:
        return "PRON"
    if pos in _PARTICLE_TAGS:
        return "P"
    if pos in ("N", "PN"):
        return "N"
    return "OTHER"


class MorphologyTextAdapter(CorpusAdapter):
    """
    Reader for the Quranic Arabic Corpus morphology file
    (quranic-corpus-morphology-0.4.txt). One line per segment:
        (sura:ayah:word:segment)<TAB>FORM<TAB>TAG<TAB>FEATURES
    Segments of a word are merged into one Token; the stem segment
    carrying ROOT: wins.
    """

    _LOCATION_RE = re.compile(r"^\((\d+):(\d+):(\d+):(\d+)\)$")

    @staticmethod
    def _extract_feature(features: List[str], key: str) -> Optional[str]:
        prefix = f"{key}:"
        for feature in features:
            if feature.startswith(prefix):
                return feature[len(prefix) :]
        return None

    @staticmethod
    def _feature_map(features: List[str]) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for feature in features:
            if not feature or feature.startswith(("ROOT:", "LEM:", "POS:")):
                continue
            if ":" in feature:
                key, value = feature.split(":", 1)
                if key and value:
                    out[key] = value
            else:
                out[feature] = "true"
        return out

    def _parse_lines(self, content: str) -> Dict[tuple, dict]:
        words: Dict[tuple, dict] = {}
        skipped = 0
        for line in content.splitlines():
            if not line or line.startswith("#") or line.startswith("LOCATION"):
                continue
            parts = line.split("\t")
            if len(parts) < 4:
                skipped += 1
                continue

            match = self._LOCATION_RE.match(parts[0].strip())
            if not match:
                skipped += 1
                continue

            key = tuple(int(g) for g in match.groups()[:3])
            form = parts[1].strip()
            tag = parts[2].strip()
            features = [f for f in parts[3].strip().split("|") if f]

            root = self._extract_feature(features, "ROOT")
            lemma = self._extract_feature(features, "LEM")
            pos = normalize_pos(self._extract_feature(features, "POS") or tag or "N")

            entry = words.setdefault(
                key,
                {
                    "forms": [],
                    "root": "",
                    "lemma": "",
                    "pos": pos,
                    "features": {},
                    "has_root": False,
                },
            )
            entry["forms"].append(form)

            if root:
                entry["root"] = buckwalter_to_arabic(root)
                if lemma:
                    entry["lemma"] = buckwalter_to_arabic(lemma)
                entry["pos"] = pos
                entry["features"] = self._feature_map(features)
                entry["has_root"] = True
            elif not entry["has_root"]:
                if not entry["lemma"] and lemma:
                    entry["lemma"] = buckwalter_to_arabic(lemma)
                if not entry["features"]:
                    entry["features"] = self._feature_map(features)

        if skipped:
            logger.warning("Skipped %d malformed morphology lines", skipped)
        return words

    def read_tokens(self, raw: Any) -> List[Token]:
        content = self._decode(raw)
        words = self._parse_lines(content)
        if content.strip() and not words:
            raise CorpusFormatError("No morphology records found in corpus input")

        tokens = []
        for (sura, ayah, position), entry in words.items():
            text = buckwalter_to_arabic("".join(entry["forms"]))
            lemma = entry["lemma"] or text
            tokens.append(
                Token(
                    id=f"{sura}:{ayah}:{position}",
                    sura=sura,
                    ayah=ayah,
                    position=position,
                    text=text,
                    root=entry["root"],
                    lemma=lemma,
                    pos=entry["pos"],
                    morphology=Morphology(
                        stem=lemma or None,
                        gloss=None,
                        features=entry["features"],
                    ),
                )
            )
        return tokens
