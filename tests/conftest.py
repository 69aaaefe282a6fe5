import pytest

from domain.corpus.schema import Token

# Small two-surah corpus.
#   1:1  كتب علم قرا
#   1:2  كتب علم
#   1:3  قرا نزل
#   2:1  كتب قرا علم
#   2:2  نزل علم في(no root)
_ROWS = [
    ("1:1:1", "كِتَابٌ", "كتب", "كِتَاب", "N"),
    ("1:1:2", "عِلْمٌ", "علم", "عِلْم", "N"),
    ("1:1:3", "قُرْآنٌ", "قرا", "قُرْآن", "N"),
    ("1:2:1", "كَتَبَ", "كتب", "كَتَبَ", "V"),
    ("1:2:2", "عِلْمًا", "علم", "عِلْم", "N"),
    ("1:3:1", "الْقُرْآنُ", "قرا", "قُرْآن", "N"),
    ("1:3:2", "أَنْزَلَ", "نزل", "أَنْزَلَ", "V"),
    ("2:1:1", "الْكِتَابُ", "كتب", "كِتَاب", "N"),
    ("2:1:2", "قُرْآنًا", "قرا", "قُرْآن", "N"),
    ("2:1:3", "عَلِمَ", "علم", "عَلِمَ", "V"),
    ("2:2:1", "أَنْزَلْنَا", "نزل", "أَنْزَلَ", "V"),
    ("2:2:2", "الْعِلْمِ", "علم", "عِلْم", "N"),
    ("2:2:3", "فِي", "", "فِي", "P"),
]


def make_tokens(rows):
    tokens = []
    for address, text, root, lemma, pos in rows:
        sura, ayah, position = (int(p) for p in address.split(":"))
        tokens.append(
            Token(
                id=address,
                sura=sura,
                ayah=ayah,
                position=position,
                text=text,
                root=root,
                lemma=lemma,
                pos=pos,
            )
        )
    return tokens


@pytest.fixture
def corpus_tokens():
    return make_tokens(_ROWS)


@pytest.fixture
def kataba_tokens():
    # three tokens of one root, two lemmas, across two surahs
    return make_tokens(
        [
            ("1:2:1", "كَتَبَ", "ك ت ب", "كَتَبَ", "V"),
            ("1:3:1", "كِتَاب", "ك ت ب", "كِتَاب", "N"),
            ("2:1:1", "كَتَبَ", "ك ت ب", "كَتَبَ", "V"),
        ]
    )
