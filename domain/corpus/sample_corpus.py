from typing import List

from domain.corpus.schema import Morphology, Token

# Minimal bundled dataset used when no corpus file is configured.
# (address, text, root, lemma, pos, gloss, stem, features)
_SAMPLE_ROWS = [
    ("1:2:1", "الْحَمْدُ", "حمد", "حَمْد", "N", "praise", "حمد", {"case": "nom", "state": "def"}),
    ("1:2:2", "لِلَّهِ", "اله", "اللَّه", "N", "Allah", "الله", {"case": "gen", "state": "def"}),
    ("1:3:1", "الرَّحْمَٰنِ", "رحم", "رَحْمَٰن", "N", "Most Merciful", "رحمن", {"case": "gen", "state": "def"}),
    ("1:3:2", "الرَّحِيمِ", "رحم", "رَحِيم", "ADJ", "Merciful", "رحيم", {"case": "gen", "state": "def"}),
    ("1:5:1", "إِيَّاكَ", "ايا", "إِيَّاك", "PRON", "You alone", None, {"person": "2", "gender": "m", "number": "sg"}),
    ("1:5:2", "نَعْبُدُ", "عبد", "عَبَدَ", "V", "we worship", "عبد", {"person": "1", "number": "pl", "aspect": "impf"}),
    ("1:5:3", "نَسْتَعِينُ", "عون", "اِسْتَعَانَ", "V", "we seek help", "عون", {"person": "1", "number": "pl", "aspect": "impf"}),
    ("1:6:1", "اهْدِنَا", "هدي", "هَدَى", "V", "guide us", "هدي", {"mood": "imp", "person": "2", "number": "sg"}),
    ("1:7:1", "الصِّرَاطَ", "صرط", "صِرَاط", "N", "path", "صرط", {"case": "acc", "state": "def"}),
    ("2:2:3", "هُدًى", "هدي", "هُدًى", "N", "guidance", "هدي", {"case": "nom", "state": "indef"}),
    ("2:3:1", "يُؤْمِنُونَ", "امن", "آمَنَ", "V", "they believe", "امن", {"person": "3", "number": "pl", "aspect": "impf"}),
    ("2:3:4", "رَزَقْنَاهُمْ", "رزق", "رَزَقَ", "V", "We provided them", "رزق", {"person": "1", "number": "pl", "aspect": "perf"}),
]


def sample_tokens() -> List[Token]:
    tokens = []
    for address, text, root, lemma, pos, gloss, stem, features in _SAMPLE_ROWS:
        sura, ayah, position = (int(part) for part in address.split(":"))
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
                morphology=Morphology(stem=stem, gloss=gloss, features=features),
            )
        )
    return tokens
