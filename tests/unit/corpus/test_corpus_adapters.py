import json
import logging

import pytest

from core.errors import CorpusFormatError
from domain.corpus.adapter_factory import AdapterFactory
from domain.corpus.content.json_adapter import JsonTokenAdapter
from domain.corpus.content.morphology_adapter import (
    MorphologyTextAdapter,
    buckwalter_to_arabic,
    normalize_pos,
)

MORPHOLOGY_SAMPLE = "\n".join(
    [
        "# Quranic Arabic Corpus (morphology)",
        "LOCATION\tFORM\tTAG\tFEATURES",
        "(1:1:1:1)\tbi\tP\tPREFIX|bi+",
        "(1:1:1:2)\tsomi\tN\tSTEM|POS:N|LEM:{som|ROOT:smw|M|GEN",
        "(1:1:2:1)\t{ll~ahi\tPN\tSTEM|POS:PN|LEM:{ll~ah|ROOT:Alh|GEN",
        "(1:2:1:1)\tyu&ominu\tV\tSTEM|POS:V|IMPF|LEM:'aAmana|ROOT:'mn|3MP",
    ]
)


def test_buckwalter_to_arabic():
    assert buckwalter_to_arabic("ktb") == "كتب"
    assert buckwalter_to_arabic("{som") == "\u0671\u0633\u0652\u0645"
    assert buckwalter_to_arabic("ka^") == "كَ"


def test_normalize_pos_folds_tags():
    assert normalize_pos("V") == "V"
    assert normalize_pos("v") == "V"
    assert normalize_pos("PN") == "N"
    assert normalize_pos("ADJ") == "ADJ"
    assert normalize_pos("REL") == "PRON"
    assert normalize_pos("CONJ") == "P"
    assert normalize_pos("INC") == "OTHER"


def test_morphology_adapter_merges_segments_per_word():
    # Execute
    tokens = MorphologyTextAdapter().read_tokens(MORPHOLOGY_SAMPLE.encode("utf-8"))

    # Assertions
    assert [t.id for t in tokens] == ["1:1:1", "1:1:2", "1:2:1"]
    first = tokens[0]
    assert first.text == "\u0628\u0650\u0633\u0652\u0645\u0650"  # bi + somi
    assert first.root == "سمو"
    assert first.lemma == "\u0671\u0633\u0652\u0645"
    assert first.pos == "N"
    assert first.morphology.features["GEN"] == "true"
    assert tokens[1].root == "اله"
    assert tokens[1].pos == "N"
    assert tokens[2].pos == "V"
    assert tokens[2].root == "ءمن"


def test_morphology_adapter_skips_malformed_lines(caplog):
    content = MORPHOLOGY_SAMPLE + "\n(1:2:2)\tbroken\n"
    with caplog.at_level(logging.WARNING):
        tokens = MorphologyTextAdapter().read_tokens(content)
    assert len(tokens) == 3
    assert "Skipped 1 malformed" in caplog.text


def test_morphology_adapter_rejects_unreadable_input():
    assert MorphologyTextAdapter().read_tokens("") == []
    with pytest.raises(CorpusFormatError):
        MorphologyTextAdapter().read_tokens("this is not a corpus file")


def test_json_adapter_reads_list_and_wrapped_payloads():
    rows = [
        {"id": "1:1:1", "sura": 1, "ayah": 1, "position": 1, "text": "كتب", "root": "كتب", "lemma": "كَتَبَ", "pos": "V"},
        {"id": "1:1:2", "sura": 1, "ayah": 1, "position": 2, "text": "في", "root": None, "lemma": "فِي", "pos": "P"},
    ]
    adapter = JsonTokenAdapter()

    tokens = adapter.read_tokens(json.dumps(rows).encode("utf-8"))
    wrapped = adapter.read_tokens({"tokens": rows})

    assert [t.id for t in tokens] == ["1:1:1", "1:1:2"]
    assert tokens[1].root == ""
    assert wrapped == tokens


def test_json_adapter_errors():
    adapter = JsonTokenAdapter()
    with pytest.raises(CorpusFormatError):
        adapter.read_tokens(b"{not json")
    with pytest.raises(CorpusFormatError):
        adapter.read_tokens('"just a string"')
    with pytest.raises(CorpusFormatError):
        adapter.read_tokens([{"id": "x", "sura": 0, "ayah": 1, "position": 1, "text": "x"}])


def test_adapter_factory():
    assert isinstance(AdapterFactory.create_corpus_adapter("morphology"), MorphologyTextAdapter)
    assert isinstance(AdapterFactory.create_corpus_adapter("json"), JsonTokenAdapter)
    with pytest.raises(ValueError):
        AdapterFactory.create_corpus_adapter("xml")
