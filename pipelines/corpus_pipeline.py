import logging
import time
from collections import Counter
from pathlib import Path
from typing import Any, List, Optional

from common.config import CORPUS_FORMAT, CORPUS_PATH
from core.errors import CorpusFormatError
from core.ports import CorpusSource, ProgressCallback
from domain.collocation.windows import canonical_key
from domain.corpus.adapter_factory import AdapterFactory
from domain.corpus.sample_corpus import sample_tokens
from domain.corpus.schema import LoadingProgress, Token

logger = logging.getLogger(__name__)


def _t():
    return time.perf_counter()


def _report_surahs(tokens: List[Token], progress: Optional[ProgressCallback]) -> None:
    if progress is None:
        return
    per_surah = Counter(token.sura for token in tokens)
    suras = sorted(per_surah)
    for sura in suras:
        progress(
            LoadingProgress(
                current_sura=sura,
                total_suras=len(suras),
                message=f"Loaded surah {sura} ({per_surah[sura]} tokens)",
            )
        )


def finalize_tokens(
    tokens: List[Token], progress: Optional[ProgressCallback] = None
) -> List[Token]:
    """
    Canonical (sura, ayah, position) order, unique addresses.
    Raises CorpusFormatError on duplicated addresses.
    """
    ordered = sorted(tokens, key=canonical_key)

    duplicates = [
        "%d:%d:%d" % key
        for key, count in Counter(canonical_key(t) for t in ordered).items()
        if count > 1
    ]
    if duplicates:
        raise CorpusFormatError(f"Duplicate token addresses: {', '.join(duplicates[:10])}")

    _report_surahs(ordered, progress)
    return ordered


def load_corpus(
    raw: Any, adapter: CorpusSource, progress: Optional[ProgressCallback] = None
) -> List[Token]:
    t0 = _t()

    # 1) parse
    tokens = adapter.read_tokens(raw)
    logger.info("Parsed %d tokens (%.3fs)", len(tokens), _t() - t0)

    # 2) order + integrity
    t1 = _t()
    ordered = finalize_tokens(tokens, progress)
    logger.info(
        "Ordered %d tokens over %d surahs (%.3fs). Total: %.3fs",
        len(ordered),
        len({t.sura for t in ordered}),
        _t() - t1,
        _t() - t0,
    )
    return ordered


def load_configured_corpus(
    path: Optional[str] = CORPUS_PATH,
    corpus_format: str = CORPUS_FORMAT,
    progress: Optional[ProgressCallback] = None,
) -> List[Token]:
    """
    Corpus from `path` in `corpus_format`, or the bundled sample when no
    path is configured or the file cannot be read.
    """
    if not path:
        logger.info("No corpus path configured, using bundled sample corpus")
        return finalize_tokens(sample_tokens(), progress)

    adapter = AdapterFactory.create_corpus_adapter(corpus_format)
    try:
        raw = Path(path).read_bytes()
        return load_corpus(raw, adapter, progress)
    except (OSError, CorpusFormatError) as e:
        logger.warning("Failed to load corpus from %s (%s), using bundled sample corpus", path, e)
        return finalize_tokens(sample_tokens(), progress)
