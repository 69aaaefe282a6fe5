import logging
import threading
from typing import Optional, Sequence

from common.config import CACHE_SIZE
from domain.collocation.cache import CollocationCache
from domain.corpus.schema import Token
from pipelines.analysis_pipeline import CorpusSnapshot, build_snapshot
from pipelines.corpus_pipeline import load_configured_corpus

logger = logging.getLogger(__name__)


class CorpusStore:
    """
    Process-wide holder of the current snapshot. Loads lazily on first
    use; replacing the tokens swaps in a new snapshot, which also empties
    the collocation cache.
    """

    def __init__(self, cache_size: int = CACHE_SIZE):
        self.cache = CollocationCache(max_size=cache_size)
        self._snapshot: Optional[CorpusSnapshot] = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> CorpusSnapshot:
        if self._snapshot is None:
            with self._lock:
                if self._snapshot is None:
                    self._snapshot = build_snapshot(load_configured_corpus())
        return self._snapshot

    def replace(self, tokens: Sequence[Token]) -> CorpusSnapshot:
        snapshot = build_snapshot(tokens)
        with self._lock:
            self._snapshot = snapshot
        logger.info("Replaced corpus snapshot (%d tokens)", len(snapshot.tokens))
        return snapshot
