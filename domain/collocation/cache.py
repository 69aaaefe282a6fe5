import threading
from collections import OrderedDict
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from core.versions import ENGINE_VERSION
from domain.analysis.frequency import FrequencyTables
from domain.collocation.engine import TokenSource, get_collocations
from domain.collocation.options import validate_options
from domain.collocation.schema import CollocationOptions, CollocationResult, CollocationTerm

ComputeFn = Callable[..., List[CollocationResult]]


class CollocationQueryKey(BaseModel):
    """Compared and hashed by value."""

    model_config = ConfigDict(frozen=True)

    target_kind: str
    target_value: str
    options: CollocationOptions
    engine_version: str = ENGINE_VERSION


class CollocationCache:
    """
    Bounded LRU of collocation results for a single token snapshot.
    Handing in a different snapshot object clears every entry.
    """

    def __init__(self, max_size: int = 64, compute: ComputeFn = get_collocations):
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self.max_size = max_size
        self._compute = compute
        self._entries: "OrderedDict[CollocationQueryKey, List[CollocationResult]]" = OrderedDict()
        self._snapshot: Optional[TokenSource] = None
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _bind(self, tokens: TokenSource) -> None:
        # identity, not equality: a new snapshot object always invalidates
        if tokens is not self._snapshot:
            self._entries.clear()
            self._snapshot = tokens

    def get_or_compute(
        self,
        target: CollocationTerm,
        tokens: TokenSource,
        freq: FrequencyTables,
        options: Optional[CollocationOptions] = None,
    ) -> List[CollocationResult]:
        options = validate_options(options)
        key = CollocationQueryKey(target_kind=target.kind, target_value=target.value, options=options)

        with self._lock:
            self._bind(tokens)
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return list(cached)

        results = self._compute(target, tokens, freq, options)

        with self._lock:
            self.misses += 1
            if tokens is self._snapshot:
                self._entries[key] = list(results)
                self._entries.move_to_end(key)
                while len(self._entries) > self.max_size:
                    self._entries.popitem(last=False)
        return results
