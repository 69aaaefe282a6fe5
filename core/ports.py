from typing import Any, List, Protocol

from domain.corpus.schema import LoadingProgress, Token


class CorpusSource(Protocol):
    def read_tokens(self, raw: Any) -> List[Token]: ...


class ProgressCallback(Protocol):
    def __call__(self, progress: LoadingProgress) -> None: ...
