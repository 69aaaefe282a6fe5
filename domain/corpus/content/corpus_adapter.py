from abc import ABC, abstractmethod
from typing import Any, List

from domain.corpus.schema import Token


class CorpusAdapter(ABC):
    @abstractmethod
    def read_tokens(self, raw: Any) -> List[Token]:
        """
        Transform raw corpus input (bytes or text) into Token records.
        Order of the returned list is not guaranteed; callers sort.
        """
        raise NotImplementedError

    @staticmethod
    def _decode(raw: Any) -> str:
        if isinstance(raw, bytes):
            return raw.decode("utf-8-sig")
        return raw
