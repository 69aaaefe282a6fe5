import json
from typing import Any, List

from pydantic import ValidationError

from core.errors import CorpusFormatError
from domain.corpus.content.corpus_adapter import CorpusAdapter
from domain.corpus.schema import Token


class JsonTokenAdapter(CorpusAdapter):
    """Reads a JSON array of token objects (the shape of Token.model_dump())."""

    def read_tokens(self, raw: Any) -> List[Token]:
        if isinstance(raw, (bytes, str)):
            try:
                payload = json.loads(self._decode(raw))
            except json.JSONDecodeError as e:
                raise CorpusFormatError(f"Corpus is not valid JSON: {e}") from e
        else:
            payload = raw

        if isinstance(payload, dict):
            payload = payload.get("tokens", [])
        if not isinstance(payload, list):
            raise CorpusFormatError("Expected a list of tokens")

        try:
            return [Token.model_validate(item) for item in payload]
        except ValidationError as e:
            raise CorpusFormatError(f"Invalid token record: {e}") from e
