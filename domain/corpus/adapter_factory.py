from common.constants import FORMAT_JSON, FORMAT_MORPHOLOGY
from domain.corpus.content.corpus_adapter import CorpusAdapter
from domain.corpus.content.json_adapter import JsonTokenAdapter
from domain.corpus.content.morphology_adapter import MorphologyTextAdapter


class AdapterFactory:
    @staticmethod
    def create_corpus_adapter(corpus_format: str) -> CorpusAdapter:
        if corpus_format == FORMAT_MORPHOLOGY:
            return MorphologyTextAdapter()
        elif corpus_format == FORMAT_JSON:
            return JsonTokenAdapter()
        else:
            raise ValueError(f"Unsupported corpus format: {corpus_format}")
