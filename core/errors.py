class ConfigurationError(ValueError):
    """Invalid parameters handed to the collocation engine."""


class CorpusFormatError(ValueError):
    """Corpus input that an adapter cannot turn into tokens."""
