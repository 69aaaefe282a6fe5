from typing import Optional, get_args

from common.constants import DISTANCE_UNITS, TERM_KINDS, WINDOW_DISTANCE, WINDOW_TYPES
from core.errors import ConfigurationError
from domain.collocation.schema import CollocationOptions, CollocationTerm
from domain.corpus.schema import PartOfSpeech

_POS_TAGS = frozenset(get_args(PartOfSpeech))


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_term(term: CollocationTerm, name: str = "target") -> CollocationTerm:
    if term.kind not in TERM_KINDS:
        raise ConfigurationError(f"{name}.kind must be one of {TERM_KINDS}, got {term.kind!r}")
    if not isinstance(term.value, str):
        raise ConfigurationError(f"{name}.value must be a string")
    return term


def validate_options(options: Optional[CollocationOptions] = None) -> CollocationOptions:
    """
    Boundary check for collocation options. Rejects unknown variants and
    out-of-range numbers; never clamps. Returns the options unchanged.
    """
    if options is None:
        return CollocationOptions()

    if options.window_type not in WINDOW_TYPES:
        raise ConfigurationError(
            f"window_type must be one of {WINDOW_TYPES}, got {options.window_type!r}"
        )
    if options.group_by not in TERM_KINDS:
        raise ConfigurationError(f"group_by must be one of {TERM_KINDS}, got {options.group_by!r}")
    if not _is_int(options.min_frequency) or options.min_frequency < 1:
        raise ConfigurationError(f"min_frequency must be >= 1, got {options.min_frequency!r}")

    if options.window_type == WINDOW_DISTANCE:
        if not _is_int(options.distance) or options.distance < 1:
            raise ConfigurationError(f"distance must be >= 1, got {options.distance!r}")
        if options.distance_unit not in DISTANCE_UNITS:
            raise ConfigurationError(
                f"distance_unit must be one of {DISTANCE_UNITS}, got {options.distance_unit!r}"
            )

    unknown_pos = [p for p in options.filter.pos if p not in _POS_TAGS]
    if unknown_pos:
        raise ConfigurationError(f"Unknown part-of-speech filter: {unknown_pos}")

    if options.pair_term is not None:
        validate_term(options.pair_term, "pair_term")

    return options
