import math
from typing import Callable, Tuple

Scale = Callable[[float], float]


def _interpolator(d0: float, d1: float, r0: float, r1: float, clamp: bool) -> Scale:
    span = d1 - d0

    def scale(value: float) -> float:
        if span == 0:
            # degenerate domain: everything maps to the middle of the range
            t = 0.5
        else:
            t = (value - d0) / span
            if clamp:
                t = min(1.0, max(0.0, t))
        return r0 + t * (r1 - r0)

    return scale


def linear_scale(
    domain: Tuple[float, float], output: Tuple[float, float], clamp: bool = True
) -> Scale:
    return _interpolator(domain[0], domain[1], output[0], output[1], clamp)


def _signed_sqrt(value: float) -> float:
    return math.copysign(math.sqrt(abs(value)), value)


def sqrt_scale(
    domain: Tuple[float, float], output: Tuple[float, float], clamp: bool = True
) -> Scale:
    """Square-root scale: output area, not radius, grows linearly with the input."""
    inner = _interpolator(_signed_sqrt(domain[0]), _signed_sqrt(domain[1]), output[0], output[1], clamp)
    return lambda value: inner(_signed_sqrt(value))


def js_round(value: float) -> int:
    # half-up, as in browser Math.round (Python's round() is half-to-even)
    return math.floor(value + 0.5)
