from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .entities import BASELINE_FIELD_COUNT, FontWideMetrics
from .errors import FormatVersionError

QUANT_SCALE = 10000


def quantize(value: float) -> int:
    # Half-up; builtin round() is half-even.
    return int(math.floor(value * QUANT_SCALE + 0.5))


def dequantize(value: int) -> float:
    return value / QUANT_SCALE


def flatten_baselines(font: FontWideMetrics) -> List[float]:
    return font.as_list()


def unflatten_baselines(values: Sequence[float]) -> FontWideMetrics:
    if len(values) != BASELINE_FIELD_COUNT:
        raise FormatVersionError(
            f"Baseline array holds {len(values)} values, expected {BASELINE_FIELD_COUNT}"
        )
    return FontWideMetrics.from_list(values)


def flatten_tuplets(tuplets: Sequence[Sequence[int]]) -> List[int]:
    """
    Concatenate variable-length index tuplets without length prefixes.

    Each element is shifted up by one so zero never appears, then the last
    element of every tuplet is negated to mark the boundary.
    """

    flat: List[int] = []
    for tuplet in tuplets:
        if not tuplet:
            raise ValueError("Cannot flatten an empty tuplet")
        shifted = [value + 1 for value in tuplet]
        shifted[-1] = -shifted[-1]
        flat.extend(shifted)
    return flat


def unflatten_tuplets(flat: Sequence[int]) -> List[Tuple[int, ...]]:
    tuplets: List[Tuple[int, ...]] = []
    current: List[int] = []
    for value in flat:
        if isinstance(value, bool) or not isinstance(value, int):
            raise FormatVersionError(f"Flattened tuplet lookup contains a non-integer element {value!r}")
        if value == 0:
            raise FormatVersionError("Flattened tuplet lookup contains a zero element")
        if value < 0:
            current.append(-value - 1)
            tuplets.append(tuple(current))
            current = []
        else:
            current.append(value - 1)
    if current:
        raise FormatVersionError("Flattened tuplet lookup ends without a terminating element")
    return tuplets
