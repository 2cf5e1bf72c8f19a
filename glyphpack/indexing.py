"""
Frequency-scored lookup tables.

Every distinct value is scored as ``occurrences * len(canonical text)`` and
the lookup is sorted by descending score, so the values that would cost the
most bytes when written out repeatedly get the shortest indices. Equal
scores fall back to ascending natural order of the values themselves, which
keeps the table independent of the order values were encountered in.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from typing import Generic, Hashable, Iterable, List, Sequence, Tuple, TypeVar

V = TypeVar("V", bound=Hashable)


def canonical_text(value: object) -> str:
    if isinstance(value, bool):
        raise TypeError("booleans are not indexable values")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (tuple, list)):
        return json.dumps(list(value), separators=(",", ":"))
    raise TypeError(f"Unsupported value type for indexing: {type(value).__name__}")


def encoded_length(value: object) -> int:
    return len(canonical_text(value))


@dataclass(frozen=True)
class IndexedValues(Generic[V]):
    lookup: Tuple[V, ...]
    indices: Tuple[int, ...]

    def resolve(self) -> List[V]:
        return [self.lookup[idx] for idx in self.indices]


def build_lookup(values: Iterable[V]) -> Tuple[V, ...]:
    counts = Counter(values)
    return tuple(
        sorted(counts, key=lambda value: (-counts[value] * encoded_length(value), value))
    )


def index_values(values: Iterable[V]) -> IndexedValues[V]:
    """Build the scored lookup for ``values`` and replace each value by its index."""

    items = list(values)
    lookup = build_lookup(items)
    positions = {value: idx for idx, value in enumerate(lookup)}
    return IndexedValues(lookup=lookup, indices=tuple(positions[value] for value in items))


def most_common(values: Sequence[V]) -> V:
    if not values:
        raise ValueError("most_common() requires at least one value")
    counts = Counter(values)
    return min(counts, key=lambda value: (-counts[value], value))
