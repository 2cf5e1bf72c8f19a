"""
Per-character glyph tuplets.

A tuplet holds lookup indices in the order (width, left, right, ascent,
descent). Before deduplication each tuplet is shortened with the first
matching rule:

    width == right, left == descent == common left  -> [width, ascent]
    width == right, left == descent                 -> [width, left, ascent]
    width == right                                  -> [width, left, ascent, descent]
    otherwise                                       -> all five indices

Decoding only needs the tuplet length and the common-left index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import FormatVersionError
from .indexing import index_values

Tuplet = Tuple[int, ...]


def compress_tuplet(full: Sequence[int], common_left: int) -> Tuplet:
    width, left, right, ascent, descent = full
    if width == right and left == descent:
        if left == common_left:
            return (width, ascent)
        return (width, left, ascent)
    if width == right:
        return (width, left, ascent, descent)
    return (width, left, right, ascent, descent)


def expand_tuplet(tuplet: Sequence[int], common_left: int) -> Tuplet:
    size = len(tuplet)
    if size == 2:
        width, ascent = tuplet
        return (width, common_left, width, ascent, common_left)
    if size == 3:
        width, left, ascent = tuplet
        return (width, left, width, ascent, left)
    if size == 4:
        width, left, ascent, descent = tuplet
        return (width, left, width, ascent, descent)
    if size == 5:
        return tuple(tuplet)
    raise FormatVersionError(f"Glyph tuplet has {size} elements; only 2-5 are defined")


@dataclass(frozen=True)
class TupletTable:
    lookup: Tuple[Tuplet, ...]
    indices: Tuple[int, ...]

    def tuplet_for(self, position: int) -> Tuplet:
        return self.lookup[self.indices[position]]


def build_tuplet_table(full_tuplets: Sequence[Sequence[int]], common_left: int) -> TupletTable:
    compressed = [compress_tuplet(full, common_left) for full in full_tuplets]
    indexed = index_values(compressed)
    return TupletTable(lookup=indexed.lookup, indices=indexed.indices)


def resolve_tuplets(
    lookup: Sequence[Tuplet],
    indices: Sequence[int],
    common_left: int,
) -> List[Tuplet]:
    resolved: List[Tuplet] = []
    for position, idx in enumerate(indices):
        if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < len(lookup):
            raise FormatVersionError(
                f"Tuplet index {idx} at position {position} is outside the tuplet lookup ({len(lookup)} entries)"
            )
        resolved.append(expand_tuplet(lookup[idx], common_left))
    return resolved
