"""
Build-time minifier for font metrics.

``minify`` turns a complete FontMetrics value into the eight-field
CompactRecord:

    [kerning value lookup, kerning range table, baseline array,
     glyph value lookup, flattened tuplet lookup, tuplet index per character,
     space advancement override, common-left lookup index]

and refuses to return anything the expander cannot reproduce exactly.
"""

from __future__ import annotations

import json
from typing import List

from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .entities import CompactRecord, FontMetrics
from .errors import Result, capture
from .indexing import index_values, most_common
from .kerning import compress_kerning
from .quantize import flatten_baselines, flatten_tuplets, quantize
from .tuplets import build_tuplet_table
from .validation import check_character_coverage, normalized_kerning, validate_roundtrip


def build_record(metrics: FontMetrics, *, charset: CharacterSet = DEFAULT_CHARACTER_SET) -> CompactRecord:
    """Assemble the compact record without round-trip validation."""

    check_character_coverage(metrics.glyphs, charset)

    full_tuplets_values: List[List[int]] = [
        [quantize(value) for value in metrics.glyphs[ch].as_tuple()] for ch in charset
    ]
    glyph_index = index_values(value for row in full_tuplets_values for value in row)
    positions = {value: idx for idx, value in enumerate(glyph_index.lookup)}
    full_tuplets = [[positions[value] for value in row] for row in full_tuplets_values]

    common_left_value = most_common([row[1] for row in full_tuplets_values])
    common_left = positions[common_left_value]
    tuplet_table = build_tuplet_table(full_tuplets, common_left)

    kerning = normalized_kerning(metrics, charset)
    kerning_index = index_values(kerning.values())
    indexed_pairs = dict(zip(kerning.keys(), kerning_index.indices))
    kerning_table = compress_kerning(indexed_pairs, charset)

    return CompactRecord(
        kerning_values=kerning_index.lookup,
        kerning_table=kerning_table,
        baselines=tuple(flatten_baselines(metrics.font)),
        glyph_values=glyph_index.lookup,
        tuplets_flat=tuple(flatten_tuplets(tuplet_table.lookup)),
        tuplet_indices=tuplet_table.indices,
        space_override=metrics.space_advance_override,
        common_left_index=common_left,
    )


def minify(metrics: FontMetrics, *, charset: CharacterSet = DEFAULT_CHARACTER_SET) -> CompactRecord:
    record = build_record(metrics, charset=charset)
    validate_roundtrip(metrics, record, charset=charset)
    return record


def try_minify(metrics: FontMetrics, *, charset: CharacterSet = DEFAULT_CHARACTER_SET) -> Result[CompactRecord]:
    return capture(minify, metrics, charset=charset)


def dumps_record(record: CompactRecord) -> str:
    return json.dumps(record.to_list(), separators=(",", ":"), ensure_ascii=False)
