"""
Runtime inverse of the minifier.

Accepts a CompactRecord (or its eight-element JSON list) and, optionally,
the compact atlas form plus the atlas pixels. Atlas x positions are always
recomputed; tight heights come from the record when an older asset still
carries them and are otherwise scanned from the pixels.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence, Tuple

from .atlas import expand_atlas
from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .entities import RECORD_FIELD_COUNT, CompactRecord, FullFontMetrics, GlyphMetrics
from .errors import FormatVersionError, Result, capture
from .kerning import expand_kerning
from .logging import DiagnosticLog
from .quantize import dequantize, unflatten_baselines, unflatten_tuplets
from .raster import PixelBuffer
from .tuplets import resolve_tuplets


def coerce_record(record: CompactRecord | Sequence[Any] | Mapping[str, Any]) -> CompactRecord:
    if isinstance(record, CompactRecord):
        return record
    if isinstance(record, Mapping):
        keys = ", ".join(sorted(str(key) for key in record))
        raise FormatVersionError(
            f"Metrics record is a keyed object ({keys}) from a format without tuplet compression"
        )
    if isinstance(record, (str, bytes)) or not isinstance(record, Sequence):
        raise FormatVersionError(f"Metrics record has unsupported type {type(record).__name__}")
    if len(record) != RECORD_FIELD_COUNT:
        raise FormatVersionError(
            f"Metrics record has {len(record)} fields, expected {RECORD_FIELD_COUNT}"
        )
    if not isinstance(record[1], Mapping):
        raise FormatVersionError("Kerning table field is not an object")
    return CompactRecord.from_list(record)


def _lookup(table: Sequence[int], idx: int, what: str) -> int:
    if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < len(table):
        raise FormatVersionError(f"{what} index {idx!r} is outside its lookup ({len(table)} entries)")
    return table[idx]


def _expand_glyphs(record: CompactRecord, charset: CharacterSet) -> Dict[str, GlyphMetrics]:
    if len(record.tuplet_indices) != len(charset):
        raise FormatVersionError(
            f"Record lists {len(record.tuplet_indices)} glyph tuplets for a {len(charset)}-character set"
        )
    _lookup(record.glyph_values, record.common_left_index, "Common-left")
    lookup = unflatten_tuplets(record.tuplets_flat)
    tuplets = resolve_tuplets(lookup, record.tuplet_indices, record.common_left_index)
    glyphs: Dict[str, GlyphMetrics] = {}
    for ch, tuplet in zip(charset, tuplets):
        values = [dequantize(_lookup(record.glyph_values, idx, "Glyph value")) for idx in tuplet]
        glyphs[ch] = GlyphMetrics.from_sequence(values)
    return glyphs


def _expand_kerning(record: CompactRecord, charset: CharacterSet) -> Dict[Tuple[str, str], float]:
    indexed = expand_kerning(record.kerning_table, charset)
    return {
        pair: dequantize(_lookup(record.kerning_values, idx, "Kerning value"))
        for pair, idx in indexed.items()
    }


def expand_metrics(
    record: CompactRecord | Sequence[Any] | Mapping[str, Any],
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
) -> FullFontMetrics:
    compact = coerce_record(record)
    return FullFontMetrics(
        glyphs=_expand_glyphs(compact, charset),
        font=unflatten_baselines(compact.baselines),
        kerning=_expand_kerning(compact, charset),
        space_advance_override=compact.space_override,
    )


def expand(
    record: CompactRecord | Sequence[Any] | Mapping[str, Any],
    *,
    atlas: Mapping[str, Any] | None = None,
    pixels: PixelBuffer | None = None,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
    diagnostics: DiagnosticLog | None = None,
) -> FullFontMetrics:
    full = expand_metrics(record, charset=charset)
    if atlas is not None:
        full.positioning = expand_atlas(atlas, charset=charset, pixels=pixels, diagnostics=diagnostics)
    return full


def try_expand(
    record: CompactRecord | Sequence[Any] | Mapping[str, Any],
    *,
    atlas: Mapping[str, Any] | None = None,
    pixels: PixelBuffer | None = None,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
    diagnostics: DiagnosticLog | None = None,
) -> Result[FullFontMetrics]:
    return capture(expand, record, atlas=atlas, pixels=pixels, charset=charset, diagnostics=diagnostics)
