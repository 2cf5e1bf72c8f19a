from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple

from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .entities import BASELINE_FIELDS, GLYPH_FIELDS, CompactRecord, FontMetrics, FullFontMetrics
from .errors import Mismatch, RoundtripMismatchError, ValidationError
from .expander import expand_metrics
from .quantize import dequantize, quantize


def check_character_coverage(chars: Iterable[str], charset: CharacterSet, *, subject: str = "character metrics") -> None:
    missing, extra = charset.diff(chars)
    if missing or extra:
        raise ValidationError(missing=missing, extra=extra, subject=subject)


def normalized_kerning(metrics: FontMetrics, charset: CharacterSet) -> Dict[Tuple[str, str], int]:
    """Quantized non-zero kerning pairs in canonical (left, right) order."""

    stray = sorted({ch for pair in metrics.kerning for ch in pair if ch not in charset})
    if stray:
        raise ValidationError(extra=stray, subject="kerning pairs")
    quantized = {pair: quantize(value) for pair, value in metrics.kerning.items()}
    return {
        pair: quantized[pair]
        for pair in sorted(quantized, key=lambda p: (charset.index(p[0]), charset.index(p[1])))
        if quantized[pair] != 0
    }


def compare_glyphs(original: FontMetrics, expanded: FullFontMetrics, charset: CharacterSet) -> List[Mismatch]:
    mismatches: List[Mismatch] = []
    for ch in charset:
        source = original.glyphs[ch].as_tuple()
        restored = expanded.glyphs.get(ch)
        if restored is None:
            mismatches.append(Mismatch(f"glyph {ch!r}", source, None))
            continue
        for name, want, got in zip(GLYPH_FIELDS, source, restored.as_tuple()):
            if quantize(want) != quantize(got):
                mismatches.append(Mismatch(f"glyph {ch!r}.{name}", dequantize(quantize(want)), got))
    return mismatches


def compare_kerning(
    expected: Mapping[Tuple[str, str], int],
    restored: Mapping[Tuple[str, str], float],
    charset: CharacterSet,
) -> List[Mismatch]:
    """Compare quantized expected pairs with expanded pairs; reports missing, extra and differing."""

    restored_q: Dict[Tuple[str, str], int] = {pair: quantize(value) for pair, value in restored.items()}
    mismatches: List[Mismatch] = []
    pairs = set(expected) | set(restored_q)

    def order(pair: Tuple[str, str]) -> Tuple[int, int, str]:
        left, right = pair
        if left in charset and right in charset:
            return (charset.index(left), charset.index(right), "")
        return (len(charset), len(charset), left + right)

    for pair in sorted(pairs, key=order):
        want = expected.get(pair)
        got = restored_q.get(pair)
        if want == got:
            continue
        mismatches.append(
            Mismatch(
                f"kerning ({pair[0]!r}, {pair[1]!r})",
                None if want is None else dequantize(want),
                None if got is None else dequantize(got),
            )
        )
    return mismatches


def compare_font_wide(original: FontMetrics, expanded: FullFontMetrics) -> List[Mismatch]:
    mismatches: List[Mismatch] = []
    for name, want, got in zip(BASELINE_FIELDS, original.font.as_list(), expanded.font.as_list()):
        if want != got:
            mismatches.append(Mismatch(f"baseline {name}", want, got))
    if original.space_advance_override != expanded.space_advance_override:
        mismatches.append(
            Mismatch("space advancement override", original.space_advance_override, expanded.space_advance_override)
        )
    return mismatches


def validate_roundtrip(
    original: FontMetrics,
    record: CompactRecord,
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
) -> None:
    """Expand ``record`` and raise RoundtripMismatchError listing every divergent key."""

    expanded = expand_metrics(record, charset=charset)
    mismatches = compare_glyphs(original, expanded, charset)
    mismatches.extend(compare_kerning(normalized_kerning(original, charset), expanded.kerning, charset))
    mismatches.extend(compare_font_wide(original, expanded))
    if mismatches:
        raise RoundtripMismatchError(mismatches)
