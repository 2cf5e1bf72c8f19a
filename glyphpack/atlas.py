from __future__ import annotations

from typing import Any, Dict, List, Mapping

from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .entities import AtlasPositioning
from .errors import FormatVersionError, Mismatch, ReconstructionError, RoundtripMismatchError, ValidationError
from .logging import DiagnosticLog
from .raster import PixelBuffer
from .reconstruct import reconstruct_tight_height, reconstruct_x_in_atlas

WIDTH_KEY = "w"
HEIGHT_KEY = "h"  # only present in assets written before height elision


def _compare_positions(label: str, expected: Mapping[str, int], actual: Mapping[str, int], charset: CharacterSet) -> List[Mismatch]:
    mismatches: List[Mismatch] = []
    for ch in charset.ordered(set(expected) | set(actual)):
        want = expected.get(ch)
        got = actual.get(ch)
        if want != got:
            mismatches.append(Mismatch(f"{label} {ch!r}", want, got))
    return mismatches


def _check_atlas_characters(positioning: AtlasPositioning, charset: CharacterSet) -> List[str]:
    visible = list(positioning.tight_width)
    extra = sorted(ch for ch in visible if ch not in charset)
    if extra:
        raise ValidationError(extra=extra, subject="atlas positioning")
    for name, values in (("dx", positioning.dx), ("dy", positioning.dy)):
        missing = [ch for ch in charset.ordered(visible) if ch not in values]
        if missing:
            raise ValidationError(missing=missing, subject=f"atlas {name} offsets")
    return charset.ordered(visible)


def validate_atlas_reconstruction(
    positioning: AtlasPositioning,
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
    pixels: PixelBuffer | None = None,
) -> None:
    """Check that the runtime algorithms reproduce the elided atlas fields."""

    mismatches: List[Mismatch] = []
    rebuilt_x = reconstruct_x_in_atlas(positioning.tight_width, charset=charset)
    if positioning.x_in_atlas:
        mismatches.extend(_compare_positions("xInAtlas", positioning.x_in_atlas, rebuilt_x, charset))
    if pixels is not None and positioning.tight_height:
        rebuilt_h = reconstruct_tight_height(positioning.tight_width, rebuilt_x, pixels, charset=charset)
        mismatches.extend(_compare_positions("tightHeight", positioning.tight_height, rebuilt_h, charset))
    if mismatches:
        raise RoundtripMismatchError(mismatches)


def minify_atlas(
    positioning: AtlasPositioning,
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
    pixels: PixelBuffer | None = None,
) -> Dict[str, Dict[str, int]]:
    visible = _check_atlas_characters(positioning, charset)
    validate_atlas_reconstruction(positioning, charset=charset, pixels=pixels)
    return {
        WIDTH_KEY: {ch: positioning.tight_width[ch] for ch in visible},
        "dx": {ch: positioning.dx[ch] for ch in visible},
        "dy": {ch: positioning.dy[ch] for ch in visible},
    }


def _int_map(compact: Mapping[str, Any], key: str, charset: CharacterSet) -> Dict[str, int]:
    values = compact.get(key, {})
    if not isinstance(values, Mapping):
        raise FormatVersionError(f"Atlas field {key!r} is not an object")
    stray = [ch for ch in values if ch not in charset]
    if stray:
        raise FormatVersionError(
            f"Atlas field {key!r} names characters outside the character set: {', '.join(repr(ch) for ch in stray)}"
        )
    result: Dict[str, int] = {}
    for ch in charset.ordered(values):
        value = values[ch]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not float(value).is_integer():
            raise FormatVersionError(f"Atlas field {key!r} holds a non-integer value {value!r} for {ch!r}")
        result[ch] = int(value)
    return result


def expand_atlas(
    compact: Mapping[str, Any],
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
    pixels: PixelBuffer | None = None,
    diagnostics: DiagnosticLog | None = None,
) -> AtlasPositioning:
    if not isinstance(compact, Mapping) or WIDTH_KEY not in compact:
        raise FormatVersionError("Atlas record has no tight-width table")
    tight_width = _int_map(compact, WIDTH_KEY, charset)
    dx = _int_map(compact, "dx", charset)
    dy = _int_map(compact, "dy", charset)
    for name, offsets in (("dx", dx), ("dy", dy)):
        uncovered = [ch for ch in tight_width if ch not in offsets]
        if uncovered:
            raise FormatVersionError(
                f"Atlas field {name!r} has no entry for {', '.join(repr(ch) for ch in uncovered)}"
            )
    x_in_atlas = reconstruct_x_in_atlas(tight_width, charset=charset)

    if HEIGHT_KEY in compact:
        tight_height = _int_map(compact, HEIGHT_KEY, charset)
    elif pixels is None:
        raise ReconstructionError(
            "atlas pixel buffer",
            "Tight heights are not stored in this atlas record and must be scanned from the atlas image",
        )
    else:
        tight_height = reconstruct_tight_height(
            tight_width, x_in_atlas, pixels, charset=charset, diagnostics=diagnostics
        )

    return AtlasPositioning(
        tight_width=tight_width,
        tight_height=tight_height,
        dx=dx,
        dy=dy,
        x_in_atlas=x_in_atlas,
    )
