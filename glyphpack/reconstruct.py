"""
Re-derive atlas fields that the compact records leave out.

Both functions rely on the packer contract: visible glyphs are placed
left-to-right with no gaps, top-aligned at y=0, in CharacterSet order.
"""

from __future__ import annotations

from typing import Dict, Mapping

import numpy as np

from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .errors import ReconstructionError
from .logging import DiagnosticLog, report
from .raster import PixelBuffer

TRANSPARENT_GLYPH_HEIGHT = 1


def reconstruct_x_in_atlas(
    tight_width: Mapping[str, int],
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
) -> Dict[str, int]:
    positions: Dict[str, int] = {}
    x = 0
    for ch in charset.ordered(tight_width):
        positions[ch] = x
        x += tight_width[ch]
    return positions


def reconstruct_tight_height(
    tight_width: Mapping[str, int],
    x_in_atlas: Mapping[str, int],
    pixels: PixelBuffer,
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
    diagnostics: DiagnosticLog | None = None,
) -> Dict[str, int]:
    alpha = pixels.alpha_plane()
    heights: Dict[str, int] = {}
    for ch in charset.ordered(tight_width):
        x = x_in_atlas.get(ch)
        if x is None:
            report(diagnostics, ch, "has a tight width but no atlas position; skipped")
            continue
        end = x + tight_width[ch]
        if x < 0 or end > pixels.width:
            raise ReconstructionError(
                "atlas pixel buffer",
                f"Glyph {ch!r} spans atlas columns {x}..{end - 1} but the atlas image is {pixels.width} px wide",
            )
        cell = alpha[:, x:end]
        opaque_rows = np.flatnonzero(cell.any(axis=1))
        if opaque_rows.size == 0:
            report(diagnostics, ch, f"no visible pixels in atlas columns {x}..{end - 1}; height defaulted to 1")
            heights[ch] = TRANSPARENT_GLYPH_HEIGHT
            continue
        heights[ch] = int(opaque_rows[-1]) + 1
    return heights
