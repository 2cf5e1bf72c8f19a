from __future__ import annotations

from typing import Any, Dict

import pytest

from glyphpack.charset import DEFAULT_CHARACTER_SET
from glyphpack.entities import FontMetrics, FontWideMetrics, GlyphMetrics


def _glyph(idx: int) -> GlyphMetrics:
    width = 4.0 + (idx % 7) * 0.5
    if idx % 17 == 0:
        width += 0.33333
    ascent = 6.0 + (idx % 4)
    if idx % 11 == 0:
        return GlyphMetrics(width, 0.25, width - 0.125, ascent, 1.5)
    if idx % 5 == 0:
        return GlyphMetrics(width, 0.0, width, ascent, 2.0)
    if idx % 3 == 0:
        return GlyphMetrics(width, -0.5, width, ascent, -0.5)
    return GlyphMetrics(width, 0.0, width, ascent, 0.0)


KERNING = {
    ("A", "V"): -1.25,
    ("A", "W"): -1.25,
    ("A", "Y"): -1.5,
    ("L", "T"): -0.75,
    ("T", "a"): -2.0,
    ("T", "e"): -2.0,
    ("T", "o"): -2.0,
    ("V", "A"): -1.25,
    ("W", "A"): -1.25,
    ("f", "f"): 0.5,
}

FONT = FontWideMetrics(
    font_ascent=14.5,
    font_descent=4.25,
    hanging_baseline=11.6,
    alphabetic_baseline=0.0,
    ideographic_baseline=-4.25,
    pixel_density=2.0,
)


@pytest.fixture
def charset():
    return DEFAULT_CHARACTER_SET


@pytest.fixture
def metrics() -> FontMetrics:
    glyphs = {ch: _glyph(idx) for idx, ch in enumerate(DEFAULT_CHARACTER_SET)}
    return FontMetrics(glyphs=glyphs, font=FONT, kerning=dict(KERNING), space_advance_override=5)


@pytest.fixture
def verbose_document(metrics: FontMetrics) -> Dict[str, Any]:
    characters = {}
    for ch, glyph in metrics.glyphs.items():
        characters[ch] = {
            "width": glyph.width,
            "actualBoundingBoxLeft": glyph.left,
            "actualBoundingBoxRight": glyph.right,
            "actualBoundingBoxAscent": glyph.ascent,
            "actualBoundingBoxDescent": glyph.descent,
            "fontBoundingBoxAscent": FONT.font_ascent,
            "fontBoundingBoxDescent": FONT.font_descent,
            "hangingBaseline": FONT.hanging_baseline,
            "alphabeticBaseline": FONT.alphabetic_baseline,
            "ideographicBaseline": FONT.ideographic_baseline,
            "pixelDensity": FONT.pixel_density,
        }
    kerning: Dict[str, Dict[str, float]] = {}
    for (left, right), value in KERNING.items():
        kerning.setdefault(left, {})[right] = value
    return {
        "characterMetrics": characters,
        "kerningTable": kerning,
        "spaceAdvancementOverrideForSmallSizesInPx": 5,
        "atlasPositioning": {
            "tightWidth": {"a": 3, "b": 2},
            "tightHeight": {"a": 3, "b": 4},
            "dx": {"a": 0, "b": 1},
            "dy": {"a": -3, "b": -4},
            "xInAtlas": {"a": 0, "b": 3},
        },
    }
