from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

GLYPH_FIELDS = ("width", "left", "right", "ascent", "descent")
BASELINE_FIELDS = (
    "font_ascent",
    "font_descent",
    "hanging_baseline",
    "alphabetic_baseline",
    "ideographic_baseline",
    "pixel_density",
)
BASELINE_FIELD_COUNT = len(BASELINE_FIELDS)
RECORD_FIELD_COUNT = 8

KerningRelation = Dict[Tuple[str, str], float]


@dataclass(frozen=True)
class GlyphMetrics:
    width: float
    left: float
    right: float
    ascent: float
    descent: float

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return (self.width, self.left, self.right, self.ascent, self.descent)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "GlyphMetrics":
        width, left, right, ascent, descent = values
        return cls(width=width, left=left, right=right, ascent=ascent, descent=descent)


@dataclass(frozen=True)
class FontWideMetrics:
    font_ascent: float
    font_descent: float
    hanging_baseline: float
    alphabetic_baseline: float
    ideographic_baseline: float
    pixel_density: float

    def as_list(self) -> List[float]:
        return [getattr(self, name) for name in BASELINE_FIELDS]

    @classmethod
    def from_list(cls, values: Sequence[float]) -> "FontWideMetrics":
        if len(values) != BASELINE_FIELD_COUNT:
            raise ValueError(f"Expected {BASELINE_FIELD_COUNT} baseline values, got {len(values)}")
        return cls(*values)


@dataclass
class FontMetrics:
    glyphs: Dict[str, GlyphMetrics]
    font: FontWideMetrics
    kerning: KerningRelation = field(default_factory=dict)
    space_advance_override: float = 0.0


@dataclass
class AtlasPositioning:
    """Per visible glyph placement inside the packed atlas (integers, physical px)."""

    tight_width: Dict[str, int] = field(default_factory=dict)
    tight_height: Dict[str, int] = field(default_factory=dict)
    dx: Dict[str, int] = field(default_factory=dict)
    dy: Dict[str, int] = field(default_factory=dict)
    x_in_atlas: Dict[str, int] = field(default_factory=dict)

    def characters(self) -> List[str]:
        return list(self.tight_width)


@dataclass(frozen=True)
class CompactRecord:
    kerning_values: Tuple[int, ...]
    kerning_table: Dict[str, Dict[str, int]]
    baselines: Tuple[float, ...]
    glyph_values: Tuple[int, ...]
    tuplets_flat: Tuple[int, ...]
    tuplet_indices: Tuple[int, ...]
    space_override: float
    common_left_index: int

    def to_list(self) -> List[Any]:
        return [
            list(self.kerning_values),
            {left: dict(rights) for left, rights in self.kerning_table.items()},
            list(self.baselines),
            list(self.glyph_values),
            list(self.tuplets_flat),
            list(self.tuplet_indices),
            self.space_override,
            self.common_left_index,
        ]

    @classmethod
    def from_list(cls, values: Sequence[Any]) -> "CompactRecord":
        (
            kerning_values,
            kerning_table,
            baselines,
            glyph_values,
            tuplets_flat,
            tuplet_indices,
            space_override,
            common_left_index,
        ) = values
        return cls(
            kerning_values=tuple(kerning_values),
            kerning_table={left: dict(rights) for left, rights in kerning_table.items()},
            baselines=tuple(baselines),
            glyph_values=tuple(glyph_values),
            tuplets_flat=tuple(tuplets_flat),
            tuplet_indices=tuple(tuplet_indices),
            space_override=space_override,
            common_left_index=common_left_index,
        )


@dataclass
class FullFontMetrics:
    glyphs: Dict[str, GlyphMetrics]
    font: FontWideMetrics
    kerning: KerningRelation
    space_advance_override: float
    positioning: AtlasPositioning | None = None

    @property
    def em_height_ascent(self) -> float:
        return self.font.font_ascent

    @property
    def em_height_descent(self) -> float:
        return self.font.font_descent

    def kerning_between(self, left: str, right: str) -> float:
        return self.kerning.get((left, right), 0.0)

    def to_font_metrics(self) -> FontMetrics:
        return FontMetrics(
            glyphs=dict(self.glyphs),
            font=self.font,
            kerning=dict(self.kerning),
            space_advance_override=self.space_advance_override,
        )
