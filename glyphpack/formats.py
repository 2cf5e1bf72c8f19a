"""
JSON shapes read and written by the command scripts and the asset store.

The verbose metrics document uses the browser TextMetrics names:

    {
      "characterMetrics": {"A": {"width": ..., "actualBoundingBoxLeft": ..., ...}},
      "kerningTable": {"A": {"V": -1.25}},
      "spaceAdvancementOverrideForSmallSizesInPx": 5,
      "atlasPositioning": {"tightWidth": {...}, "tightHeight": {...},
                           "dx": {...}, "dy": {...}, "xInAtlas": {...}}
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .codec import dumps_record
from .entities import AtlasPositioning, CompactRecord, FontMetrics, FontWideMetrics, FullFontMetrics, GlyphMetrics
from .errors import FormatVersionError, ValidationError

GLYPH_KEYS = (
    "width",
    "actualBoundingBoxLeft",
    "actualBoundingBoxRight",
    "actualBoundingBoxAscent",
    "actualBoundingBoxDescent",
)
FONT_WIDE_KEYS = (
    "fontBoundingBoxAscent",
    "fontBoundingBoxDescent",
    "hangingBaseline",
    "alphabeticBaseline",
    "ideographicBaseline",
    "pixelDensity",
)
POSITIONING_KEYS = {
    "tightWidth": "tight_width",
    "tightHeight": "tight_height",
    "dx": "dx",
    "dy": "dy",
    "xInAtlas": "x_in_atlas",
}


def _number(entry: Dict[str, Any], key: str, problems: List[str], *, default: float | None = None) -> float:
    if key not in entry:
        if default is None:
            problems.append(f"{key} missing")
        return 0.0 if default is None else default
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        problems.append(f"{key} is not a number")
        return 0.0
    return float(value)


def font_metrics_from_json(
    data: Dict[str, Any],
    *,
    charset: CharacterSet = DEFAULT_CHARACTER_SET,
) -> Tuple[FontMetrics, AtlasPositioning | None]:
    """
    Parse the verbose document. Font-wide fields are repeated on every
    character entry; an absent one reads as 0.0, and every character must
    agree with the first one in CharacterSet order.
    """

    characters: Dict[str, Dict[str, float]] = data.get("characterMetrics") or {}
    ordered = charset.ordered(characters)
    if not ordered:
        missing, extra = charset.diff(characters)
        raise ValidationError(missing=missing, extra=extra)

    problems: Dict[str, List[str]] = {}
    glyphs: Dict[str, GlyphMetrics] = {}
    font_rows: Dict[str, Tuple[float, ...]] = {}
    for ch, entry in characters.items():
        if not isinstance(entry, dict):
            problems[ch] = ["entry is not an object"]
            continue
        glyph_values = [_number(entry, key, problems.setdefault(ch, [])) for key in GLYPH_KEYS]
        font_values = [_number(entry, key, problems[ch], default=0.0) for key in FONT_WIDE_KEYS]
        if not problems[ch]:
            del problems[ch]
            glyphs[ch] = GlyphMetrics.from_sequence(glyph_values)
            font_rows[ch] = tuple(font_values)

    reference = ordered[0]
    if reference in font_rows:
        for ch in charset.ordered(font_rows):
            differing = [
                f"{key} differs from {reference!r}"
                for key, want, got in zip(FONT_WIDE_KEYS, font_rows[reference], font_rows[ch])
                if want != got
            ]
            if differing:
                problems[ch] = differing
    if problems:
        raise ValidationError(fields={ch: problems[ch] for ch in sorted(problems)})
    font = FontWideMetrics(*font_rows[reference])
    kerning = {
        (left, right): float(value)
        for left, rights in (data.get("kerningTable") or {}).items()
        for right, value in rights.items()
    }
    metrics = FontMetrics(
        glyphs=glyphs,
        font=font,
        kerning=kerning,
        space_advance_override=data.get("spaceAdvancementOverrideForSmallSizesInPx", 0.0),
    )

    raw_positioning = data.get("atlasPositioning")
    positioning = None
    if raw_positioning:
        positioning = AtlasPositioning(
            **{
                attr: {ch: int(value) for ch, value in (raw_positioning.get(key) or {}).items()}
                for key, attr in POSITIONING_KEYS.items()
            }
        )
    return metrics, positioning


def full_metrics_to_json(full: FullFontMetrics, *, charset: CharacterSet = DEFAULT_CHARACTER_SET) -> Dict[str, Any]:
    font_values = dict(zip(FONT_WIDE_KEYS, full.font.as_list()))
    characters = {}
    for ch in charset.ordered(full.glyphs):
        entry: Dict[str, float] = dict(zip(GLYPH_KEYS, full.glyphs[ch].as_tuple()))
        entry.update(font_values)
        entry["emHeightAscent"] = full.em_height_ascent
        entry["emHeightDescent"] = full.em_height_descent
        characters[ch] = entry
    kerning: Dict[str, Dict[str, float]] = {}
    for (left, right), value in full.kerning.items():
        kerning.setdefault(left, {})[right] = value
    payload: Dict[str, Any] = {
        "characterMetrics": characters,
        "kerningTable": kerning,
        "spaceAdvancementOverrideForSmallSizesInPx": full.space_advance_override,
    }
    if full.positioning is not None:
        payload["atlasPositioning"] = {
            key: dict(getattr(full.positioning, attr)) for key, attr in POSITIONING_KEYS.items()
        }
    return payload


def load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FormatVersionError(f"{path} is not valid JSON ({exc.msg} at line {exc.lineno})") from exc


def write_json(path: Path, payload: Any, *, compact: bool = True) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if compact:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    else:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")


def write_record(path: Path, record: CompactRecord) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_record(record), encoding="utf-8")
