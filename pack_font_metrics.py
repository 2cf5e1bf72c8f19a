#!/usr/bin/env python3
"""
Minify a verbose font-metrics JSON document into the compact record.

The record is only written after it has been expanded again and compared
against the input; any difference aborts the build.  Example:

    python pack_font_metrics.py Arial-18.full.json \
        --output assets/Arial-18.metrics.json \
        --atlas-output assets/Arial-18.atlas.json \
        --atlas-png assets/Arial-18.atlas.png
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from glyphpack.atlas import minify_atlas
from glyphpack.codec import minify
from glyphpack.errors import GlyphPackError, RoundtripMismatchError
from glyphpack.formats import font_metrics_from_json, load_json, write_json, write_record
from glyphpack.logging import log_mismatches
from glyphpack.raster import load_png


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compress font metrics into a compact, validated record.")
    parser.add_argument("input", type=Path, help="Verbose metrics JSON (characterMetrics, kerningTable, ...)")
    parser.add_argument("--output", type=Path, help="Destination for the compact metrics record")
    parser.add_argument(
        "--atlas-output",
        type=Path,
        help="Destination for the compact atlas positioning (requires atlasPositioning in the input)",
    )
    parser.add_argument(
        "--atlas-png",
        type=Path,
        help="Packed atlas image; when given, tight heights are verified against its pixels",
    )
    parser.add_argument(
        "--mismatch-log",
        type=Path,
        help="Write every round-trip mismatch to this path when validation fails",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    data = load_json(args.input)
    metrics, positioning = font_metrics_from_json(data)
    print(
        f"[+] Loaded {args.input} ({len(metrics.glyphs)} glyphs, {len(metrics.kerning)} kerning pairs)"
    )

    record = minify(metrics)
    output = args.output or args.input.with_suffix(".metrics.json")
    write_record(output, record)
    print(
        f"[+] Record written to {output} ({len(record.glyph_values)} glyph values, "
        f"{len(record.kerning_values)} kerning values, {len(record.kerning_table)} kerning groups)"
    )

    if args.atlas_output:
        if positioning is None:
            print("[warn] Input has no atlasPositioning; atlas record skipped")
            return 0
        pixels = load_png(args.atlas_png) if args.atlas_png else None
        compact = minify_atlas(positioning, pixels=pixels)
        write_json(args.atlas_output, compact)
        checked = "x positions and heights" if pixels is not None else "x positions"
        print(f"[+] Atlas record written to {args.atlas_output} ({len(compact['w'])} glyphs, {checked} verified)")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run(args)
    except RoundtripMismatchError as exc:
        if args.mismatch_log:
            log_mismatches(exc.mismatches, args.mismatch_log)
            print(f"[i] Mismatch report written to {args.mismatch_log}", file=sys.stderr)
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    except GlyphPackError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
