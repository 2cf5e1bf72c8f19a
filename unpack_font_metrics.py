#!/usr/bin/env python3
"""
Expand a compact metrics record (and optionally its atlas) back into the
verbose JSON document, e.g. to inspect what a shipped asset contains:

    python unpack_font_metrics.py assets/Arial-18.metrics.json \
        --atlas assets/Arial-18.atlas.json --atlas-png assets/Arial-18.atlas.png \
        --json Arial-18.expanded.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from glyphpack.errors import GlyphPackError
from glyphpack.expander import expand
from glyphpack.formats import full_metrics_to_json, load_json, write_json
from glyphpack.logging import DiagnosticLog
from glyphpack.raster import load_png


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Expand a compact font-metrics record.")
    parser.add_argument("record", type=Path, help="Compact metrics record JSON")
    parser.add_argument("--atlas", type=Path, help="Compact atlas positioning JSON")
    parser.add_argument("--atlas-png", type=Path, help="Packed atlas image used to rebuild tight heights")
    parser.add_argument("--json", type=Path, help="Write the expanded metrics to this path")
    parser.add_argument(
        "--diagnostics-log",
        type=Path,
        help="Write reconstruction diagnostics (e.g. fully transparent glyphs) to this path",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    diagnostics = DiagnosticLog(args.diagnostics_log)
    try:
        record = load_json(args.record)
        atlas = load_json(args.atlas) if args.atlas else None
        pixels = load_png(args.atlas_png) if args.atlas_png else None
        if pixels is not None:
            print(f"[+] Loaded atlas image {args.atlas_png} ({pixels.width}x{pixels.height})")
        full = expand(record, atlas=atlas, pixels=pixels, diagnostics=diagnostics)
    except GlyphPackError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    pair_count = len(full.kerning)
    print(f"[+] Expanded {len(full.glyphs)} glyphs and {pair_count} kerning pairs from {args.record}")
    if full.positioning is not None:
        print(f"[+] Rebuilt atlas positioning for {len(full.positioning.tight_width)} visible glyphs")
    for line in diagnostics.lines():
        print(f"[warn] {line}")
    diagnostics.flush()

    if args.json:
        write_json(args.json, full_metrics_to_json(full), compact=False)
        print(f"[+] Expanded metrics written to {args.json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
