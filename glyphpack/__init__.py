"""
Bitmap-font metrics codec: compact records, atlas positioning and the
round-trip checks that keep them reversible.
"""

from .atlas import expand_atlas, minify_atlas, validate_atlas_reconstruction
from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .codec import build_record, dumps_record, minify, try_minify
from .entities import AtlasPositioning, CompactRecord, FontMetrics, FontWideMetrics, FullFontMetrics, GlyphMetrics
from .errors import (
    AtlasDiagnosticWarning,
    ErrorKind,
    FormatVersionError,
    GlyphPackError,
    Mismatch,
    ReconstructionError,
    Result,
    RoundtripMismatchError,
    ValidationError,
)
from .expander import expand, expand_metrics, try_expand
from .logging import DiagnosticLog, log_mismatches
from .raster import PixelBuffer, load_png
from .reconstruct import reconstruct_tight_height, reconstruct_x_in_atlas
from .store import FontAssetStore
from .validation import validate_roundtrip

__all__ = [
    "AtlasDiagnosticWarning",
    "expand_atlas",
    "minify_atlas",
    "validate_atlas_reconstruction",
    "DEFAULT_CHARACTER_SET",
    "CharacterSet",
    "build_record",
    "dumps_record",
    "minify",
    "try_minify",
    "AtlasPositioning",
    "CompactRecord",
    "FontMetrics",
    "FontWideMetrics",
    "FullFontMetrics",
    "GlyphMetrics",
    "ErrorKind",
    "FormatVersionError",
    "GlyphPackError",
    "Mismatch",
    "ReconstructionError",
    "Result",
    "RoundtripMismatchError",
    "ValidationError",
    "expand",
    "expand_metrics",
    "try_expand",
    "DiagnosticLog",
    "log_mismatches",
    "PixelBuffer",
    "load_png",
    "reconstruct_tight_height",
    "reconstruct_x_in_atlas",
    "FontAssetStore",
    "validate_roundtrip",
]
