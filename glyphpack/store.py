from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .charset import DEFAULT_CHARACTER_SET, CharacterSet
from .entities import FullFontMetrics
from .expander import expand
from .formats import load_json
from .logging import DiagnosticLog
from .raster import load_png

MANIFEST_NAME = "fonts.lst"
RECORD_SUFFIX = ".metrics.json"
ATLAS_SUFFIX = ".atlas.json"
ATLAS_IMAGE_SUFFIX = ".atlas.png"


@dataclass(frozen=True)
class FontAssetEntry:
    font_id: str
    record: Path
    atlas: Path | None = None
    image: Path | None = None


class FontAssetStore:
    """
    Loaded fonts for one caller, constructed at load time and torn down with
    ``unload`` / ``clear``. Nothing here is shared between store instances.
    """

    def __init__(
        self,
        root: Path,
        *,
        charset: CharacterSet = DEFAULT_CHARACTER_SET,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self.root = root
        self.charset = charset
        self.diagnostics = diagnostics
        self._fonts: dict[str, FullFontMetrics] = {}
        self._entries = self._load_manifest()

    def _load_manifest(self) -> dict[str, FontAssetEntry]:
        manifest = self.root / MANIFEST_NAME
        if not manifest.exists():
            return self._discover()
        entries: dict[str, FontAssetEntry] = {}
        for line in manifest.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) < 2:
                continue
            font_id, record = parts[0], parts[1]
            atlas = self.root / parts[2] if len(parts) >= 3 else None
            image = self.root / parts[3] if len(parts) >= 4 else None
            entries[font_id] = FontAssetEntry(font_id, self.root / record, atlas, image)
        return entries

    def _discover(self) -> dict[str, FontAssetEntry]:
        entries: dict[str, FontAssetEntry] = {}
        if not self.root.is_dir():
            return entries
        for record in sorted(self.root.glob(f"*{RECORD_SUFFIX}")):
            font_id = record.name[: -len(RECORD_SUFFIX)]
            atlas = self.root / f"{font_id}{ATLAS_SUFFIX}"
            image = self.root / f"{font_id}{ATLAS_IMAGE_SUFFIX}"
            entries[font_id] = FontAssetEntry(
                font_id,
                record,
                atlas if atlas.exists() else None,
                image if image.exists() else None,
            )
        return entries

    def available(self) -> List[str]:
        return list(self._entries)

    def loaded(self) -> List[str]:
        return list(self._fonts)

    def get(self, font_id: str) -> FullFontMetrics:
        if font_id in self._fonts:
            return self._fonts[font_id]
        entry = self._entries.get(font_id)
        if entry is None:
            raise KeyError(f"No font assets registered for {font_id!r} under {self.root}")
        font = self._load(entry)
        self._fonts[font_id] = font
        return font

    def _load(self, entry: FontAssetEntry) -> FullFontMetrics:
        record = load_json(entry.record)
        atlas = load_json(entry.atlas) if entry.atlas else None
        pixels = load_png(entry.image) if entry.image else None
        return expand(
            record,
            atlas=atlas,
            pixels=pixels,
            charset=self.charset,
            diagnostics=self.diagnostics,
        )

    def unload(self, font_id: str) -> bool:
        return self._fonts.pop(font_id, None) is not None

    def clear(self) -> None:
        self._fonts.clear()
