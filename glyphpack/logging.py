from __future__ import annotations

import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import AtlasDiagnosticWarning, Mismatch


def log_mismatches(mismatches: Sequence[Mismatch], destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    lines: List[str] = []
    for idx, entry in enumerate(mismatches, start=1):
        lines.append(f"#{idx:04d} {entry.key}")
        lines.append(f"       expected={entry.expected!r} actual={entry.actual!r}")
    destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")


@dataclass
class DiagnosticLog:
    """Collects non-fatal conditions raised while expanding or reconstructing."""

    destination: Path | None = None

    def __post_init__(self) -> None:
        self._entries: List[Tuple[str, str]] = []

    def record(self, subject: str, message: str) -> None:
        self._entries.append((subject, message))

    @property
    def entries(self) -> List[Tuple[str, str]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lines(self) -> List[str]:
        return [f"{subject!r}: {message}" for subject, message in self._entries]

    def flush(self) -> None:
        if self.destination is None or not self._entries:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        self.destination.write_text("\n".join(self.lines()) + "\n", encoding="utf-8")


def report(diagnostics: DiagnosticLog | None, subject: str, message: str) -> None:
    """Record into ``diagnostics``, or raise an AtlasDiagnosticWarning when there is no log."""

    if diagnostics is not None:
        diagnostics.record(subject, message)
        return
    warnings.warn(f"{subject!r}: {message}", AtlasDiagnosticWarning, stacklevel=3)
