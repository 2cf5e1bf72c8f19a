from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Mapping, Sequence, TypeVar

T = TypeVar("T")

REGENERATE_HINT = "Regenerate the font assets with the current packer; records are not migrated in place."


class ErrorKind(enum.Enum):
    VALIDATION = "validation"
    ROUNDTRIP_MISMATCH = "roundtrip-mismatch"
    FORMAT_VERSION = "format-version"
    RECONSTRUCTION = "reconstruction"


class GlyphPackError(RuntimeError):
    kind: ErrorKind


class ValidationError(GlyphPackError):
    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        missing: Sequence[str] = (),
        extra: Sequence[str] = (),
        *,
        subject: str = "character metrics",
        fields: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.missing = list(missing)
        self.extra = list(extra)
        self.subject = subject
        # character -> problems with its individual fields
        self.fields = {ch: list(problems) for ch, problems in (fields or {}).items()}
        parts = []
        if self.missing:
            parts.append("missing " + ", ".join(repr(ch) for ch in self.missing))
        if self.extra:
            parts.append("unexpected " + ", ".join(repr(ch) for ch in self.extra))
        parts.extend(f"{ch!r} ({', '.join(problems)})" for ch, problems in self.fields.items())
        if self.missing or self.extra:
            headline = f"{subject} do not match the character set"
        else:
            headline = f"{subject} are malformed"
        super().__init__(f"{headline}: " + "; ".join(parts))


@dataclass(frozen=True)
class Mismatch:
    key: str
    expected: Any
    actual: Any

    def describe(self) -> str:
        return f"{self.key}: expected {self.expected!r}, got {self.actual!r}"


class RoundtripMismatchError(GlyphPackError):
    kind = ErrorKind.ROUNDTRIP_MISMATCH

    def __init__(self, mismatches: Sequence[Mismatch]) -> None:
        self.mismatches: List[Mismatch] = list(mismatches)
        lines = "\n".join(f"  {entry.describe()}" for entry in self.mismatches)
        super().__init__(
            f"Round-trip validation failed for {len(self.mismatches)} value(s):\n{lines}"
        )

    @property
    def keys(self) -> List[str]:
        return [entry.key for entry in self.mismatches]


class FormatVersionError(GlyphPackError):
    kind = ErrorKind.FORMAT_VERSION

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{detail}. {REGENERATE_HINT}")


class ReconstructionError(GlyphPackError):
    kind = ErrorKind.RECONSTRUCTION

    def __init__(self, dependency: str, detail: str) -> None:
        self.dependency = dependency
        super().__init__(f"{detail} (missing dependency: {dependency})")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a codec call for callers that prefer branching to ``except``."""

    value: T | None = None
    error: GlyphPackError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def capture(func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    try:
        return Result(value=func(*args, **kwargs))
    except GlyphPackError as exc:
        return Result(error=exc)


class AtlasDiagnosticWarning(UserWarning):
    """Non-fatal atlas reconstruction condition reported when no DiagnosticLog is supplied."""
