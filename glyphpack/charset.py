from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple

PRINTABLE_ASCII = tuple(chr(i) for i in range(32, 127))

# Windows-1252 printables (0x80-0x9F) mapped to their Unicode code points.
CP1252_EXTRA_CODEPOINTS: Tuple[int, ...] = (
    0x20AC,  # euro sign
    0x2026,  # horizontal ellipsis
    0x2030,  # per mille
    0x2039,  # single left angle quote
    0x017D,  # Z caron
    0x2019,  # right single quote (curly apostrophe)
    0x2022,  # bullet
    0x2014,  # em dash
    0x2122,  # trade mark
    0x0161,  # s caron
    0x203A,  # single right angle quote
    0x0153,  # oe ligature
    0x017E,  # z caron
    0x0178,  # Y diaeresis
)

SOFT_HYPHEN = 0x00AD
FULL_BLOCK = chr(0x2588)


def default_characters() -> Tuple[str, ...]:
    chars: List[str] = list(PRINTABLE_ASCII)
    chars.extend(chr(code) for code in CP1252_EXTRA_CODEPOINTS)
    chars.extend(chr(code) for code in range(161, 256) if code != SOFT_HYPHEN)
    chars.append(FULL_BLOCK)
    return tuple(sorted(chars))


@dataclass(frozen=True)
class CharacterSet:
    """
    Canonical ordering for every per-character structure.

    Atlas packing order, tuplet-index order and kerning range notation all
    depend on positions in this sequence, so it is passed explicitly instead
    of being inferred from dict insertion order.
    """

    chars: Tuple[str, ...]
    _positions: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions: dict[str, int] = {}
        for idx, ch in enumerate(self.chars):
            if len(ch) != 1:
                raise ValueError(f"CharacterSet members must be single characters, got {ch!r}")
            if ch in positions:
                raise ValueError(f"Duplicate character {ch!r} in CharacterSet")
            positions[ch] = idx
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def from_string(cls, text: str) -> "CharacterSet":
        return cls(tuple(text))

    def __len__(self) -> int:
        return len(self.chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)

    def __getitem__(self, idx: int) -> str:
        return self.chars[idx]

    def __contains__(self, ch: object) -> bool:
        return ch in self._positions

    def index(self, ch: str) -> int:
        try:
            return self._positions[ch]
        except KeyError:
            raise KeyError(f"{ch!r} is not part of the character set") from None

    def ordered(self, chars: Iterable[str]) -> List[str]:
        """Members of ``chars`` that belong to the set, in canonical order."""

        wanted = set(chars)
        return [ch for ch in self.chars if ch in wanted]

    def diff(self, chars: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Return (missing, extra) of ``chars`` relative to this set."""

        present = set(chars)
        missing = [ch for ch in self.chars if ch not in present]
        extra = sorted(ch for ch in present if ch not in self._positions)
        return missing, extra


DEFAULT_CHARACTER_SET = CharacterSet(default_characters())
