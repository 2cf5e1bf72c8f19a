"""
Two-pass range compression for the sparse kerning relation.

Pass 1 groups, per left character, every right character that shares a
value into one token. Pass 2 groups left characters whose whole pass-1
object is identical. Both axes use the same token grammar:

    token := ["-"] item*
    item  := CHAR "-" CHAR     inclusive run in CharacterSet order (3+ chars)
           | CHAR              literal

A literal dash can only appear first, so any later dash is a range
separator. Dash never takes part in a run.
"""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .charset import CharacterSet
from .errors import FormatVersionError

DASH = "-"
MIN_RUN = 3

KerningTable = Dict[str, Dict[str, int]]


def _runs(indices: Sequence[int]) -> List[List[int]]:
    runs: List[List[int]] = []
    for idx in indices:
        if runs and runs[-1][-1] + 1 == idx:
            runs[-1].append(idx)
        else:
            runs.append([idx])
    return runs


def compress_characters(chars: Iterable[str], charset: CharacterSet) -> str:
    members = set(chars)
    parts: List[str] = []
    if DASH in members:
        parts.append(DASH)
        members.discard(DASH)
    indices = sorted(charset.index(ch) for ch in members)
    for run in _runs(indices):
        if len(run) >= MIN_RUN:
            parts.append(f"{charset[run[0]]}{DASH}{charset[run[-1]]}")
        else:
            parts.extend(charset[idx] for idx in run)
    return "".join(parts)


def expand_token(token: str, charset: CharacterSet) -> List[str]:
    if not token:
        raise FormatVersionError("Empty kerning token")
    chars: List[str] = []
    pos = 0
    if token[0] == DASH:
        chars.append(DASH)
        pos = 1
    while pos < len(token):
        ch = token[pos]
        if pos + 1 < len(token) and token[pos + 1] == DASH:
            if pos + 2 >= len(token):
                raise FormatVersionError(f"Kerning token {token!r} ends inside a range")
            start, end = ch, token[pos + 2]
            first, last = _position(start, token, charset), _position(end, token, charset)
            if first >= last:
                raise FormatVersionError(f"Kerning token {token!r} has a reversed range {start!r}-{end!r}")
            chars.extend(charset[idx] for idx in range(first, last + 1))
            pos += 3
        else:
            _position(ch, token, charset)
            chars.append(ch)
            pos += 1
    return chars


def _position(ch: str, token: str, charset: CharacterSet) -> int:
    if ch not in charset:
        raise FormatVersionError(f"Kerning token {token!r} references {ch!r}, which is not in the character set")
    return charset.index(ch)


def _group_by_value(values: Mapping[str, int], charset: CharacterSet) -> Dict[str, int]:
    groups: Dict[int, List[str]] = {}
    for ch in charset.ordered(values):
        groups.setdefault(values[ch], []).append(ch)
    ordered = sorted(groups.items(), key=lambda item: charset.index(item[1][0]))
    return {compress_characters(chars, charset): value for value, chars in ordered}


def _fingerprint(rights: Mapping[str, int]) -> str:
    return json.dumps(rights, separators=(",", ":"), ensure_ascii=False)


def compress_kerning(
    relation: Mapping[Tuple[str, str], int],
    charset: CharacterSet,
) -> KerningTable:
    """Compress ``(left, right) -> value index`` into nested token notation."""

    by_left: Dict[str, Dict[str, int]] = {}
    for (left, right), value in relation.items():
        by_left.setdefault(left, {})[right] = value

    right_compressed: List[Tuple[str, Dict[str, int]]] = [
        (left, _group_by_value(by_left[left], charset)) for left in charset.ordered(by_left)
    ]

    left_groups: Dict[str, Tuple[List[str], Dict[str, int]]] = {}
    for left, rights in right_compressed:
        key = _fingerprint(rights)
        if key in left_groups:
            left_groups[key][0].append(left)
        else:
            left_groups[key] = ([left], rights)

    table: KerningTable = {}
    for lefts, rights in left_groups.values():
        table[compress_characters(lefts, charset)] = rights
    return table


def expand_kerning(table: Mapping[str, Mapping[str, int]], charset: CharacterSet) -> Dict[Tuple[str, str], int]:
    relation: Dict[Tuple[str, str], int] = {}
    for left_token, rights in table.items():
        lefts = expand_token(left_token, charset)
        expanded_rights = [(expand_token(token, charset), value) for token, value in rights.items()]
        for left in lefts:
            for right_chars, value in expanded_rights:
                for right in right_chars:
                    relation[(left, right)] = value
    return relation
