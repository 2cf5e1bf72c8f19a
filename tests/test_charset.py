import pytest

from glyphpack.charset import DEFAULT_CHARACTER_SET, FULL_BLOCK, CharacterSet


def test_default_set_has_204_sorted_characters():
    chars = DEFAULT_CHARACTER_SET.chars
    assert len(DEFAULT_CHARACTER_SET) == 204
    assert list(chars) == sorted(chars)
    assert chars[0] == " "
    assert chars[-1] == FULL_BLOCK


def test_default_set_membership():
    assert chr(0x00AD) not in DEFAULT_CHARACTER_SET
    assert chr(0x20AC) in DEFAULT_CHARACTER_SET
    assert chr(0x00FF) in DEFAULT_CHARACTER_SET
    assert "~" in DEFAULT_CHARACTER_SET
    assert "\t" not in DEFAULT_CHARACTER_SET
    assert chr(0x0080) not in DEFAULT_CHARACTER_SET


def test_index_and_getitem_agree():
    for idx, ch in enumerate(DEFAULT_CHARACTER_SET):
        assert DEFAULT_CHARACTER_SET.index(ch) == idx
        assert DEFAULT_CHARACTER_SET[idx] == ch


def test_index_of_unknown_character_raises_key_error():
    with pytest.raises(KeyError):
        DEFAULT_CHARACTER_SET.index("Ж")


def test_ordered_restricts_and_reorders():
    charset = CharacterSet.from_string("abcd")
    assert charset.ordered(["d", "z", "a", "c"]) == ["a", "c", "d"]


def test_diff_reports_missing_and_extra():
    charset = CharacterSet.from_string("abcd")
    assert charset.diff("abz") == (["c", "d"], ["z"])


def test_rejects_duplicates_and_multi_character_members():
    with pytest.raises(ValueError):
        CharacterSet.from_string("abca")
    with pytest.raises(ValueError):
        CharacterSet(("a", "bc"))
