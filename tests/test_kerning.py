import pytest

from glyphpack.errors import FormatVersionError
from glyphpack.kerning import compress_characters, compress_kerning, expand_kerning, expand_token


def test_full_character_set_becomes_one_token(charset):
    relation = {("A", ch): 20 for ch in charset}
    table = compress_kerning(relation, charset)
    # dash is pulled out as a leading literal, splitting the set into two runs
    assert table == {"A": {"- -,.-█": 20}}
    assert expand_kerning(table, charset) == relation


def test_digits_become_a_range(charset):
    relation = {("B", str(digit)): 15 for digit in range(10)}
    assert compress_kerning(relation, charset) == {"B": {"0-9": 15}}


def test_mixed_groups_stay_separate(charset):
    relation = {("X", ch): 10 for ch in "012345"}
    relation.update({("X", "A"): 25, ("X", "B"): 25})
    relation.update({("X", ch): 30 for ch in "abcde"})
    table = compress_kerning(relation, charset)
    assert table == {"X": {"0-5": 10, "AB": 25, "a-e": 30}}
    assert list(table["X"]) == ["0-5", "AB", "a-e"]
    assert expand_kerning(table, charset) == relation


def test_non_adjacent_characters_stay_literal(charset):
    relation = {("Q", "A"): 5, ("Q", "D"): 5, ("Q", "Z"): 5}
    assert compress_kerning(relation, charset) == {"Q": {"ADZ": 5}}


def test_left_characters_with_identical_rights_are_merged(charset):
    relation = {("A", "V"): 1, ("B", "V"): 1, ("C", "V"): 1, ("T", "o"): 2, ("U", "o"): 2}
    table = compress_kerning(relation, charset)
    assert table == {"A-C": {"V": 1}, "TU": {"o": 2}}
    assert expand_kerning(table, charset) == relation


def test_lefts_with_different_rights_are_not_merged(charset):
    relation = {("A", "V"): 1, ("B", "V"): 2}
    assert compress_kerning(relation, charset) == {"A": {"V": 1}, "B": {"V": 2}}


def test_dash_is_emitted_first_and_never_joins_a_run(charset):
    assert compress_characters(["0", "/", "-", "."], charset) == "-.-0"
    assert expand_token("-.-0", charset) == ["-", ".", "/", "0"]
    assert compress_characters([",", "-", "."], charset) == "-,."
    assert expand_token("-,.", charset) == ["-", ",", "."]
    assert compress_characters(["-"], charset) == "-"
    assert expand_token("-", charset) == ["-"]


def test_dash_as_left_character(charset):
    relation = {("-", "1"): 4, ("-", "7"): 4}
    table = compress_kerning(relation, charset)
    assert table == {"-": {"17": 4}}
    assert expand_kerning(table, charset) == relation


@pytest.mark.parametrize("token", ["", "A-", "C-A", "AЖ", "a-Ж"])
def test_malformed_tokens_are_format_errors(charset, token):
    with pytest.raises(FormatVersionError):
        expand_token(token, charset)
