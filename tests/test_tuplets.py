import pytest

from glyphpack.errors import FormatVersionError
from glyphpack.tuplets import build_tuplet_table, compress_tuplet, expand_tuplet, resolve_tuplets


@pytest.mark.parametrize(
    "full, compressed",
    [
        ((4, 0, 4, 7, 0), (4, 7)),
        ((4, 2, 4, 7, 2), (4, 2, 7)),
        ((4, 2, 4, 7, 3), (4, 2, 7, 3)),
        ((4, 2, 5, 7, 3), (4, 2, 5, 7, 3)),
    ],
)
def test_cascade(full, compressed):
    assert compress_tuplet(full, common_left=0) == compressed
    assert expand_tuplet(compressed, common_left=0) == full


def test_left_equal_to_descent_but_not_common_keeps_left():
    assert compress_tuplet((4, 1, 4, 7, 1), common_left=2) == (4, 1, 7)


@pytest.mark.parametrize("tuplet", [(1,), (1, 2, 3, 4, 5, 6), ()])
def test_undefined_lengths_are_rejected(tuplet):
    with pytest.raises(FormatVersionError):
        expand_tuplet(tuplet, common_left=0)


def test_table_deduplicates_compressed_tuplets():
    table = build_tuplet_table([(4, 0, 4, 7, 0)] * 3 + [(4, 2, 5, 7, 3)], common_left=0)
    assert table.lookup == ((4, 7), (4, 2, 5, 7, 3))
    assert table.indices == (0, 0, 0, 1)
    assert table.tuplet_for(3) == (4, 2, 5, 7, 3)


def test_resolve_rejects_dangling_index():
    with pytest.raises(FormatVersionError):
        resolve_tuplets([(4, 7)], [0, 1], common_left=0)
