import pytest

from glyphpack.entities import FontWideMetrics
from glyphpack.errors import FormatVersionError
from glyphpack.quantize import (
    dequantize,
    flatten_baselines,
    flatten_tuplets,
    quantize,
    unflatten_baselines,
    unflatten_tuplets,
)


def test_quantize_rounds_half_up():
    assert quantize(1.23456) == 12346
    assert quantize(0.03125) == 313
    assert quantize(-0.03125) == -312
    assert quantize(-2.0) == -20000


def test_dequantize():
    assert dequantize(12346) == 1.2346
    assert dequantize(-12500) == -1.25


def test_flatten_marks_tuplet_ends():
    assert flatten_tuplets([(0, 1), (2,), (4, 0, 4, 7, 0)]) == [1, -2, -3, 5, 1, 5, 8, -1]


def test_unflatten_inverts_flatten():
    assert unflatten_tuplets([1, -2, -3, 5, 1, 5, 8, -1]) == [(0, 1), (2,), (4, 0, 4, 7, 0)]


def test_unflatten_rejects_zero_and_unterminated_tails():
    with pytest.raises(FormatVersionError):
        unflatten_tuplets([1, 0, -2])
    with pytest.raises(FormatVersionError):
        unflatten_tuplets([1, -2, 3])


def test_baselines_keep_field_order():
    font = FontWideMetrics(14.5, 4.25, 11.6, 0.0, -4.25, 2.0)
    assert flatten_baselines(font) == [14.5, 4.25, 11.6, 0.0, -4.25, 2.0]
    assert unflatten_baselines(flatten_baselines(font)) == font


def test_wrong_baseline_count_is_a_format_error():
    with pytest.raises(FormatVersionError, match="Regenerate"):
        unflatten_baselines([1.0, 2.0])
