import pytest

from glyphpack.codec import minify
from glyphpack.errors import FormatVersionError, ValidationError
from glyphpack.expander import expand
from glyphpack.formats import font_metrics_from_json, full_metrics_to_json, load_json, write_json


def test_reads_verbose_document(verbose_document, metrics):
    parsed, positioning = font_metrics_from_json(verbose_document)
    assert parsed.glyphs == metrics.glyphs
    assert parsed.font == metrics.font
    assert parsed.kerning == metrics.kerning
    assert parsed.space_advance_override == 5
    assert positioning.x_in_atlas == {"a": 0, "b": 3}
    assert positioning.tight_height == {"a": 3, "b": 4}


def test_document_without_atlas(verbose_document):
    del verbose_document["atlasPositioning"]
    _, positioning = font_metrics_from_json(verbose_document)
    assert positioning is None


def test_empty_document_is_a_validation_error():
    with pytest.raises(ValidationError):
        font_metrics_from_json({"characterMetrics": {}})


def test_expanded_metrics_write_the_same_shape(verbose_document):
    parsed, _ = font_metrics_from_json(verbose_document)
    payload = full_metrics_to_json(expand(minify(parsed)))
    entry = payload["characterMetrics"]["A"]
    assert entry["emHeightAscent"] == entry["fontBoundingBoxAscent"] == 14.5
    assert entry["emHeightDescent"] == 4.25
    assert payload["kerningTable"]["T"] == {"a": -2.0, "e": -2.0, "o": -2.0}

    reparsed, _ = font_metrics_from_json(payload)
    assert reparsed.kerning == parsed.kerning
    assert reparsed.font == parsed.font


def test_load_json_reports_broken_files(tmp_path):
    path = tmp_path / "record.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(FormatVersionError):
        load_json(path)


def test_write_json_compact_and_indented(tmp_path):
    compact = tmp_path / "out" / "compact.json"
    write_json(compact, {"w": {"█": 3}})
    assert compact.read_text(encoding="utf-8") == '{"w":{"█":3}}'

    pretty = tmp_path / "pretty.json"
    write_json(pretty, {"a": 1}, compact=False)
    assert load_json(pretty) == {"a": 1}
    assert "\n" in pretty.read_text(encoding="utf-8")


def test_missing_and_non_numeric_glyph_fields_are_named(verbose_document):
    del verbose_document["characterMetrics"]["A"]["actualBoundingBoxDescent"]
    verbose_document["characterMetrics"]["B"]["width"] = "wide"
    with pytest.raises(ValidationError) as excinfo:
        font_metrics_from_json(verbose_document)
    assert excinfo.value.fields == {
        "A": ["actualBoundingBoxDescent missing"],
        "B": ["width is not a number"],
    }
    assert "'A' (actualBoundingBoxDescent missing)" in str(excinfo.value)


def test_font_wide_fields_must_agree(verbose_document):
    verbose_document["characterMetrics"]["B"]["fontBoundingBoxAscent"] = 15.0
    with pytest.raises(ValidationError) as excinfo:
        font_metrics_from_json(verbose_document)
    assert excinfo.value.fields == {"B": ["fontBoundingBoxAscent differs from ' '"]}


def test_absent_font_wide_field_reads_as_zero(verbose_document):
    for entry in verbose_document["characterMetrics"].values():
        del entry["ideographicBaseline"]
    parsed, _ = font_metrics_from_json(verbose_document)
    assert parsed.font.ideographic_baseline == 0.0
