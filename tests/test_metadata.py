import pandas as pd
import pytest

from geckoutils.core.errors import UnknownColumnWarning, ValidationError
from geckoutils.metadata import MISSING, get_metadata, metadata_fields, parse_metadata, set_metadata


def test_get_metadata_without_any_metadata_is_all_missing(mtcars):
    meta = get_metadata(mtcars)
    assert list(meta) == list(mtcars.columns)
    for record in meta.values():
        assert list(record) == ["Description", "Unit", "Symbol"]
        assert all(v is MISSING for v in record.values())


def test_set_then_get_single_column(mtcars):
    set_metadata(mtcars, {"mpg": {"Description": "Miles per gallon", "Unit": "mpg"}})
    record = get_metadata(mtcars)["mpg"]
    assert record["Description"] == "Miles per gallon"
    assert record["Unit"] == "mpg"
    assert record["Symbol"] is MISSING


def test_get_metadata_returns_exactly_requested_fields(mtcars):
    set_metadata(mtcars, {"mpg": {"Description": "Miles per gallon", "Source": "1974 Motor Trend"}})
    meta = get_metadata(mtcars, fields=["Source", "Unit"])
    assert meta["mpg"] == {"Source": "1974 Motor Trend", "Unit": MISSING}
    assert meta["cyl"]["Source"] is MISSING
    assert list(get_metadata(mtcars, fields="Source")["mpg"]) == ["Source"]


def test_field_names_are_case_sensitive(mtcars):
    set_metadata(mtcars, {"mpg": {"Description": "Miles per gallon", "unit": "mpg"}})
    record = get_metadata(mtcars, fields=["Unit", "unit"])["mpg"]
    assert record["Unit"] is MISSING
    assert record["unit"] == "mpg"


def test_set_metadata_merges_and_last_write_wins(mtcars):
    set_metadata(mtcars, {"mpg": {"Description": "Miles", "Unit": "mpg"}})
    set_metadata(mtcars, {"mpg": {"Description": "Miles per gallon", "Symbol": "m"}})
    record = get_metadata(mtcars)["mpg"]
    assert record == {"Description": "Miles per gallon", "Unit": "mpg", "Symbol": "m"}


def test_set_metadata_is_idempotent(mtcars):
    records = {"mpg": {"Description": "Miles per gallon", "Unit": "mpg"},
               "cyl": {"Description": "Number of cylinders", "Unit": "count"}}
    set_metadata(mtcars, records)
    once = get_metadata(mtcars)
    set_metadata(mtcars, records)
    assert get_metadata(mtcars) == once


def test_set_metadata_returns_same_frame(mtcars):
    out = set_metadata(mtcars, {"mpg": {"Description": "Miles per gallon"}})
    assert out is mtcars


def test_unknown_column_warns_and_continues(mtcars):
    records = {"mpg": {"Description": "Miles per gallon"},
               "non_existent": {"Description": "This column does not exist"}}
    with pytest.warns(UnknownColumnWarning, match="Column 'non_existent' not found in the data frame"):
        set_metadata(mtcars, records)
    assert get_metadata(mtcars)["mpg"]["Description"] == "Miles per gallon"
    assert "non_existent" not in get_metadata(mtcars)


def test_missing_description_rejects_only_that_row(mtcars):
    records = {"mpg": {"Description": "Miles per gallon"},
               "cyl": {"Unit": "count"},
               "disp": {"Description": None, "Unit": "cu.in."}}
    with pytest.raises(ValidationError, match="cyl") as exc:
        set_metadata(mtcars, records)
    assert "disp" in str(exc.value)
    meta = get_metadata(mtcars)
    assert meta["mpg"]["Description"] == "Miles per gallon"
    assert meta["cyl"]["Unit"] is MISSING
    assert meta["disp"]["Unit"] is MISSING


def test_set_metadata_from_table(mtcars):
    table = pd.DataFrame({
        "Datafield": ["mpg", "cyl", "disp"],
        "Description": ["Miles/(US) gallon", "Number of cylinders", "Displacement (cu.in.)"],
        "Unit": ["mpg", "count", "cu.in."],
    })
    set_metadata(mtcars, table)
    meta = get_metadata(mtcars)
    assert meta["mpg"]["Description"] == "Miles/(US) gallon"
    assert meta["cyl"]["Unit"] == "count"
    assert meta["disp"]["Unit"] == "cu.in."


def test_set_metadata_table_requires_key_and_description(mtcars):
    with pytest.raises(ValidationError, match="Datafield"):
        set_metadata(mtcars, pd.DataFrame({"Description": ["x"]}))
    with pytest.raises(ValidationError, match="Description"):
        set_metadata(mtcars, pd.DataFrame({"Datafield": ["mpg"], "Unit": ["mpg"]}))


def test_set_metadata_rejects_non_frame_inputs(mtcars):
    with pytest.raises(TypeError):
        set_metadata({"mpg": [1]}, {"mpg": {"Description": "x"}})
    with pytest.raises(TypeError):
        set_metadata(mtcars, [("mpg", {"Description": "x"})])


def test_metadata_travels_with_copies(mtcars):
    set_metadata(mtcars, {"mpg": {"Description": "Miles per gallon"}})
    copied = mtcars.copy()
    assert get_metadata(copied)["mpg"]["Description"] == "Miles per gallon"


def test_parse_metadata_always_includes_description():
    table = pd.DataFrame({
        "Datafield": ["mpg", "cyl", "disp"],
        "Description": ["Miles/(US) gallon", "Number of cylinders", "Displacement (cu.in.)"],
        "Unit": ["mpg", "count", "cu.in."],
        "Symbol": ["m", "n", None],
    })
    parsed = parse_metadata(table, key_field="Datafield", description_field="Description", fields=["Unit", "Symbol", "Unit"])
    assert list(parsed) == ["mpg", "cyl", "disp"]
    assert list(parsed["mpg"]) == ["Description", "Unit", "Symbol"]
    assert parsed["mpg"]["Description"] == "Miles/(US) gallon"
    assert parsed["cyl"]["Unit"] == "count"
    assert parsed["disp"]["Symbol"] is MISSING


def test_parse_metadata_with_renamed_description_column():
    table = pd.DataFrame({"Field": ["mpg"], "Beschreibung": ["Verbrauch"], "Unit": ["mpg"]})
    parsed = parse_metadata(table, key_field="Field", description_field="Beschreibung", fields="Unit")
    assert parsed == {"mpg": {"Description": "Verbrauch", "Unit": "mpg"}}


def test_parse_metadata_missing_columns_raise():
    table = pd.DataFrame({"Datafield": ["mpg"], "Description": ["Miles"]})
    with pytest.raises(ValidationError, match="Symbol"):
        parse_metadata(table, fields=["Symbol"])
    with pytest.raises(ValidationError, match="Key"):
        parse_metadata(table, key_field="Key", fields=[])


def test_parse_metadata_missing_key_value_raises():
    table = pd.DataFrame({"Datafield": ["mpg", None], "Description": ["Miles", "Orphan"]})
    with pytest.raises(ValidationError, match="Row 1"):
        parse_metadata(table, fields=[])


def test_metadata_fields_discovers_in_first_seen_order(mtcars):
    assert metadata_fields(mtcars) == []
    set_metadata(mtcars, {"cyl": {"Description": "Cylinders", "Unit": "count"},
                          "mpg": {"Description": "Miles", "Source": "MT"}})
    assert metadata_fields(mtcars) == ["Description", "Source", "Unit"]


def test_editing_a_copy_leaves_the_original_alone(mtcars):
    set_metadata(mtcars, {"mpg": {"Description": "Miles"}})
    copied = mtcars.copy()
    set_metadata(copied, {"mpg": {"Description": "Changed", "Unit": "mpg"}})
    assert get_metadata(mtcars)["mpg"]["Description"] == "Miles"
    assert get_metadata(mtcars)["mpg"]["Unit"] is MISSING
    assert get_metadata(copied)["mpg"]["Description"] == "Changed"


def test_integer_column_labels_from_table():
    df = pd.DataFrame({0: [1.0], 1: [2.0]})
    table = pd.DataFrame({"Datafield": [0, 1], "Description": ["first", "second"]})
    set_metadata(df, table)
    meta = get_metadata(df, fields="Description")
    assert meta == {0: {"Description": "first"}, 1: {"Description": "second"}}


def test_string_keys_match_integer_labels():
    df = pd.DataFrame({0: [1.0], 1: [2.0]})
    set_metadata(df, {"1": {"Description": "second"}})
    assert get_metadata(df, fields="Description")[1]["Description"] == "second"
    assert get_metadata(df, fields="Description")[0]["Description"] is MISSING


def test_parse_metadata_keeps_key_type():
    table = pd.DataFrame({"Datafield": [10, 20], "Description": ["a", "b"]})
    assert list(parse_metadata(table, fields=[])) == [10, 20]
