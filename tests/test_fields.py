"""Unit tests for header cell parsing."""

from __future__ import annotations

import pytest

from sheetdoc_io.errors import SchemaError
from sheetdoc_io.fields import parse_field, parse_header_cells
from sheetdoc_io.schema import FieldType


def test_parse_field_basic() -> None:
    field = parse_field("  id,int64  ", "user0", 1, 0)

    assert field is not None
    assert field.key == "id"
    assert field.type is FieldType.INT64
    assert field.required is True
    assert field.args == ()
    assert (field.sheet, field.row, field.col) == ("user0", 1, 0)


@pytest.mark.parametrize("modifier", ["o", "O", "optional", "Optional"])
def test_optional_modifiers(modifier: str) -> None:
    field = parse_field(f"nick:{modifier},string", "s", 1, 3)

    assert field is not None
    assert field.key == "nick"
    assert field.required is False


def test_unknown_modifier_keeps_field_required() -> None:
    field = parse_field("nick:x,string", "s", 1, 0)

    assert field is not None
    assert field.required is True


def test_ref_field_arguments() -> None:
    field = parse_field("products:o,ref,product0,user_id", "user0", 1, 2)

    assert field is not None
    assert field.is_ref
    assert field.ref_sheet == "product0"
    assert field.ref_filter == "user_id"
    assert field.args == ("product0", "user_id")


def test_blank_cell_yields_no_descriptor() -> None:
    assert parse_field("   ", "s", 1, 0) is None


@pytest.mark.parametrize(
    "text",
    [
        "id",
        "int64",
        ":o,int64",
        "id,integer",
        "id,",
        "products,ref",
        "products,ref,product0",
    ],
)
def test_invalid_header_cells_raise(text: str) -> None:
    with pytest.raises(SchemaError) as excinfo:
        parse_field(text, "field0", 1, 4)

    message = str(excinfo.value)
    assert text in message
    assert "field0,1,4" in message
    assert excinfo.value.col == 4


def test_duplicate_key_names_both_cells() -> None:
    with pytest.raises(SchemaError) as excinfo:
        parse_header_cells(["id,int64", "name,string", "id:o,float64"], "user0", 1)

    message = str(excinfo.value)
    assert "user0,1,2" in message
    assert "user0,1,0" in message


def test_header_skips_blank_cells_and_collects_refs() -> None:
    schema = parse_header_cells(
        ["id,int64", "", "a,ref,product0,user_id", "b,ref,product0,name", "c,ref,tag0,id"],
        "user1",
        1,
    )

    assert [field.key for field in schema.fields] == ["id", "a", "b", "c"]
    assert [field.col for field in schema.fields] == [0, 2, 3, 4]
    assert [field.key for field in schema.refs] == ["a", "b", "c"]
    assert schema.ref_sheets == ["product0", "tag0"]


def test_header_parsing_is_idempotent() -> None:
    cells = ["id,int64", "profile.name,string", "when:o,time", "p,ref,product0,user_id=id"]

    assert parse_header_cells(cells, "s", 1) == parse_header_cells(cells, "s", 1)


def test_custom_types_need_opt_in() -> None:
    with pytest.raises(SchemaError):
        parse_field("color,rgb", "s", 1, 0)

    field = parse_field("color,rgb,hex", "s", 1, 0, allow_custom=True)

    assert field is not None
    assert field.type == "rgb"
    assert field.args == ("hex",)
    assert field.to_dict() == {
        "key": "color",
        "req": True,
        "type": "rgb",
        "args": ["hex"],
        "row": 1,
        "col": 0,
    }
