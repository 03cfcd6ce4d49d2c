import pytest

from pixel_arts.commands import (
    CreateElement,
    Remove,
    SetAttr,
    SetStyle,
    Translate,
    attr_items,
    build_element,
    build_removal,
    build_translate,
    build_update,
)
from pixel_arts.coords import CellTransform, cell_transform
from pixel_arts.errors import InvalidIdentifierError
from pixel_arts.types import ElementType


def test_attr_items_keep_order_and_stringify() -> None:
    assert attr_items({"b": 1, "a": 0.5, "c": "x", "d": 2.0}) == (
        ("b", "1"),
        ("a", "0.5"),
        ("c", "x"),
        ("d", "2"),
    )
    assert attr_items(None) == ()
    assert attr_items({}) == ()


def test_build_element() -> None:
    command = build_element(
        "cv",
        "el1",
        ElementType.PATH,
        cell_transform(2, 3),
        {"d": "M0 0"},
        {"stroke": "red"},
    )
    assert command == CreateElement(
        scope_id="cv",
        element_type="path",
        element_id="el1",
        transform=CellTransform(dx=2, dy=1),
        attrs=(("d", "M0 0"),),
        styles=(("stroke", "red"),),
    )


def test_build_element_accepts_plain_type_names() -> None:
    command = build_element("cv", None, "ellipse", None)
    assert command.element_type == "ellipse"
    assert command.element_id is None
    assert command.attrs == ()


def test_build_element_rejects_bad_ids() -> None:
    with pytest.raises(InvalidIdentifierError):
        build_element("c v", "el", "rect", None)
    with pytest.raises(InvalidIdentifierError):
        build_element("cv", "el#1", "rect", None)


def test_build_removal_scoped_and_unscoped() -> None:
    assert build_removal("cv", "el") == Remove(element_id="el", scope_id="cv")
    assert build_removal(None, "el") == Remove(element_id="el", scope_id=None)


def test_build_update_attrs_and_styles() -> None:
    commands = build_update("el", attrs={"x": 1}, styles={"fill": "red"}, scope_id="cv")
    assert commands == (
        SetAttr("el", (("x", "1"),), "cv"),
        SetStyle("el", (("fill", "red"),), "cv"),
    )


def test_build_update_styles_use_style_mapping_only() -> None:
    (command,) = build_update("el", styles={"opacity": "0.5"})
    assert isinstance(command, SetStyle)
    assert command.styles == (("opacity", "0.5"),)


def test_build_update_empty_is_empty() -> None:
    assert build_update("el") == ()


def test_build_translate() -> None:
    assert build_translate("el", 4, 2) == Translate(
        "el", CellTransform(dx=1, dy=3), None
    )
