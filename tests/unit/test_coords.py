import numpy as np
import pytest

from pixel_arts.coords import (
    CellTransform,
    canvas_viewport,
    cell_center_transform,
    cell_transform,
    format_number,
    validate_extent,
)
from pixel_arts.errors import InvalidExtentError


@pytest.mark.parametrize("i, j", [(1, 1), (1, 5), (4, 2), (10, 10), (3, 7)])
def test_cell_transform_is_zero_based(i: int, j: int) -> None:
    transform = cell_transform(i, j)
    assert transform == CellTransform(dx=j - 1, dy=i - 1)
    assert transform.svg() == f"translate({j - 1},{i - 1})"


def test_cell_transform_inverse() -> None:
    assert cell_transform(3, 5).cell() == (3, 5)


def test_fractional_anchor() -> None:
    assert cell_transform(1.5, 2.25).svg() == "translate(1.25,0.5)"


def test_cell_center_transform_with_rotation() -> None:
    transform = cell_center_transform(2, 3, rotate=-90)
    assert transform.svg() == "translate(2.5,1.5) rotate(-90)"


def test_zero_rotation_is_omitted() -> None:
    assert cell_center_transform(1, 1).svg() == "translate(0.5,0.5)"


@pytest.mark.parametrize(
    "value, expected",
    [(0, "0"), (2, "2"), (1.0, "1"), (0.5, "0.5"), (-1.5, "-1.5"), (np.int64(3), "3")],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "vunits, hunits, height, width", [(2, 2, 250, 250), (3, 8, 100, 400), (1, 1, 10, 10)]
)
def test_viewport_has_one_unit_per_cell(
    vunits: int, hunits: int, height: int, width: int
) -> None:
    viewport = canvas_viewport(vunits, hunits, height, width)
    assert viewport.viewbox == (0, 0, hunits, vunits)
    assert viewport.viewbox_str() == f"0 0 {hunits} {vunits}"
    assert (viewport.height, viewport.width) == (height, width)


@pytest.mark.parametrize(
    "vunits, hunits", [(0, 2), (2, 0), (-1, 3), (2.5, 2), (2, "3"), (True, 2)]
)
def test_invalid_extents_are_rejected(vunits: object, hunits: object) -> None:
    with pytest.raises(InvalidExtentError):
        validate_extent(vunits, hunits)


def test_numpy_integer_extents_are_accepted() -> None:
    validate_extent(np.int64(4), np.int32(5))


def test_invalid_display_size() -> None:
    with pytest.raises(ValueError):
        canvas_viewport(2, 2, 0, 250)
