"""Grid coordinate mapping.

A canvas declares a viewBox of ``0 0 hunits vunits`` so one viewBox unit is
exactly one grid cell; the displayed height/width only scale the picture.
Cells are 1-based (row ``i``, column ``j``) and a unit-square element anchored
at cell (i, j) is translated to its zero-based top-left corner
``(j - 1, i - 1)``.

Functions here are pure.
"""

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Tuple

from pixel_arts.errors import InvalidExtentError
from pixel_arts.types import Coordinate


def format_number(value: Coordinate) -> str:
    """Render a number for SVG output, dropping a redundant ``.0``."""
    if isinstance(value, Integral):
        return str(int(value))
    as_float = float(value)
    if as_float.is_integer():
        return str(int(as_float))
    return repr(as_float)


@dataclass(frozen=True)
class CellTransform:
    """SVG transform of an element anchored in the grid.

    Attributes:
        dx: Horizontal translation in grid units (zero-based column).
        dy: Vertical translation in grid units (zero-based row).
        rotate: Optional rotation in degrees, applied after the translation.
    """

    dx: Coordinate
    dy: Coordinate
    rotate: Coordinate = 0

    def svg(self) -> str:
        out = f"translate({format_number(self.dx)},{format_number(self.dy)})"
        if self.rotate:
            out += f" rotate({format_number(self.rotate)})"
        return out

    def cell(self) -> Tuple[Coordinate, Coordinate]:
        """Inverse of :func:`cell_transform`: the (row, column) anchor."""
        return (self.dy + 1, self.dx + 1)


def cell_transform(i: Coordinate, j: Coordinate) -> CellTransform:
    """Top-left anchored transform for cell (i, j)."""
    return CellTransform(dx=j - 1, dy=i - 1)


def cell_center_transform(
    i: Coordinate, j: Coordinate, rotate: Coordinate = 0
) -> CellTransform:
    """Transform placing the element origin at the centre of cell (i, j)."""
    return CellTransform(dx=j - 0.5, dy=i - 0.5, rotate=rotate)


@dataclass(frozen=True)
class Viewport:
    """Canvas viewBox plus its on-screen size in pixels."""

    viewbox: Tuple[int, int, int, int]
    height: int
    width: int

    def viewbox_str(self) -> str:
        return " ".join(str(v) for v in self.viewbox)


def validate_extent(vunits: object, hunits: object) -> None:
    """Reject grid extents that are not positive integers."""
    for name, value in (("vunits", vunits), ("hunits", hunits)):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidExtentError(
                f"{name} must be a positive integer, got {value!r}"
            )
        if value <= 0:
            raise InvalidExtentError(f"{name} must be positive, got {value}")


def canvas_viewport(vunits: int, hunits: int, height: int, width: int) -> Viewport:
    """Return the viewport of a ``vunits`` x ``hunits`` grid shown at ``height`` x ``width``."""
    validate_extent(vunits, hunits)
    for name, value in (("height", height), ("width", width)):
        if isinstance(value, bool) or not isinstance(value, Real) or value <= 0:
            raise ValueError(f"Display {name} must be a positive number, got {value!r}")
    return Viewport(
        viewbox=(0, 0, int(hunits), int(vunits)), height=height, width=width
    )
