"""Color specs and color grids.

Callers describe colors either directly (any CSS color string) or through a
lookup mapping (``{1: "green", "#": "red"}``) applied to arbitrary grid
values. Everything is resolved to literal strings here, before any command is
built, so a missing key fails the whole operation up front.
"""

from dataclasses import dataclass
from typing import Any, Hashable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from pixel_arts.errors import MissingColorKeyError, ShapeMismatchError
from pixel_arts.types import Cell

ObjectArray = npt.NDArray[np.object_]


@dataclass(frozen=True)
class ColorLiteral:
    """A color string used as-is."""

    value: str


@dataclass(frozen=True)
class LookupKey:
    """A key to be resolved through the caller's color mapping."""

    key: Hashable


ColorSpec = Union[ColorLiteral, LookupKey]
ColorMapping = Mapping[Any, Any]


def resolve_color(spec: Any, mapping: Optional[ColorMapping] = None) -> str:
    """Resolve ``spec`` to a literal color string.

    Plain values are lookup keys when a mapping is given and literals
    (converted with ``str``) otherwise.
    """
    if isinstance(spec, ColorLiteral):
        return spec.value
    if isinstance(spec, LookupKey):
        key = spec.key
    elif mapping is not None:
        key = spec
    else:
        return str(spec)
    if mapping is None or key not in mapping:
        raise MissingColorKeyError(f"No color mapped for grid value {key!r}")
    return str(mapping[key])


def color_grid(array: Any, mapping: Optional[ColorMapping] = None) -> ObjectArray:
    """Return a 2-D object array of resolved color strings for ``array``.

    ``array`` is anything ``numpy.asarray`` understands as a rectangular 2-D
    grid (nested lists, a numpy array, ...). Row ``i`` of the result is grid
    row ``i + 1``.
    """
    grid: ObjectArray = np.asarray(array, dtype=object)
    if grid.ndim != 2 or grid.size == 0:
        raise ShapeMismatchError(
            f"Color grid must be a non-empty rectangular 2-D array, got shape {grid.shape}"
        )
    resolved: ObjectArray = np.empty(grid.shape, dtype=object)
    for index, value in np.ndenumerate(grid):
        resolved[index] = resolve_color(value, mapping)
    return resolved


def grid_cells(vunits: int, hunits: int) -> List[Cell]:
    """All 1-based cells of a grid in row-major order."""
    return [(i, j) for i in range(1, vunits + 1) for j in range(1, hunits + 1)]


def colors_for_positions(
    positions: Sequence[Cell], colours: Union[Any, Sequence[Any]]
) -> List[str]:
    """Pair every position with a color.

    ``colours`` is a single color (broadcast to every position) or a sequence
    of exactly one color per position.
    """
    if not isinstance(colours, (list, tuple, np.ndarray)):
        return [resolve_color(colours)] * len(positions)
    colours = list(colours)
    if len(colours) == 1:
        return [resolve_color(colours[0])] * len(positions)
    if len(colours) != len(positions):
        raise ShapeMismatchError(
            f"Got {len(colours)} colors for {len(positions)} positions"
        )
    return [resolve_color(colour) for colour in colours]


def grid_shape(grid: ObjectArray) -> Tuple[int, int]:
    vunits, hunits = grid.shape
    return int(vunits), int(hunits)
