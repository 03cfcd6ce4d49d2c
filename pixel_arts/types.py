"""Common type aliases and enumerations.

``RenderSink`` is the single extension point towards the host display: every
composed payload is handed to one of these callables as a string.
"""

from enum import StrEnum
from typing import Callable, Mapping, Tuple, Union

CanvasID = str
ElementID = str

# Grid anchor (row, column), 1-based. Floats allow sub-cell placement.
Coordinate = Union[int, float]
Cell = Tuple[int, int]

AttrMap = Mapping[str, object]
AttrItems = Tuple[Tuple[str, str], ...]

RenderSink = Callable[[str], None]


class ElementType(StrEnum):
    """Built-in SVG element types. Any other SVG tag name is accepted as a plain string."""

    RECT = "rect"
    PATH = "path"
    IMAGE = "image"
    CIRCLE = "circle"
    LINE = "line"
