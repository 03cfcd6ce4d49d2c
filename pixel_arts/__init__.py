"""pixel_arts
=================

Grid-addressable pixel art for notebook output areas.

A canvas is an ``svg`` whose viewBox has one unit per grid cell; callers
color cells by 1-based (row, column) and anchor decorations (crosses, arrows,
images, any SVG element) to cells. Operations become structured commands,
composed into one HTML/script payload per call and handed to a render sink
(IPython's ``display`` by default)::

    from pixel_arts import PixelArts

    arts = PixelArts()
    cv = arts.render_bg([["green", "red"], ["yellow", "blue"]])
    arts.add_pixel_cross(cv, 1, 2, "white")

The same operations are available as module-level functions bound to a
process-wide session, e.g. ``pixel_arts.create_canvas(10, 10)``.
"""

from .colors import ColorLiteral, ColorSpec, LookupKey, resolve_color
from .commands import (
    Command,
    CreateElement,
    RawScript,
    Remove,
    SetAttr,
    SetStyle,
    Translate,
    build_element,
    build_removal,
    build_translate,
    build_update,
)
from .compose import Batch, Payload, Placement, compose, pixel_colors, serialize
from .config import DEFAULT_CONFIG, PixelArtsConfig
from .coords import CellTransform, Viewport, canvas_viewport, cell_transform
from .display import RecordingSink, ipython_sink
from .errors import (
    CoordinateError,
    InvalidExtentError,
    InvalidIdentifierError,
    MissingColorKeyError,
    PixelArtsError,
    ShapeMismatchError,
)
from .ids import IdGenerator, new_id
from .registry import Canvas, CanvasRegistry
from .session import (
    PixelArts,
    add_element,
    add_pixel,
    add_pixel_arrow,
    add_pixel_cross,
    add_pixel_grid,
    add_pixel_image,
    add_pixels,
    create_canvas,
    default_session,
    display_js,
    flush,
    remove_canvas,
    remove_element,
    render_bg,
    set_attr,
    set_style,
    translate_element,
)
from .types import ElementType

__all__ = [
    # Session
    "PixelArts",
    "default_session",
    "create_canvas",
    "remove_canvas",
    "render_bg",
    "add_pixel",
    "add_pixels",
    "add_pixel_grid",
    "add_element",
    "remove_element",
    "set_attr",
    "set_style",
    "translate_element",
    "add_pixel_cross",
    "add_pixel_arrow",
    "add_pixel_image",
    "display_js",
    "flush",
    # Building blocks
    "Batch",
    "Canvas",
    "CanvasRegistry",
    "CellTransform",
    "Command",
    "CreateElement",
    "ElementType",
    "IdGenerator",
    "Payload",
    "Placement",
    "RawScript",
    "Remove",
    "SetAttr",
    "SetStyle",
    "Translate",
    "Viewport",
    "build_element",
    "build_removal",
    "build_translate",
    "build_update",
    "canvas_viewport",
    "cell_transform",
    "compose",
    "new_id",
    "pixel_colors",
    "serialize",
    # Colors
    "ColorLiteral",
    "ColorSpec",
    "LookupKey",
    "resolve_color",
    # Config & sinks
    "DEFAULT_CONFIG",
    "PixelArtsConfig",
    "RecordingSink",
    "ipython_sink",
    # Errors
    "CoordinateError",
    "InvalidExtentError",
    "InvalidIdentifierError",
    "MissingColorKeyError",
    "PixelArtsError",
    "ShapeMismatchError",
]
