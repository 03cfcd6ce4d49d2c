"""Cell-anchored element presets.

Each builder returns a single :class:`~pixel_arts.commands.CreateElement`
describing a pixel or a decoration at grid cell (i, j). Builders are pure;
id generation and flushing belong to :mod:`pixel_arts.session`.

Geometry is in grid units (one cell is a 1x1 square):

* pixel: filled 1x1 ``rect`` at the cell's top-left corner.
* cross: ``path`` through the middle of the cell, both axes.
* arrow: ``path`` from the cell centre, pointing ``rotate`` degrees
  counter-clockwise from "right" (0 = right, 90 = up).
* image: 1x1 ``image`` at the cell's top-left corner.
"""

import base64
import io
from typing import Dict, Optional, Union

from PIL import Image

from pixel_arts.commands import CreateElement, build_element
from pixel_arts.coords import cell_center_transform, cell_transform
from pixel_arts.types import (
    AttrMap,
    CanvasID,
    Coordinate,
    ElementID,
    ElementType,
)

CROSS_PATH = "M0.5 0 L0.5 1 M0 0.5 L1 0.5"
CROSS_STROKE_WIDTH = 0.2
ARROW_PATH = "M0 0 L0 0.5 M -0.15 0.3 L0 0.5 L0.15 0.3"
ARROW_STROKE_WIDTH = 0.1
DEFAULT_COLOUR = "black"

ImageSource = Union[str, Image.Image]


def pixel_element(
    scope_id: CanvasID,
    i: Coordinate,
    j: Coordinate,
    colour: str = DEFAULT_COLOUR,
    element_id: Optional[ElementID] = None,
    attrs: Optional[AttrMap] = None,
    styles: Optional[AttrMap] = None,
) -> CreateElement:
    """Unit ``rect`` filled with ``colour``; caller attrs/styles override the defaults."""
    merged_attrs: Dict[str, object] = {"width": "1", "height": "1"}
    merged_attrs.update(attrs or {})
    merged_styles: Dict[str, object] = {"fill": colour}
    merged_styles.update(styles or {})
    return build_element(
        scope_id,
        element_id,
        ElementType.RECT,
        cell_transform(i, j),
        merged_attrs,
        merged_styles,
    )


def cross_element(
    scope_id: CanvasID,
    element_id: ElementID,
    i: Coordinate,
    j: Coordinate,
    colour: str = DEFAULT_COLOUR,
) -> CreateElement:
    return build_element(
        scope_id,
        element_id,
        ElementType.PATH,
        cell_transform(i, j),
        {"d": CROSS_PATH},
        {"stroke": colour, "stroke-width": CROSS_STROKE_WIDTH},
    )


def arrow_element(
    scope_id: CanvasID,
    element_id: ElementID,
    i: Coordinate,
    j: Coordinate,
    rotate: Coordinate = 0,
    colour: str = DEFAULT_COLOUR,
) -> CreateElement:
    # The path points down (+y); -90 turns it to point right at rotate=0.
    return build_element(
        scope_id,
        element_id,
        ElementType.PATH,
        cell_center_transform(i, j, rotate=-rotate - 90),
        {"d": ARROW_PATH},
        {"stroke": colour, "stroke-width": ARROW_STROKE_WIDTH},
    )


def image_href(source: ImageSource) -> str:
    """Return an ``href`` for ``source``.

    Strings (URLs or paths served by the notebook) pass through; Pillow images
    are embedded in memory as a PNG data URI.
    """
    if isinstance(source, Image.Image):
        buffer = io.BytesIO()
        image = source if source.mode in ("RGB", "RGBA") else source.convert("RGBA")
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
    return str(source)


def image_element(
    scope_id: CanvasID,
    element_id: ElementID,
    i: Coordinate,
    j: Coordinate,
    source: ImageSource,
    attrs: Optional[AttrMap] = None,
    styles: Optional[AttrMap] = None,
) -> CreateElement:
    """Unit ``image``; ``attrs`` are merged over the placeholder defaults."""
    merged: Dict[str, object] = {
        "xlink:href": image_href(source),
        "x": "0",
        "y": "0",
        "width": "1px",
        "height": "1px",
    }
    merged.update(attrs or {})
    return build_element(
        scope_id,
        element_id,
        ElementType.IMAGE,
        cell_transform(i, j),
        merged,
        styles,
    )
