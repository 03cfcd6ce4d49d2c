"""Grid-level drawing API.

:class:`PixelArts` turns grid operations into commands, composes them into a
single payload per call and hands it to the render sink. Every element-level
operation accepts ``disp``:

* ``disp=True`` (default) flushes immediately and returns a committed
  :class:`~pixel_arts.compose.Placement`.
* ``disp=False`` returns the uncommitted placement; pass any number of them
  to :meth:`PixelArts.flush` to render them in one payload.

Usage::

    arts = PixelArts()
    cv = arts.create_canvas(10, 10)
    arts.add_pixel(cv, 1, 2, "yellow")
    arrow = arts.add_pixel_arrow(cv, 3, 3, rotate=90)
    arts.remove_element(cv, arrow.element_id)

Canvases may be passed as :class:`~pixel_arts.registry.Canvas` handles or as
bare ids. Pixel anchors and color grids are validated against the extents of
canvases this session knows about; unknown ids are passed through untouched
(the host ignores selectors that match nothing).

The module-level functions at the bottom forward to a process-wide session
rendering through IPython.
"""

import logging
from typing import Any, Iterable, Optional, Sequence, Union

from pixel_arts.colors import (
    ColorMapping,
    color_grid,
    colors_for_positions,
    grid_cells,
    grid_shape,
)
from pixel_arts.commands import (
    Command,
    RawScript,
    build_element,
    build_removal,
    build_translate,
    build_update,
)
from pixel_arts.compose import (
    Batch,
    BatchItem,
    Payload,
    Placement,
    compose,
    is_batch_item,
)
from pixel_arts.config import DEFAULT_CONFIG, PixelArtsConfig
from pixel_arts.coords import canvas_viewport, cell_transform
from pixel_arts.decorations import (
    DEFAULT_COLOUR,
    ImageSource,
    arrow_element,
    cross_element,
    image_element,
    pixel_element,
)
from pixel_arts.display import ipython_sink
from pixel_arts.errors import CoordinateError, ShapeMismatchError
from pixel_arts.ids import (
    ARROW_PREFIX,
    CANVAS_PREFIX,
    CROSS_PREFIX,
    ELEMENT_PREFIX,
    IMAGE_PREFIX,
    IdGenerator,
    validate_id,
)
from pixel_arts.registry import Canvas, CanvasRef, CanvasRegistry, canvas_id_of
from pixel_arts.types import (
    AttrMap,
    CanvasID,
    Cell,
    Coordinate,
    ElementID,
    ElementType,
    RenderSink,
)

logger = logging.getLogger(__name__)


class PixelArts:
    config: PixelArtsConfig
    sink: RenderSink
    ids: IdGenerator
    registry: CanvasRegistry
    last_payload: Optional[Payload]

    def __init__(
        self,
        sink: Optional[RenderSink] = None,
        config: PixelArtsConfig = DEFAULT_CONFIG,
        ids: Optional[IdGenerator] = None,
    ):
        self.config = config
        self.sink = ipython_sink if sink is None else sink
        self.ids = (
            IdGenerator(length=config.id_length, alphabet=config.id_alphabet)
            if ids is None
            else ids
        )
        self.registry = CanvasRegistry()
        self.last_payload = None

    # -------- flushing --------

    def _render(self, payload: Payload) -> Payload:
        logger.debug(
            "Flushing %d command(s), %d chars%s",
            len(payload.commands),
            len(payload.markup),
            f" declaring canvas {payload.canvas.canvas_id}" if payload.canvas else "",
        )
        self.sink(payload.markup)
        self.last_payload = payload
        return payload

    def _commit(
        self,
        element_id: Optional[ElementID],
        commands: Sequence[Command],
        disp: bool,
    ) -> Placement:
        commands = tuple(commands)
        if not disp:
            return Placement(
                element_id=element_id,
                committed=False,
                commands=commands,
                config=self.config,
            )
        payload = self._render(compose(commands, self.config))
        return Placement(
            element_id=element_id,
            committed=True,
            commands=commands,
            payload=payload,
            config=self.config,
        )

    def flush(self, *items: Union[BatchItem, Iterable[BatchItem]]) -> Payload:
        """Render deferred placements and/or commands as one payload, in order.

        Any argument that is not itself a placement or command is iterated,
        so lists, tuples and generators of them are accepted.
        """
        batch = Batch()
        for item in items:
            if is_batch_item(item):
                batch = batch.add(item)
            else:
                batch = batch.extend(item)
        return self._render(batch.compose(self.config))

    def display_js(
        self, script: str, require: Optional[Sequence[str]] = None
    ) -> Payload:
        """Run caller-written script once the ``require`` libraries have loaded.

        Each library is passed to the script under its own name; defaults to
        the configured library alone.
        """
        return self._render(
            compose([RawScript(script)], self.config, require=require)
        )

    # -------- canvases --------

    def _lookup(self, canvas: CanvasRef) -> Optional[Canvas]:
        known = self.registry.get(canvas)
        if known is None and isinstance(canvas, Canvas):
            known = canvas
        if known is None:
            logger.debug("Canvas %r is not registered in this session", canvas)
        return known

    def _check_cell(self, canvas: CanvasRef, cells: Iterable[Cell]) -> CanvasID:
        known = self._lookup(canvas)
        if known is not None:
            for i, j in cells:
                if not known.contains(i, j):
                    raise CoordinateError(
                        f"Cell ({i}, {j}) is outside canvas {known.canvas_id} "
                        f"of {known.vunits}x{known.hunits} cells"
                    )
        return validate_id(canvas_id_of(canvas))

    def create_canvas(
        self,
        vunits: int,
        hunits: int,
        height: Optional[int] = None,
        width: Optional[int] = None,
        canvas_id: Optional[CanvasID] = None,
        commands: Sequence[Command] = (),
    ) -> Canvas:
        """Declare a ``vunits`` x ``hunits`` canvas and render it.

        ``commands`` are rendered in the same payload, after the canvas
        exists. A generated id is used when ``canvas_id`` is None.
        """
        height = self.config.default_height if height is None else height
        width = self.config.default_width if width is None else width
        canvas_viewport(vunits, hunits, height, width)
        canvas_id = (
            self.ids.new_id(CANVAS_PREFIX)
            if canvas_id is None
            else validate_id(canvas_id)
        )
        canvas = Canvas(
            canvas_id=canvas_id,
            vunits=int(vunits),
            hunits=int(hunits),
            height=height,
            width=width,
        )
        self._render(compose(commands, self.config, canvas=canvas))
        self.registry = self.registry.register(canvas)
        return canvas

    def remove_canvas(self, canvas: CanvasRef) -> Payload:
        """Detach the canvas root, and with it every element it owns."""
        canvas_id = canvas_id_of(canvas)
        payload = self._render(
            compose([build_removal(None, canvas_id)], self.config)
        )
        self.registry = self.registry.unregister(canvas_id)
        return payload

    def render_bg(
        self,
        array: Any,
        colour_dict: Optional[ColorMapping] = None,
        height: Optional[int] = None,
        width: Optional[int] = None,
        canvas_id: Optional[CanvasID] = None,
    ) -> Canvas:
        """Create a canvas sized to ``array`` and fill every cell, in one payload.

        Without ``colour_dict`` the array holds colors; with it, each value is
        resolved through the mapping.
        """
        colours = color_grid(array, colour_dict)
        vunits, hunits = grid_shape(colours)
        # Id is drawn before building pixels so they can be scoped to it.
        canvas_id = (
            self.ids.new_id(CANVAS_PREFIX)
            if canvas_id is None
            else validate_id(canvas_id)
        )
        commands = [
            pixel_element(canvas_id, i, j, colours[i - 1, j - 1])
            for i, j in grid_cells(vunits, hunits)
        ]
        return self.create_canvas(
            vunits, hunits, height, width, canvas_id=canvas_id, commands=commands
        )

    # -------- pixels --------

    def add_pixel(
        self,
        canvas: CanvasRef,
        i: int,
        j: int,
        colour: Any = DEFAULT_COLOUR,
        element_id: Optional[ElementID] = None,
        attrs: Optional[AttrMap] = None,
        styles: Optional[AttrMap] = None,
        disp: bool = True,
    ) -> Placement:
        canvas_id = self._check_cell(canvas, [(i, j)])
        (colour,) = colors_for_positions([(i, j)], colour)
        command = pixel_element(canvas_id, i, j, colour, element_id, attrs, styles)
        return self._commit(element_id, [command], disp)

    def add_pixels(
        self,
        canvas: CanvasRef,
        positions: Sequence[Sequence[int]],
        colours: Any = DEFAULT_COLOUR,
        attrs: Optional[AttrMap] = None,
        styles: Optional[AttrMap] = None,
        disp: bool = True,
    ) -> Placement:
        """Place one pixel per ``(i, j)`` position.

        ``colours`` is a single color or one color per position.
        """
        cells = []
        for position in positions:
            if len(position) != 2:
                raise ShapeMismatchError(
                    f"Positions must be (row, column) pairs, got {position!r}"
                )
            cells.append((position[0], position[1]))
        canvas_id = self._check_cell(canvas, cells)
        resolved = colors_for_positions(cells, colours)
        commands = [
            pixel_element(canvas_id, i, j, colour, attrs=attrs, styles=styles)
            for (i, j), colour in zip(cells, resolved)
        ]
        return self._commit(None, commands, disp)

    def add_pixel_grid(
        self,
        canvas: CanvasRef,
        colour_array: Any,
        colour_dict: Optional[ColorMapping] = None,
        disp: bool = True,
    ) -> Placement:
        """Fill the grid from a 2-D color array in row-major order.

        The array shape must equal the canvas extents when the canvas is known.
        """
        colours = color_grid(colour_array, colour_dict)
        vunits, hunits = grid_shape(colours)
        known = self._lookup(canvas)
        if known is not None and (known.vunits, known.hunits) != (vunits, hunits):
            raise ShapeMismatchError(
                f"Color array of shape {vunits}x{hunits} does not match canvas "
                f"{known.canvas_id} of {known.vunits}x{known.hunits} cells"
            )
        canvas_id = validate_id(canvas_id_of(canvas))
        commands = [
            pixel_element(canvas_id, i, j, colours[i - 1, j - 1])
            for i, j in grid_cells(vunits, hunits)
        ]
        return self._commit(None, commands, disp)

    # -------- generic elements --------

    def add_element(
        self,
        canvas: CanvasRef,
        element_type: Union[ElementType, str],
        i: Coordinate = 1,
        j: Coordinate = 1,
        attrs: Optional[AttrMap] = None,
        styles: Optional[AttrMap] = None,
        element_id: Optional[ElementID] = None,
        disp: bool = True,
    ) -> Placement:
        """Append any SVG element anchored at cell (i, j)."""
        if element_id is None:
            element_id = self.ids.new_id(ELEMENT_PREFIX)
        command = build_element(
            canvas_id_of(canvas),
            element_id,
            element_type,
            cell_transform(i, j),
            attrs,
            styles,
        )
        return self._commit(element_id, [command], disp)

    def remove_element(
        self,
        canvas: CanvasRef,
        element_id: ElementID,
        disp: bool = True,
    ) -> Placement:
        """Detach an element of ``canvas`` if it exists; a missing id is a no-op."""
        scope_id = canvas_id_of(canvas)
        return self._commit(element_id, [build_removal(scope_id, element_id)], disp)

    def set_attr(
        self,
        canvas: CanvasRef,
        element_id: ElementID,
        attrs: AttrMap,
        disp: bool = True,
    ) -> Placement:
        scope_id = canvas_id_of(canvas)
        return self._commit(
            element_id, build_update(element_id, attrs=attrs, scope_id=scope_id), disp
        )

    def set_style(
        self,
        canvas: CanvasRef,
        element_id: ElementID,
        styles: AttrMap,
        disp: bool = True,
    ) -> Placement:
        scope_id = canvas_id_of(canvas)
        return self._commit(
            element_id, build_update(element_id, styles=styles, scope_id=scope_id), disp
        )

    def translate_element(
        self,
        canvas: CanvasRef,
        element_id: ElementID,
        i: Coordinate,
        j: Coordinate,
        disp: bool = True,
    ) -> Placement:
        """Re-anchor an element of ``canvas`` at cell (i, j)."""
        scope_id = canvas_id_of(canvas)
        return self._commit(
            element_id, [build_translate(element_id, i, j, scope_id)], disp
        )

    # -------- decorations --------

    def add_pixel_cross(
        self,
        canvas: CanvasRef,
        i: int,
        j: int,
        colour: Any = DEFAULT_COLOUR,
        element_id: Optional[ElementID] = None,
        disp: bool = True,
    ) -> Placement:
        if element_id is None:
            element_id = self.ids.new_id(CROSS_PREFIX)
        command = cross_element(canvas_id_of(canvas), element_id, i, j, str(colour))
        return self._commit(element_id, [command], disp)

    def add_pixel_arrow(
        self,
        canvas: CanvasRef,
        i: int,
        j: int,
        rotate: Coordinate = 0,
        colour: Any = DEFAULT_COLOUR,
        element_id: Optional[ElementID] = None,
        disp: bool = True,
    ) -> Placement:
        if element_id is None:
            element_id = self.ids.new_id(ARROW_PREFIX)
        command = arrow_element(
            canvas_id_of(canvas), element_id, i, j, rotate, str(colour)
        )
        return self._commit(element_id, [command], disp)

    def add_pixel_image(
        self,
        canvas: CanvasRef,
        i: int,
        j: int,
        source: ImageSource,
        attrs: Optional[AttrMap] = None,
        styles: Optional[AttrMap] = None,
        element_id: Optional[ElementID] = None,
        disp: bool = True,
    ) -> Placement:
        """Place a unit-size image; ``source`` is a URL/path or a Pillow image."""
        if element_id is None:
            element_id = self.ids.new_id(IMAGE_PREFIX)
        command = image_element(
            canvas_id_of(canvas), element_id, i, j, source, attrs, styles
        )
        return self._commit(element_id, [command], disp)


_default_session = PixelArts()


def default_session() -> PixelArts:
    """The process-wide session behind the module-level functions."""
    return _default_session


create_canvas = _default_session.create_canvas
remove_canvas = _default_session.remove_canvas
render_bg = _default_session.render_bg
add_pixel = _default_session.add_pixel
add_pixels = _default_session.add_pixels
add_pixel_grid = _default_session.add_pixel_grid
add_element = _default_session.add_element
remove_element = _default_session.remove_element
set_attr = _default_session.set_attr
set_style = _default_session.set_style
translate_element = _default_session.translate_element
add_pixel_cross = _default_session.add_pixel_cross
add_pixel_arrow = _default_session.add_pixel_arrow
add_pixel_image = _default_session.add_pixel_image
display_js = _default_session.display_js
flush = _default_session.flush
