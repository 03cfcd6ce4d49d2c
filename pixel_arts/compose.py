"""Payload composition.

This is the only module that turns :mod:`pixel_arts.commands` values into
markup and script text. A payload is what one flush hands to the render
sink; any number of commands compose into exactly one payload::

    <div class="usersvg"><svg id=... viewBox="0 0 H V"></svg></div>   (canvas only)
    <script>requirejs.config({paths: {"d3": [...]}});</script>          (canvas only)
    <script>
    require(["d3"], function(d3) {
    ...one statement per command, in order...
    });
    </script>

Design notes:

* Every caller-supplied value is written as a JSON string literal with
  ``</`` escaped, so nothing can close the surrounding ``<script>`` block.
  Ids are validated when commands are built and only ever appear inside
  those literals.
* Commands run sequentially in the host, so a later command observes the
  effect of an earlier one on the same element.
* Deferred operations return a :class:`Placement`; its commands can be
  accumulated in a :class:`Batch` and flushed together later.
"""

import html
import json
import re
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pyrsistent import pvector
from pyrsistent.typing import PVector

from pixel_arts.commands import (
    COMMAND_TYPES,
    Command,
    CreateElement,
    RawScript,
    Remove,
    SetAttr,
    SetStyle,
    Translate,
)
from pixel_arts.config import DEFAULT_CONFIG, PixelArtsConfig
from pixel_arts.coords import canvas_viewport
from pixel_arts.registry import Canvas
from pixel_arts.types import AttrItems, CanvasID, Coordinate, ElementID, ElementType

_JS_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

def js_string(value: str) -> str:
    """Quote ``value`` as a JavaScript string literal safe inside ``<script>``."""
    return json.dumps(value).replace("</", "<\\/")


def selector(
    config: PixelArtsConfig,
    element_id: Optional[ElementID],
    scope_id: Optional[CanvasID] = None,
) -> str:
    """Composite selector scoping an element lookup to one canvas."""
    parts = [f".{config.scope_class}"]
    if scope_id is not None:
        parts.append(f"#{scope_id}")
    if element_id is not None:
        parts.append(f"#{element_id}")
    return " ".join(parts)


def _chain(method: str, items: AttrItems) -> str:
    return "".join(
        f".{method}({js_string(key)}, {js_string(value)})" for key, value in items
    )


def serialize(command: Command, config: PixelArtsConfig = DEFAULT_CONFIG) -> str:
    """Render one command as a single JavaScript statement."""
    if isinstance(command, CreateElement):
        out = f"d3.select({js_string(selector(config, None, command.scope_id))})"
        out += f".append({js_string(command.element_type)})"
        if command.element_id is not None:
            out += _chain("attr", (("id", command.element_id),))
        if command.transform is not None:
            out += _chain("attr", (("transform", command.transform.svg()),))
        out += _chain("attr", command.attrs)
        out += _chain("style", command.styles)
        return out + ";"
    if isinstance(command, SetAttr):
        target = js_string(selector(config, command.element_id, command.scope_id))
        return f"d3.select({target}){_chain('attr', command.attrs)};"
    if isinstance(command, SetStyle):
        target = js_string(selector(config, command.element_id, command.scope_id))
        return f"d3.select({target}){_chain('style', command.styles)};"
    if isinstance(command, Translate):
        target = js_string(selector(config, command.element_id, command.scope_id))
        return (
            f"d3.select({target})"
            f"{_chain('attr', (('transform', command.transform.svg()),))};"
        )
    if isinstance(command, Remove):
        target = js_string(selector(config, command.element_id, command.scope_id))
        return (
            "(function() {"
            f" var node = document.querySelector({target});"
            " if (node !== null) { node.parentNode.removeChild(node); }"
            " })();"
        )
    if isinstance(command, RawScript):
        return command.script
    raise TypeError(f"Unknown command: {command!r}")


def script_body(
    commands: Iterable[Command], config: PixelArtsConfig = DEFAULT_CONFIG
) -> str:
    """Serialized commands, one statement per line, without envelope."""
    return "\n".join(serialize(command, config) for command in commands)


def require_block(
    body: str,
    config: PixelArtsConfig = DEFAULT_CONFIG,
    require: Optional[Sequence[str]] = None,
) -> str:
    """Wrap ``body`` in a script running once the ``require`` libraries have loaded.

    Each library is bound to a callback parameter of the same name, so names
    must be JavaScript identifiers. Defaults to ``config.library`` alone.
    """
    libraries = (config.library,) if require is None else tuple(require)
    for library in libraries:
        if not _JS_IDENTIFIER.fullmatch(library):
            raise ValueError(f"Library name {library!r} is not a JavaScript identifier")
    names = ", ".join(js_string(library) for library in libraries)
    params = ", ".join(libraries)
    return (
        "<script>\n"
        f"require([{names}], function({params}) {{\n"
        f"{body}\n"
        "});\n"
        "</script>"
    )


def canvas_markup(canvas: Canvas, config: PixelArtsConfig = DEFAULT_CONFIG) -> str:
    """Wrapper ``div``/``svg`` of a canvas plus the library dependency declaration."""
    viewport = canvas_viewport(canvas.vunits, canvas.hunits, canvas.height, canvas.width)
    paths = ", ".join(js_string(path) for path in config.library_paths)
    return (
        f'<div class="{html.escape(config.scope_class)}">\n'
        f'<svg id="{html.escape(canvas.canvas_id)}" '
        f'width="{viewport.width}" height="{viewport.height}" '
        f'viewBox="{viewport.viewbox_str()}"></svg>\n'
        "</div>\n"
        "<script>\n"
        f"requirejs.config({{paths: {{{js_string(config.library)}: [{paths}]}}}});\n"
        "</script>"
    )


@dataclass(frozen=True)
class Payload:
    """The result of one flush.

    Attributes:
        markup: Exact string handed to the render sink.
        commands: Commands carried by the script block, in execution order.
        canvas: Canvas declared by this payload, if it creates one.
    """

    markup: str
    commands: Tuple[Command, ...] = ()
    canvas: Optional[Canvas] = None

    def __str__(self) -> str:
        return self.markup


def compose(
    commands: Iterable[Command],
    config: PixelArtsConfig = DEFAULT_CONFIG,
    canvas: Optional[Canvas] = None,
    require: Optional[Sequence[str]] = None,
) -> Payload:
    """Compose ``commands`` (and optionally a canvas declaration) into one payload."""
    commands = tuple(commands)
    parts: List[str] = []
    if canvas is not None:
        parts.append(canvas_markup(canvas, config))
    if commands or canvas is None:
        parts.append(require_block(script_body(commands, config), config, require))
    return Payload(markup="\n".join(parts), commands=commands, canvas=canvas)


@dataclass(frozen=True)
class Placement:
    """Result of an element-level operation.

    Attributes:
        element_id: Id of the affected element; None for anonymous pixels.
        committed: True if the commands were flushed to the sink.
        commands: Commands making up the operation.
        payload: The flushed payload, None when deferred.
        config: Configuration the commands are serialized with.
    """

    element_id: Optional[ElementID]
    committed: bool
    commands: Tuple[Command, ...]
    payload: Optional[Payload] = None
    config: PixelArtsConfig = DEFAULT_CONFIG

    @property
    def script(self) -> str:
        """Raw script of the commands, for manual concatenation."""
        return script_body(self.commands, self.config)


BatchItem = Union[
    CreateElement, SetAttr, SetStyle, Translate, Remove, RawScript, Placement
]


def is_batch_item(item: object) -> bool:
    return isinstance(item, (Placement,) + COMMAND_TYPES)


@dataclass(frozen=True)
class Batch:
    """Immutable accumulator of commands flushed together."""

    commands: PVector[Command] = pvector()

    def add(self, item: BatchItem) -> "Batch":
        if isinstance(item, Placement):
            return replace(self, commands=self.commands.extend(item.commands))
        if not isinstance(item, COMMAND_TYPES):
            raise TypeError(
                f"Batch accepts commands or placements, got {type(item).__name__}"
            )
        return replace(self, commands=self.commands.append(item))

    def extend(self, items: Iterable[BatchItem]) -> "Batch":
        batch = self
        for item in items:
            batch = batch.add(item)
        return batch

    def compose(
        self, config: PixelArtsConfig = DEFAULT_CONFIG, canvas: Optional[Canvas] = None
    ) -> Payload:
        return compose(self.commands, config, canvas)

    def __len__(self) -> int:
        return len(self.commands)


def _last(items: AttrItems, key: str) -> Optional[str]:
    value: Optional[str] = None
    for k, v in items:
        if k == key:
            value = v
    return value


def pixel_colors(
    commands: Iterable[Command],
) -> Dict[Tuple[Coordinate, Coordinate], str]:
    """Read (row, column) -> fill color back out of pixel creation commands.

    Later pixels at the same cell override earlier ones, as they do on screen.
    A ``fill`` style takes precedence over a ``fill`` attribute.
    """
    colors: Dict[Tuple[Coordinate, Coordinate], str] = {}
    for command in commands:
        if not isinstance(command, CreateElement):
            continue
        if command.element_type != ElementType.RECT or command.transform is None:
            continue
        fill = _last(command.styles, "fill") or _last(command.attrs, "fill")
        if fill is not None:
            colors[command.transform.cell()] = fill
    return colors
