"""Structured rendering commands.

A command is an immutable value meaning "select target T, perform operation O
with parameters P". Nothing here produces JavaScript: commands are turned into
script text only by :mod:`pixel_arts.compose`, which is therefore the single
place where caller-supplied values get escaped.

Variants:

* :class:`CreateElement` appends a new node under a canvas.
* :class:`SetAttr` / :class:`SetStyle` overwrite attributes / styles of an
  existing node, key by key.
* :class:`Translate` replaces the transform of an existing node.
* :class:`Remove` detaches a node if it exists (idempotent).
* :class:`RawScript` carries caller-written script verbatim.

Attribute and style maps are flat key -> value overwrites in mapping order; a
key written twice keeps its last value. Defaults (e.g. an image's placeholder
size) are merged by the caller *before* building.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Optional, Tuple, Union

from pixel_arts.coords import CellTransform, cell_transform, format_number
from pixel_arts.ids import validate_id
from pixel_arts.types import (
    AttrItems,
    AttrMap,
    CanvasID,
    Coordinate,
    ElementID,
    ElementType,
)


def attr_items(mapping: Optional[AttrMap]) -> AttrItems:
    """Freeze a mapping into ordered ``(key, value)`` string pairs."""
    if not mapping:
        return ()
    items = []
    for key, value in mapping.items():
        if isinstance(value, Real) and not isinstance(value, bool):
            text = format_number(value)
        else:
            text = str(value)
        items.append((str(key), text))
    return tuple(items)


@dataclass(frozen=True)
class CreateElement:
    """Append ``element_type`` under canvas ``scope_id``.

    Attributes:
        scope_id: Owning canvas.
        element_type: SVG tag name.
        element_id: Node id, or None for anonymous nodes (plain pixels).
        transform: Grid anchor; None leaves the node untransformed.
        attrs: Attribute pairs applied after id and transform.
        styles: Style pairs applied after the attributes.
    """

    scope_id: CanvasID
    element_type: str
    element_id: Optional[ElementID] = None
    transform: Optional[CellTransform] = None
    attrs: AttrItems = ()
    styles: AttrItems = ()


@dataclass(frozen=True)
class SetAttr:
    element_id: ElementID
    attrs: AttrItems
    scope_id: Optional[CanvasID] = None


@dataclass(frozen=True)
class SetStyle:
    element_id: ElementID
    styles: AttrItems
    scope_id: Optional[CanvasID] = None


@dataclass(frozen=True)
class Translate:
    element_id: ElementID
    transform: CellTransform
    scope_id: Optional[CanvasID] = None


@dataclass(frozen=True)
class Remove:
    """Detach ``element_id`` if present; ``scope_id`` None looks it up globally under the wrapper class."""

    element_id: ElementID
    scope_id: Optional[CanvasID] = None


@dataclass(frozen=True)
class RawScript:
    script: str


Command = Union[CreateElement, SetAttr, SetStyle, Translate, Remove, RawScript]
COMMAND_TYPES = (CreateElement, SetAttr, SetStyle, Translate, Remove, RawScript)


def _check_scope(scope_id: Optional[CanvasID]) -> Optional[CanvasID]:
    return None if scope_id is None else validate_id(scope_id)


def build_element(
    scope_id: CanvasID,
    element_id: Optional[ElementID],
    element_type: Union[ElementType, str],
    transform: Optional[CellTransform],
    attrs: Optional[AttrMap] = None,
    styles: Optional[AttrMap] = None,
) -> CreateElement:
    """Build the creation command for one element."""
    if not str(element_type):
        raise ValueError("Element type must not be empty")
    return CreateElement(
        scope_id=validate_id(scope_id),
        element_type=str(element_type),
        element_id=None if element_id is None else validate_id(element_id),
        transform=transform,
        attrs=attr_items(attrs),
        styles=attr_items(styles),
    )


def build_removal(
    scope_id: Optional[CanvasID], element_id: ElementID
) -> Remove:
    return Remove(element_id=validate_id(element_id), scope_id=_check_scope(scope_id))


def build_update(
    element_id: ElementID,
    attrs: Optional[AttrMap] = None,
    styles: Optional[AttrMap] = None,
    scope_id: Optional[CanvasID] = None,
) -> Tuple[Command, ...]:
    """Re-apply attributes and/or styles to an existing element.

    Returns an empty tuple when both maps are empty.
    """
    element_id = validate_id(element_id)
    scope_id = _check_scope(scope_id)
    commands: Tuple[Command, ...] = ()
    if attrs:
        commands += (SetAttr(element_id, attr_items(attrs), scope_id),)
    if styles:
        commands += (SetStyle(element_id, attr_items(styles), scope_id),)
    return commands


def build_translate(
    element_id: ElementID,
    i: Coordinate,
    j: Coordinate,
    scope_id: Optional[CanvasID] = None,
) -> Translate:
    """Move an element so that it is anchored at cell (i, j)."""
    return Translate(validate_id(element_id), cell_transform(i, j), _check_scope(scope_id))
