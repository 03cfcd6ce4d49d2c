"""Canvas handles and the session-local canvas registry.

The host page is the only authority on which canvases exist; the registry
here is bookkeeping of what *this* session created, used to validate pixel
anchors and array shapes against declared extents. Ids it has never seen are
still accepted by the session (the host silently ignores unknown selectors).

The registry is a persistent map: every update returns a new registry, so a
snapshot taken before an operation is never affected by it.
"""

from dataclasses import dataclass, replace
from typing import Iterator, Optional, Union

from pyrsistent import pmap
from pyrsistent.typing import PMap

from pixel_arts.types import CanvasID


@dataclass(frozen=True)
class Canvas:
    """A created canvas.

    Attributes:
        canvas_id: Id of the ``svg`` root in the host page.
        vunits: Rows of the grid.
        hunits: Columns of the grid.
        height: Display height in pixels.
        width: Display width in pixels.
    """

    canvas_id: CanvasID
    vunits: int
    hunits: int
    height: int
    width: int

    def contains(self, i: int, j: int) -> bool:
        """True if cell (i, j) lies inside the grid."""
        return 1 <= i <= self.vunits and 1 <= j <= self.hunits


CanvasRef = Union[Canvas, CanvasID]


def canvas_id_of(canvas: CanvasRef) -> CanvasID:
    return canvas.canvas_id if isinstance(canvas, Canvas) else canvas


@dataclass(frozen=True)
class CanvasRegistry:
    canvases: PMap[CanvasID, Canvas] = pmap()

    def register(self, canvas: Canvas) -> "CanvasRegistry":
        """Record ``canvas``, replacing any previous canvas with the same id."""
        return replace(self, canvases=self.canvases.set(canvas.canvas_id, canvas))

    def unregister(self, canvas_id: CanvasID) -> "CanvasRegistry":
        return replace(self, canvases=self.canvases.discard(canvas_id))

    def get(self, canvas: CanvasRef) -> Optional[Canvas]:
        """Return the registered canvas for ``canvas`` (a handle or an id), if any."""
        return self.canvases.get(canvas_id_of(canvas))

    def __contains__(self, canvas_id: object) -> bool:
        return canvas_id in self.canvases

    def __iter__(self) -> Iterator[CanvasID]:
        return iter(self.canvases)

    def __len__(self) -> int:
        return len(self.canvases)
