"""Exceptions raised while composing payloads.

Every error here is raised synchronously, before anything reaches the render
sink. Each class also derives from the builtin it refines so callers may catch
either ``PixelArtsError`` or the usual ``ValueError`` / ``KeyError``.

Unknown canvas ids are *not* represented: the host display is the only
authority on which canvases exist, and a selector that matches nothing is a
no-op there.
"""


class PixelArtsError(Exception):
    """Base class for all package errors."""


class InvalidExtentError(PixelArtsError, ValueError):
    """Grid extents must be positive integers."""


class ShapeMismatchError(PixelArtsError, ValueError):
    """A color sequence/array does not match the positions or grid it targets."""


class MissingColorKeyError(PixelArtsError, KeyError):
    """A grid value has no entry in the caller's color mapping."""


class InvalidIdentifierError(PixelArtsError, ValueError):
    """An id cannot be used inside a CSS id selector."""


class CoordinateError(PixelArtsError, ValueError):
    """A pixel anchor lies outside the declared grid of its canvas."""
