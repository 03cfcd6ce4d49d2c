"""Identifier generation & validation.

Canvases and elements are addressed in the host page through CSS id
selectors, so every id is a short string that must be selector-safe.

This module provides:
* ``IdGenerator``: prefix + fixed-length random suffix, drawn from its own
  ``random.Random`` so a seeded generator is fully deterministic.
* A process-wide default generator behind ``new_id``.
* ``validate_id`` for ids supplied by callers.

Examples
--------
>>> from pixel_arts.ids import IdGenerator
>>> ids = IdGenerator(seed=0)
>>> cid = ids.new_id("canvas")  # e.g. "canvasXyZ"

Collisions are possible and never checked (62**3 suffixes by default). Pass
your own id wherever guaranteed uniqueness matters.
"""

import random
import re
from typing import Optional

from pixel_arts.config import DEFAULT_ID_ALPHABET, DEFAULT_ID_LENGTH
from pixel_arts.errors import InvalidIdentifierError

_ID_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")

CANVAS_PREFIX = "canvas"
ELEMENT_PREFIX = "element"
CROSS_PREFIX = "pixel_cross"
ARROW_PREFIX = "pixel_arrow"
IMAGE_PREFIX = "pixel_image"


class IdGenerator:
    length: int
    alphabet: str

    def __init__(
        self,
        seed: Optional[int] = None,
        length: int = DEFAULT_ID_LENGTH,
        alphabet: str = DEFAULT_ID_ALPHABET,
    ):
        if length <= 0:
            raise ValueError(f"Id suffix length must be positive, got {length}")
        if not alphabet:
            raise ValueError("Id alphabet must not be empty")
        self.length = length
        self.alphabet = alphabet
        self._rng = random.Random(seed)

    def new_id(self, prefix: str) -> str:
        """Return ``prefix`` followed by a random suffix."""
        suffix = "".join(self._rng.choice(self.alphabet) for _ in range(self.length))
        return validate_id(prefix + suffix)


_default_generator = IdGenerator()


def new_id(prefix: str) -> str:
    """Return a fresh id from the process-wide generator."""
    return _default_generator.new_id(prefix)


def validate_id(value: str) -> str:
    """Return ``value`` unchanged if it can be used as ``#value`` in a selector."""
    if not isinstance(value, str) or not _ID_PATTERN.fullmatch(value):
        raise InvalidIdentifierError(
            f"Invalid id {value!r}: expected a letter or underscore followed by "
            "letters, digits, '_' or '-'"
        )
    return value
