"""Display configuration.

``PixelArtsConfig`` gathers the constants that end up in payload envelopes
(library name and load paths, the wrapper class used to scope selectors) and
the defaults used by the session API. Derive variants with
``dataclasses.replace``::

    from dataclasses import replace
    config = replace(DEFAULT_CONFIG, default_height=400, default_width=400)
"""

import string
from dataclasses import dataclass
from typing import Tuple

DEFAULT_LIBRARY = "d3"
DEFAULT_LIBRARY_URL = "https://d3js.org/d3.v3.min.js?noext"
DEFAULT_SCOPE_CLASS = "usersvg"
DEFAULT_HEIGHT = 250
DEFAULT_WIDTH = 250
DEFAULT_ID_LENGTH = 3
DEFAULT_ID_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True)
class PixelArtsConfig:
    """Envelope and session defaults.

    Attributes:
        library: Module name declared to requirejs and bound in the callback.
        library_paths: Load locations, primary first, tried in order by requirejs.
        scope_class: Class of the wrapper ``div`` every canvas lives in.
        default_height: Display height in pixels for new canvases.
        default_width: Display width in pixels for new canvases.
        id_length: Length of generated id suffixes.
        id_alphabet: Characters generated id suffixes are drawn from.
    """

    library: str = DEFAULT_LIBRARY
    library_paths: Tuple[str, ...] = (DEFAULT_LIBRARY_URL,)
    scope_class: str = DEFAULT_SCOPE_CLASS
    default_height: int = DEFAULT_HEIGHT
    default_width: int = DEFAULT_WIDTH
    id_length: int = DEFAULT_ID_LENGTH
    id_alphabet: str = DEFAULT_ID_ALPHABET


DEFAULT_CONFIG = PixelArtsConfig()
