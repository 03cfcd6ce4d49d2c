"""Render sinks.

A render sink takes one payload string and delivers it to the host display.
It returns nothing and reports no errors back; whatever happens in the page
is invisible to the composer.
"""

from typing import List


def ipython_sink(markup: str) -> None:
    """Display ``markup`` as HTML in the current IPython/Jupyter output area."""
    from IPython.display import HTML
    from IPython.display import display as ipy_display

    ipy_display(HTML(markup))


class RecordingSink:
    """Sink collecting payloads in memory, e.g. for tests or offline export."""

    payloads: List[str]

    def __init__(self) -> None:
        self.payloads = []

    def __call__(self, markup: str) -> None:
        self.payloads.append(markup)

    @property
    def last(self) -> str:
        if not self.payloads:
            raise IndexError("No payload has been rendered")
        return self.payloads[-1]

    def clear(self) -> None:
        self.payloads.clear()

    def __len__(self) -> int:
        return len(self.payloads)
