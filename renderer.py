from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence


class Style(Enum):
    REFERENCE = "reference"
    INPUT = "input"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURSOR = "cursor"
    STATUS = "status"


# Rich style strings for terminal backends
RICH_STYLES = {
    Style.REFERENCE: "bold white on black",
    Style.INPUT: "blue on black",
    Style.CORRECT: "blue on black",
    Style.INCORRECT: "black on red",
    Style.CURSOR: "bold blue on black",
    Style.STATUS: "white on blue",
}


class Renderer(Protocol):
    """What the session needs from a terminal backend.

    Rows are offsets from the vertical center of the screen.
    """

    def draw_line(self, content: Sequence[str], visible_start: int, vertical_offset: int, style: Style) -> None:
        ...

    def draw_glyph(self, char: str, column: int, row: int, style: Style) -> None:
        ...

    def draw_cursor_marker(self, column: int, row: int) -> None:
        ...

    def draw_status(self, text: str) -> None:
        ...

    def query_dimensions(self) -> tuple[int, int]:
        ...

    def commit(self) -> None:
        ...

    def teardown(self) -> None:
        ...
