from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Static

from config import APP_NAME, CURSOR_GLYPH, INPUT_ROW, REFERENCE_ROW, configure_logging
from controller import Keystroke, Resize, SessionController
from errors import EmptyInputError, InvalidArgumentsError
import interrupts
from metrics import format_report
from renderer import RICH_STYLES, Style
from session import ENTER
from text_buffer import load_reference


logger = logging.getLogger(__name__)

# A finished session exits 1; everything else exits 0.
EXIT_COMPLETED = 1
EXIT_INTERRUPTED = 0
EXIT_ERROR = 0

ROW_WIDGETS = {REFERENCE_ROW: "#reference-line", INPUT_ROW: "#input-line"}


class TextualRenderer:
    """Keeps a styled cell model of the two text rows and pushes it to widgets on commit."""

    def __init__(self, screen: Screen) -> None:
        self.screen = screen
        self.rows: dict[int, list[tuple[str, Style]]] = {row: [] for row in ROW_WIDGETS}
        self.status = ""
        self._torn_down = False

    def query_dimensions(self) -> tuple[int, int]:
        size = self.screen.app.size
        return size.height, size.width

    def draw_line(self, content: Sequence[str], visible_start: int, vertical_offset: int, style: Style) -> None:
        _, columns = self.query_dimensions()
        visible = content[visible_start:visible_start + columns]
        self.rows[vertical_offset] = [(ch, style) for ch in visible]

    def draw_glyph(self, char: str, column: int, row: int, style: Style) -> None:
        cells = self.rows.setdefault(row, [])
        while len(cells) <= column:
            cells.append((" ", Style.INPUT))
        cells[column] = (char, style)

    def draw_cursor_marker(self, column: int, row: int) -> None:
        self.draw_glyph(CURSOR_GLYPH, column, row, Style.CURSOR)
        del self.rows[row][column + 1:]

    def draw_status(self, text: str) -> None:
        self.status = text

    def row_text(self, row: int) -> str:
        return "".join(ch for ch, _ in self.rows.get(row, []))

    def commit(self) -> None:
        if self._torn_down:
            return
        for row, selector in ROW_WIDGETS.items():
            line = Text(no_wrap=True, overflow="crop")
            for ch, style in self.rows[row]:
                line.append(ch, style=RICH_STYLES[style])
            self.screen.query_one(selector, Static).update(line)
        self.screen.query_one("#status-line", Static).update(Text(self.status, style=RICH_STYLES[Style.STATUS]))

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        if self.screen.app.is_running:
            self.screen.app.exit()


class SessionScreen(Screen):
    BINDINGS = [Binding("ctrl+c", "interrupt", "Quit", priority=True)]

    def __init__(self, reference: str) -> None:
        super().__init__()
        self.reference = reference
        self.controller: SessionController | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="session"):
            yield Static("", id="reference-line")
            yield Static("", id="input-line")
        yield Static("", id="status-line")

    def on_mount(self) -> None:
        loop = asyncio.get_running_loop()
        self.controller = SessionController(
            self.reference, TextualRenderer(self), schedule=loop.call_soon_threadsafe
        )
        self.controller.start()

    def on_key(self, event: events.Key) -> None:
        if self.controller is None or self.controller.finished:
            return
        if event.key == "enter":
            char = ENTER
        elif event.is_printable and event.character:
            char = event.character
        else:
            return
        event.stop()
        self.controller.handle(Keystroke(char))

    def on_resize(self, event: events.Resize) -> None:
        if self.controller is not None and not self.controller.finished:
            self.controller.handle(Resize())

    def action_interrupt(self) -> None:
        if self.controller is not None:
            self.controller.interrupt()


class TypingPracticeApp(App):
    CSS = """
    #session {
        height: 1fr;
        align: left middle;
    }

    #reference-line, #input-line {
        height: 1;
        width: 100%;
    }

    #status-line {
        dock: bottom;
        height: 1;
        margin-bottom: 1;
    }
    """

    TITLE = APP_NAME

    def __init__(self, reference: str) -> None:
        super().__init__()
        self.session_screen = SessionScreen(reference)

    @property
    def controller(self) -> SessionController | None:
        return self.session_screen.controller

    def on_mount(self) -> None:
        self.push_screen(self.session_screen)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Retype a text file and measure speed and accuracy.")
    parser.add_argument("filename", nargs="?", help="Text file to practice on.")
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    args, _ = parser.parse_known_args(argv)
    if args.filename is None:
        raise InvalidArgumentsError()
    return args


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    try:
        args = parse_args(argv)
        reference = load_reference(args.filename)
    except InvalidArgumentsError as exc:
        print(exc, file=sys.stderr)
        return EXIT_ERROR
    except EmptyInputError as exc:
        logger.error("%s: %s", exc.path, exc)
        print(exc, file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        logger.error("Cannot read input: %s", exc)
        print("File descriptor invalid. Did you give a valid filename?", file=sys.stderr)
        return EXIT_ERROR

    app = TypingPracticeApp(reference)
    previous = interrupts.install()
    try:
        app.run()
    finally:
        interrupts.restore(previous)
        interrupts.clear()

    controller = app.controller
    if controller is None:
        return EXIT_INTERRUPTED
    if not controller.finished:
        controller.interrupt()
    print(format_report(controller.report))
    return EXIT_INTERRUPTED if controller.interrupted else EXIT_COMPLETED


if __name__ == "__main__":
    sys.exit(main())
