from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable, Iterable, Union

from config import INPUT_ROW, REFERENCE_ROW
from metrics import Metrics, StatsTracker, format_status
import interrupts
from renderer import Renderer, Style
from session import Phase, SessionState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Keystroke:
    char: str


@dataclass(frozen=True)
class Resize:
    pass


@dataclass(frozen=True)
class Interrupt:
    pass


Event = Union[Keystroke, Resize, Interrupt]


class SessionController:
    """Feeds input events through the session and keeps the screen current."""

    def __init__(
        self,
        reference: str,
        renderer: Renderer,
        clock: Callable[[], float] = time.perf_counter,
        schedule: Callable[[Callable[[], None]], object] | None = None,
    ) -> None:
        self.renderer = renderer
        self.clock = clock
        self.schedule = schedule
        self.rows, self.columns = renderer.query_dimensions()
        self.session = SessionState(reference, self.columns)
        self.stats = StatsTracker()
        self.report: Metrics | None = None
        self.interrupted = False

    @property
    def finished(self) -> bool:
        return self.report is not None

    def start(self) -> None:
        interrupts.register(self.interrupt, schedule=self.schedule)
        logger.info("Session started: %d characters, %dx%d", len(self.session.reference), self.rows, self.columns)
        self.redraw()

    def run(self, events: Iterable[Event]) -> Metrics:
        self.start()
        try:
            for event in events:
                if not self.handle(event):
                    break
        except KeyboardInterrupt:
            self.interrupt()
        if not self.finished:
            self.interrupt()
        return self.report

    def handle(self, event: Event) -> bool:
        if self.finished:
            return False
        if isinstance(event, Interrupt):
            self.interrupt()
            return False
        if isinstance(event, Resize):
            self.rows, self.columns = self.renderer.query_dimensions()
            self.session.resize(self.columns)
            logger.debug("Resized to %dx%d", self.rows, self.columns)
            self.redraw()
            return True
        return self._keystroke(event.char)

    def _keystroke(self, char: str) -> bool:
        if self.session.phase is Phase.AWAITING_FIRST_KEYSTROKE:
            self.stats.on_first_keystroke(self.clock())
        result = self.session.process_keystroke(char)
        self.stats.on_keystroke(result.correct)

        if result.correct:
            self.renderer.draw_glyph(result.char, result.column, INPUT_ROW, Style.CORRECT)
            self.renderer.draw_cursor_marker(result.column + 1, INPUT_ROW)
        else:
            self.renderer.draw_glyph(result.char, result.column, INPUT_ROW, Style.INCORRECT)
        if result.full_redraw:
            self._draw_lines()
        self.renderer.draw_status(format_status(self.stats.snapshot(self.clock())))
        self.renderer.commit()

        if result.completed:
            self._finish()
            return False
        return True

    def redraw(self) -> None:
        self._draw_lines()
        if self.stats.total_keystrokes:
            self.renderer.draw_status(format_status(self.stats.snapshot(self.clock())))
        self.renderer.commit()

    def _draw_lines(self) -> None:
        session = self.session
        self.renderer.draw_line(session.reference, session.scroll_start, REFERENCE_ROW, Style.REFERENCE)
        self.renderer.draw_line(session.typed_text(), session.scroll_start, INPUT_ROW, Style.INPUT)
        self.renderer.draw_cursor_marker(session.screen_col, INPUT_ROW)

    def interrupt(self) -> None:
        if self.finished:
            return
        self.interrupted = True
        logger.info("Session interrupted at position %d", self.session.pos)
        self._finish()

    def _finish(self) -> None:
        self.report = self.stats.snapshot(self.clock())
        interrupts.clear()
        self.renderer.teardown()
        logger.info(
            "Session over after %d keystrokes (%d incorrect): apm=%.3f wpm=%.3f accuracy=%.1f",
            self.report.total_keystrokes,
            self.report.incorrect_keystrokes,
            self.report.actions_per_minute,
            self.report.words_per_minute,
            self.report.accuracy_percent,
        )
