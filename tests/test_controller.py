"""Tests for controller.SessionController: event dispatch, redraws, teardown."""

from __future__ import annotations

import pytest

from config import INPUT_ROW, REFERENCE_ROW
from controller import Interrupt, Keystroke, Resize, SessionController
import interrupts
from renderer import Style
from session import ENTER, Phase


def keys(text):
    return [Keystroke(ch) for ch in text]


class TestRun:
    def test_completes_after_two_correct_keystrokes(self, renderer, clock):
        c = SessionController("ab", renderer, clock=clock)
        report = c.run(keys("ab"))
        assert c.session.phase is Phase.COMPLETED
        assert report.total_keystrokes == 2
        assert report.incorrect_keystrokes == 0
        assert report.accuracy_percent == 100.0
        assert not c.interrupted
        assert renderer.teardowns == 1

    def test_incorrect_retry(self, renderer, clock):
        c = SessionController("a", renderer, clock=clock)
        c.start()
        assert c.handle(Keystroke("b"))
        assert c.session.pos == 0
        assert c.stats.incorrect_keystrokes == 1
        assert c.stats.total_keystrokes == 1
        assert not c.handle(Keystroke("a"))
        assert c.session.pos == 1
        assert c.report.total_keystrokes == 2
        assert c.report.incorrect_keystrokes == 1
        assert c.report.accuracy_percent == 50.0

    def test_enter_counts_as_space(self, renderer, clock):
        c = SessionController(" x", renderer, clock=clock)
        c.start()
        c.handle(Keystroke(ENTER))
        assert c.session.pos == 1
        assert c.stats.incorrect_keystrokes == 0

    def test_source_exhausted_is_an_interrupt(self, renderer, clock):
        c = SessionController("abc", renderer, clock=clock)
        report = c.run(keys("a"))
        assert c.interrupted
        assert report.total_keystrokes == 1
        assert renderer.teardowns == 1

    def test_keyboard_interrupt_while_waiting(self, renderer, clock):
        def events():
            yield Keystroke("a")
            raise KeyboardInterrupt

        c = SessionController("abc", renderer, clock=clock)
        report = c.run(events())
        assert c.interrupted
        assert report.total_keystrokes == 1
        assert renderer.teardowns == 1

    def test_timer_starts_on_first_keystroke(self, renderer, clock):
        c = SessionController("abc", renderer, clock=clock)
        c.start()
        assert c.stats.start_time is None
        c.handle(Keystroke("a"))
        assert c.stats.start_time == 100.0


class TestRendering:
    def test_initial_redraw(self, renderer, clock):
        c = SessionController("hello", renderer, clock=clock)
        c.start()
        assert renderer.of_kind("line") == [
            ("line", "hello", REFERENCE_ROW, Style.REFERENCE),
            ("line", "", INPUT_ROW, Style.INPUT),
        ]
        assert renderer.of_kind("cursor") == [("cursor", 0, INPUT_ROW)]
        assert renderer.of_kind("status") == []
        assert renderer.commits == 1

    def test_correct_keystroke_draws_glyph_and_cursor(self, renderer, clock):
        c = SessionController("hello", renderer, clock=clock)
        c.start()
        renderer.calls.clear()
        c.handle(Keystroke("h"))
        assert renderer.calls[0] == ("glyph", "h", 0, INPUT_ROW, Style.CORRECT)
        assert renderer.calls[1] == ("cursor", 1, INPUT_ROW)
        assert renderer.calls[2][0] == "status"
        assert not renderer.of_kind("line")

    def test_wrong_keystroke_draws_red_glyph(self, renderer, clock):
        c = SessionController("hello", renderer, clock=clock)
        c.start()
        renderer.calls.clear()
        c.handle(Keystroke("q"))
        assert renderer.calls[0] == ("glyph", "q", 0, INPUT_ROW, Style.INCORRECT)
        assert not renderer.of_kind("cursor")

    def test_rebase_triggers_full_redraw(self, clock):
        from conftest import FakeRenderer

        renderer = FakeRenderer(columns=10)
        c = SessionController("abcdefghijkl", renderer, clock=clock)
        c.start()
        for ch in "abcde":
            c.handle(Keystroke(ch))
        renderer.calls.clear()
        c.handle(Keystroke("f"))
        assert ("line", "bcdefghijk", REFERENCE_ROW, Style.REFERENCE) in renderer.calls
        assert ("line", "bcdef", INPUT_ROW, Style.INPUT) in renderer.calls
        assert renderer.calls[-2] == ("cursor", 5, INPUT_ROW)
        assert c.session.scroll_start == 1

    def test_resize_redraws_without_touching_stats(self, clock):
        from conftest import FakeRenderer

        renderer = FakeRenderer(columns=40)
        c = SessionController("x" * 30, renderer, clock=clock)
        c.start()
        for _ in range(12):
            c.handle(Keystroke("x"))
        total = c.stats.total_keystrokes
        renderer.columns = 10
        renderer.calls.clear()
        assert c.handle(Resize())
        assert c.stats.total_keystrokes == total
        assert c.columns == 10
        assert (c.session.pos, c.session.scroll_start, c.session.screen_col) == (12, 0, 12)
        assert len(renderer.of_kind("line")) == 2
        assert renderer.of_kind("cursor") == [("cursor", 12, INPUT_ROW)]


class TestInterrupt:
    def test_interrupt_event_before_any_keystroke(self, renderer, clock):
        c = SessionController("abc", renderer, clock=clock)
        c.start()
        assert not c.handle(Interrupt())
        assert c.interrupted
        assert renderer.teardowns == 1
        assert c.report.total_keystrokes == 0
        assert c.report.actions_per_minute == 0.0
        assert c.report.accuracy_percent == 0.0

    def test_teardown_happens_once(self, renderer, clock):
        c = SessionController("abc", renderer, clock=clock)
        c.start()
        c.handle(Keystroke("a"))
        c.interrupt()
        c.interrupt()
        assert not c.handle(Keystroke("b"))
        assert renderer.teardowns == 1
        assert c.report.total_keystrokes == 1

    def test_registers_with_signal_registry(self, renderer, clock):
        c = SessionController("abc", renderer, clock=clock)
        assert interrupts.active() is None
        c.start()
        assert interrupts.active() == c.interrupt
        interrupts.dispatch(15)
        assert c.interrupted
        assert interrupts.active() is None
        assert renderer.teardowns == 1

    def test_signal_is_queued_on_the_scheduler(self, renderer, clock):
        queued = []
        c = SessionController("abc", renderer, clock=clock, schedule=queued.append)
        c.start()
        interrupts.dispatch(15)
        assert not c.interrupted
        assert renderer.teardowns == 0
        assert queued == [c.interrupt]
        queued.pop()()
        assert c.interrupted
        assert renderer.teardowns == 1

    def test_queued_signal_after_completion_keeps_completed(self, renderer, clock):
        queued = []
        c = SessionController("a", renderer, clock=clock, schedule=queued.append)
        c.start()
        interrupts.dispatch(15)
        assert not c.handle(Keystroke("a"))
        queued.pop()()
        assert not c.interrupted
        assert c.report.total_keystrokes == 1
        assert renderer.teardowns == 1

    def test_completion_clears_registry(self, renderer, clock):
        c = SessionController("a", renderer, clock=clock)
        c.run(keys("a"))
        assert interrupts.active() is None


def test_dispatch_without_session_exits():
    with pytest.raises(SystemExit) as excinfo:
        interrupts.dispatch(2)
    assert excinfo.value.code == 0
