from __future__ import annotations

import pytest

import interrupts


class FakeRenderer:
    """Records every call instead of painting a terminal."""

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self.rows = rows
        self.columns = columns
        self.calls: list[tuple] = []
        self.teardowns = 0
        self.commits = 0

    def draw_line(self, content, visible_start, vertical_offset, style):
        self.calls.append(("line", "".join(content[visible_start:visible_start + self.columns]), vertical_offset, style))

    def draw_glyph(self, char, column, row, style):
        self.calls.append(("glyph", char, column, row, style))

    def draw_cursor_marker(self, column, row):
        self.calls.append(("cursor", column, row))

    def draw_status(self, text):
        self.calls.append(("status", text))

    def query_dimensions(self):
        return self.rows, self.columns

    def commit(self):
        self.commits += 1

    def teardown(self):
        self.teardowns += 1

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


class FakeClock:
    def __init__(self, start: float = 100.0, step: float = 1.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def _clear_interrupts():
    interrupts.clear()
    yield
    interrupts.clear()
