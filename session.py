from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from errors import SessionCompleteError


logger = logging.getLogger(__name__)

ENTER = "\n"


class Phase(Enum):
    AWAITING_FIRST_KEYSTROKE = "awaiting"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class KeystrokeResult:
    char: str
    column: int
    correct: bool
    full_redraw: bool
    completed: bool


class SessionState:
    """Reference text, what was typed, and where the cursor sits on screen.

    ``pos`` indexes the next reference character to match. ``scroll_start``
    is the reference index shown at the left edge of the line and
    ``screen_col`` is the cursor column; ``pos - scroll_start`` always
    equals ``screen_col`` between keystrokes.
    """

    def __init__(self, reference: str, width: int) -> None:
        if not reference:
            raise ValueError("reference text must not be empty")
        self.reference = reference
        self.typed: list[str | None] = [None] * len(reference)
        self.width = width
        self.pos = 0
        self.scroll_start = 0
        self.screen_col = 0
        self.phase = Phase.AWAITING_FIRST_KEYSTROKE

    @property
    def half_width(self) -> int:
        return self.width // 2

    @property
    def completed(self) -> bool:
        return self.phase is Phase.COMPLETED

    def process_keystroke(self, char: str) -> KeystrokeResult:
        if self.completed:
            raise SessionCompleteError(f"keystroke {char!r} after position {self.pos}")
        if char == ENTER:
            char = " "
        if self.phase is Phase.AWAITING_FIRST_KEYSTROKE:
            self.phase = Phase.IN_PROGRESS

        column = self.screen_col
        self.typed[self.pos] = char
        correct = char == self.reference[self.pos]
        if correct:
            self.pos += 1
            self.screen_col += 1

        rebased = self._rebase()
        if self.pos == len(self.reference):
            self.phase = Phase.COMPLETED

        logger.debug(
            "key %r correct=%s pos=%d scroll_start=%d screen_col=%d",
            char, correct, self.pos, self.scroll_start, self.screen_col,
        )
        return KeystrokeResult(
            char=char,
            column=column,
            correct=correct,
            full_redraw=rebased,
            completed=self.completed,
        )

    def resize(self, width: int) -> None:
        # Cursor state is left alone; a narrower window rebases on the next keystroke.
        self.width = width

    def _rebase(self) -> bool:
        overflow = self.screen_col - self.half_width
        if overflow <= 0:
            return False
        self.scroll_start += overflow
        self.screen_col = self.half_width
        logger.debug("Rebased scroll window by %d to %d", overflow, self.scroll_start)
        return True

    def typed_text(self) -> str:
        """Everything typed so far, up to the first untouched slot."""
        chars = []
        for ch in self.typed:
            if ch is None:
                break
            chars.append(ch)
        return "".join(chars)
