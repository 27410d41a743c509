from __future__ import annotations

from dataclasses import dataclass

from config import WORD_LENGTH


@dataclass(frozen=True)
class Metrics:
    elapsed_s: float
    total_keystrokes: int
    incorrect_keystrokes: int
    actions_per_minute: float
    corrected_word_count: int
    words_per_minute: float
    accuracy_percent: float


def compute_metrics(total_keystrokes: int, incorrect_keystrokes: int, elapsed_s: float) -> Metrics:
    correct = total_keystrokes - incorrect_keystrokes
    words = correct // WORD_LENGTH
    if elapsed_s > 0:
        apm = total_keystrokes * 60 / elapsed_s
        wpm = words * 60 / elapsed_s
    else:
        apm = wpm = 0.0
    accuracy = (100.0 * correct / total_keystrokes) if total_keystrokes > 0 else 0.0

    return Metrics(
        elapsed_s=elapsed_s,
        total_keystrokes=total_keystrokes,
        incorrect_keystrokes=incorrect_keystrokes,
        actions_per_minute=apm,
        corrected_word_count=words,
        words_per_minute=wpm,
        accuracy_percent=accuracy,
    )


class StatsTracker:
    def __init__(self) -> None:
        self.start_time: float | None = None
        self.total_keystrokes = 0
        self.incorrect_keystrokes = 0

    def on_first_keystroke(self, now: float) -> None:
        if self.start_time is None:
            self.start_time = now

    def on_keystroke(self, correct: bool) -> None:
        self.total_keystrokes += 1
        if not correct:
            self.incorrect_keystrokes += 1

    def snapshot(self, now: float) -> Metrics:
        """Metrics as of ``now``; all-zero rates before the first keystroke."""
        elapsed = 0.0 if self.start_time is None else now - self.start_time
        return compute_metrics(self.total_keystrokes, self.incorrect_keystrokes, elapsed)


def format_status(metrics: Metrics) -> str:
    return (
        f"apm: {metrics.actions_per_minute:.3f} "
        f"wpm: {metrics.words_per_minute:.3f} "
        f"accuracy: {metrics.accuracy_percent:2.1f}"
    )


def format_report(metrics: Metrics) -> str:
    return (
        f"actions per minute: {metrics.actions_per_minute:.3f}\n"
        f"words per minute: {metrics.words_per_minute:.3f}\n"
        f"accuracy: {metrics.accuracy_percent:2.1f}"
    )
