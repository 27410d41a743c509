from __future__ import annotations


class TypingPracticeError(Exception):
    """Base class for errors raised by the typing session."""


class InvalidArgumentsError(TypingPracticeError):
    def __init__(self) -> None:
        super().__init__("Invalid arguments")


class EmptyInputError(TypingPracticeError, ValueError):
    def __init__(self, path) -> None:
        super().__init__("Given file is empty or invalid")
        self.path = path


class SessionCompleteError(TypingPracticeError, RuntimeError):
    """A keystroke arrived after the reference text was exhausted."""
