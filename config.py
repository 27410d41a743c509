from __future__ import annotations

import logging
import os
from pathlib import Path


APP_NAME = "typing-practice"

# Logging goes to a file only; stderr belongs to the terminal UI.
LOG_FILE = os.environ.get("TYPING_PRACTICE_LOG_FILE") or None
LOG_LEVEL = os.environ.get("TYPING_PRACTICE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
LOG_DATEFMT = "[%H:%M:%S]"

# Scoring
WORD_LENGTH = 5  # characters per word

# Display
CURSOR_GLYPH = "_"
REFERENCE_ROW = -1  # rows are offsets from the vertical center
INPUT_ROW = 0


_handler: logging.Handler | None = None


def configure_logging(log_file: str | Path | None = LOG_FILE, level: str = LOG_LEVEL) -> logging.Logger:
    """Attach the project's handler to the root logger, replacing any earlier one."""
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()

    if log_file is None:
        _handler = logging.NullHandler()
    else:
        _handler = logging.FileHandler(log_file, mode="w", delay=True)
        _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.setLevel(getattr(logging, level, logging.INFO))
    root.addHandler(_handler)
    return root
