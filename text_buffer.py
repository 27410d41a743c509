from __future__ import annotations

import logging
from pathlib import Path

from errors import EmptyInputError


logger = logging.getLogger(__name__)

STRIPPED_BYTES = b"\n\t\r"


def sanitize(raw: bytes) -> str:
    """Drop line breaks and tabs so the whole document becomes one line.

    Bytes map one-to-one onto characters, so the result is exactly
    ``len(raw)`` minus the number of stripped bytes.
    """
    return raw.translate(None, STRIPPED_BYTES).decode("latin-1")


def load_reference(path: str | Path) -> str:
    raw = Path(path).read_bytes()
    text = sanitize(raw)
    if not text:
        raise EmptyInputError(path)
    logger.info("Loaded %s: %d bytes, %d typable", path, len(raw), len(text))
    return text
