"""Process-wide handle to the session that should receive SIGINT/SIGTERM.

Signal handlers cannot take arguments, so the running controller registers
its interrupt callback here when it starts and clears it when it ends.
When the session lives inside an event loop it also registers a scheduler
(``loop.call_soon_threadsafe``) and the handler only queues the callback,
which wakes the loop and keeps the interrupt from landing mid-keystroke.
"""
from __future__ import annotations

import logging
import signal
from typing import Callable


logger = logging.getLogger(__name__)

_active: Callable[[], None] | None = None
_schedule: Callable[[Callable[[], None]], object] | None = None


def register(
    callback: Callable[[], None],
    schedule: Callable[[Callable[[], None]], object] | None = None,
) -> None:
    global _active, _schedule
    _active = callback
    _schedule = schedule


def clear() -> None:
    global _active, _schedule
    _active = None
    _schedule = None


def active() -> Callable[[], None] | None:
    return _active


def dispatch(signum: int, frame=None) -> None:
    callback = _active
    schedule = _schedule
    logger.info("Received signal %d", signum)
    if callback is None:
        raise SystemExit(0)
    if schedule is None:
        callback()
    else:
        schedule(callback)


def install(signals: tuple[int, ...] = (signal.SIGINT, signal.SIGTERM)) -> dict[int, object]:
    previous = {}
    for signum in signals:
        previous[signum] = signal.signal(signum, dispatch)
    return previous


def restore(previous: dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)
