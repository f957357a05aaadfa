"""Process-wide flag telling long-running loops whether to keep going."""

from __future__ import annotations

import logging
import threading

log = logging.getLogger(__name__)


class RunningTracker:
    """Tracks whether the application should keep running."""

    def __init__(self) -> None:
        self._running = threading.Event()
        self._running.set()

    def quit(self, reason: str) -> None:
        """Mark the application as stopping and record why."""
        self._running.clear()
        log.info("Quit %s", reason)

    def is_running(self) -> bool:
        return self._running.is_set()


RUNNING_TRACKER = RunningTracker()