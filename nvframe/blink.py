"""Cursor blink state machine."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class BlinkState(Enum):
    WAITING = "waiting"
    ON = "on"
    OFF = "off"


_NEXT_STATE = {
    BlinkState.WAITING: BlinkState.ON,
    BlinkState.ON: BlinkState.OFF,
    BlinkState.OFF: BlinkState.ON,
}


@dataclass(frozen=True)
class BlinkTiming:
    """Blink timings of a cursor in milliseconds; None means not set."""

    blinkwait: Optional[int] = None
    blinkon: Optional[int] = None
    blinkoff: Optional[int] = None


def _delay_ms(state: BlinkState, timing: Any) -> Optional[int]:
    if state is BlinkState.WAITING:
        return timing.blinkwait
    if state is BlinkState.OFF:
        return timing.blinkoff
    return timing.blinkon


class BlinkStatus:
    """Decides whether the cursor is visible at a given time.

    ``timing`` may be any object with ``blinkwait``, ``blinkon`` and
    ``blinkoff`` attributes; a change in it (by equality) restarts the cycle.
    Times are in seconds on a monotonic clock.
    """

    def __init__(self, now: Optional[float] = None) -> None:
        self.state = BlinkState.WAITING
        self.last_transition = time.monotonic() if now is None else now
        self.scheduled_frame: Optional[float] = None
        self._previous: Any = None

    def update_status(self, timing: Any, now: Optional[float] = None) -> bool:
        """Advance the blink cycle to ``now`` and return whether the cursor shows.

        Afterwards ``scheduled_frame`` holds the time of the next transition,
        or None when no redraw is needed for blinking.
        """
        if now is None:
            now = time.monotonic()

        if self._previous is None or timing != self._previous:
            self._previous = timing
            self.last_transition = now
            if timing.blinkwait is not None and timing.blinkwait != 0:
                self.state = BlinkState.WAITING
            else:
                self.state = BlinkState.ON

        if 0 in (timing.blinkwait, timing.blinkoff, timing.blinkon):
            self.scheduled_frame = None
            return True

        delay = _delay_ms(self.state, timing)
        if delay is not None and delay > 0 and self.last_transition + delay / 1000.0 < now:
            self.state = _NEXT_STATE[self.state]
            self.last_transition = now

        next_delay = _delay_ms(self.state, timing)
        self.scheduled_frame = (
            None if next_delay is None else self.last_transition + next_delay / 1000.0
        )

        return self.state is not BlinkState.OFF