"""
Clock Sources
=============
Wall-clock readers used to derive the current rotation index.
"""

import time
from typing import Callable

import structlog

from .exceptions import ClockError

logger = structlog.get_logger(__name__)

Clock = Callable[[], int]


def system_clock() -> int:
    """
    Read the system clock as whole seconds since the Unix epoch.

    Raises:
        ClockError: If the system reports a time before the epoch
    """
    now = time.time()
    if now < 0:
        logger.error("System clock is before the Unix epoch", reading=now)
        raise ClockError("System clock is before the Unix epoch", reading=now)
    return int(now)


class FixedClock:
    """
    Manually driven clock.

    Useful for tests and for computing digests at an explicit point in time.
    """

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        """Move the clock forward by the given number of seconds."""
        self.now += seconds

    def set(self, now: int) -> None:
        self.now = now
