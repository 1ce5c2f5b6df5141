"""Minimum spacing between outbound API calls."""

import asyncio
import time
from typing import Callable, Optional

# The minimum amount of time to wait between API calls, in seconds.
DEFAULT_MIN_INTERVAL = 0.05


class RateGate:
    """Enforce a floor on the time between consecutive calls.

    One slot, no burst allowance. ``wait()`` suspends the caller until
    ``min_interval`` has passed since the previous call started; ``touch()``
    moves the watermark forward again once a call has finished. The
    watermark is guarded by a lock so concurrent callers on one client still
    see the spacing.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        clock: Optional[Callable[[], float]] = None,
    ):
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self.min_interval = min_interval
        self._clock = clock or time.monotonic
        self._last_call: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_call(self) -> Optional[float]:
        return self._last_call

    async def wait(self) -> None:
        """Wait for the slot, then mark the start of a call."""
        async with self._lock:
            if self._last_call is not None:
                delay = self._last_call + self.min_interval - self._clock()
                if delay > 0:
                    await asyncio.sleep(delay)
            self._last_call = self._clock()

    def touch(self) -> None:
        """Mark the end of a call."""
        now = self._clock()
        if self._last_call is None or now > self._last_call:
            self._last_call = now
