#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Cancellable delayed callbacks for debouncing live input."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Run a callback once input has been quiet for ``delay`` seconds.

    Each call to :meth:`arm` replaces any pending callback, so a burst of
    input produces a single invocation after the last change.

    Parameters
    ----------
    delay : float
        Quiet period in seconds
    loop : asyncio.AbstractEventLoop, optional
        Event loop to schedule on; defaults to the running loop at arm time

    """

    def __init__(self, delay: float, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialise the debouncer with its delay."""
        if delay < 0:
            raise ValueError(f"delay cannot be negative, got {delay}")
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[..., Any] | None = None
        self._args: tuple[Any, ...] = ()

    @property
    def pending(self) -> bool:
        """Return True while a callback is scheduled."""
        return self._handle is not None

    def arm(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)`` after the delay, replacing any pending one."""
        self.disarm()
        loop = self._loop or asyncio.get_running_loop()
        self._callback = callback
        self._args = args
        self._handle = loop.call_later(self.delay, self._fire)

    def disarm(self) -> None:
        """Cancel the pending callback, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._clear()

    def fire_now(self) -> bool:
        """Run the pending callback immediately.

        Returns
        -------
        bool
            True if a callback was pending and has been run

        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        callback, args = self._callback, self._args
        self._clear()
        if callback is not None:
            logger.debug("Debounce elapsed, running %r", callback)
            callback(*args)

    def _clear(self) -> None:
        self._handle = None
        self._callback = None
        self._args = ()


__all__ = ["Debouncer"]
