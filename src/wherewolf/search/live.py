#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Debounced live search driven by input changes.

A host (an editor sidebar, a TUI) calls :meth:`LiveSearch.update` on every
keystroke. The search runs once input has been quiet for the configured
debounce interval, and only if the search-relevant inputs actually changed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from wherewolf.exceptions import WherewolfError
from wherewolf.options.search import SearchOptions
from wherewolf.search.debounce import Debouncer
from wherewolf.search.orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchInputs:
    """Text of the sidebar input fields."""

    search: str = ""
    replace: str = ""
    include: str = ""
    exclude: str = ""

    def search_key(self) -> tuple[str, str, str]:
        """Return the fields that affect which matches are found."""
        return (self.search, self.include, self.exclude)


class LiveSearch:
    """Tie input updates, debouncing and the orchestrator together.

    Parameters
    ----------
    orchestrator : SearchOrchestrator
        Orchestrator that runs the searches and delivers results
    debounce_ms : int, optional
        Quiet period before searching; defaults to the orchestrator's config
    base_options : SearchOptions, optional
        Options applied to every search; globs are taken from the inputs

    """

    def __init__(
        self,
        orchestrator: SearchOrchestrator,
        *,
        debounce_ms: int | None = None,
        base_options: SearchOptions | None = None,
    ) -> None:
        """Initialise the live search."""
        self.orchestrator = orchestrator
        if debounce_ms is None:
            debounce_ms = orchestrator.config.debounce_ms
        self.debouncer = Debouncer(debounce_ms / 1000.0)
        self.base_options = base_options or SearchOptions()
        self.inputs = SearchInputs()
        self._last_searched: tuple[str, str, str] | None = None
        self._pending_start: asyncio.Task[None] | None = None

    def update(self, inputs: SearchInputs) -> None:
        """Record new input values and (re)arm the debounce timer."""
        self.inputs = inputs
        self.debouncer.arm(self._trigger)

    def flush(self) -> bool:
        """Run a pending debounced search immediately."""
        return self.debouncer.fire_now()

    def refresh(self) -> None:
        """Forget the last searched inputs so the next trigger searches again.

        Used after replacements are applied, when the same pattern must be
        searched again to show the updated files.
        """
        self._last_searched = None
        self._trigger()

    async def wait_started(self) -> None:
        """Wait until a search started by the debouncer has been spawned."""
        if self._pending_start is not None:
            await self._pending_start

    async def aclose(self) -> None:
        """Disarm the timer and cancel any running search."""
        self.debouncer.disarm()
        if self._pending_start is not None and not self._pending_start.done():
            self._pending_start.cancel()
        await self.orchestrator.aclose()

    def _trigger(self) -> None:
        key = self.inputs.search_key()
        if key == self._last_searched:
            logger.debug("Inputs unchanged, skipping search")
            return
        self._last_searched = key

        if not self.inputs.search:
            self.orchestrator.cancel()
            return

        options = self.base_options.create_updated(
            include_globs=self.inputs.include or None,
            exclude_globs=self.inputs.exclude or None,
        )
        self._pending_start = asyncio.get_running_loop().create_task(self._start(self.inputs.search, options))

    async def _start(self, pattern: str, options: SearchOptions) -> None:
        try:
            await self.orchestrator.start(pattern, options)
        except WherewolfError as exc:
            # Already delivered through the orchestrator's error callback
            logger.debug("Live search did not start: %s", exc.message)


__all__ = ["LiveSearch", "SearchInputs"]
