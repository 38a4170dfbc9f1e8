#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Lifecycle management for ripgrep search runs.

The orchestrator owns a single "live run" slot. Starting a search first
cancels whatever run occupies the slot, so at most one ripgrep process is
producing user-visible results at any time. Output is streamed from the
process on the asyncio event loop and parsed as it arrives; the exit status
decides whether the run completed, failed or was cancelled.

Results are delivered two ways: through the optional ``on_complete`` and
``on_error`` callbacks, and as a :class:`SearchOutcome` awaitable through
:meth:`SearchOrchestrator.wait`. A cancelled run delivers neither a callback
nor an outcome (``wait`` returns None). An exception raised inside a callback
is logged and does not change the outcome.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Optional

from wherewolf.constants import CANCEL_EXIT_CODES, SUCCESS_EXIT_CODES
from wherewolf.exceptions import ProcessFailure, ProcessSpawnError, ToolNotFoundError, WherewolfError
from wherewolf.options.config import WherewolfConfig
from wherewolf.options.search import SearchOptions
from wherewolf.search.command import build_command
from wherewolf.search.parser import parse_line
from wherewolf.search.types import RunState, SearchMatch, SearchOutcome

logger = logging.getLogger(__name__)

CompleteCallback = Callable[[list[SearchMatch]], None]
ErrorCallback = Callable[[WherewolfError], None]
ToolResolver = Callable[[str], Optional[str]]

READ_CHUNK_SIZE = 64 * 1024

# Finished runs kept around so that ``wait`` works after completion
RUN_HISTORY_SIZE = 16


class SearchRun:
    """One invocation of the external search process.

    Attributes
    ----------
    run_id : int
        Identifier returned by :meth:`SearchOrchestrator.start`
    command : list[str]
        Argument list the process was started with
    matches : list[SearchMatch]
        Parsed matches in arrival order
    error_lines : list[str]
        Standard-error lines in arrival order
    state : RunState
        Current lifecycle state
    exit_code : int or None
        Exit status once the process has exited

    """

    def __init__(self, run_id: int, command: list[str], process: asyncio.subprocess.Process) -> None:
        """Create a running search run around a started process."""
        self.run_id = run_id
        self.command = command
        self.process = process
        self.matches: list[SearchMatch] = []
        self.error_lines: list[str] = []
        self.state = RunState.RUNNING
        self.exit_code: int | None = None
        self.outcome: asyncio.Future[SearchOutcome | None] = asyncio.get_running_loop().create_future()
        self.task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"SearchRun(run_id={self.run_id}, state={self.state.name}, matches={len(self.matches)})"

    def transition(self, state: RunState) -> bool:
        """Move to ``state`` unless the run has already reached a terminal state."""
        if self.state.is_terminal:
            return False
        logger.debug("Run %d: %s -> %s", self.run_id, self.state.name, state.name)
        self.state = state
        return True

    def add_output_line(self, line: str) -> None:
        if self.state is not RunState.RUNNING or not line:
            return
        match = parse_line(line)
        if match is not None:
            self.matches.append(match)

    def add_error_line(self, line: str) -> None:
        if self.state is not RunState.RUNNING or not line:
            return
        self.error_lines.append(line)

    @property
    def stderr_text(self) -> str:
        """Return accumulated standard-error output."""
        return "\n".join(self.error_lines)


class SearchOrchestrator:
    """Start, stream, cancel and finalize ripgrep searches.

    Parameters
    ----------
    config : WherewolfConfig, optional
        Configuration defaults for command construction
    on_complete : callable, optional
        Called with the match list when a run exits with status 0 or 1
    on_error : callable, optional
        Called with a ``WherewolfError`` when a search cannot start or fails
    cwd : str or Path, optional
        Working directory for the ripgrep process
    tool_resolver : callable, optional
        Maps the configured executable to a full path, or None when missing.
        Defaults to :func:`shutil.which`.

    """

    def __init__(
        self,
        config: WherewolfConfig | None = None,
        *,
        on_complete: CompleteCallback | None = None,
        on_error: ErrorCallback | None = None,
        cwd: str | Path | None = None,
        tool_resolver: ToolResolver | None = None,
    ) -> None:
        """Initialise an idle orchestrator."""
        self.config = config or WherewolfConfig()
        self.on_complete = on_complete
        self.on_error = on_error
        self.cwd = cwd
        self._resolve_tool: ToolResolver = tool_resolver or shutil.which
        self._live: SearchRun | None = None
        self._runs: OrderedDict[int, SearchRun] = OrderedDict()
        self._next_run_id = 1
        self._generation = 0

    @property
    def live_run(self) -> SearchRun | None:
        """Return the run currently occupying the live slot."""
        return self._live

    @property
    def is_searching(self) -> bool:
        """Return True while a run is in progress."""
        return self._live is not None

    def get_run(self, run_id: int) -> SearchRun | None:
        """Return a recent run by id, or None if it is unknown or was evicted."""
        return self._runs.get(run_id)

    async def start(self, pattern: str, options: SearchOptions | None = None) -> int:
        """Start a new search, cancelling any live run first.

        Parameters
        ----------
        pattern : str
            Search pattern
        options : SearchOptions, optional
            Per-call options

        Returns
        -------
        int
            Identifier of the new run

        Raises
        ------
        EmptyPatternError
            If the pattern is blank; no process is spawned
        InvalidFlagError
            If the options carry a denylisted flag; no process is spawned
        ToolNotFoundError
            If the ripgrep executable cannot be found; no process is spawned
        ProcessSpawnError
            If the operating system fails to start the process

        """
        self.cancel()
        self._generation += 1
        generation = self._generation

        try:
            command = build_command(pattern, options, self.config)
            executable = self._resolve_tool(self.config.executable)
            if executable is None:
                raise ToolNotFoundError(self.config.executable)
            command[0] = executable
        except WherewolfError as exc:
            self._notify_error(exc)
            raise

        logger.debug("Starting ripgrep: %s", command)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
            )
        except OSError as exc:
            error = ProcessSpawnError(command, original_error=exc)
            self._notify_error(error)
            raise error from exc

        run = SearchRun(self._next_run_id, command, process)
        self._next_run_id += 1
        self._remember(run)

        if generation != self._generation:
            # A later start() superseded this one while the process was spawning
            logger.debug("Run %d superseded during spawn", run.run_id)
            self._terminate(run)
        else:
            self._live = run

        run.task = asyncio.create_task(self._drive(run))
        return run.run_id

    def cancel(self) -> bool:
        """Cancel the live run, if any.

        Cancellation is cooperative: the process is sent SIGTERM and the run
        is finalized once it exits. Output arriving in the meantime is dropped.

        Returns
        -------
        bool
            True if a live run was cancelled

        """
        run = self._live
        if run is None:
            return False
        self._live = None
        self._terminate(run)
        return True

    async def wait(self, run_id: int | None = None) -> SearchOutcome | None:
        """Wait for a run to finish and return its outcome.

        Parameters
        ----------
        run_id : int, optional
            Run to wait for; defaults to the live run

        Returns
        -------
        SearchOutcome or None
            None when the run was cancelled or is unknown

        """
        if run_id is None:
            run = self._live
        else:
            run = self._runs.get(run_id)
        if run is None:
            return None
        return await asyncio.shield(run.outcome)

    async def search(self, pattern: str, options: SearchOptions | None = None) -> SearchOutcome | None:
        """Start a search and wait for its outcome."""
        run_id = await self.start(pattern, options)
        return await self.wait(run_id)

    async def aclose(self) -> None:
        """Cancel the live run and wait for its process to exit."""
        run = self._live
        self.cancel()
        if run is not None and run.task is not None:
            await run.task

    def _terminate(self, run: SearchRun) -> None:
        run.transition(RunState.CANCELLED)
        if run.process.returncode is None:
            try:
                run.process.terminate()
            except ProcessLookupError:
                # Exited between the returncode check and the signal
                pass

    def _remember(self, run: SearchRun) -> None:
        self._runs[run.run_id] = run
        while len(self._runs) > RUN_HISTORY_SIZE:
            self._runs.popitem(last=False)

    async def _drive(self, run: SearchRun) -> None:
        process = run.process
        assert process.stdout is not None and process.stderr is not None
        await asyncio.gather(
            _pump_lines(process.stdout, run.add_output_line),
            _pump_lines(process.stderr, run.add_error_line),
        )
        exit_code = await process.wait()
        self._finalize(run, exit_code)

    def _finalize(self, run: SearchRun, exit_code: int) -> None:
        run.exit_code = exit_code
        if self._live is run:
            self._live = None

        if run.state is RunState.CANCELLED or exit_code in CANCEL_EXIT_CODES:
            run.transition(RunState.CANCELLED)
            logger.debug("Run %d was cancelled (exit code %d), ignoring", run.run_id, exit_code)
            run.outcome.set_result(None)
            return

        if exit_code in SUCCESS_EXIT_CODES:
            run.transition(RunState.COMPLETED)
            matches = list(run.matches)
            logger.debug("Run %d completed with %d matches", run.run_id, len(matches))
            run.outcome.set_result(SearchOutcome(run_id=run.run_id, matches=matches))
            if self.on_complete is not None:
                try:
                    self.on_complete(matches)
                except Exception:
                    logger.exception("on_complete callback failed for run %d", run.run_id)
            return

        run.transition(RunState.FAILED)
        error = ProcessFailure(exit_code, run.stderr_text)
        logger.debug("Run %d failed: %s", run.run_id, error.message)
        run.outcome.set_result(SearchOutcome(run_id=run.run_id, matches=list(run.matches), error=error))
        self._notify_error(error)

    def _notify_error(self, error: WherewolfError) -> None:
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception:
            logger.exception("on_error callback failed while reporting: %s", error.message)


async def _pump_lines(stream: asyncio.StreamReader, on_line: Callable[[str], None]) -> None:
    """Read ``stream`` in chunks and hand each decoded line to ``on_line``."""
    pending = b""
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split(b"\n")
        for line in lines:
            on_line(line.decode("utf-8", errors="replace"))
    if pending:
        on_line(pending.decode("utf-8", errors="replace"))


__all__ = ["SearchOrchestrator", "SearchRun"]
