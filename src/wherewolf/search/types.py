"""Shared data structures for the search subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from wherewolf.exceptions import WherewolfError


@dataclass(frozen=True)
class SearchMatch:
    """One reported occurrence of the pattern at a file, line and column.

    Line and column are 1-based, as reported by ``rg --vimgrep``.
    """

    file_path: str
    line_number: int
    column: int
    line_text: str


class RunState(Enum):
    """Lifecycle states of a single search run."""

    RUNNING = auto()
    COMPLETED = auto()
    CANCELLED = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        """Return True once the run can no longer change state."""
        return self is not RunState.RUNNING


@dataclass(frozen=True)
class SearchOutcome:
    """Result delivered when a run finishes without being cancelled."""

    run_id: int
    matches: list[SearchMatch] = field(default_factory=list)
    error: WherewolfError | None = None

    @property
    def ok(self) -> bool:
        """Return True when the run completed successfully."""
        return self.error is None


@dataclass(frozen=True)
class ResultSummary:
    """Totals shown above a result listing."""

    total_matches: int
    total_files: int

    def describe(self) -> str:
        """Return the one-line summary used by result listings."""
        if not self.total_matches:
            return "No matches found."
        return f"Found {self.total_matches} matches in {self.total_files} files"
