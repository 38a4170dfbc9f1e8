"""Search subsystem exposed to the public API."""

from __future__ import annotations

from wherewolf.options.config import WherewolfConfig
from wherewolf.options.search import SearchOptions
from wherewolf.search.command import build_command
from wherewolf.search.debounce import Debouncer
from wherewolf.search.flags import check_flags, validate_flags
from wherewolf.search.live import LiveSearch, SearchInputs
from wherewolf.search.orchestrator import SearchOrchestrator, SearchRun
from wherewolf.search.parser import parse_line, parse_output
from wherewolf.search.replace import ReplacementPlan, ReplacementReport, Replacer, apply_replacements
from wherewolf.search.results import format_diff_lines, format_results, group_by_file, preview, summarize
from wherewolf.search.types import ResultSummary, RunState, SearchMatch, SearchOutcome


async def search(
    pattern: str,
    options: SearchOptions | None = None,
    *,
    config: WherewolfConfig | None = None,
    cwd: str | None = None,
) -> SearchOutcome:
    """Run one search to completion and return its outcome.

    Unlike :meth:`SearchOrchestrator.search`, a one-shot search can never be
    superseded, so an outcome is always returned.
    """
    orchestrator = SearchOrchestrator(config, cwd=cwd)
    outcome = await orchestrator.search(pattern, options)
    if outcome is None:
        # Terminated by a signal from outside this process
        return SearchOutcome(run_id=0, matches=[])
    return outcome


__all__ = [
    "Debouncer",
    "LiveSearch",
    "ReplacementPlan",
    "ReplacementReport",
    "Replacer",
    "ResultSummary",
    "RunState",
    "SearchInputs",
    "SearchMatch",
    "SearchOrchestrator",
    "SearchOutcome",
    "SearchRun",
    "apply_replacements",
    "build_command",
    "check_flags",
    "format_diff_lines",
    "format_results",
    "group_by_file",
    "parse_line",
    "parse_output",
    "preview",
    "search",
    "summarize",
    "validate_flags",
]
