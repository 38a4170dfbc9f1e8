#  Copyright (c) 2025 Tom Villani, Ph.D.
"""wherewolf - project-wide find and replace powered by ripgrep.

wherewolf runs ripgrep in ``--vimgrep`` mode, parses its output into
structured matches, groups them by file and previews or applies a
replacement. A single orchestrator owns the live ripgrep process so that
starting a new search always cancels the previous one, which makes it a
good fit for interactive hosts that search as the user types.

Key Features
------------
- Safe command construction: flags that would break output parsing are rejected
- Asynchronous search runs with cancellation and completion callbacks
- Debounced live search keyed on the current inputs
- Diff-style replacement previews and best-effort multi-file replacement
- Configuration from TOML, YAML, JSON or ``[tool.wherewolf]`` in pyproject.toml

Requirements
------------
- Python 3.10+
- ripgrep available on PATH (or configured through ``executable``)

Examples
--------
One-shot search:

    >>> import asyncio
    >>> from wherewolf import search
    >>> outcome = asyncio.run(search("TODO"))
    >>> for match in outcome.matches:
    ...     print(match.file_path, match.line_number, match.line_text)

Replacing every match:

    >>> from wherewolf import apply_replacements
    >>> apply_replacements("TODO", "DONE", outcome.matches)
    2

"""

from wherewolf.exceptions import (
    DependencyError,
    EmptyPatternError,
    FileAccessError,
    FileError,
    InvalidFlagError,
    ProcessFailure,
    ProcessSpawnError,
    SearchProcessError,
    ToolNotFoundError,
    ValidationError,
    WherewolfError,
)
from wherewolf.health import HealthReport, check_health
from wherewolf.options import RipgrepOptions, SearchOptions, WherewolfConfig, config_from_dict
from wherewolf.search import (
    Debouncer,
    LiveSearch,
    ReplacementPlan,
    ReplacementReport,
    Replacer,
    ResultSummary,
    RunState,
    SearchInputs,
    SearchMatch,
    SearchOrchestrator,
    SearchOutcome,
    SearchRun,
    apply_replacements,
    build_command,
    check_flags,
    format_diff_lines,
    format_results,
    group_by_file,
    parse_line,
    parse_output,
    preview,
    search,
    summarize,
    validate_flags,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Options
    "RipgrepOptions",
    "SearchOptions",
    "WherewolfConfig",
    "config_from_dict",
    # Search
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
    # Health
    "HealthReport",
    "check_health",
    # Exceptions
    "DependencyError",
    "EmptyPatternError",
    "FileAccessError",
    "FileError",
    "InvalidFlagError",
    "ProcessFailure",
    "ProcessSpawnError",
    "SearchProcessError",
    "ToolNotFoundError",
    "ValidationError",
    "WherewolfError",
]
