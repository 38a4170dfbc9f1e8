"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/output.py
import argparse
import sys
from typing import Any, TextIO

from wherewolf.search.results import format_diff_lines, format_results, group_by_file, summarize
from wherewolf.search.types import SearchMatch


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def render_plain(
    matches: list[SearchMatch],
    pattern: str,
    replacement: str | None,
    *,
    regex: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Print results grouped by file with diff-style before/after lines."""
    out = stream or sys.stdout
    for line in format_results(matches, pattern, replacement, regex=regex):
        print(line, file=out)


def render_rich(
    matches: list[SearchMatch],
    pattern: str,
    replacement: str | None,
    *,
    regex: bool = False,
    console: Any = None,
) -> None:
    """Print results using Rich styles for headers and diff markers."""
    from rich.console import Console
    from rich.text import Text

    console = console or Console()
    if not matches:
        console.print(Text("No matches found.", style="dim"))
        return

    console.print(Text(summarize(matches).describe(), style="bold cyan"))
    console.print()
    for file_path, file_matches in group_by_file(matches).items():
        console.print(Text(f"▼ {file_path} ({len(file_matches)})", style="bold magenta"))
        for match in file_matches:
            delete_line, add_line = format_diff_lines(match, pattern, replacement, regex=regex)
            if replacement:
                console.print(Text(delete_line, style="red"))
                console.print(Text(add_line, style="green"))
            else:
                console.print(Text(add_line))
        console.print()
