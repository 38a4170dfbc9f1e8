#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Grouping and replacement previews for search results.

Everything here is display-only: nothing in this module touches files.
"""

from __future__ import annotations

from typing import Iterable

from wherewolf.search.types import ResultSummary, SearchMatch
from wherewolf.utils.text import substitute


def group_by_file(matches: Iterable[SearchMatch]) -> dict[str, list[SearchMatch]]:
    """Group matches by file path.

    Files appear in the order they were first seen, and matches keep their
    original relative order within each file.
    """
    grouped: dict[str, list[SearchMatch]] = {}
    for match in matches:
        grouped.setdefault(match.file_path, []).append(match)
    return grouped


def summarize(matches: Iterable[SearchMatch]) -> ResultSummary:
    """Count matches and distinct files."""
    total = 0
    files: set[str] = set()
    for match in matches:
        total += 1
        files.add(match.file_path)
    return ResultSummary(total_matches=total, total_files=len(files))


def preview(
    match: SearchMatch,
    pattern: str,
    replacement: str | None,
    *,
    regex: bool = False,
) -> tuple[str, str]:
    """Return the matched line before and after replacement.

    Parameters
    ----------
    match : SearchMatch
        Match whose line is previewed
    pattern : str
        Search pattern, literal unless ``regex`` is True
    replacement : str or None
        Replacement text; empty or None leaves the line unchanged
    regex : bool, default False
        Interpret ``pattern`` as a Python regular expression

    Returns
    -------
    tuple[str, str]
        ``(before, after)`` line text

    """
    before = match.line_text
    if not replacement or not pattern:
        return before, before
    after, _ = substitute(before, pattern, replacement, regex=regex)
    return before, after


def format_diff_lines(
    match: SearchMatch,
    pattern: str,
    replacement: str | None,
    *,
    regex: bool = False,
) -> tuple[str, str]:
    """Format a match as a pair of diff lines.

    The first line carries a ``-`` marker and the original text. The second
    carries a ``+`` marker and the replaced text, or no marker when there is
    no replacement to show.
    """
    line_num = f"{match.line_number:4d}"
    before, after = preview(match, pattern, replacement, regex=regex)
    delete_line = f"    {line_num}: - {before}"
    if replacement and pattern:
        add_line = f"    {line_num}: + {after}"
    else:
        add_line = f"    {line_num}:   {before}"
    return delete_line, add_line


def format_results(
    matches: list[SearchMatch],
    pattern: str,
    replacement: str | None = None,
    *,
    regex: bool = False,
) -> list[str]:
    """Render a full plain-text result listing with per-file headers.

    With a replacement each match shows its ``-``/``+`` pair; without one
    only the unmarked original line is listed.
    """
    if not matches:
        return ["", "  No matches found.", ""]

    summary = summarize(matches)
    lines = ["", f"  {summary.describe()}", ""]
    for file_path, file_matches in group_by_file(matches).items():
        lines.append(f"  ▼ {file_path} ({len(file_matches)})")
        for match in file_matches:
            delete_line, add_line = format_diff_lines(match, pattern, replacement, regex=regex)
            if replacement and pattern:
                lines.append(delete_line)
            lines.append(add_line)
        lines.append("")
    return lines


__all__ = ["format_diff_lines", "format_results", "group_by_file", "preview", "summarize"]
