#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Apply a replacement across the files referenced by a result set.

Replacement is file-granular and best effort: each file is read once,
substituted, and written back only when its content changed. A file that
cannot be read or written is reported and skipped; the remaining files are
still processed.

By default every occurrence of the pattern in a file is replaced, including
occurrences on lines that were not part of the result set. Pass
``line_scoped=True`` to restrict substitution to the matched lines.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from wherewolf.exceptions import FileAccessError
from wherewolf.search.results import group_by_file
from wherewolf.search.types import SearchMatch
from wherewolf.utils.text import compile_substitution, substitute

logger = logging.getLogger(__name__)

# Line numbers from ripgrep count "\n" separators only
_LINE_BREAK = re.compile(r"(?<=\n)")

FileErrorCallback = Callable[[FileAccessError], None]


@dataclass(frozen=True)
class ReplacementPlan:
    """A replacement waiting to be applied."""

    pattern: str
    replacement: str
    target_matches: tuple[SearchMatch, ...]

    @property
    def files(self) -> dict[str, list[SearchMatch]]:
        """Return target matches grouped by file."""
        return group_by_file(self.target_matches)


@dataclass
class ReplacementReport:
    """Per-file outcome of applying a ``ReplacementPlan``.

    Attributes
    ----------
    count : int
        Sum of match counts for files that were modified
    modified_files : list[str]
        Files whose content changed and was written back
    unchanged_files : list[str]
        Files read successfully whose content did not change
    failed_files : dict[str, str]
        Files that could not be read or written, mapped to the error message

    """

    count: int = 0
    modified_files: list[str] = field(default_factory=list)
    unchanged_files: list[str] = field(default_factory=list)
    failed_files: dict[str, str] = field(default_factory=dict)


class Replacer:
    """Substitute a pattern in every file referenced by a set of matches.

    Parameters
    ----------
    regex : bool, default False
        Interpret the pattern as a Python regular expression; the
        replacement may then use ``\\1`` or ``\\g<name>`` group references
    line_scoped : bool, default False
        Only substitute on lines that appear in the matches
    encoding : str, default "utf-8"
        Encoding used to read and write files
    on_file_error : callable, optional
        Called with a ``FileAccessError`` for each file that fails

    """

    def __init__(
        self,
        *,
        regex: bool = False,
        line_scoped: bool = False,
        encoding: str = "utf-8",
        on_file_error: FileErrorCallback | None = None,
    ) -> None:
        """Initialise the replacer with its substitution policy."""
        self.regex = regex
        self.line_scoped = line_scoped
        self.encoding = encoding
        self.on_file_error = on_file_error

    def plan(self, pattern: str, replacement: str, matches: Iterable[SearchMatch]) -> ReplacementPlan:
        """Build a plan, validating the pattern and template in regex mode.

        Raises
        ------
        ValidationError
            If ``regex`` is enabled and the pattern does not compile, or the
            replacement refers to a group the pattern does not define

        """
        if self.regex:
            compile_substitution(pattern, replacement)
        return ReplacementPlan(pattern=pattern, replacement=replacement, target_matches=tuple(matches))

    def execute(self, plan: ReplacementPlan) -> ReplacementReport:
        """Apply ``plan`` file by file and report the outcome."""
        report = ReplacementReport()
        if not plan.target_matches:
            return report

        for file_path, file_matches in plan.files.items():
            try:
                modified = self._replace_in_file(file_path, file_matches, plan)
            except FileAccessError as exc:
                logger.error(exc.message)
                report.failed_files[file_path] = exc.message
                if self.on_file_error is not None:
                    self.on_file_error(exc)
                continue

            if modified:
                report.modified_files.append(file_path)
                report.count += len(file_matches)
            else:
                report.unchanged_files.append(file_path)

        logger.info("Applied %d replacements in %d files", report.count, len(report.modified_files))
        return report

    def apply(self, pattern: str, replacement: str, matches: Iterable[SearchMatch]) -> int:
        """Plan and execute a replacement, returning the modified-match count."""
        return self.execute(self.plan(pattern, replacement, matches)).count

    def _replace_in_file(self, file_path: str, matches: list[SearchMatch], plan: ReplacementPlan) -> bool:
        path = Path(file_path)
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise FileAccessError(file_path, f"Could not open file: {file_path}", original_error=exc) from exc

        if self.line_scoped:
            new_content = self._substitute_lines(content, {m.line_number for m in matches}, plan)
        else:
            new_content, _ = substitute(content, plan.pattern, plan.replacement, regex=self.regex)

        if new_content == content:
            logger.debug("No change in %s", file_path)
            return False

        try:
            with open(path, "w", encoding=self.encoding, newline="") as f:
                f.write(new_content)
        except OSError as exc:
            raise FileAccessError(file_path, f"Could not write file: {file_path}", original_error=exc) from exc

        logger.debug("Rewrote %s (%d matches)", file_path, len(matches))
        return True

    def _substitute_lines(self, content: str, line_numbers: set[int], plan: ReplacementPlan) -> str:
        lines = _LINE_BREAK.split(content)
        for line_number in line_numbers:
            index = line_number - 1
            if 0 <= index < len(lines):
                lines[index], _ = substitute(lines[index], plan.pattern, plan.replacement, regex=self.regex)
        return "".join(lines)


def apply_replacements(
    pattern: str,
    replacement: str,
    matches: Iterable[SearchMatch],
    *,
    on_file_error: FileErrorCallback | None = None,
    regex: bool = False,
    line_scoped: bool = False,
) -> int:
    """Replace ``pattern`` with ``replacement`` in the files referenced by ``matches``.

    Parameters
    ----------
    pattern : str
        Text to replace (literal unless ``regex`` is True)
    replacement : str
        Replacement text
    matches : Iterable[SearchMatch]
        Matches from a completed search
    on_file_error : callable, optional
        Called with a ``FileAccessError`` for each file that fails
    regex : bool, default False
        Interpret ``pattern`` as a Python regular expression
    line_scoped : bool, default False
        Only substitute on matched lines instead of the whole file

    Returns
    -------
    int
        Number of matches in files that were actually modified. Returns 0
        without touching the filesystem when ``matches`` is empty.

    Examples
    --------
    >>> apply_replacements("TODO", "DONE", [])
    0

    """
    replacer = Replacer(regex=regex, line_scoped=line_scoped, on_file_error=on_file_error)
    return replacer.apply(pattern, replacement, matches)


__all__ = ["ReplacementPlan", "ReplacementReport", "Replacer", "apply_replacements"]
