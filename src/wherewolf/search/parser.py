#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsing of ``rg --vimgrep`` output lines into ``SearchMatch`` records."""

from __future__ import annotations

from wherewolf.search.types import SearchMatch


def _positive_int(token: str) -> int | None:
    if not (token.isascii() and token.isdecimal()):
        return None
    value = int(token)
    return value if value > 0 else None


def parse_line(line: str) -> SearchMatch | None:
    """Parse one ``path:line:col:text`` line.

    Paths may contain colons (``C:\\src\\x.py``) and so may the matched text.
    The line/column pair is the first pair of adjacent positive integers
    after at least one path token, and everything after it is the text.
    A path that itself contains a ``:<n>:<m>:`` segment is therefore split at
    that segment: ``bk:1:2:x.py:9:3:t`` parses as file ``bk``, line 1, column
    2 with text ``x.py:9:3:t``.

    Parameters
    ----------
    line : str
        A single output line without its newline

    Returns
    -------
    SearchMatch or None
        The parsed match, or None for empty and malformed lines

    Examples
    --------
    >>> parse_line("a/b.txt:12:5:hello:world")
    SearchMatch(file_path='a/b.txt', line_number=12, column=5, line_text='hello:world')
    >>> parse_line("onlytwo:colons") is None
    True

    """
    line = line.rstrip("\r")
    if not line:
        return None

    tokens = line.split(":")
    if len(tokens) < 4:
        return None

    # The pair must leave room for a text token after it
    for index in range(1, len(tokens) - 2):
        line_number = _positive_int(tokens[index])
        if line_number is None:
            continue
        column = _positive_int(tokens[index + 1])
        if column is None:
            continue
        return SearchMatch(
            file_path=":".join(tokens[:index]),
            line_number=line_number,
            column=column,
            line_text=":".join(tokens[index + 2 :]),
        )
    return None


def parse_output(text: str) -> list[SearchMatch]:
    """Parse a block of output, skipping empty and malformed lines.

    Records are separated by ``\\n`` only; form feeds and other Unicode line
    breaks belong to the matched text.
    """
    matches: list[SearchMatch] = []
    for raw_line in text.split("\n"):
        match = parse_line(raw_line)
        if match is not None:
            matches.append(match)
    return matches


__all__ = ["parse_line", "parse_output"]
