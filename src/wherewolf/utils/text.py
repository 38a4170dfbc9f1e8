#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wherewolf/utils/text.py
"""Text substitution shared by result previews and the replacer.

Previews and file replacement must agree on what a replacement does, so both
go through :func:`substitute`.

Functions
---------
substitute : Replace every occurrence of a pattern in a string
compile_substitution : Compile a regex pattern and check its replacement template

Examples
--------
Literal substitution (the default):

    >>> from wherewolf.utils.text import substitute
    >>> substitute("a.b a.b", "a.b", "x")
    ('x x', 2)

Regular expression substitution with a group reference:

    >>> substitute("foo(1) foo(2)", r"foo\\((\\d)\\)", r"bar[\\1]", regex=True)
    ('bar[1] bar[2]', 2)

"""

from __future__ import annotations

import re

from wherewolf.exceptions import ValidationError


def compile_substitution(pattern: str, replacement: str) -> re.Pattern[str]:
    """Compile ``pattern`` and check that ``replacement`` is a valid template for it.

    Group references in the template are resolved when the substitution is
    prepared, not when something matches, so a substitution against an empty
    string is enough to reject ``\\1`` on a pattern without groups.

    Raises
    ------
    ValidationError
        If the pattern does not compile or the template refers to a missing group

    """
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise ValidationError(
            f"Invalid regular expression: {exc}",
            parameter_name="pattern",
            parameter_value=pattern,
            original_error=exc,
        ) from exc

    try:
        compiled.sub(replacement, "")
    except (re.error, IndexError) as exc:
        raise ValidationError(
            f"Invalid replacement template: {exc}",
            parameter_name="replacement",
            parameter_value=replacement,
            original_error=exc,
        ) from exc
    return compiled


def substitute(text: str, pattern: str, replacement: str, *, regex: bool = False) -> tuple[str, int]:
    """Replace every occurrence of ``pattern`` in ``text``.

    Parameters
    ----------
    text : str
        Input text
    pattern : str
        Literal text, or a Python regular expression when ``regex`` is True
    replacement : str
        Replacement text. In regex mode group references such as ``\\1`` and
        ``\\g<name>`` are expanded.
    regex : bool, default False
        Interpret ``pattern`` as a regular expression

    Returns
    -------
    tuple[str, int]
        The new text and the number of substitutions made

    Raises
    ------
    ValidationError
        If ``regex`` is True and the pattern or replacement is invalid

    """
    if not pattern:
        return text, 0
    if regex:
        return compile_substitution(pattern, replacement).subn(replacement, text)
    count = text.count(pattern)
    if not count:
        return text, 0
    return text.replace(pattern, replacement), count
