#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Validation of user-supplied ripgrep flags.

The output parser assumes one ``path:line:col:text`` line per match. Flags
that switch ripgrep to JSON, NUL-separated or file-list output would silently
corrupt parsing, so they are rejected before reaching a command line.
"""

from __future__ import annotations

from typing import Iterable

from wherewolf.constants import DENYLISTED_FLAGS
from wherewolf.exceptions import InvalidFlagError


def _is_denylisted(flag: str) -> bool:
    for denied in DENYLISTED_FLAGS:
        if flag == denied or flag.startswith(denied + "="):
            return True
    return False


def check_flags(flags: Iterable[str]) -> str | None:
    """Return the rejection reason for the first denylisted flag, or None.

    Parameters
    ----------
    flags : Iterable[str]
        Candidate ripgrep flags

    Returns
    -------
    str or None
        Human-readable reason when a flag is rejected, None when all flags are acceptable

    """
    for flag in flags:
        if _is_denylisted(flag):
            return f"Blacklisted ripgrep flag: {flag}"
    return None


def validate_flags(flags: Iterable[str]) -> None:
    """Raise ``InvalidFlagError`` if any flag is denylisted.

    Both the bare form (``--json``) and the ``name=value`` form
    (``--json=true``) are rejected.

    Raises
    ------
    InvalidFlagError
        For the first rejected flag

    """
    for flag in flags:
        if _is_denylisted(flag):
            raise InvalidFlagError(flag)


__all__ = ["check_flags", "validate_flags"]
