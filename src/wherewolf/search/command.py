#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Construction of ripgrep command lines.

Flags are emitted in a fixed order and the pattern always follows an explicit
``--`` so that neither user flags nor a pattern starting with ``-`` can be
misread as an option.
"""

from __future__ import annotations

import logging

from wherewolf.constants import BASE_RIPGREP_FLAGS, END_OF_FLAGS
from wherewolf.exceptions import EmptyPatternError
from wherewolf.options.config import WherewolfConfig
from wherewolf.options.search import SearchOptions
from wherewolf.search.flags import check_flags, validate_flags

logger = logging.getLogger(__name__)


def build_command(
    pattern: str,
    options: SearchOptions | None = None,
    config: WherewolfConfig | None = None,
) -> list[str]:
    """Assemble the argument list for one ripgrep search.

    Parameters
    ----------
    pattern : str
        Search pattern; must contain non-whitespace characters
    options : SearchOptions, optional
        Per-call options
    config : WherewolfConfig, optional
        Configuration defaults

    Returns
    -------
    list[str]
        Command starting with the configured executable

    Raises
    ------
    EmptyPatternError
        If ``pattern`` is empty or blank
    InvalidFlagError
        If ``options.extra_flags`` contains a denylisted flag

    """
    if not pattern or not pattern.strip():
        raise EmptyPatternError(parameter_value=pattern)

    options = options or SearchOptions()
    config = config or WherewolfConfig()

    cmd = [config.executable, *BASE_RIPGREP_FLAGS]

    if options.case_sensitive or config.case_sensitive:
        cmd.append("--case-sensitive")
    else:
        cmd.append("--smart-case")

    if options.multiline or config.multiline:
        cmd.append("--multiline")

    if options.fixed_strings:
        cmd.append("--fixed-strings")

    max_count = options.max_results or config.max_results
    if max_count:
        cmd.append(f"--max-count={max_count}")

    if not config.rg.respect_gitignore:
        cmd.append("--no-ignore")
    if config.rg.hidden:
        cmd.append("--hidden")

    if config.rg.extra_args:
        reason = check_flags(config.rg.extra_args)
        if reason is None:
            cmd.extend(config.rg.extra_args)
        else:
            logger.warning("Invalid ripgrep flag in config: %s", reason)

    if options.extra_flags:
        validate_flags(options.extra_flags)
        cmd.extend(options.extra_flags)

    for glob in options.include_list:
        cmd.append(f"--glob={glob}")
    for glob in options.exclude_list:
        cmd.append(f"--glob=!{glob}")

    cmd.append(END_OF_FLAGS)
    cmd.append(pattern)

    if options.path:
        cmd.append(options.path)

    return cmd


__all__ = ["build_command"]
