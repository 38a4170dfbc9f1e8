#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/commands/__init__.py
"""CLI command handlers for wherewolf.

Each subcommand owns its argument parser; this module only routes the
first argument to the matching handler.
"""

import logging
import sys

# Handlers are imported lazily so that ``--help`` and ``--version`` stay fast

logger = logging.getLogger(__name__)

COMMANDS = ("search", "replace", "health", "config")


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Route a subcommand to its handler.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments

    Returns
    -------
    int or None
        Exit code if a subcommand was handled, None otherwise

    """
    if not args:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] == "search":
        from wherewolf.cli.commands.search import handle_search_command

        return handle_search_command(args[1:])

    if args[0] == "replace":
        from wherewolf.cli.commands.search import handle_replace_command

        return handle_replace_command(args[1:])

    if args[0] == "health":
        from wherewolf.cli.commands.health import handle_health_command

        return handle_health_command(args[1:])

    if args[0] == "config":
        from wherewolf.cli.commands.config import handle_config_command

        return handle_config_command(args)

    return None


__all__ = ["COMMANDS", "dispatch_command"]
