#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/__init__.py
"""Command-line interface for wherewolf.

Usage examples::

    wherewolf search TODO src -g "*.py"
    wherewolf search foo -r bar
    wherewolf replace TODO DONE src --yes
    wherewolf health
    wherewolf config generate --out .wherewolf.toml
"""

import sys

from wherewolf.cli.commands import dispatch_command

USAGE = """Usage: wherewolf <command> [OPTIONS]

Find and replace across a project with ripgrep.

Commands:
  search            Search files and list matches grouped by file
  replace           Preview a replacement, confirm it and rewrite files
  health            Check ripgrep availability and configuration
  config            Generate, show or validate configuration files

Options:
  -h, --help        Show this help message
  --version         Show the wherewolf version

Use 'wherewolf <command> --help' for more information on a command.
"""


def main(args: list[str] | None = None) -> int:
    """Execute the wherewolf CLI entry point."""
    if args is None:
        args = sys.argv[1:]

    if not args or args[0] in ("-h", "--help", "help"):
        print(USAGE, file=sys.stdout if args else sys.stderr)
        return 0 if args else 1

    if args[0] in ("--version", "-V"):
        from wherewolf import __version__

        print(f"wherewolf {__version__}")
        return 0

    result = dispatch_command(args)
    if result is not None:
        return result

    print(f"Error: Unknown command '{args[0]}'", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return 1


__all__ = ["main"]
