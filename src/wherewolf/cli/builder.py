#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/builder.py
"""Shared argument definitions and exit codes for wherewolf commands."""

import argparse
import logging

from wherewolf.exceptions import DependencyError, FileError, ValidationError
from wherewolf.logging_utils import configure_logging

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, DependencyError):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging options shared by every command."""
    parser.add_argument("--config", help="Path to a configuration file (TOML, YAML, JSON or pyproject.toml)")
    parser.add_argument(
        "--no-config",
        dest="use_config",
        action="store_false",
        help="Ignore configuration files and use built-in defaults",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="Logging verbosity",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")


def add_search_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options that shape a ripgrep search."""
    parser.add_argument("path", nargs="?", help="Directory or file to search (default: current directory)")
    parser.add_argument(
        "-s",
        "--case-sensitive",
        action="store_true",
        help="Force case-sensitive matching (smart case otherwise)",
    )
    parser.add_argument("-U", "--multiline", action="store_true", help="Allow matches to span lines")
    parser.add_argument("-m", "--max-results", type=int, help="Maximum matches per file")
    parser.add_argument("-g", "--include", action="append", help="Glob of files to search (repeatable)")
    parser.add_argument("-x", "--exclude", action="append", help="Glob of files to skip (repeatable)")
    parser.add_argument(
        "--rg-flag",
        dest="rg_flags",
        action="append",
        default=[],
        help="Extra ripgrep flag passed through verbatim (repeatable)",
    )


def setup_logging(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)
