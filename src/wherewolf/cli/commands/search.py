#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/commands/search.py
"""Search and replace commands for the wherewolf CLI.

``wherewolf search`` runs ripgrep and prints matches grouped by file,
optionally previewing a replacement. ``wherewolf replace`` runs the same
search, shows the preview, asks for confirmation and rewrites the files.
"""
import argparse
import asyncio
import logging
import sys
from typing import Callable

from wherewolf.cli.builder import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    add_common_arguments,
    add_search_arguments,
    get_exit_code_for_exception,
    setup_logging,
)
from wherewolf.cli.config import resolve_config
from wherewolf.cli.output import render_plain, render_rich, should_use_rich_output
from wherewolf.exceptions import FileAccessError, WherewolfError
from wherewolf.options.config import WherewolfConfig
from wherewolf.options.search import SearchOptions
from wherewolf.search.orchestrator import SearchOrchestrator
from wherewolf.search.replace import Replacer
from wherewolf.search.results import summarize
from wherewolf.search.types import SearchMatch
from wherewolf.utils.text import compile_substitution

logger = logging.getLogger(__name__)

EXIT_NO_MATCHES = 1


def _options_from_args(
    parsed: argparse.Namespace, *, fixed_strings: bool, case_sensitive: bool = False
) -> SearchOptions:
    return SearchOptions(
        case_sensitive=case_sensitive or parsed.case_sensitive,
        multiline=parsed.multiline,
        fixed_strings=fixed_strings,
        max_results=parsed.max_results,
        include_globs=tuple(parsed.include or ()) or None,
        exclude_globs=tuple(parsed.exclude or ()) or None,
        extra_flags=tuple(parsed.rg_flags),
        path=parsed.path,
    )


def _prepare(
    parsed: argparse.Namespace, *, fixed_strings: bool, case_sensitive: bool = False
) -> tuple[WherewolfConfig, SearchOptions]:
    config = resolve_config(parsed.config, use_config=parsed.use_config)
    try:
        options = _options_from_args(parsed, fixed_strings=fixed_strings, case_sensitive=case_sensitive)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return config, options


def _run_search(pattern: str, options: SearchOptions, config: WherewolfConfig) -> list[SearchMatch]:
    """Run a search to completion, raising the run's error on failure."""
    orchestrator = SearchOrchestrator(config)
    outcome = asyncio.run(orchestrator.search(pattern, options))
    if outcome is None:
        return []
    if outcome.error is not None:
        raise outcome.error
    return outcome.matches


def _render(parsed: argparse.Namespace, matches: list[SearchMatch], pattern: str, replacement: str | None) -> None:
    if should_use_rich_output(parsed):
        render_rich(matches, pattern, replacement, regex=parsed.regex)
    else:
        render_plain(matches, pattern, replacement, regex=parsed.regex)


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rich", action="store_true", help="Enable rich-style output formatting")
    parser.add_argument("--force-rich", action="store_true", help="Use rich output even when not writing to a TTY")


def handle_search_command(args: list[str] | None = None) -> int:
    """Handle ``wherewolf search`` to list matches grouped by file."""
    parser = argparse.ArgumentParser(
        prog="wherewolf search",
        description="Search files with ripgrep and list matches grouped by file.",
    )
    parser.add_argument("pattern", help="Search pattern (ripgrep regular expression unless -F)")
    add_search_arguments(parser)
    parser.add_argument("-F", "--fixed-strings", action="store_true", help="Treat the pattern as literal text")
    parser.add_argument("-r", "--replace", dest="replacement", help="Preview this replacement for every match")
    parser.add_argument(
        "-e",
        "--regex",
        action="store_true",
        help="Expand the preview with Python regular expression semantics",
    )
    _add_output_arguments(parser)
    add_common_arguments(parser)

    parsed = parser.parse_args(args)
    setup_logging(parsed)

    try:
        if parsed.regex and parsed.replacement:
            compile_substitution(parsed.pattern, parsed.replacement)
        config, options = _prepare(parsed, fixed_strings=parsed.fixed_strings)
        matches = _run_search(parsed.pattern, options, config)
    except (WherewolfError, argparse.ArgumentTypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return get_exit_code_for_exception(exc)

    _render(parsed, matches, parsed.pattern, parsed.replacement)
    return EXIT_SUCCESS if matches else EXIT_NO_MATCHES


def _confirm(prompt: str, input_func: Callable[[str], str]) -> bool:
    try:
        response = input_func(prompt)
    except EOFError:
        return False
    return response.strip().lower() == "y"


def handle_replace_command(args: list[str] | None = None, input_func: Callable[[str], str] = input) -> int:
    """Handle ``wherewolf replace`` to rewrite files after confirmation."""
    parser = argparse.ArgumentParser(
        prog="wherewolf replace",
        description="Search files with ripgrep, preview the replacement and apply it.",
    )
    parser.add_argument("pattern", help="Text to replace (literal unless --regex)")
    parser.add_argument("replacement", help="Replacement text")
    add_search_arguments(parser)
    parser.add_argument(
        "-e",
        "--regex",
        action="store_true",
        help="Treat the pattern as a regular expression; the replacement may use \\1 or \\g<name>",
    )
    parser.add_argument(
        "--line-scoped",
        action="store_true",
        help="Only replace on matched lines instead of every occurrence in each file",
    )
    parser.add_argument("-y", "--yes", action="store_true", help="Apply without asking for confirmation")
    parser.add_argument("--dry-run", action="store_true", help="Show the preview and exit without writing")
    _add_output_arguments(parser)
    add_common_arguments(parser)

    parsed = parser.parse_args(args)
    setup_logging(parsed)

    if not parsed.replacement:
        print("Error: No replacement text specified", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        # Substitution is case-sensitive, so the search must be too
        config, options = _prepare(parsed, fixed_strings=not parsed.regex, case_sensitive=True)
        replacer = Replacer(
            regex=parsed.regex,
            line_scoped=parsed.line_scoped,
            on_file_error=_print_file_error,
        )
        # Rejects an invalid regex or template before ripgrep is started
        replacer.plan(parsed.pattern, parsed.replacement, [])
        matches = _run_search(parsed.pattern, options, config)
    except (WherewolfError, argparse.ArgumentTypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return get_exit_code_for_exception(exc)

    if not matches:
        print("No results to replace", file=sys.stderr)
        return EXIT_NO_MATCHES

    _render(parsed, matches, parsed.pattern, parsed.replacement)
    if parsed.dry_run:
        return EXIT_SUCCESS

    summary = summarize(matches)
    prompt = f"Apply {summary.total_matches} replacements in {summary.total_files} files? (y/n): "
    if not parsed.yes and not _confirm(prompt, input_func):
        print("Replacement cancelled")
        return EXIT_SUCCESS

    report = replacer.execute(replacer.plan(parsed.pattern, parsed.replacement, matches))
    if report.count > 0:
        print(f"Applied {report.count} replacements")
    else:
        print("No replacements applied", file=sys.stderr)

    if report.failed_files:
        return EXIT_FILE_ERROR
    return EXIT_SUCCESS if report.count > 0 else EXIT_ERROR


def _print_file_error(exc: FileAccessError) -> None:
    print(f"Error: {exc}", file=sys.stderr)
