#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/commands/health.py
"""Health check command for the wherewolf CLI."""
import argparse
import sys

from wherewolf.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_SUCCESS,
    add_common_arguments,
    get_exit_code_for_exception,
    setup_logging,
)
from wherewolf.cli.config import resolve_config
from wherewolf.health import HealthReport, check_health

_STATUS_LABELS = {
    "ok": "OK",
    "warn": "WARNING",
    "error": "ERROR",
    "info": "INFO",
}


def format_health_report(report: HealthReport) -> str:
    """Render a health report as plain text lines."""
    lines = ["wherewolf health", "=" * 60]
    for check in report.checks:
        lines.append(f"[{_STATUS_LABELS[check.status]}] {check.message}")
        for advice in check.advice:
            lines.append(f"    - {advice}")
    return "\n".join(lines)


def handle_health_command(args: list[str] | None = None) -> int:
    """Handle ``wherewolf health`` to report ripgrep and configuration status.

    Returns
    -------
    int
        0 when every check passed or only warned, 2 when ripgrep is missing

    """
    parser = argparse.ArgumentParser(
        prog="wherewolf health",
        description="Check that ripgrep is installed and the configuration is sensible.",
    )
    add_common_arguments(parser)
    parsed = parser.parse_args(args)
    setup_logging(parsed)

    try:
        config = resolve_config(parsed.config, use_config=parsed.use_config)
    except argparse.ArgumentTypeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return get_exit_code_for_exception(exc)

    report = check_health(config)
    print(format_health_report(report))
    return EXIT_SUCCESS if report.ok else EXIT_DEPENDENCY_ERROR
