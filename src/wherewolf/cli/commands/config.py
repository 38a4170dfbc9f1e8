#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wherewolf/cli/commands/config.py
"""Configuration management commands for the wherewolf CLI.

This module provides subcommands for generating, viewing, and validating
configuration files. TOML, JSON and YAML are supported, and the effective
configuration is resolved with the same priority rules the search commands
use.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

import yaml

from wherewolf.cli.config import get_config_search_paths, load_config_file, load_config_with_priority
from wherewolf.constants import CONFIG_ENV_VAR
from wherewolf.options.config import WherewolfConfig, config_from_dict

logger = logging.getLogger(__name__)

_HEADER_LINES = (
    "# wherewolf configuration file",
    "# Generated from current defaults",
    "# Edit values as needed and remove settings you do not use.",
)


def _build_default_config_data() -> Dict[str, Any]:
    """Return the default configuration as plain values, dropping unset entries."""
    return {key: value for key, value in WherewolfConfig().to_dict().items() if value is not None}


def _format_config_as_toml(config: Dict[str, Any]) -> str:
    import tomli_w

    return "\n".join(_HEADER_LINES) + "\n\n" + tomli_w.dumps(config)


def _format_config_as_yaml(config: Dict[str, Any]) -> str:
    """Format configuration dictionary as YAML string.

    Parameters
    ----------
    config : dict
        Configuration dictionary to format

    Returns
    -------
    str
        YAML-formatted configuration string

    """
    header = "\n".join(_HEADER_LINES) + "\n\n"
    yaml_content = yaml.dump(config, default_flow_style=False, sort_keys=True, allow_unicode=True, indent=2)
    return header + yaml_content


def _format_config(config: Dict[str, Any], output_format: str) -> str:
    if output_format == "toml":
        return _format_config_as_toml(config)
    if output_format == "yaml":
        return _format_config_as_yaml(config)
    return json.dumps(config, indent=2, ensure_ascii=False, sort_keys=True)


def handle_config_generate_command(args: list[str] | None = None) -> int:
    """Handle ``config generate`` to create a default configuration file."""
    parser = argparse.ArgumentParser(
        prog="wherewolf config generate",
        description="Generate a default configuration file with all available options.",
    )
    parser.add_argument(
        "--format",
        choices=("toml", "json", "yaml"),
        default="toml",
        help="Output format for the generated configuration (default: toml).",
    )
    parser.add_argument(
        "--out",
        dest="out",
        help="Write configuration to the given path instead of stdout.",
    )

    try:
        parsed_args = parser.parse_args(args or [])
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0

    output_text = _format_config(_build_default_config_data(), parsed_args.format)

    if parsed_args.out:
        try:
            output_path = Path(parsed_args.out)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output_text, encoding="utf-8")
        except OSError as exc:
            print(f"Error writing configuration file: {exc}", file=sys.stderr)
            return 1
        print(f"Configuration written to {parsed_args.out}")
        return 0

    print(output_text)
    return 0


def handle_config_show_command(args: list[str] | None = None) -> int:
    """Handle ``config show`` command to display effective configuration."""
    parser = argparse.ArgumentParser(
        prog="wherewolf config show",
        description="Display the effective configuration that wherewolf will use.",
    )
    parser.add_argument(
        "--format",
        choices=("toml", "json", "yaml"),
        default="toml",
        help="Output format for the configuration (default: toml).",
    )
    parser.add_argument(
        "--no-source",
        dest="show_source",
        action="store_false",
        default=True,
        help="Hide configuration source information.",
    )

    try:
        parsed_args = parser.parse_args(args or [])
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0

    env_config_path = os.environ.get(CONFIG_ENV_VAR)

    if parsed_args.show_source:
        print("Configuration Sources (in priority order):")
        print("-" * 60)

        if env_config_path:
            status = "FOUND" if Path(env_config_path).exists() else "NOT FOUND"
            print(f"1. {CONFIG_ENV_VAR} env var: {env_config_path} [{status}]")
        else:
            print(f"1. {CONFIG_ENV_VAR} env var: (not set)")

        for index, path in enumerate(get_config_search_paths(), start=2):
            status = "FOUND" if path.exists() else "-"
            print(f"{index}. {path} [{status}]")

        print()

    try:
        config = load_config_with_priority(explicit_path=None, env_var_path=env_config_path)
    except argparse.ArgumentTypeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not config:
        print("No configuration found. Using defaults.")
        print("\nTo create a config file, run: wherewolf config generate --out .wherewolf.toml")
        return 0

    print("Effective Configuration:")
    print("=" * 60)
    print(_format_config(config, parsed_args.format))
    return 0


def handle_config_validate_command(args: list[str] | None = None) -> int:
    """Handle config validate command to check a configuration file.

    Both the syntax and the values are checked, so unknown keys and
    out-of-range numbers are reported as well as parse errors.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (beyond 'config validate')

    Returns
    -------
    int
        Exit code (0 for success, 1 for invalid config)

    """
    config_file = None

    for arg in args or []:
        if arg in ("--help", "-h"):
            print(
                """Usage: wherewolf config validate <config-file>

Validate a configuration file for syntax errors and invalid values.

Arguments:
  config-file        Path to configuration file (.toml, .yaml, .json or pyproject.toml)

Options:
  -h, --help        Show this help message

Examples:
  wherewolf config validate .wherewolf.toml
  wherewolf config validate pyproject.toml
"""
            )
            return 0
        if not arg.startswith("-"):
            config_file = arg
            break

    if not config_file:
        print("Error: Config file path required", file=sys.stderr)
        print("Usage: wherewolf config validate <config-file>", file=sys.stderr)
        return 1

    try:
        config = load_config_file(config_file)
    except argparse.ArgumentTypeError as e:
        print(f"Invalid configuration file: {e}", file=sys.stderr)
        return 1

    try:
        config_from_dict(config)
    except (TypeError, ValueError) as e:
        print(f"Invalid configuration values: {e}", file=sys.stderr)
        return 1

    print(f"Configuration file is valid: {config_file}")
    print(f"Format: {Path(config_file).suffix}")
    print(f"Keys found: {', '.join(config.keys()) if config else '(empty)'}")
    return 0


def handle_config_command(args: list[str] | None = None) -> int | None:
    """Handle config subcommands.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments

    Returns
    -------
    int or None
        Exit code if config command was handled, None otherwise

    """
    if not args:
        args = sys.argv[1:]

    if not args or args[0] != "config":
        return None

    if len(args) < 2:
        print(
            """Usage: wherewolf config <subcommand> [OPTIONS]

Configuration management commands.

Subcommands:
  generate          Generate a default configuration file
  show              Display effective configuration from all sources
  validate          Validate a configuration file

Examples:
  wherewolf config generate --out .wherewolf.toml
  wherewolf config show
  wherewolf config validate .wherewolf.toml
""",
            file=sys.stderr,
        )
        return 1

    subcommand = args[1]
    subcommand_args = args[2:]

    if subcommand == "generate":
        return handle_config_generate_command(subcommand_args)
    elif subcommand == "show":
        return handle_config_show_command(subcommand_args)
    elif subcommand == "validate":
        return handle_config_validate_command(subcommand_args)
    else:
        print(f"Error: Unknown config subcommand '{subcommand}'", file=sys.stderr)
        print("Valid subcommands: generate, show, validate", file=sys.stderr)
        return 1
