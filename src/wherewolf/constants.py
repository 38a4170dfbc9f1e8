#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the wherewolf library.

This module centralizes the hardcoded values used across wherewolf:
ripgrep flags, exit statuses and configuration defaults.

Constants are organized by category:
1. Type Definitions - Literal types
2. Configuration Defaults - Values used by ``WherewolfConfig``
3. Ripgrep Command Line - Base flags and the flag denylist
4. Process Exit Statuses - Mapping of exit codes to run outcomes
5. Configuration Files - Names searched during discovery
"""

from __future__ import annotations

import signal
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HealthStatus = Literal["ok", "warn", "error", "info"]

# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULT_EXECUTABLE = "rg"
DEFAULT_CASE_SENSITIVE = False
DEFAULT_MULTILINE = False
DEFAULT_MAX_RESULTS = 1000
DEFAULT_DEBOUNCE_MS = 500
DEFAULT_RESPECT_GITIGNORE = True
DEFAULT_HIDDEN = False

# Above this result cap the health check suggests lowering max_results
HIGH_MAX_RESULTS_THRESHOLD = 10000

# Oldest ripgrep release with --vimgrep, --smart-case and --glob negation
MIN_RIPGREP_VERSION = "0.10.0"

# =============================================================================
# Ripgrep Command Line
# =============================================================================

BASE_RIPGREP_FLAGS: tuple[str, ...] = ("--vimgrep", "--no-heading", "--color=never")

END_OF_FLAGS = "--"

# Flags that change the output away from one "path:line:col:text" line per match
DENYLISTED_FLAGS: tuple[str, ...] = (
    "--binary",
    "--json",
    "--null-data",
    "--null",
    "-0",
    "--files",
    "--files-with-matches",
    "--files-without-match",
    "-l",
    "-L",
)

# =============================================================================
# Process Exit Statuses
# =============================================================================

EXIT_MATCHES_FOUND = 0
EXIT_NO_MATCHES = 1

SUCCESS_EXIT_CODES = frozenset({EXIT_MATCHES_FOUND, EXIT_NO_MATCHES})

# asyncio reports death-by-signal as a negative return code, shells as 128 + signo
CANCEL_EXIT_CODES = frozenset(
    {
        -signal.SIGTERM,
        -signal.SIGINT,
        -signal.SIGKILL,
        int(signal.SIGTERM),
        128 + signal.SIGTERM,
        128 + signal.SIGINT,
    }
)

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_ENV_VAR = "WHEREWOLF_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (".wherewolf.toml", ".wherewolf.yaml", ".wherewolf.yml", ".wherewolf.json")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_SECTION = "wherewolf"
