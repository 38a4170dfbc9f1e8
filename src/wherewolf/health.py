#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Environment and configuration health checks.

Reports whether ripgrep can be found and is recent enough, and flags
configuration values that are likely to cause trouble.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Callable, Optional

from packaging import version

from wherewolf.constants import HIGH_MAX_RESULTS_THRESHOLD, MIN_RIPGREP_VERSION, HealthStatus
from wherewolf.options.config import WherewolfConfig

logger = logging.getLogger(__name__)

RIPGREP_INSTALL_ADVICE = [
    "Install ripgrep: https://github.com/BurntSushi/ripgrep",
    "macOS: brew install ripgrep",
    "Ubuntu: apt install ripgrep",
    "Windows: choco install ripgrep or scoop install ripgrep",
]

_VERSION_RE = re.compile(r"ripgrep (\S+)")


@dataclass(frozen=True)
class HealthCheck:
    """A single health check line."""

    status: HealthStatus
    message: str
    advice: tuple[str, ...] = ()


@dataclass
class HealthReport:
    """Collected results of :func:`check_health`."""

    checks: list[HealthCheck] = field(default_factory=list)

    def add(self, status: HealthStatus, message: str, advice: list[str] | None = None) -> None:
        self.checks.append(HealthCheck(status, message, tuple(advice or ())))

    @property
    def ok(self) -> bool:
        """Return True when no check reported an error."""
        return all(check.status != "error" for check in self.checks)


def get_ripgrep_version(executable: str) -> Optional[str]:
    """Return the version reported by ``<executable> --version``, or None."""
    try:
        result = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Could not run %s --version: %s", executable, exc)
        return None

    found = _VERSION_RE.search(result.stdout or "")
    return found.group(1) if found else None


def _version_at_least(found: str, minimum: str) -> bool | None:
    try:
        return version.parse(found) >= version.parse(minimum)
    except version.InvalidVersion:
        return None


def check_health(
    config: WherewolfConfig | None = None,
    *,
    tool_resolver: Callable[[str], Optional[str]] | None = None,
) -> HealthReport:
    """Check ripgrep availability and configuration sanity.

    Parameters
    ----------
    config : WherewolfConfig, optional
        Configuration to inspect
    tool_resolver : callable, optional
        Maps the executable name to a path; defaults to :func:`shutil.which`

    Returns
    -------
    HealthReport
        One entry per check, in display order

    """
    config = config or WherewolfConfig()
    resolve = tool_resolver or shutil.which
    report = HealthReport()

    executable = resolve(config.executable)
    if executable is None:
        report.add("error", "ripgrep not found", RIPGREP_INSTALL_ADVICE)
    else:
        found = get_ripgrep_version(executable)
        if found is None:
            report.add("ok", "ripgrep found (version unknown)")
        elif _version_at_least(found, MIN_RIPGREP_VERSION) is False:
            report.add(
                "warn",
                f"ripgrep {found} is older than {MIN_RIPGREP_VERSION}",
                ["Upgrade ripgrep for reliable --vimgrep output"],
            )
        else:
            report.add("ok", f"ripgrep {found} found")

    if config.max_results is not None and config.max_results > HIGH_MAX_RESULTS_THRESHOLD:
        report.add(
            "warn",
            f"max_results is very high ({config.max_results})",
            ["Consider lowering max_results for better performance"],
        )
    else:
        report.add("ok", "Configuration looks good")

    report.add("info", f"Case sensitive: {str(config.case_sensitive).lower()}")
    report.add("info", f"Debounce delay: {config.debounce_ms}ms")
    return report


__all__ = ["HealthCheck", "HealthReport", "check_health", "get_ripgrep_version"]
