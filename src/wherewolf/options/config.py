#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Long-lived wherewolf configuration.

``WherewolfConfig`` is the read-only source of defaults consulted by the
command builder, the orchestrator and the live search. It is normally built
from a configuration file through :func:`config_from_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from wherewolf.constants import (
    DEFAULT_CASE_SENSITIVE,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_EXECUTABLE,
    DEFAULT_HIDDEN,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MULTILINE,
    DEFAULT_RESPECT_GITIGNORE,
)
from wherewolf.options.base import CloneFrozenMixin, check_unknown_keys


@dataclass(frozen=True)
class RipgrepOptions(CloneFrozenMixin):
    """Ripgrep-specific configuration.

    Parameters
    ----------
    extra_args : tuple of str
        Extra flags appended to every search. Denylisted flags are skipped
        with a warning rather than failing the search.
    respect_gitignore : bool
        Honour ``.gitignore`` and other ignore files. ``False`` adds ``--no-ignore``.
    hidden : bool
        Search hidden files and directories.

    """

    extra_args: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Extra ripgrep arguments added to every search", "importance": "advanced"},
    )
    respect_gitignore: bool = field(
        default=DEFAULT_RESPECT_GITIGNORE,
        metadata={"help": "Respect .gitignore files", "importance": "core"},
    )
    hidden: bool = field(
        default=DEFAULT_HIDDEN,
        metadata={"help": "Search hidden files", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Normalise ``extra_args`` into a tuple."""
        if isinstance(self.extra_args, str):
            raise ValueError("rg.extra_args must be a list of flags, not a string")
        object.__setattr__(self, "extra_args", tuple(self.extra_args))


@dataclass(frozen=True)
class WherewolfConfig(CloneFrozenMixin):
    """Configuration defaults for searching and live updates."""

    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={"help": "Use case-sensitive matching by default", "importance": "core"},
    )
    multiline: bool = field(
        default=DEFAULT_MULTILINE,
        metadata={"help": "Enable multiline matching by default", "importance": "core"},
    )
    max_results: int | None = field(
        default=DEFAULT_MAX_RESULTS,
        metadata={"help": "Maximum matches per file passed as --max-count (None disables)", "type": int},
    )
    debounce_ms: int = field(
        default=DEFAULT_DEBOUNCE_MS,
        metadata={"help": "Quiet period in milliseconds before a live search runs", "type": int},
    )
    executable: str = field(
        default=DEFAULT_EXECUTABLE,
        metadata={"help": "Name or path of the ripgrep executable", "importance": "advanced"},
    )
    rg: RipgrepOptions = field(
        default_factory=RipgrepOptions,
        metadata={"help": "Ripgrep-specific settings", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges at construction time.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_results is not None and self.max_results <= 0:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms cannot be negative, got {self.debounce_ms}")
        if not self.executable or not self.executable.strip():
            raise ValueError("executable must not be empty")

    @property
    def debounce_seconds(self) -> float:
        """Return the debounce interval in seconds."""
        return self.debounce_ms / 1000.0


def config_from_dict(data: Mapping[str, Any] | None) -> WherewolfConfig:
    """Build a ``WherewolfConfig`` from a loaded configuration mapping.

    Parameters
    ----------
    data : Mapping[str, Any] or None
        Mapping as produced by the config-file loaders. The ``rg`` key may
        hold a nested table.

    Returns
    -------
    WherewolfConfig
        Validated configuration

    Raises
    ------
    ValueError
        If unknown keys are present or a value is out of range

    """
    if not data:
        return WherewolfConfig()

    check_unknown_keys(WherewolfConfig, data)
    values = dict(data)

    rg_section = values.pop("rg", None)
    if rg_section is not None:
        if not isinstance(rg_section, Mapping):
            raise ValueError(f"rg must be a table, got {type(rg_section).__name__}")
        check_unknown_keys(RipgrepOptions, rg_section, section="rg")
        values["rg"] = RipgrepOptions(**rg_section)

    return WherewolfConfig(**values)


__all__ = ["RipgrepOptions", "WherewolfConfig", "config_from_dict"]
