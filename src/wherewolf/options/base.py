#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for wherewolf option dataclasses.

This module defines the foundation shared by the per-search options and the
long-lived configuration object.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, is_dataclass, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the options as plain, config-file friendly values."""
        result: dict[str, Any] = {}
        for field in fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if is_dataclass(value) and isinstance(value, CloneFrozenMixin):
                value = value.to_dict()
            elif isinstance(value, tuple):
                value = list(value)
            result[field.name] = value
        return result


def check_unknown_keys(options_class: type, data: Mapping[str, Any], section: str | None = None) -> None:
    """Raise ``ValueError`` when ``data`` holds keys that are not fields of ``options_class``.

    Parameters
    ----------
    options_class : type
        Dataclass whose field names are accepted
    data : Mapping[str, Any]
        Raw configuration mapping
    section : str, optional
        Section name used to prefix keys in the error message

    """
    valid = {field.name for field in fields(options_class)}
    unknown = sorted(key for key in data if key not in valid)
    if unknown:
        prefix = f"{section}." if section else ""
        names = ", ".join(prefix + key for key in unknown)
        raise ValueError(f"Unknown configuration option(s): {names}")
