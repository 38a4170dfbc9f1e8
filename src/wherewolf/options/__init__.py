#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options and settings for wherewolf.

Options are frozen dataclasses: ``SearchOptions`` travels with a single
search, while ``WherewolfConfig`` holds the defaults loaded from a
configuration file.
"""

from __future__ import annotations

from wherewolf.options.base import CloneFrozenMixin
from wherewolf.options.config import RipgrepOptions, WherewolfConfig, config_from_dict
from wherewolf.options.search import SearchOptions, split_globs

__all__ = [
    "CloneFrozenMixin",
    "RipgrepOptions",
    "SearchOptions",
    "WherewolfConfig",
    "config_from_dict",
    "split_globs",
]
