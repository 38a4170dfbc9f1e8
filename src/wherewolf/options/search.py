"""Per-invocation options for a single ripgrep search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from wherewolf.options.base import CloneFrozenMixin


def split_globs(globs: str | Sequence[str] | None) -> list[str]:
    """Split glob input into individual patterns.

    Strings are split on whitespace, so ``"*.py  *.lua"`` becomes two globs.
    Sequences are flattened the same way, which lets callers mix both forms.
    """
    if not globs:
        return []
    if isinstance(globs, str):
        return globs.split()
    tokens: list[str] = []
    for item in globs:
        tokens.extend(item.split())
    return tokens


@dataclass(frozen=True)
class SearchOptions(CloneFrozenMixin):
    """Options supplied by the caller for one search run.

    Boolean toggles are combined with the configuration defaults: a search is
    case sensitive when either the options or the configuration ask for it.
    """

    case_sensitive: bool = field(
        default=False,
        metadata={"help": "Force case-sensitive matching (smart case otherwise)", "importance": "core"},
    )
    multiline: bool = field(
        default=False,
        metadata={"help": "Allow matches to span multiple lines", "importance": "core"},
    )
    fixed_strings: bool = field(
        default=False,
        metadata={"help": "Treat the pattern as literal text instead of a regular expression", "importance": "core"},
    )
    max_results: int | None = field(
        default=None,
        metadata={
            "help": "Maximum matches per file; overrides the configured cap when set",
            "type": int,
            "importance": "core",
        },
    )
    include_globs: str | tuple[str, ...] | None = field(
        default=None,
        metadata={"help": "Whitespace-separated globs of files to search", "importance": "core"},
    )
    exclude_globs: str | tuple[str, ...] | None = field(
        default=None,
        metadata={"help": "Whitespace-separated globs of files to skip", "importance": "core"},
    )
    extra_flags: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Additional ripgrep flags for this search", "importance": "advanced"},
    )
    path: str | None = field(
        default=None,
        metadata={"help": "Directory or file to search (current directory when omitted)", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Normalise sequence fields and validate ranges at construction time."""
        if self.max_results is not None and self.max_results <= 0:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        if isinstance(self.extra_flags, str):
            raise ValueError("extra_flags must be a sequence of flags, not a string")
        object.__setattr__(self, "extra_flags", tuple(self.extra_flags))
        for name in ("include_globs", "exclude_globs"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                object.__setattr__(self, name, tuple(value))

    @property
    def include_list(self) -> list[str]:
        """Return include globs as individual patterns."""
        return split_globs(self.include_globs)

    @property
    def exclude_list(self) -> list[str]:
        """Return exclude globs as individual patterns."""
        return split_globs(self.exclude_globs)


__all__ = ["SearchOptions", "split_globs"]
