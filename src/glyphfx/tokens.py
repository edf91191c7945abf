"""Token variants and source positions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class TextRun:
    """Plain text between tags."""

    content: str
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class TagOpen:
    """Opening tag: {name key=value ...}."""

    name: str
    args: Mapping[str, int | float] = field(default_factory=dict)
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class TagClose:
    """Closing tag: {/name}."""

    name: str
    span: Span | None = field(default=None, compare=False)


Token = TextRun | TagOpen | TagClose

TOKEN_TYPES = (TextRun, TagOpen, TagClose)


def is_token(value: object) -> bool:
    """Return True if value is one of the three token variants."""
    return isinstance(value, TOKEN_TYPES)
