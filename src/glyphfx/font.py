"""Font protocol and two simple metric-only fonts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol


class Font(Protocol):
    """Anything that can report a character's horizontal advance."""

    def get_width(self, char: str) -> float: ...


@dataclass(frozen=True, slots=True)
class MonospaceFont:
    """Every character advances by the same amount."""

    advance: float = 8.0

    def get_width(self, char: str) -> float:
        return self.advance


@dataclass(frozen=True, slots=True)
class TableFont:
    """Per-character advances with a fallback for unlisted characters."""

    widths: Mapping[str, float] = field(default_factory=dict)
    default: float = 8.0

    def get_width(self, char: str) -> float:
        return self.widths.get(char, self.default)
