"""Per-character glyph state, character info, and emitted glyphs."""

from __future__ import annotations

from dataclasses import dataclass, field

Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)


@dataclass(slots=True)
class GlyphState:
    """Visual state of one character. Created fresh for every character."""

    color: Color = WHITE
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    skew_x: float = 0.0
    skew_y: float = 0.0
    rotation: float = 0.0  # radians

    def set_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self.color = (r, g, b, a)

    def set_offset(self, x: float, y: float) -> None:
        self.offset_x = x
        self.offset_y = y

    def set_scale(self, x: float, y: float | None = None) -> None:
        self.scale_x = x
        self.scale_y = x if y is None else y

    def set_skew(self, x: float, y: float) -> None:
        self.skew_x = x
        self.skew_y = y

    def set_rotation(self, rotation: float) -> None:
        self.rotation = rotation


@dataclass(frozen=True, slots=True)
class CharInfo:
    """The character an effect is applied to.

    ``index`` is 1-based within the enclosing text run, ``length`` is the
    run's length.
    """

    char: str
    index: int
    length: int


@dataclass(frozen=True, slots=True)
class Glyph:
    """One emitted character with its resolved state and cursor position."""

    char: str
    state: GlyphState = field(default_factory=GlyphState)
    cursor: float = 0.0

    @property
    def x(self) -> float:
        return self.cursor + self.state.offset_x

    @property
    def y(self) -> float:
        return self.state.offset_y


@dataclass(frozen=True, slots=True)
class Layout:
    """Result of one engine run."""

    glyphs: tuple[Glyph, ...]
    text: str
    width: float
