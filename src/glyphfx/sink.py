"""Glyph sinks and rendering backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from glyphfx.glyph import Color

GlyphSpec = tuple[Color, str]


@dataclass(frozen=True, slots=True)
class DrawTransform:
    """Instance-level transform applied to a whole batch when drawn."""

    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0
    skew_x: float = 0.0
    skew_y: float = 0.0


@dataclass(frozen=True, slots=True)
class GlyphDraw:
    """One glyph as recorded by a GlyphBatch."""

    color: Color
    char: str
    x: float
    y: float
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0
    skew_x: float = 0.0
    skew_y: float = 0.0


class GlyphSink(Protocol):
    """Incremental glyph accumulator owned by a RichText."""

    def clear(self) -> None: ...

    def add(
        self,
        spec: GlyphSpec,
        x: float,
        y: float,
        rotation: float = 0.0,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
        skew_x: float = 0.0,
        skew_y: float = 0.0,
    ) -> None: ...

    def draw(self, *transform: float) -> Any: ...


class Backend(Protocol):
    """Renders a recorded batch."""

    def draw_batch(self, batch: GlyphBatch, transform: DrawTransform) -> Any: ...


@dataclass
class GlyphBatch:
    """In-memory sink that records glyphs and hands them to a backend on draw."""

    backend: Backend | None = None
    items: list[GlyphDraw] = field(default_factory=list)

    def clear(self) -> None:
        self.items.clear()

    def add(
        self,
        spec: GlyphSpec,
        x: float,
        y: float,
        rotation: float = 0.0,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
        skew_x: float = 0.0,
        skew_y: float = 0.0,
    ) -> None:
        color, char = spec
        self.items.append(
            GlyphDraw(
                color, char, x, y, rotation, scale_x, scale_y, origin_x, origin_y, skew_x, skew_y
            )
        )

    def draw(self, *transform: float) -> Any:
        """Draw the batch through the backend.

        *transform* is positional ``x, y, rotation, scale_x, scale_y,
        origin_x, origin_y, skew_x, skew_y``; omitted trailing values take
        their defaults, and a single ``scale_x`` also sets ``scale_y``.
        Without a backend the recorded draws are returned as a list.
        """
        if self.backend is None:
            return list(self.items)
        return self.backend.draw_batch(self, make_transform(*transform))

    def __len__(self) -> int:
        return len(self.items)


def make_transform(*args: float) -> DrawTransform:
    """Build a DrawTransform from positional draw() arguments."""
    if len(args) > 9:
        raise TypeError(f"draw() takes at most 9 transform arguments ({len(args)} given)")
    if len(args) == 4:
        # Uniform scale when only scale_x is given
        args = (*args, args[3])
    return DrawTransform(*args)
