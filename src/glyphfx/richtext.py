"""RichText — ties a font, parsed markup, a registry and a glyph sink together."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from glyphfx.engine import apply
from glyphfx.font import Font
from glyphfx.glyph import Glyph, Layout
from glyphfx.parser import parse
from glyphfx.registry import EffectRegistry, default_registry
from glyphfx.sink import GlyphBatch, GlyphSink
from glyphfx.tokens import Token


class RichText:
    """A piece of effect-annotated text, laid out into a glyph sink.

    The font and registry are borrowed; the sink belongs to this instance.
    When *registry* is omitted the process default registry is used.
    When *sink* is omitted a backend-less ``GlyphBatch`` records the glyphs
    and ``draw()`` returns those records.
    Construction runs ``update()`` once, so markup errors surface
    immediately.
    """

    def __init__(
        self,
        font: Font,
        format: str | Sequence[Token],
        registry: EffectRegistry | None = None,
        sink: GlyphSink | None = None,
        filename: str = "input.fx",
    ) -> None:
        self.font = font
        self.source = format if isinstance(format, str) else ""
        self.tokens = parse(format, filename)
        self.registry = registry if registry is not None else default_registry()
        self.sink: GlyphSink = sink if sink is not None else GlyphBatch()
        self.text = ""
        self.layout: Layout | None = None
        self.update()

    def update(self) -> None:
        """Re-run effect application and rebuild the sink from scratch.

        Glyphs are staged first; the sink is only cleared and refilled once
        the whole token list applied cleanly, so a failed update leaves the
        last good contents in place.
        """
        staged: list[Glyph] = []
        layout = apply(self.tokens, self.registry, self.font, emit=staged.append, source=self.source)

        self.sink.clear()
        for glyph in staged:
            state = glyph.state
            self.sink.add(
                (state.color, glyph.char),
                glyph.x,
                glyph.y,
                state.rotation,
                state.scale_x,
                state.scale_y,
                0,
                0,
                state.skew_x,
                state.skew_y,
            )
        self.layout = layout
        self.text = layout.text

    def draw(self, *transform: float) -> Any:
        """Draw the current sink contents with an instance-level transform."""
        return self.sink.draw(*transform)

    @property
    def glyphs(self) -> tuple[Glyph, ...]:
        return self.layout.glyphs if self.layout is not None else ()

    @property
    def width(self) -> float:
        return self.layout.width if self.layout is not None else 0.0
