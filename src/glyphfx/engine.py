"""Effect application — replays tokens and resolves every character's glyph state."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from glyphfx.errors import UnknownEffectError, UnmatchedCloseTagError
from glyphfx.font import Font
from glyphfx.glyph import CharInfo, Glyph, GlyphState, Layout
from glyphfx.registry import EffectArgs, EffectDefinition, EffectRegistry
from glyphfx.tokens import TagClose, TagOpen, TextRun, Token

Emit = Callable[[Glyph], None]


@dataclass
class ApplyContext:
    """State carried through one pass over the tokens."""

    registry: EffectRegistry
    font: Font
    source: str = ""
    # name -> (definition, args); insertion order is application order
    scope: dict[str, tuple[EffectDefinition, EffectArgs]] = field(default_factory=dict)
    x: float = 0.0
    text: list[str] = field(default_factory=list)
    glyphs: list[Glyph] = field(default_factory=list)


def apply(
    tokens: Sequence[Token],
    registry: EffectRegistry,
    font: Font,
    *,
    emit: Emit | None = None,
    source: str = "",
) -> Layout:
    """Apply effects to every character of *tokens*.

    Each glyph is passed to *emit* as soon as it is produced. On error the
    glyphs emitted so far are not retracted; callers that need all-or-nothing
    behaviour should stage emitted glyphs and commit after a clean return.
    *source* is only used to give errors a source snippet.
    """
    ctx = ApplyContext(registry=registry, font=font, source=source)
    for tok in tokens:
        if isinstance(tok, TextRun):
            _apply_text(tok, ctx, emit)
        elif isinstance(tok, TagOpen):
            _open_tag(tok, ctx)
        elif isinstance(tok, TagClose):
            _close_tag(tok, ctx)
        else:
            raise TypeError(f"unexpected token: {type(tok).__name__}")
    return Layout(tuple(ctx.glyphs), "".join(ctx.text), ctx.x)


def _apply_text(tok: TextRun, ctx: ApplyContext, emit: Emit | None) -> None:
    ctx.text.append(tok.content)
    length = len(tok.content)
    for index, char in enumerate(tok.content, start=1):
        state = GlyphState()
        info = CharInfo(char, index, length)
        for definition, args in ctx.scope.values():
            result = definition.fn(state, args, info)
            if result is not None:
                state = result

        glyph = Glyph(char, state, ctx.x)
        ctx.glyphs.append(glyph)
        if emit is not None:
            emit(glyph)

        # Only horizontal scale moves the cursor
        ctx.x += ctx.font.get_width(char) * state.scale_x


def _open_tag(tok: TagOpen, ctx: ApplyContext) -> None:
    definition = ctx.registry.get_effect(tok.name)
    if definition is None:
        raise UnknownEffectError(tok.name, tok.span, ctx.source)
    # Re-opening an already open name overwrites its arguments
    ctx.scope[tok.name] = (definition, EffectArgs(tok.name, tok.args))


def _close_tag(tok: TagClose, ctx: ApplyContext) -> None:
    if tok.name not in ctx.scope:
        raise UnmatchedCloseTagError(tok.name, tok.span, ctx.source)
    del ctx.scope[tok.name]
