"""--debug token and glyph dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from glyphfx.glyph import WHITE, Glyph, GlyphState
from glyphfx.tokens import TagClose, TagOpen, TextRun, Token

_DEFAULT_STATE = GlyphState()


def dump_tokens(tokens: Sequence[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token to *file* (stderr by default)."""
    if file is None:
        file = sys.stderr
    file.write("Tokens\n")
    for tok in tokens:
        if isinstance(tok, TextRun):
            file.write(f"  TextRun({tok.content!r})\n")
        elif isinstance(tok, TagOpen):
            args = " ".join(f"{k}={v}" for k, v in tok.args.items())
            file.write(f"  TagOpen {tok.name}" + (f" {args}" if args else "") + "\n")
        elif isinstance(tok, TagClose):
            file.write(f"  TagClose {tok.name}\n")


def dump_glyphs(glyphs: Sequence[Glyph], *, file: TextIO | None = None) -> None:
    """Print each glyph with the state fields that differ from the defaults."""
    if file is None:
        file = sys.stderr
    file.write("Glyphs\n")
    for glyph in glyphs:
        file.write(f"  {glyph.char!r} @ {glyph.cursor:g}")
        changed = _changed_fields(glyph.state)
        if changed:
            file.write(" " + " ".join(changed))
        file.write("\n")


def _changed_fields(state: GlyphState) -> list[str]:
    out: list[str] = []
    if state.color != WHITE:
        out.append("color=(" + ", ".join(f"{c:g}" for c in state.color) + ")")
    for name in ("offset_x", "offset_y", "scale_x", "scale_y", "skew_x", "skew_y", "rotation"):
        value = getattr(state, name)
        if value != getattr(_DEFAULT_STATE, name):
            out.append(f"{name}={value:g}")
    return out
