"""glyphfx — per-character text effects from inline markup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from glyphfx.engine import apply
from glyphfx.errors import (
    DuplicateEffectError,
    EffectError,
    GlyphFxError,
    InvalidArgumentError,
    MarkupError,
    TagSyntaxError,
    UnknownEffectError,
    UnmatchedCloseTagError,
)
from glyphfx.glyph import CharInfo, Glyph, GlyphState, Layout
from glyphfx.parser import parse
from glyphfx.registry import (
    EffectArgs,
    EffectDefinition,
    EffectRegistry,
    add_effect,
    default_registry,
    remove_effect,
)
from glyphfx.richtext import RichText
from glyphfx.tokens import TagClose, TagOpen, TextRun, Token

if TYPE_CHECKING:
    from glyphfx.font import Font

__version__ = "0.1.0"

__all__ = [
    "CharInfo",
    "DuplicateEffectError",
    "EffectArgs",
    "EffectDefinition",
    "EffectError",
    "EffectRegistry",
    "Glyph",
    "GlyphFxError",
    "GlyphState",
    "InvalidArgumentError",
    "Layout",
    "MarkupError",
    "RichText",
    "TagClose",
    "TagOpen",
    "TagSyntaxError",
    "TextRun",
    "Token",
    "UnknownEffectError",
    "UnmatchedCloseTagError",
    "add_effect",
    "apply",
    "default_registry",
    "layout",
    "parse",
    "remove_effect",
]


def layout(source: str, font: Font, registry: EffectRegistry) -> Layout:
    """Parse markup and apply effects in one step."""
    return apply(parse(source), registry, font, source=source)
