"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from glyphfx.engine import apply
from glyphfx.font import MonospaceFont
from glyphfx.glyph import CharInfo, GlyphState, Layout
from glyphfx.parser import parse
from glyphfx.registry import EffectArgs, EffectRegistry, default_registry


@pytest.fixture
def font() -> MonospaceFont:
    """Every character advances 10 units."""
    return MonospaceFont(10.0)


@pytest.fixture
def registry() -> EffectRegistry:
    """A registry with a few simple test effects."""
    reg = EffectRegistry()

    @reg.effect("red")
    def red(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
        state.set_color(1, 0, 0, 1)

    @reg.effect("blue")
    def blue(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
        state.set_color(0, 0, 1, 1)

    @reg.effect("big")
    def big(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
        state.set_scale(args.value(2.0))

    @reg.effect("lift")
    def lift(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
        state.offset_y = -args.value(1.0)

    return reg


@pytest.fixture
def run(registry: EffectRegistry, font: MonospaceFont):
    """Return a helper that parses and applies source against the test registry."""

    def _run(source: str) -> Layout:
        return apply(parse(source), registry, font, source=source)

    return _run


@pytest.fixture
def default_effects(monkeypatch: pytest.MonkeyPatch) -> EffectRegistry:
    """A fresh process default registry, restored after the test."""
    monkeypatch.setattr("glyphfx.registry._default", None)
    return default_registry()
