"""Built-in effects.

Every effect reads its primary value from ``{name=value}`` and any further
parameters from named arguments, e.g. ``{wave=3 freq=0.8}``.
"""

from __future__ import annotations

import colorsys
import math
import random

from glyphfx.glyph import CharInfo, GlyphState
from glyphfx.registry import EffectArgs, EffectFn, EffectRegistry


def color(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    state.set_color(args.get("r", 1.0), args.get("g", 1.0), args.get("b", 1.0), args.get("a", 1.0))


def alpha(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    r, g, b, _ = state.color
    state.color = (r, g, b, args.value(1.0))


def wave(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    amp = args.get("amp", args.value(4.0))
    freq = args.get("freq", 0.5)
    phase = args.get("phase", 0.0)
    state.offset_y += math.sin(info.index * freq + phase) * amp


def shake(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    amount = args.value(1.0)
    # Seeded per character: same markup, same jitter
    rng = random.Random(f"{args.get('seed', 0)}:{info.index}:{info.char}")
    state.offset_x += rng.uniform(-amount, amount)
    state.offset_y += rng.uniform(-amount, amount)


def rainbow(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    hue = (info.index - 1) / max(info.length, 1) + args.get("offset", 0.0)
    r, g, b = colorsys.hsv_to_rgb(hue % 1.0, args.get("sat", 1.0), args.get("val", 1.0))
    state.color = (r, g, b, state.color[3])


def offset(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    state.offset_x += args.get("x", 0.0)
    state.offset_y += args.get("y", 0.0)


def scale(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    uniform = args.value(1.0)
    state.set_scale(args.get("x", uniform), args.get("y", uniform))


def skew(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    state.set_skew(args.get("x", args.value(0.0)), args.get("y", 0.0))


def rotate(state: GlyphState, args: EffectArgs, info: CharInfo) -> None:
    # Degrees in markup, radians in glyph state
    state.set_rotation(math.radians(args.value(0.0)))


BUILTIN_EFFECTS: dict[str, EffectFn] = {
    "color": color,
    "alpha": alpha,
    "wave": wave,
    "shake": shake,
    "rainbow": rainbow,
    "offset": offset,
    "scale": scale,
    "skew": skew,
    "rotate": rotate,
}


def register_builtins(registry: EffectRegistry) -> EffectRegistry:
    """Add every built-in effect to *registry* and return it."""
    for name, fn in BUILTIN_EFFECTS.items():
        registry.add_effect(name, fn)
    return registry


def builtin_registry() -> EffectRegistry:
    """A fresh registry holding only the built-in effects."""
    return register_builtins(EffectRegistry())
