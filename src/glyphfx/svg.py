"""SVG backend — renders a recorded glyph batch to an SVG document."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from glyphfx.glyph import Color
from glyphfx.sink import DrawTransform, GlyphBatch, GlyphDraw


@dataclass
class SvgBackend:
    """Backend producing one standalone SVG document per draw call.

    The most recent document is also kept in ``last``.
    """

    font_size: float = 16.0
    font_family: str = "monospace"
    background: str | None = None
    padding: float = 4.0
    last: str = field(default="", init=False)

    def draw_batch(self, batch: GlyphBatch, transform: DrawTransform) -> str:
        self.last = render_svg(
            batch,
            transform,
            font_size=self.font_size,
            font_family=self.font_family,
            background=self.background,
            padding=self.padding,
        )
        return self.last


def render_svg(
    batch: GlyphBatch,
    transform: DrawTransform | None = None,
    *,
    font_size: float = 16.0,
    font_family: str = "monospace",
    background: str | None = None,
    padding: float = 4.0,
) -> str:
    """Render every glyph in *batch* as a positioned ``<text>`` element."""
    if transform is None:
        transform = DrawTransform()

    min_x, min_y, max_x, max_y = _bounds(batch.items, transform, font_size)
    min_x -= padding
    min_y -= padding
    width = max_x - min_x + padding
    height = max_y - min_y + padding

    parts: list[str] = [
        '<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="{_num(min_x)} {_num(min_y)} {_num(width)} {_num(height)}" '
        f'width="{_num(width)}" height="{_num(height)}">\n'
    ]
    if background:
        parts.append(
            f'<rect x="{_num(min_x)}" y="{_num(min_y)}" width="{_num(width)}" '
            f'height="{_num(height)}" fill="{_escape_attr(background)}"/>\n'
        )
    parts.append(
        f'<g transform="{_group_transform(transform)}" '
        f'font-family="{_escape_attr(font_family)}" font-size="{_num(font_size)}" '
        'dominant-baseline="text-before-edge" xml:space="preserve">\n'
    )
    for item in batch.items:
        parts.append(_render_glyph(item))
        parts.append("\n")
    parts.append("</g>\n")
    parts.append("</svg>\n")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def _bounds(
    items: list[GlyphDraw], transform: DrawTransform, font_size: float
) -> tuple[float, float, float, float]:
    """Approximate drawn bounds, ignoring rotation and skew."""
    if not items:
        return transform.x, transform.y, transform.x, transform.y
    xs: list[float] = []
    ys: list[float] = []
    for item in items:
        left = transform.x + (item.x - transform.origin_x) * transform.scale_x
        top = transform.y + (item.y - transform.origin_y) * transform.scale_y
        xs.extend((left, left + font_size * abs(item.scale_x * transform.scale_x)))
        ys.extend((top, top + font_size * abs(item.scale_y * transform.scale_y)))
    return min(xs), min(ys), max(xs), max(ys)


def _group_transform(t: DrawTransform) -> str:
    ops = [f"translate({_num(t.x)} {_num(t.y)})"]
    if t.rotation:
        ops.append(f"rotate({_num(math.degrees(t.rotation))})")
    if t.skew_x:
        ops.append(f"skewX({_num(math.degrees(math.atan(t.skew_x)))})")
    if t.skew_y:
        ops.append(f"skewY({_num(math.degrees(math.atan(t.skew_y)))})")
    if t.scale_x != 1 or t.scale_y != 1:
        ops.append(f"scale({_num(t.scale_x)} {_num(t.scale_y)})")
    if t.origin_x or t.origin_y:
        ops.append(f"translate({_num(-t.origin_x)} {_num(-t.origin_y)})")
    return " ".join(ops)


def _render_glyph(item: GlyphDraw) -> str:
    ops = [f"translate({_num(item.x)} {_num(item.y)})"]
    if item.rotation:
        ops.append(f"rotate({_num(math.degrees(item.rotation))})")
    # Skew factors are shears; SVG wants angles
    if item.skew_x:
        ops.append(f"skewX({_num(math.degrees(math.atan(item.skew_x)))})")
    if item.skew_y:
        ops.append(f"skewY({_num(math.degrees(math.atan(item.skew_y)))})")
    if item.scale_x != 1 or item.scale_y != 1:
        ops.append(f"scale({_num(item.scale_x)} {_num(item.scale_y)})")

    fill = _rgb(item.color)
    opacity = ""
    if item.color[3] != 1:
        opacity = f' fill-opacity="{_num(_clamp(item.color[3]))}"'
    return (
        f'<text transform="{" ".join(ops)}" fill="{fill}"{opacity}>'
        f"{_escape_text(item.char)}</text>"
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _clamp(v: float) -> float:
    return min(1.0, max(0.0, v))


def _rgb(color: Color) -> str:
    r, g, b, _ = color
    return "#{:02x}{:02x}{:02x}".format(*(round(_clamp(c) * 255) for c in (r, g, b)))


def _num(v: float) -> str:
    """Compact decimal: at most three places, no trailing zeros."""
    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def _escape_text(text: str) -> str:
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    return _escape_text(text).replace('"', "&quot;")
